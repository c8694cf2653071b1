from typing import Any, Dict, List
from urllib.parse import urlparse

COMPANY_NEW_REQUIRED = ["handle", "name", "description"]
COMPANY_FIELDS = ["handle", "name", "description", "numEmployees", "logoUrl"]
COMPANY_UPDATE_FIELDS = ["name", "description", "numEmployees", "logoUrl"]

JOB_NEW_REQUIRED = ["title", "company_handle"]
JOB_FIELDS = ["title", "salary", "equity", "company_handle"]
JOB_UPDATE_FIELDS = ["title", "salary", "equity"]

MAX_HANDLE_LENGTH = 25


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _valid_url(v: str) -> bool:
    try:
        p = urlparse(v)
        return bool(p.scheme and p.netloc)
    except ValueError:
        return False


def _unknown_fields(data: Dict[str, Any], allowed: List[str]) -> List[str]:
    return [f"Unknown field: {k}" for k in data if k not in allowed]


def _check_company_fields(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    for f in ("name", "description"):
        if f in data and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string")
    if "name" in data and isinstance(data["name"], str) and not data["name"].strip():
        errors.append("Field 'name' must be a non-empty string")

    n = data.get("numEmployees")
    if n is not None and (not _is_int(n) or n < 0):
        errors.append("Field 'numEmployees' must be a non-negative integer")

    logo = data.get("logoUrl")
    if logo is not None and (not isinstance(logo, str) or not _valid_url(logo)):
        errors.append("Field 'logoUrl' must be a valid absolute URL (scheme + host)")
    return errors


def _check_job_fields(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    if "title" in data and not _is_non_empty_str(data["title"]):
        errors.append("Field 'title' must be a non-empty string")

    salary = data.get("salary")
    if salary is not None and (not _is_int(salary) or salary < 0):
        errors.append("Field 'salary' must be a non-negative integer")

    equity = data.get("equity")
    if equity is not None and (not _is_number(equity) or not 0 <= equity <= 1):
        errors.append("Field 'equity' must be a number between 0 and 1")
    return errors


def validate_company_new(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = _unknown_fields(data, COMPANY_FIELDS)

    for f in COMPANY_NEW_REQUIRED:
        if f not in data:
            errors.append(f"Missing required field: {f}")

    handle = data.get("handle")
    if "handle" in data:
        if not _is_non_empty_str(handle):
            errors.append("Field 'handle' must be a non-empty string")
        elif len(handle) > MAX_HANDLE_LENGTH:
            errors.append(f"Field 'handle' must be at most {MAX_HANDLE_LENGTH} characters")

    errors.extend(_check_company_fields(data))
    return errors


def validate_company_update(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = _unknown_fields(data, COMPANY_UPDATE_FIELDS)
    if not data:
        errors.append("No data")
    errors.extend(_check_company_fields(data))
    return errors


def validate_job_new(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = _unknown_fields(data, JOB_FIELDS)

    for f in JOB_NEW_REQUIRED:
        if f not in data:
            errors.append(f"Missing required field: {f}")

    if "company_handle" in data and not _is_non_empty_str(data["company_handle"]):
        errors.append("Field 'company_handle' must be a non-empty string")

    errors.extend(_check_job_fields(data))
    return errors


def validate_job_update(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = _unknown_fields(data, JOB_UPDATE_FIELDS)
    if not data:
        errors.append("No data")
    errors.extend(_check_job_fields(data))
    return errors


def validate_company_filter(data: Dict[str, Any]) -> List[str]:
    """
    Check list filters for companies.

    Ranges are checked here, not in the query builder: min_employees may not
    exceed max_employees.
    """
    errors: List[str] = _unknown_fields(data, ["name_like", "min_employees", "max_employees"])

    for f in ("min_employees", "max_employees"):
        if f in data and (not _is_int(data[f]) or data[f] < 0):
            errors.append(f"Filter '{f}' must be a non-negative integer")

    lo, hi = data.get("min_employees"), data.get("max_employees")
    if _is_int(lo) and _is_int(hi) and lo > hi:
        errors.append("Filter 'min_employees' cannot be larger than 'max_employees'")

    if "name_like" in data and not isinstance(data["name_like"], str):
        errors.append("Filter 'name_like' must be a string")
    return errors


def validate_job_filter(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = _unknown_fields(data, ["min_salary", "title", "has_equity"])

    if "min_salary" in data and (not _is_int(data["min_salary"]) or data["min_salary"] < 0):
        errors.append("Filter 'min_salary' must be a non-negative integer")
    if "title" in data and not isinstance(data["title"], str):
        errors.append("Filter 'title' must be a string")
    if "has_equity" in data and not isinstance(data["has_equity"], bool):
        errors.append("Filter 'has_equity' must be true or false")
    return errors
