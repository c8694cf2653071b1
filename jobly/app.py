import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .config import Settings
from .database import Database
from .env import load_env
from .errors import JoblyError
from .filters import CompanyFilter, JobFilter
from .logger import get_logger
from .repositories import CompanyRepository, JobRepository
from .schema import (
    validate_company_filter,
    validate_company_new,
    validate_company_update,
    validate_job_filter,
    validate_job_new,
    validate_job_update,
)
from .seed import load_seed, seed


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _read_input(path: str) -> Dict[str, Any]:
    input_path = Path(path)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise SystemExit(f"Input must be a JSON object: {input_path}")
    return data


def _check(errors: List[str]) -> None:
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)


def _given(**options: Any) -> Dict[str, Any]:
    """Keep only the options given on the command line."""
    return {k: v for k, v in options.items() if v is not None}


def _database(args: argparse.Namespace) -> Database:
    settings = Settings.from_env()
    url = args.database_url or settings.database_url
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)
    return Database(url, logger=logger)


def cmd_init_db(args: argparse.Namespace) -> None:
    db = _database(args)
    db.init_schema()
    print(f"Initialized database: {db.url}")


def cmd_seed(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    db = _database(args)
    if not args.dry_run:
        db.init_schema()
    counts = seed(db, load_seed(input_path), dry_run=args.dry_run)
    prefix = "[DRY RUN] " if args.dry_run else ""
    print(f"{prefix}Done. companies={counts['companies']} jobs={counts['jobs']} skipped={counts['skipped']}")


def cmd_companies_list(args: argparse.Namespace) -> None:
    filters = CompanyFilter.from_mapping(
        _given(name_like=args.name_like, min_employees=args.min_employees, max_employees=args.max_employees)
    )
    _check(validate_company_filter(filters.supplied()))
    _print_json({"companies": CompanyRepository(_database(args)).find_all(filters)})


def cmd_companies_get(args: argparse.Namespace) -> None:
    _print_json({"company": CompanyRepository(_database(args)).get(args.handle)})


def cmd_companies_create(args: argparse.Namespace) -> None:
    data = _read_input(args.input)
    _check(validate_company_new(data))
    _print_json({"company": CompanyRepository(_database(args)).create(data)})


def cmd_companies_update(args: argparse.Namespace) -> None:
    data = _read_input(args.input)
    _check(validate_company_update(data))
    _print_json({"company": CompanyRepository(_database(args)).update(args.handle, data)})


def cmd_companies_delete(args: argparse.Namespace) -> None:
    CompanyRepository(_database(args)).remove(args.handle)
    _print_json({"deleted": args.handle})


def cmd_jobs_list(args: argparse.Namespace) -> None:
    filters = JobFilter.from_mapping(
        _given(min_salary=args.min_salary, title=args.title, has_equity=args.has_equity or None)
    )
    _check(validate_job_filter(filters.supplied()))
    _print_json({"jobs": JobRepository(_database(args)).find_all(filters)})


def cmd_jobs_get(args: argparse.Namespace) -> None:
    _print_json({"job": JobRepository(_database(args)).get(args.id)})


def cmd_jobs_create(args: argparse.Namespace) -> None:
    data = _read_input(args.input)
    _check(validate_job_new(data))
    _print_json({"job": JobRepository(_database(args)).create(data)})


def cmd_jobs_update(args: argparse.Namespace) -> None:
    data = _read_input(args.input)
    _check(validate_job_update(data))
    _print_json({"job": JobRepository(_database(args)).update(args.id, data)})


def cmd_jobs_delete(args: argparse.Namespace) -> None:
    JobRepository(_database(args)).remove(args.id)
    _print_json({"deleted": args.id})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobly", description="Jobly: companies and jobs")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--database-url", help="SQLAlchemy database URL (or set DATABASE_URL)")

    subparsers = parser.add_subparsers(dest="command")

    init = subparsers.add_parser("init-db", help="Create the companies and jobs tables")
    init.set_defaults(func=cmd_init_db)

    sd = subparsers.add_parser("seed", help="Load companies and jobs from a JSON file")
    sd.add_argument("--input", required=True, help="Path to seed JSON")
    sd.add_argument("--dry-run", action="store_true", help="Validate and count without writing")
    sd.set_defaults(func=cmd_seed)

    companies = subparsers.add_parser("companies", help="Manage companies")
    csub = companies.add_subparsers(dest="action", required=True)

    clist = csub.add_parser("list", help="List companies, optionally filtered")
    clist.add_argument("--name-like", help="Case-insensitive partial match on name")
    clist.add_argument("--min-employees", type=int, help="Minimum number of employees")
    clist.add_argument("--max-employees", type=int, help="Maximum number of employees")
    clist.set_defaults(func=cmd_companies_list)

    cget = csub.add_parser("get", help="Show a company and its jobs")
    cget.add_argument("handle")
    cget.set_defaults(func=cmd_companies_get)

    cnew = csub.add_parser("create", help="Create a company from a JSON file")
    cnew.add_argument("--input", required=True, help="Path to company JSON")
    cnew.set_defaults(func=cmd_companies_create)

    cupd = csub.add_parser("update", help="Patch a company from a JSON file")
    cupd.add_argument("handle")
    cupd.add_argument("--input", required=True, help="Path to JSON with the fields to change")
    cupd.set_defaults(func=cmd_companies_update)

    cdel = csub.add_parser("delete", help="Delete a company and its jobs")
    cdel.add_argument("handle")
    cdel.set_defaults(func=cmd_companies_delete)

    jobs = subparsers.add_parser("jobs", help="Manage jobs")
    jsub = jobs.add_subparsers(dest="action", required=True)

    jlist = jsub.add_parser("list", help="List jobs, optionally filtered")
    jlist.add_argument("--min-salary", type=int, help="Minimum salary")
    jlist.add_argument("--title", help="Case-insensitive partial match on title")
    jlist.add_argument("--has-equity", action="store_true", help="Only jobs with equity > 0")
    jlist.set_defaults(func=cmd_jobs_list)

    jget = jsub.add_parser("get", help="Show a job")
    jget.add_argument("id", type=int)
    jget.set_defaults(func=cmd_jobs_get)

    jnew = jsub.add_parser("create", help="Create a job from a JSON file")
    jnew.add_argument("--input", required=True, help="Path to job JSON")
    jnew.set_defaults(func=cmd_jobs_create)

    jupd = jsub.add_parser("update", help="Patch a job from a JSON file")
    jupd.add_argument("id", type=int)
    jupd.add_argument("--input", required=True, help="Path to JSON with the fields to change")
    jupd.set_defaults(func=cmd_jobs_update)

    jdel = jsub.add_parser("delete", help="Delete a job")
    jdel.add_argument("id", type=int)
    jdel.set_defaults(func=cmd_jobs_delete)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    # Load .env if present (DATABASE_URL, JOBLY_LOG_LEVEL, ...)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        args.func(args)
    except JoblyError as e:
        raise SystemExit(f"{e.kind.value}: {e.message}")


if __name__ == "__main__":
    main()
