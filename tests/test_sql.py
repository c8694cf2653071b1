"""
Tests for sql.py - partial update and WHERE fragment builders.
"""

import pytest

from jobly.errors import BadRequestError, EmptyPayloadError, ErrorKind
from jobly.sql import Fragment, WhereBuilder, quote_identifier, sql_for_partial_update, where_sql


class TestPartialUpdate:
    """Test sql_for_partial_update."""

    def test_one_field_with_name_map(self):
        """Mapped field names become column names."""
        result = sql_for_partial_update({"firstName": "john"}, {"firstName": "first_name"})
        assert result == Fragment('"first_name"=$1', ["john"])

    def test_unmapped_field_passes_through(self):
        result = sql_for_partial_update({"x": 1}, {})
        assert result.clause == '"x"=$1'
        assert result.values == [1]

    def test_name_map_is_optional(self):
        assert sql_for_partial_update({"x": 1}).clause == '"x"=$1'

    def test_multiple_fields_keep_order_and_alignment(self):
        data = {"firstName": "Aliya", "age": 32, "isAdmin": False}
        result = sql_for_partial_update(data, {"firstName": "first_name", "isAdmin": "is_admin"})

        assert result.clause == '"first_name"=$1, "age"=$2, "is_admin"=$3'
        assert result.values == ["Aliya", 32, False]

    def test_placeholder_index_matches_value_position(self):
        data = {f"f{i}": i * 10 for i in range(7)}
        result = sql_for_partial_update(data)

        parts = result.clause.split(", ")
        assert len(parts) == len(data) == len(result.values)
        for i, part in enumerate(parts):
            column, placeholder = part.split("=")
            assert placeholder == f"${i + 1}"
            assert column == f'"f{i}"'
            assert result.values[i] == i * 10

    def test_null_values_are_kept(self):
        result = sql_for_partial_update({"title": "New", "salary": None})
        assert result.values == ["New", None]

    def test_ordered_pairs(self):
        result = sql_for_partial_update([("b", 2), ("a", 1)])
        assert result.clause == '"b"=$1, "a"=$2'
        assert result.values == [2, 1]

    def test_duplicate_pair_rejected(self):
        with pytest.raises(BadRequestError):
            sql_for_partial_update([("a", 1), ("a", 2)])

    def test_start_offset(self):
        result = sql_for_partial_update({"a": 1, "b": 2}, start=3)
        assert result.clause == '"a"=$3, "b"=$4'

    def test_empty_payload_raises(self):
        with pytest.raises(EmptyPayloadError) as exc_info:
            sql_for_partial_update({}, {})
        assert exc_info.value.kind is ErrorKind.EMPTY_PAYLOAD

    def test_empty_pairs_raise(self):
        with pytest.raises(EmptyPayloadError):
            sql_for_partial_update([], {"a": "b"})

    def test_empty_payload_is_a_bad_request(self):
        with pytest.raises(BadRequestError):
            sql_for_partial_update({})

    def test_deterministic(self):
        data = {"title": "New", "salary": 5}
        assert sql_for_partial_update(data) == sql_for_partial_update(data)


class TestQuoteIdentifier:

    def test_plain(self):
        assert quote_identifier("logo_url") == '"logo_url"'

    def test_embedded_quote_is_doubled(self):
        assert quote_identifier('a"; DROP TABLE jobs; --') == '"a""; DROP TABLE jobs; --"'

    def test_empty_rejected(self):
        with pytest.raises(BadRequestError):
            quote_identifier("")


class TestWhereBuilder:

    def test_empty(self):
        fragment = WhereBuilder().build()
        assert fragment == Fragment("", [])
        assert not fragment

    def test_predicates_joined_with_and(self):
        fragment = (
            WhereBuilder()
            .add("salary", ">=", 200)
            .add("title", "ILIKE", "%eng%")
            .build()
        )
        assert fragment.clause == '"salary" >= $1 AND "title" ILIKE $2'
        assert fragment.values == [200, "%eng%"]

    def test_start_offset(self):
        fragment = WhereBuilder(start=4).add("salary", ">=", 1).build()
        assert fragment.clause == '"salary" >= $4'


class TestWhereSql:

    def test_empty_fragment_has_no_where_keyword(self):
        assert where_sql(Fragment()) == ""

    def test_non_empty_fragment(self):
        assert where_sql(Fragment('"a" >= $1', [1])) == ' WHERE "a" >= $1'
