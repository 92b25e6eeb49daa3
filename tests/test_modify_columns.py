"""
Unit tests for modify_columns.py
"""

import pytest

from sqldumper.errors import ConfigurationError, ErrorKind
from sqldumper.models import MatchGroup, MatchOperator, ModifyColumnRule
from sqldumper.modify_columns import (
    ModifyColumnResolver,
    group_matches,
    operator_matches,
    rule_applies,
)


def rule(value="'x'", *groups):
    return ModifyColumnRule(value=value, match=list(groups))


def group(*operators):
    return MatchGroup(operators=list(operators))


class TestOperatorMatches:
    """Tests for operator_matches function."""

    def test_equal_value(self):
        op = MatchOperator(column="x", pattern="5")
        assert operator_matches({"x": "5"}, op) is True
        assert operator_matches({"x": "6"}, op) is False

    def test_full_match_only(self):
        """Test the pattern has to match the whole value."""
        op = MatchOperator(column="x", pattern="5")
        assert operator_matches({"x": "15"}, op) is False
        assert operator_matches({"x": "55"}, op) is False

    def test_non_string_values(self):
        """Test values are compared by their text form."""
        op = MatchOperator(column="x", pattern="5")
        assert operator_matches({"x": 5}, op) is True

    def test_regex_pattern(self):
        op = MatchOperator(column="email", pattern=r".*@example\.com")
        assert operator_matches({"email": "a@example.com"}, op) is True
        assert operator_matches({"email": "a@example.org"}, op) is False

    def test_behaviour_inverts(self):
        op = MatchOperator(column="x", pattern="5", behaviour=True)
        assert operator_matches({"x": "5"}, op) is False
        assert operator_matches({"x": "6"}, op) is True

    def test_null_never_matches(self):
        """Test NULL values do not match, so an inverted operator fires."""
        assert operator_matches({"x": None}, MatchOperator(column="x", pattern=".*")) is False
        assert operator_matches({"x": None}, MatchOperator(column="x", pattern=".*", behaviour=True)) is True

    def test_missing_column(self):
        assert operator_matches({}, MatchOperator(column="x", pattern="5")) is False

    def test_bytes_value(self):
        assert operator_matches({"x": b"abc"}, MatchOperator(column="x", pattern="abc")) is True

    def test_invalid_pattern(self):
        with pytest.raises(ConfigurationError) as exc_info:
            MatchOperator(column="x", pattern="(")
        assert exc_info.value.kind is ErrorKind.INVALID_MODIFY_COLUMN_PATTERN


class TestGroupAndRule:
    """Tests for AND within groups and OR across groups."""

    def test_group_requires_all_operators(self):
        g = group(
            MatchOperator(column="a", pattern="1"),
            MatchOperator(column="b", pattern="2"),
        )
        assert group_matches({"a": "1", "b": "2"}, g) is True
        assert group_matches({"a": "1", "b": "3"}, g) is False

    def test_rule_any_group(self):
        r = rule(
            "'x'",
            group(MatchOperator(column="a", pattern="1")),
            group(MatchOperator(column="b", pattern="2")),
        )
        assert rule_applies({"a": "1", "b": "0"}, r) is True
        assert rule_applies({"a": "0", "b": "2"}, r) is True
        assert rule_applies({"a": "0", "b": "0"}, r) is False

    def test_empty_match_always_applies(self):
        assert rule_applies({}, rule("NULL")) is True
        assert rule_applies({"a": "anything"}, rule("NULL")) is True


class TestModifyColumnResolver:
    """Tests for ModifyColumnResolver class."""

    def test_no_rule(self):
        resolver = ModifyColumnResolver({})
        assert resolver.resolve({"x": "5"}, "x") is None
        assert not resolver

    def test_unconditional_rule(self):
        resolver = ModifyColumnResolver({"email": rule("'hidden'")})
        assert resolver.resolve({"email": "a@b.c"}, "email") == "'hidden'"
        assert resolver.resolve({"email": "a@b.c"}, "name") is None

    def test_conditional_rule(self):
        resolver = ModifyColumnResolver({
            "y": rule("NULL", group(MatchOperator(column="x", pattern="5")))
        })
        assert resolver.resolve({"x": "5", "y": "v"}, "y") == "NULL"
        assert resolver.resolve({"x": "6", "y": "v"}, "y") is None

    def test_inverted_rule(self):
        resolver = ModifyColumnResolver({
            "y": rule("NULL", group(MatchOperator(column="x", pattern="5", behaviour=True)))
        })
        assert resolver.resolve({"x": "5", "y": "v"}, "y") is None
        assert resolver.resolve({"x": "6", "y": "v"}, "y") == "NULL"

    def test_does_not_modify_row(self):
        row = {"x": "5"}
        ModifyColumnResolver({"x": rule("NULL")}).resolve(row, "x")
        assert row == {"x": "5"}


class TestModifyColumnRuleFromConfig:
    """Tests for ModifyColumnRule.from_config."""

    def test_from_config(self):
        r = ModifyColumnRule.from_config({
            "value": "'redacted'",
            "match": [
                {"operators": [
                    {"column": "role", "pattern": "admin", "behaviour": True},
                    {"column": "id", "pattern": 5},
                ]}
            ]
        })
        assert r.value == "'redacted'"
        assert len(r.match) == 1
        ops = r.match[0].operators
        assert ops[0] == MatchOperator(column="role", pattern="admin", behaviour=True)
        assert ops[1].pattern == "5"
        assert ops[1].behaviour is False

    def test_missing_value_defaults_to_null(self):
        assert ModifyColumnRule.from_config({}).value == "NULL"

    def test_value_not_escaped(self):
        """Test the value is kept verbatim."""
        assert ModifyColumnRule.from_config({"value": "CONCAT('a', 'b')"}).value == "CONCAT('a', 'b')"
