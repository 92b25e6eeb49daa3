"""
Per-column value substitution for the data dump.

Rules are evaluated against each row before it is formatted. Evaluation has
no side effects and only reads the row.
"""

from typing import Any, Mapping, Optional

from .models import MatchGroup, MatchOperator, ModifyColumnRule


def value_matches(value: Any, operator: MatchOperator) -> bool:
    """Full match of the operator's pattern against the value's text. NULL never matches."""
    if value is None:
        return False
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode('utf-8', errors='replace')
    return operator.regex.fullmatch(str(value)) is not None


def operator_matches(row: Mapping[str, Any], operator: MatchOperator) -> bool:
    """Evaluate one operator against a row, inverted when ``behaviour`` is set."""
    return value_matches(row.get(operator.column), operator) != operator.behaviour


def group_matches(row: Mapping[str, Any], group: MatchGroup) -> bool:
    """A group matches when every one of its operators does."""
    return all(operator_matches(row, op) for op in group.operators)


def rule_applies(row: Mapping[str, Any], rule: ModifyColumnRule) -> bool:
    """A rule applies when any group matches, or always when it has no groups."""
    if not rule.match:
        return True
    return any(group_matches(row, group) for group in rule.match)


class ModifyColumnResolver:
    """Decides which column values of a row get replaced."""

    def __init__(self, rules: Optional[Mapping[str, ModifyColumnRule]] = None):
        self.rules = dict(rules or {})

    def __bool__(self) -> bool:
        return bool(self.rules)

    def resolve(self, row: Mapping[str, Any], column: str) -> Optional[str]:
        """Return the replacement literal for ``column`` in ``row``, or None to keep the value."""
        rule = self.rules.get(column)
        if rule is None or not rule_applies(row, rule):
            return None
        return rule.value
