"""
Generic field rules: id, created, modified, type.

Checks:
  generic-field-id-type      — MUST — `id` is a string
  generic-field-date-time    — MUST — `created` / `modified` are string + date-time
  generic-field-type-string  — MUST — `type` is a string
"""

from convention_check.config import (
    DATE_TIME_FORMAT,
    ID_FIELD,
    MUST,
    TIMESTAMP_FIELDS,
    TYPE_FIELD,
)
from convention_check.rules import Rule
from convention_check.utils import declared_types, describe_type, is_string_only


def _non_string_type(ctx):
    node = ctx.resolved
    if node is None or not declared_types(node):
        return []
    if is_string_only(node):
        return []
    return [{"actual": describe_type(node)}]


def check_id_type(ctx):
    """`id` must be a string, never numeric."""
    return _non_string_type(ctx)


def check_type_string(ctx):
    """`type` must be a string (usually an enum or x-extensible-enum)."""
    return _non_string_type(ctx)


def check_timestamp_format(ctx):
    """`created` / `modified` must be string with format date-time."""
    node = ctx.resolved
    if node is None:
        return []
    if is_string_only(node) and node.get("format") == DATE_TIME_FORMAT:
        return []
    return [{"actual": describe_type(node)}]


# ── Rule registration ────────────────────────────────────────

RULE_GROUP = "generic"

RULES = [
    Rule(
        name="generic-field-id-type",
        group=RULE_GROUP,
        severity=MUST,
        fields=frozenset({ID_FIELD}),
        detect=check_id_type,
        message="'{name}' must be declared as a string, found {actual}",
        description="Identifiers are opaque strings, never numbers.",
    ),
    Rule(
        name="generic-field-date-time",
        group=RULE_GROUP,
        severity=MUST,
        fields=frozenset(TIMESTAMP_FIELDS),
        detect=check_timestamp_format,
        message="'{name}' must be a string with format 'date-time', found {actual}",
        description="Creation and modification timestamps use RFC 3339 date-time.",
    ),
    Rule(
        name="generic-field-type-string",
        group=RULE_GROUP,
        severity=MUST,
        fields=frozenset({TYPE_FIELD}),
        detect=check_type_string,
        message="'{name}' must be declared as a string, found {actual}",
        description="Entity type discriminators are strings.",
    ),
]
