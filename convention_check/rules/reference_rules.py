"""
Reference field naming.

A property that refers to another entity is named <referenced_type>_id
(or <referenced_type>_ids for arrays of references). Name-only heuristics
over-fire, so the rule runs only when an annotation says what the property
refers to: either a caller-supplied hint for the property's pointer, or an
x-reference-to / x-references extension keyword on the property itself.
"""

from convention_check.config import (
    REFERENCE_HINT_KEYWORDS,
    REFERENCE_LIST_SUFFIX,
    REFERENCE_SUFFIX,
    SHOULD,
)
from convention_check.rules import Rule
from convention_check.utils import is_array, snake_case


def referenced_type(ctx):
    """Referenced entity type for this property, or None when unannotated."""
    if ctx.hint:
        return ctx.hint
    for keyword in REFERENCE_HINT_KEYWORDS:
        value = ctx.schema.get(keyword)
        if isinstance(value, str) and value.strip():
            return value
    return None


def expected_reference_name(type_name, many=False):
    suffix = REFERENCE_LIST_SUFFIX if many else REFERENCE_SUFFIX
    return snake_case(type_name) + suffix


def check_reference_naming(ctx):
    target = referenced_type(ctx)
    if target is None:
        return []
    node = ctx.resolved or ctx.schema
    expected = expected_reference_name(target, many=is_array(node))
    if ctx.name == expected:
        return []
    return [{"target": target, "expected": expected}]


# ── Rule registration ────────────────────────────────────────

RULE_GROUP = "reference"

RULES = [
    Rule(
        name="reference-field-naming",
        group=RULE_GROUP,
        severity=SHOULD,
        detect=check_reference_naming,
        message="'{name}' references {target} and should be named '{expected}'",
        description="Reference fields are named after the entity they point to.",
    ),
]
