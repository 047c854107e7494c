"""
Money object rules.

A Money object is {amount, currency}: `amount` keeps full decimal precision
(number/decimal or a decimal string), `currency` is a 3-letter ISO 4217 code.

Checks:
  money-amount-format     — MUST   — amount is not binary floating point
  money-amount-precision  — SHOULD — number amounts declare format decimal
  money-amount-type       — MUST   — amount is number or string
  money-currency-missing  — MUST   — amount has a sibling currency
  money-currency-type     — MUST   — currency next to an amount is a string
  money-currency-code     — SHOULD — currency pins the 3-letter code shape
  money-currency-enum     — MUST   — enumerated currencies are 3-letter codes
  money-object-shape      — SHOULD — money-named fields are Money objects
  money-amount-missing    — MUST   — money-named objects declare an amount
"""

import re

from convention_check.config import (
    BINARY_FLOAT_FORMATS,
    CURRENCY_FORMATS,
    MONEY_AMOUNT_FIELD,
    MONEY_CURRENCY_FIELD,
    MONEY_OBJECT_FIELDS,
    MUST,
    SHOULD,
)
from convention_check.rules import Rule
from convention_check.utils import declared_types, describe_type, format_names, has_type, is_string_only

CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")

# Patterns accepted as pinning a 3-letter code
_CURRENCY_PATTERNS = {
    "^[A-Z]{3}$",
    "[A-Z]{3}",
    "^[A-Z][A-Z][A-Z]$",
    "^[a-zA-Z]{3}$",
}


# ── amount ───────────────────────────────────────────────────

def check_amount_format(ctx):
    """Number amounts must not use a binary floating-point format."""
    node = ctx.resolved
    if node is None or not has_type(node, "number"):
        return []
    fmt = node.get("format")
    if fmt in BINARY_FLOAT_FORMATS:
        return [{"format": fmt}]
    return []


def check_amount_precision(ctx):
    """Number amounts without any format leave precision to the consumer."""
    node = ctx.resolved
    if node is None or not has_type(node, "number"):
        return []
    if node.get("format") is None:
        return [{}]
    return []


def check_amount_type(ctx):
    node = ctx.resolved
    if node is None or not declared_types(node):
        return []
    if all(t in ("number", "string") for t in declared_types(node)):
        return []
    return [{"actual": describe_type(node)}]


def check_currency_missing(ctx):
    if MONEY_CURRENCY_FIELD in ctx.siblings:
        return []
    return [{}]


# ── currency ─────────────────────────────────────────────────

def _in_money_object(ctx):
    return MONEY_AMOUNT_FIELD in ctx.siblings


def check_currency_type(ctx):
    node = ctx.resolved
    if not _in_money_object(ctx) or node is None or not declared_types(node):
        return []
    if is_string_only(node):
        return []
    return [{"actual": describe_type(node)}]


def _pins_currency_code(node):
    if node.get("format") in CURRENCY_FORMATS:
        return True
    pattern = node.get("pattern")
    if isinstance(pattern, str) and pattern in _CURRENCY_PATTERNS:
        return True
    if node.get("minLength") == 3 and node.get("maxLength") == 3:
        return True
    enum = node.get("enum")
    return isinstance(enum, list) and bool(enum)


def check_currency_code(ctx):
    node = ctx.resolved
    if not _in_money_object(ctx) or node is None or not is_string_only(node):
        return []
    if _pins_currency_code(node):
        return []
    return [{}]


def check_currency_enum(ctx):
    node = ctx.resolved
    if not _in_money_object(ctx) or node is None:
        return []
    enum = node.get("enum")
    if not isinstance(enum, list):
        return []
    bad = [v for v in enum if v is not None and not (isinstance(v, str) and CURRENCY_CODE.match(v))]
    if not bad:
        return []
    return [{"values": ", ".join(repr(v) for v in bad)}]


# ── money-named objects ──────────────────────────────────────

def check_money_object_shape(ctx):
    """A money-named scalar loses the currency; model it as a Money object."""
    node = ctx.resolved
    if node is None:
        return []
    if has_type(node, "number", "integer", "string") and "properties" not in node:
        return [{"actual": describe_type(node)}]
    return []


def check_money_amount_missing(ctx):
    props = ctx.properties
    if props is None or MONEY_AMOUNT_FIELD in props:
        return []
    missing = [MONEY_AMOUNT_FIELD]
    if MONEY_CURRENCY_FIELD not in props:
        missing.append(MONEY_CURRENCY_FIELD)
    return [{"missing": format_names(missing)}]


# ── Rule registration ────────────────────────────────────────

RULE_GROUP = "money"

_AMOUNT = frozenset({MONEY_AMOUNT_FIELD})
_CURRENCY = frozenset({MONEY_CURRENCY_FIELD})
_MONEY_OBJECTS = frozenset(MONEY_OBJECT_FIELDS)

RULES = [
    Rule(
        name="money-amount-format",
        group=RULE_GROUP,
        severity=MUST,
        fields=_AMOUNT,
        detect=check_amount_format,
        message="'{name}' uses binary floating-point format '{format}'; use format 'decimal' or a decimal string",
        description="Monetary amounts keep arbitrary decimal precision.",
    ),
    Rule(
        name="money-amount-precision",
        group=RULE_GROUP,
        severity=SHOULD,
        fields=_AMOUNT,
        detect=check_amount_precision,
        message="'{name}' is a number without a format; declare format 'decimal'",
    ),
    Rule(
        name="money-amount-type",
        group=RULE_GROUP,
        severity=MUST,
        fields=_AMOUNT,
        detect=check_amount_type,
        message="'{name}' must be a decimal number or decimal string, found {actual}",
    ),
    Rule(
        name="money-currency-missing",
        group=RULE_GROUP,
        severity=MUST,
        fields=_AMOUNT,
        detect=check_currency_missing,
        message="'{name}' has no sibling 'currency'; a Money object carries both amount and currency",
    ),
    Rule(
        name="money-currency-type",
        group=RULE_GROUP,
        severity=MUST,
        fields=_CURRENCY,
        detect=check_currency_type,
        message="'{name}' must be a string holding an ISO 4217 code, found {actual}",
    ),
    Rule(
        name="money-currency-code",
        group=RULE_GROUP,
        severity=SHOULD,
        fields=_CURRENCY,
        detect=check_currency_code,
        message="'{name}' should declare format 'iso-4217' (3-letter currency code)",
    ),
    Rule(
        name="money-currency-enum",
        group=RULE_GROUP,
        severity=MUST,
        fields=_CURRENCY,
        detect=check_currency_enum,
        message="'{name}' enumerates values that are not 3-letter ISO 4217 codes: {values}",
    ),
    Rule(
        name="money-object-shape",
        group=RULE_GROUP,
        severity=SHOULD,
        fields=_MONEY_OBJECTS,
        detect=check_money_object_shape,
        message="'{name}' is a bare {actual}; model money as an object with 'amount' and 'currency'",
    ),
    Rule(
        name="money-amount-missing",
        group=RULE_GROUP,
        severity=MUST,
        fields=_MONEY_OBJECTS,
        detect=check_money_amount_missing,
        message="Money object '{name}' is missing {missing}",
    ),
]
