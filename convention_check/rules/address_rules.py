"""
Address and addressee structure rules.

  address:   street, city, zip, country_code — all required strings
  addressee: salutation, first_name, last_name, business_name — strings,
             first_name and last_name required

Findings are reported at the address/addressee node and name the field.
"""

from convention_check.config import (
    ADDRESS_FIELDS,
    ADDRESS_REQUIRED_FIELDS,
    ADDRESSEE_FIELDS,
    ADDRESSEE_REQUIRED_FIELDS,
    ADDRESSEE_STRING_FIELDS,
    MUST,
)
from convention_check.rules import Rule
from convention_check.utils import (
    declared_types,
    describe_type,
    format_names,
    is_string_only,
    resolve_ref,
)


def _missing(ctx, required):
    props = ctx.properties
    if props is None:
        return []
    missing = [f for f in required if f not in props]
    if not missing:
        return []
    return [{"missing": format_names(missing)}]


def _non_string_fields(ctx, fields):
    props = ctx.properties
    if props is None:
        return []
    out = []
    for field_name in fields:
        if field_name not in props:
            continue
        node = resolve_ref(ctx.root, props[field_name])
        if node is None or not declared_types(node) or is_string_only(node):
            continue
        out.append({"field": field_name, "actual": describe_type(node)})
    return out


def check_address_required(ctx):
    return _missing(ctx, ADDRESS_REQUIRED_FIELDS)


def check_address_types(ctx):
    return _non_string_fields(ctx, ADDRESS_REQUIRED_FIELDS)


def check_addressee_required(ctx):
    return _missing(ctx, ADDRESSEE_REQUIRED_FIELDS)


def check_addressee_types(ctx):
    return _non_string_fields(ctx, ADDRESSEE_STRING_FIELDS)


# ── Rule registration ────────────────────────────────────────

RULE_GROUP = "address"

_ADDRESS = frozenset(ADDRESS_FIELDS)
_ADDRESSEE = frozenset(ADDRESSEE_FIELDS)

RULES = [
    Rule(
        name="address-required-field",
        group=RULE_GROUP,
        severity=MUST,
        fields=_ADDRESS,
        detect=check_address_required,
        message="Address '{name}' is missing required field(s) {missing}",
        description="Addresses carry street, city, zip and country_code.",
    ),
    Rule(
        name="address-field-type",
        group=RULE_GROUP,
        severity=MUST,
        fields=_ADDRESS,
        detect=check_address_types,
        message="Address '{name}' field '{field}' must be a string, found {actual}",
    ),
    Rule(
        name="addressee-required-field",
        group=RULE_GROUP,
        severity=MUST,
        fields=_ADDRESSEE,
        detect=check_addressee_required,
        message="Addressee '{name}' is missing required field(s) {missing}",
    ),
    Rule(
        name="addressee-field-type",
        group=RULE_GROUP,
        severity=MUST,
        fields=_ADDRESSEE,
        detect=check_addressee_types,
        message="Addressee '{name}' field '{field}' must be a string, found {actual}",
    ),
]
