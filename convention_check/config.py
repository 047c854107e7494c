"""
Central configuration for the API convention checker.
"""

import os

# ── Application ───────────────────────────────────────────────
APP_TITLE = "API Convention Check"
APP_VERSION = "0.1.0"
SERVER_HOST = os.environ.get("CONVENTION_CHECK_HOST", "127.0.0.1")
SERVER_PORT = int(os.environ.get("CONVENTION_CHECK_PORT", "7860"))

# ── Severities (strongest first) ─────────────────────────────
MUST = "MUST"
SHOULD = "SHOULD"
SEVERITY_ORDER = (MUST, SHOULD)
DEFAULT_FAIL_ON = MUST

# ── Input files ───────────────────────────────────────────────
SCHEMA_FILE_EXTENSIONS = (".json", ".yaml", ".yml")

# Root-level containers of named schemas (JSON Schema / Swagger 2 / OpenAPI 3)
SCHEMA_CONTAINERS = (
    ("definitions",),
    ("$defs",),
    ("components", "schemas"),
)

# ── Money object ─────────────────────────────────────────────
MONEY_AMOUNT_FIELD = "amount"
MONEY_CURRENCY_FIELD = "currency"
MONEY_OBJECT_FIELDS = (
    "money",
    "price",
    "cost",
    "subtotal",
    "balance",
    "fee",
    "discount",
    "unit_price",
    "total_price",
)
BINARY_FLOAT_FORMATS = ("float", "double")
CURRENCY_FORMATS = ("iso-4217",)

# ── Generic fields ───────────────────────────────────────────
ID_FIELD = "id"
TIMESTAMP_FIELDS = ("created", "modified")
TYPE_FIELD = "type"
DATE_TIME_FORMAT = "date-time"

# ── Reference fields ─────────────────────────────────────────
REFERENCE_HINT_KEYWORDS = ("x-reference-to", "x-references")
REFERENCE_SUFFIX = "_id"
REFERENCE_LIST_SUFFIX = "_ids"

# ── Address / addressee ──────────────────────────────────────
ADDRESS_FIELDS = (
    "address",
    "billing_address",
    "shipping_address",
    "delivery_address",
)
ADDRESS_REQUIRED_FIELDS = ("street", "city", "zip", "country_code")

ADDRESSEE_FIELDS = ("addressee",)
ADDRESSEE_REQUIRED_FIELDS = ("first_name", "last_name")
ADDRESSEE_STRING_FIELDS = ("salutation", "first_name", "last_name", "business_name")
