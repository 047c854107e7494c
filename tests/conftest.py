"""Shared fixtures for convention check tests."""

import json

import pytest
import yaml

from convention_check.checker import ConventionChecker


@pytest.fixture
def checker():
    """Checker with every discovered rule."""
    return ConventionChecker()


@pytest.fixture
def money_schema():
    """A well-formed Money object plus an order referencing it."""
    return {
        "openapi": "3.0.3",
        "components": {
            "schemas": {
                "Money": {
                    "type": "object",
                    "properties": {
                        "amount": {"type": "number", "format": "decimal"},
                        "currency": {"type": "string", "format": "iso-4217"},
                    },
                    "required": ["amount", "currency"],
                },
                "Order": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string"},
                        "created": {"type": "string", "format": "date-time"},
                        "total": {"$ref": "#/components/schemas/Money"},
                    },
                },
            }
        },
    }


@pytest.fixture
def address_schema():
    """Address with every required field declared as string."""
    return {
        "type": "object",
        "properties": {
            "address": {
                "type": "object",
                "properties": {
                    "street": {"type": "string"},
                    "city": {"type": "string"},
                    "zip": {"type": "string"},
                    "country_code": {"type": "string"},
                },
            }
        },
    }


@pytest.fixture
def schema_dir(tmp_path):
    """Directory with one clean, one violating and one broken schema file."""
    clean = {"type": "object", "properties": {"id": {"type": "string"}}}
    bad = {"properties": {"id": {"type": "integer"}, "amount": {"type": "number", "format": "double"}}}

    (tmp_path / "clean.json").write_text(json.dumps(clean))
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "bad.yaml").write_text(yaml.safe_dump(bad, sort_keys=False))
    (tmp_path / "broken.json").write_text("{not json")
    (tmp_path / "notes.txt").write_text("ignored")
    return tmp_path
