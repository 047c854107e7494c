"""Tests for the checker traversal, ordering and error handling."""

import copy
import logging

import pytest

from convention_check import check
from convention_check.checker import ConventionChecker, InvalidDocumentError, is_bare_property_map
from convention_check.config import MUST, SHOULD
from convention_check.models import MALFORMED_NODE, Finding
from convention_check.rules import Rule
from convention_check.utils import resolve_pointer


def _rules(findings):
    return [f.rule for f in findings]


class TestCallerErrors:
    """Caller errors are raised, not reported as findings."""

    def test_none_document(self, checker):
        with pytest.raises(InvalidDocumentError):
            checker.check(None)

    def test_non_mapping_document(self, checker):
        with pytest.raises(InvalidDocumentError, match="mapping"):
            checker.check(["id"])

    def test_error_is_value_error(self, checker):
        with pytest.raises(ValueError):
            checker.check("schema")


class TestBasicBehaviour:
    """Properties of check() that hold for any document."""

    def test_empty_document(self, checker):
        assert checker.check({}) == []

    def test_no_recognized_names(self, checker):
        doc = {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "count": {"type": "integer"},
                "tags": {"type": "array", "items": {"type": "number", "format": "float"}},
            },
        }
        assert checker.check(doc) == []

    def test_numeric_id_single_finding(self, checker):
        doc = {"type": "object", "properties": {"id": {"type": "integer"}}}
        findings = checker.check(doc)

        assert len(findings) == 1
        assert findings[0].rule == "generic-field-id-type"
        assert findings[0].path == "/properties/id"
        assert findings[0].severity == MUST

    def test_amount_example_document(self, checker):
        doc = {"id": {"type": "string"}, "amount": {"type": "number", "format": "double"}}
        findings = checker.check(doc)

        assert _rules(findings) == ["money-amount-format", "money-currency-missing"]
        assert all(f.path == "/amount" for f in findings)
        assert not any(f.path == "/id" for f in findings)

    def test_idempotent(self, checker, money_schema):
        money_schema["components"]["schemas"]["Order"]["properties"]["id"] = {"type": "integer"}
        first = checker.check(money_schema)
        second = checker.check(money_schema)

        assert first == second
        assert len(first) == 1

    def test_document_not_mutated(self, checker, money_schema):
        before = copy.deepcopy(money_schema)
        checker.check(money_schema)
        assert money_schema == before

    def test_module_level_check(self):
        findings = check({"properties": {"type": {"type": "integer"}}})
        assert _rules(findings) == ["generic-field-type-string"]


class TestTraversal:
    """Depth-first, pre-order, declaration order."""

    def test_preorder_declaration_order(self, checker):
        doc = {
            "type": "object",
            "properties": {
                "order": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "integer"},
                        "price": {"type": "number"},
                    },
                },
                "created": {"type": "string"},
            },
        }
        findings = checker.check(doc)

        assert [(f.rule, f.path) for f in findings] == [
            ("generic-field-id-type", "/properties/order/properties/id"),
            ("money-object-shape", "/properties/order/properties/price"),
            ("generic-field-date-time", "/properties/created"),
        ]

    def test_array_items(self, checker):
        doc = {
            "properties": {
                "lines": {
                    "type": "array",
                    "items": {"type": "object", "properties": {"id": {"type": "number"}}},
                }
            }
        }
        findings = checker.check(doc)
        assert [f.path for f in findings] == ["/properties/lines/items/properties/id"]

    def test_combinators_and_additional_properties(self, checker):
        doc = {
            "allOf": [{"properties": {"id": {"type": "integer"}}}],
            "additionalProperties": {"properties": {"type": {"type": "boolean"}}},
        }
        findings = checker.check(doc)
        assert [f.path for f in findings] == [
            "/allOf/0/properties/id",
            "/additionalProperties/properties/type",
        ]

    def test_schema_containers(self, checker):
        doc = {
            "openapi": "3.0.0",
            "components": {"schemas": {"Order": {"properties": {"id": {"type": "integer"}}}}},
            "definitions": {"Item": {"properties": {"modified": {"type": "integer"}}}},
        }
        findings = checker.check(doc)
        assert [(f.rule, f.path) for f in findings] == [
            ("generic-field-id-type", "/components/schemas/Order/properties/id"),
            ("generic-field-date-time", "/definitions/Item/properties/modified"),
        ]

    def test_containers_follow_declaration_order(self, checker):
        doc = {
            "definitions": {"Item": {"properties": {"modified": {"type": "integer"}}}},
            "properties": {"id": {"type": "integer"}},
            "components": {"schemas": {"Order": {"properties": {"type": {"type": "integer"}}}}},
        }
        findings = checker.check(doc)
        assert [f.path for f in findings] == [
            "/definitions/Item/properties/modified",
            "/properties/id",
            "/components/schemas/Order/properties/type",
        ]

    def test_keywords_follow_declaration_order(self, checker):
        doc = {
            "allOf": [{"properties": {"id": {"type": "integer"}}}],
            "properties": {"type": {"type": "integer"}},
        }
        assert [f.path for f in checker.check(doc)] == [
            "/allOf/0/properties/id",
            "/properties/type",
        ]

        reordered = {"properties": doc["properties"], "allOf": doc["allOf"]}
        assert [f.path for f in checker.check(reordered)] == [
            "/properties/type",
            "/allOf/0/properties/id",
        ]

    def test_nested_definitions_not_walked(self, checker):
        doc = {"properties": {"meta": {"definitions": {"X": {"properties": {"id": {"type": "integer"}}}}}}}
        assert checker.check(doc) == []

    def test_pointer_escaping(self, checker):
        doc = {"definitions": {"a/b~c": {"properties": {"id": {"type": "integer"}}}}}
        findings = checker.check(doc)
        assert findings[0].path == "/definitions/a~1b~0c/properties/id"
        assert resolve_pointer(doc, findings[0].path) == {"type": "integer"}

    def test_ref_targets_resolved(self, checker, money_schema):
        assert checker.check(money_schema) == []

    def test_cyclic_refs_terminate(self, checker):
        doc = {
            "definitions": {"A": {"$ref": "#/definitions/B"}, "B": {"$ref": "#/definitions/A"}},
            "properties": {"id": {"$ref": "#/definitions/A"}},
        }
        assert checker.check(doc) == []

    def test_self_referencing_tree_terminates(self, checker):
        node = {"type": "object", "properties": {"id": {"type": "integer"}}}
        node["properties"]["child"] = node
        findings = checker.check(node)
        assert _rules(findings) == ["generic-field-id-type"]


class TestMalformedNodes:
    """Malformed sub-nodes are skipped with a MALFORMED_NODE finding."""

    def test_properties_not_mapping(self, checker):
        findings = checker.check({"properties": ["id"]})

        assert len(findings) == 1
        assert findings[0].kind == MALFORMED_NODE
        assert findings[0].is_malformed
        assert findings[0].path == "/properties"

    def test_traversal_continues(self, checker):
        doc = {
            "properties": {
                "broken": {"properties": "nope"},
                "label": "string",
                "id": {"type": "integer"},
            }
        }
        findings = checker.check(doc)

        assert [(f.kind, f.path) for f in findings] == [
            (MALFORMED_NODE, "/properties/broken/properties"),
            (MALFORMED_NODE, "/properties/label"),
            ("convention", "/properties/id"),
        ]

    def test_bad_items_and_combinators(self, checker):
        doc = {
            "properties": {
                "tags": {"type": "array", "items": "string"},
                "choice": {"oneOf": {"type": "string"}},
                "mixed": {"anyOf": [{"type": "string"}, 3]},
            }
        }
        findings = checker.check(doc)
        assert [f.path for f in findings] == [
            "/properties/tags/items",
            "/properties/choice/oneOf",
            "/properties/mixed/anyOf/1",
        ]
        assert all(f.kind == MALFORMED_NODE for f in findings)

    def test_boolean_schemas_are_valid(self, checker):
        doc = {"properties": {"tags": {"items": True}, "meta": {"additionalProperties": False}}}
        assert checker.check(doc) == []

    def test_every_path_exists(self, checker):
        doc = {
            "properties": {
                "address": {"properties": {"street": {"type": "integer"}}},
                "price": {"type": "number"},
                "items": {"type": "array", "items": 7},
                "addressee": {"$ref": "#/definitions/Person"},
            },
            "definitions": {
                "Person": {"properties": {"first_name": {"type": "string"}}},
                "Broken": [],
            },
        }
        findings = checker.check(doc)

        assert findings
        for f in findings:
            assert resolve_pointer(doc, f.path) is not None, f.path


class TestRuleSelection:
    """select / ignore and custom rule sets."""

    def test_select_group(self):
        doc = {"id": {"type": "integer"}, "amount": {"type": "number", "format": "double"}}
        findings = ConventionChecker(select=["generic"]).check(doc)
        assert _rules(findings) == ["generic-field-id-type"]

    def test_ignore_rule(self):
        doc = {"amount": {"type": "number", "format": "double"}}
        findings = ConventionChecker(ignore=["money-currency-missing"]).check(doc)
        assert _rules(findings) == ["money-amount-format"]

    def test_unknown_names_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="convention_check.checker"):
            checker = ConventionChecker(select=["generic", "moneys"], ignore=["no-such-rule"])

        assert checker.rules
        assert "'moneys'" in caplog.text
        assert "'no-such-rule'" in caplog.text
        assert "'generic'" not in caplog.text

    def test_custom_rules(self):
        rule = Rule(
            name="no-camel-case",
            group="naming",
            severity=SHOULD,
            message="'{name}' should be snake_case",
            detect=lambda ctx: [{}] if ctx.name != ctx.name.lower() else [],
        )
        findings = ConventionChecker(rules=[rule]).check({"properties": {"firstName": {"type": "string"}}})

        assert findings == [
            Finding(
                rule="no-camel-case",
                path="/properties/firstName",
                message="'firstName' should be snake_case",
                severity=SHOULD,
            )
        ]


class TestBarePropertyMap:

    def test_detects_bare_map(self):
        assert is_bare_property_map({"id": {"type": "string"}, "type": {"type": "string"}})

    def test_schema_is_not_bare(self):
        assert not is_bare_property_map({"type": "object", "properties": {}})
        assert not is_bare_property_map({"openapi": "3.0.0", "paths": {}})
        assert not is_bare_property_map({})
        assert not is_bare_property_map({"description": "Order", "properties": {"id": {"type": "string"}}})
        assert not is_bare_property_map({"required": ["id"], "items": [{"type": "string"}]})

    @pytest.mark.parametrize("name", ["description", "title", "format", "enum", "required", "items", "properties"])
    def test_keyword_named_property(self, name):
        doc = {"id": {"type": "integer"}, name: {"type": "string"}}
        assert is_bare_property_map(doc)

    def test_description_property_still_checked(self, checker):
        findings = checker.check({"id": {"type": "integer"}, "description": {"type": "string"}})
        assert [(f.rule, f.path) for f in findings] == [("generic-field-id-type", "/id")]
