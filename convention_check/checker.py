"""
Convention checker — walks a schema document and runs every registered rule.

Usage:
    from convention_check.checker import ConventionChecker
    findings = ConventionChecker().check(schema)
    for f in findings:
        print(f.severity, f.rule, f.path, f.message)
"""

import logging
from collections.abc import Mapping
from typing import Dict, Iterable, List, Optional

from convention_check.config import MUST, SCHEMA_CONTAINERS
from convention_check.models import Finding, MALFORMED_NODE
from convention_check.rules import PropertyContext, Rule, discover_rules
from convention_check.utils import join_pointer

logger = logging.getLogger(__name__)

MALFORMED_RULE = "malformed-node"
COMBINATORS = ("allOf", "anyOf", "oneOf")

# Schema / OpenAPI keywords by the shape of value they take. A root key only
# counts as a keyword when its value has that shape; otherwise it names a property.
STRING_KEYWORDS = frozenset({
    "$schema", "$id", "$ref", "title", "description", "format", "pattern",
    "openapi", "swagger",
})
LIST_KEYWORDS = frozenset({"required", "enum", "allOf", "anyOf", "oneOf"})
SCHEMA_MAP_KEYWORDS = frozenset({"properties", "definitions", "$defs", "components", "paths"})


class InvalidDocumentError(ValueError):
    """The document handed to check() is missing or not a mapping."""


def _type_name(value) -> str:
    return type(value).__name__


def _is_named_map(value) -> bool:
    # {"id": {...}} under `properties`, unlike a property definition {"type": "string"}
    return isinstance(value, Mapping) and not any(is_schema_keyword(k, v, nested=False) for k, v in value.items())


def is_schema_keyword(key, value, nested: bool = True) -> bool:
    """True when ``key: value`` reads as a schema keyword rather than a property definition."""
    if key in STRING_KEYWORDS:
        return isinstance(value, str)
    if key in LIST_KEYWORDS:
        return isinstance(value, list)
    if key in SCHEMA_MAP_KEYWORDS:
        return nested and _is_named_map(value)
    if key == "type":
        return isinstance(value, (str, list))
    if key in ("items", "additionalProperties"):
        return isinstance(value, (bool, list))
    return False


def is_bare_property_map(document) -> bool:
    """True for a root like {"id": {...}, "amount": {...}}: property name → definition.

    A root using any schema or OpenAPI keyword is a schema, never a bare map.
    A property literally named `description` or `type` is a mapping, whereas
    the keywords take a string.
    """
    if not document or any(is_schema_keyword(k, v) for k, v in document.items()):
        return False
    return all(isinstance(v, Mapping) for v in document.values())


def _normalize_pointer(pointer: str) -> str:
    return pointer[1:] if pointer.startswith("#") else pointer


class ConventionChecker:
    """Run convention rules over JSON-Schema / OpenAPI documents.

    Args:
        rules: Rules to run (defaults to every discovered rule group).
        select: Only run rules whose name or group is listed.
        ignore: Skip rules whose name or group is listed.
    """

    def __init__(
        self,
        rules: Optional[Iterable[Rule]] = None,
        select: Optional[Iterable[str]] = None,
        ignore: Optional[Iterable[str]] = None,
    ):
        available = tuple(rules) if rules is not None else discover_rules()
        select = frozenset(select or ())
        ignore = frozenset(ignore or ())

        known = {r.name for r in available} | {r.group for r in available}
        for option, names in (("select", select), ("ignore", ignore)):
            for unknown in sorted(names - known):
                logger.warning("Unknown rule or group in %s: '%s'", option, unknown)

        self.rules = tuple(
            r for r in available
            if (not select or r.name in select or r.group in select)
            and r.name not in ignore and r.group not in ignore
        )

    def check(
        self,
        document,
        reference_hints: Optional[Dict[str, str]] = None,
    ) -> List[Finding]:
        """Return the findings for ``document`` in depth-first, pre-order.

        Sibling keywords are visited in declaration order, so findings under
        ``allOf`` come before those under ``properties`` when ``allOf`` is
        declared first.

        Args:
            document: Schema document (mapping). Never mutated.
            reference_hints: JSON pointer of a property → name of the entity
                type it references. Enables reference naming checks.

        Raises:
            InvalidDocumentError: if ``document`` is None or not a mapping.
        """
        if document is None:
            raise InvalidDocumentError("document is required, got None")
        if not isinstance(document, Mapping):
            raise InvalidDocumentError(
                f"document must be a mapping, got {_type_name(document)}"
            )

        hints = {_normalize_pointer(k): v for k, v in (reference_hints or {}).items()}
        findings: List[Finding] = []
        active = set()

        if is_bare_property_map(document):
            self._walk_property_map(document, "", document, hints, findings, active)
        else:
            self._walk(document, "", document, hints, findings, active, top=True)

        logger.debug("Checked document with %d rules: %d findings", len(self.rules), len(findings))
        return findings

    # ── Traversal ────────────────────────────────────────────

    def _walk(self, node, path, root, hints, out, active, top=False):
        # Guards against self-referencing in-memory trees (e.g. YAML aliases)
        if id(node) in active:
            return
        active.add(id(node))
        try:
            for key in node:
                if key == "properties":
                    self._walk_properties(node, path, root, hints, out, active)
                elif key == "items":
                    self._walk_items(node, path, root, hints, out, active)
                elif key in COMBINATORS:
                    self._walk_combinator(node, key, path, root, hints, out, active)
                elif key == "additionalProperties":
                    self._walk_additional(node, path, root, hints, out, active)
                elif top:
                    for keys in SCHEMA_CONTAINERS:
                        if keys[0] == key:
                            self._walk_container(keys, root, hints, out, active)
        finally:
            active.discard(id(node))

    def _walk_container(self, keys, root, hints, out, active):
        """Named schemas under ``definitions``, ``$defs`` or ``components/schemas``."""
        container = root
        for key in keys:
            if not isinstance(container, Mapping) or key not in container:
                return
            container = container[key]

        path = join_pointer("", *keys)
        if not isinstance(container, Mapping):
            out.append(self._malformed(path, f"'{keys[-1]}' must be a mapping, found {_type_name(container)}"))
            return

        for name, schema in container.items():
            schema_path = join_pointer(path, name)
            if not isinstance(schema, Mapping):
                out.append(self._malformed(schema_path, f"schema '{name}' must be a mapping, found {_type_name(schema)}"))
                continue
            self._walk(schema, schema_path, root, hints, out, active)

    def _walk_properties(self, node, path, root, hints, out, active):
        props = node["properties"]
        props_path = join_pointer(path, "properties")
        if not isinstance(props, Mapping):
            out.append(self._malformed(props_path, f"'properties' must be a mapping, found {_type_name(props)}"))
            return
        self._walk_property_map(props, props_path, root, hints, out, active)

    def _walk_property_map(self, props, props_path, root, hints, out, active):
        for key, prop in props.items():
            name = str(key)
            prop_path = join_pointer(props_path, name)
            if not isinstance(prop, Mapping):
                out.append(self._malformed(prop_path, f"property '{name}' must be a mapping, found {_type_name(prop)}"))
                continue

            ctx = PropertyContext(
                name=name,
                path=prop_path,
                schema=prop,
                siblings=props,
                parent_path=props_path,
                root=root,
                hint=hints.get(prop_path),
            )
            for rule in self.rules:
                if rule.applies_to(name):
                    out.extend(rule.evaluate(ctx))

            self._walk(prop, prop_path, root, hints, out, active)

    def _walk_items(self, node, path, root, hints, out, active):
        items = node["items"]
        items_path = join_pointer(path, "items")
        if isinstance(items, Mapping):
            self._walk(items, items_path, root, hints, out, active)
        elif isinstance(items, list):
            self._walk_list(items, items_path, "items", root, hints, out, active)
        elif not isinstance(items, bool):
            out.append(self._malformed(items_path, f"'items' must be a mapping or a list, found {_type_name(items)}"))

    def _walk_combinator(self, node, key, path, root, hints, out, active):
        value = node[key]
        key_path = join_pointer(path, key)
        if isinstance(value, list):
            self._walk_list(value, key_path, key, root, hints, out, active)
        else:
            out.append(self._malformed(key_path, f"'{key}' must be a list, found {_type_name(value)}"))

    def _walk_additional(self, node, path, root, hints, out, active):
        extra = node["additionalProperties"]
        extra_path = join_pointer(path, "additionalProperties")
        if isinstance(extra, Mapping):
            self._walk(extra, extra_path, root, hints, out, active)
        elif not isinstance(extra, bool):
            out.append(self._malformed(extra_path, f"'additionalProperties' must be a mapping or a boolean, found {_type_name(extra)}"))

    def _walk_list(self, schemas, path, key, root, hints, out, active):
        for i, schema in enumerate(schemas):
            item_path = join_pointer(path, i)
            if isinstance(schema, Mapping):
                self._walk(schema, item_path, root, hints, out, active)
            else:
                out.append(self._malformed(item_path, f"'{key}' entry must be a mapping, found {_type_name(schema)}"))

    @staticmethod
    def _malformed(path: str, message: str) -> Finding:
        logger.debug("Skipping malformed node at %s: %s", path or "/", message)
        return Finding(
            rule=MALFORMED_RULE,
            path=path,
            message=message,
            severity=MUST,
            kind=MALFORMED_NODE,
        )


def check(document, reference_hints: Optional[Dict[str, str]] = None) -> List[Finding]:
    """Check ``document`` with every discovered rule."""
    return ConventionChecker().check(document, reference_hints=reference_hints)
