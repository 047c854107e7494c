"""
Shared schema-node helpers used by the checker and the rule groups.

All helpers are read-only: they never mutate the document they inspect.
"""

import re
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Tuple


# ── JSON pointers ────────────────────────────────────────────

def escape_token(token: str) -> str:
    """Escape one reference token (RFC 6901)."""
    return str(token).replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def join_pointer(base: str, *tokens) -> str:
    """Append tokens to a JSON pointer: join_pointer("", "properties", "id") → "/properties/id"."""
    return base + "".join("/" + escape_token(t) for t in tokens)


def resolve_pointer(document: Any, pointer: str) -> Any:
    """Return the value at ``pointer`` or None if it does not exist."""
    if pointer in ("", "#"):
        return document
    if pointer.startswith("#"):
        pointer = pointer[1:]
    if not pointer.startswith("/"):
        return None
    node = document
    for raw in pointer[1:].split("/"):
        token = unescape_token(raw)
        if isinstance(node, Mapping):
            if token not in node:
                return None
            node = node[token]
        elif isinstance(node, list):
            if not token.isdigit() or int(token) >= len(node):
                return None
            node = node[int(token)]
        else:
            return None
    return node


def resolve_ref(root: Any, node: Any, max_depth: int = 32) -> Optional[Mapping]:
    """Follow local ``$ref`` chains starting at ``node``.

    Only same-document refs (``#/...``) are followed. Returns None for a
    dangling, remote or cyclic ref, or when the target is not a mapping.
    """
    seen = set()
    while isinstance(node, Mapping) and "$ref" in node:
        ref = node["$ref"]
        if not isinstance(ref, str) or not ref.startswith("#") or ref in seen:
            return None
        if len(seen) >= max_depth:
            return None
        seen.add(ref)
        node = resolve_pointer(root, ref)
    return node if isinstance(node, Mapping) else None


# ── Node accessors ───────────────────────────────────────────

def declared_types(node: Mapping) -> Tuple[str, ...]:
    """Return the declared ``type`` as a tuple (``type`` may be a list in JSON Schema)."""
    t = node.get("type")
    if isinstance(t, str):
        return (t,)
    if isinstance(t, list):
        return tuple(x for x in t if isinstance(x, str) and x != "null")
    return ()


def has_type(node: Mapping, *types: str) -> bool:
    return any(t in types for t in declared_types(node))


def is_string_only(node: Mapping) -> bool:
    """Declared type is exactly string (nullable allowed)."""
    ts = declared_types(node)
    return bool(ts) and all(t == "string" for t in ts)


def get_properties(node: Any) -> Optional[Mapping]:
    """Return ``node['properties']`` when it is a well-formed mapping, else None."""
    if not isinstance(node, Mapping):
        return None
    props = node.get("properties")
    return props if isinstance(props, Mapping) else None


def is_array(node: Mapping) -> bool:
    return has_type(node, "array") or "items" in node


def describe_type(node: Mapping) -> str:
    """Readable 'type/format' string for messages."""
    ts = declared_types(node)
    t = "|".join(ts) if ts else "untyped"
    fmt = node.get("format")
    return f"{t}/{fmt}" if fmt else t


# ── Naming ───────────────────────────────────────────────────

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def snake_case(name: str) -> str:
    """'SalesOrder' → 'sales_order', 'sales-order' → 'sales_order'."""
    text = _CAMEL_BOUNDARY.sub("_", name.strip())
    text = re.sub(r"[^A-Za-z0-9]+", "_", text)
    return text.strip("_").lower()


def format_names(names: Iterable[str]) -> str:
    return ", ".join(f"'{n}'" for n in names)
