"""Map schema nodes to canonical type names.

:func:`resolve_type` is the only place in rapidfront where a schema node is
turned into a type name. Parameter types, request and response schema
references, template output and the generated ``types`` file all go through
it, so the same node always gets the same name.

Resolution rules, first match wins:

1. A reference node (``{"$ref": "#/components/schemas/User"}``) is named
   after the last segment of its target: ``User``.
2. ``type: array`` with an ``items`` node resolves to the item type plus
   ``[]``, recursively (``User[][]`` for nested arrays).
3. Primitive types go through :data:`PRIMITIVE_TYPE_MAP`.
4. Anything else is ``any``.

Resolution never raises; malformed nodes degrade to :data:`ANY_TYPE`.
"""

from __future__ import annotations

from typing import Any

ANY_TYPE = "any"
"""Sentinel type for anything that cannot be resolved."""

ARRAY_SUFFIX = "[]"

PRIMITIVE_TYPE_MAP: dict[str, str] = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "array": "any[]",
    "object": ANY_TYPE,
}

BUILTIN_TYPE_NAMES = frozenset({"string", "number", "boolean", ANY_TYPE})


def resolve_type(node: Any) -> str:
    """Resolve a schema node to its type name.

    Args:
        node: A schema dict, possibly a (dereferenced) reference node, or
            ``None``.

    Returns:
        The type name, e.g. ``"User"``, ``"string[]"`` or ``"any"``.
    """
    if not isinstance(node, dict):
        return ANY_TYPE

    ref = node.get("$ref")
    if isinstance(ref, str):
        return ref.rsplit("/", 1)[-1] or ANY_TYPE

    schema_type = _declared_type(node)
    items = node.get("items")
    if schema_type == "array" and isinstance(items, dict):
        return resolve_type(items) + ARRAY_SUFFIX

    return PRIMITIVE_TYPE_MAP.get(schema_type, ANY_TYPE)


def _declared_type(node: dict[str, Any]) -> str:
    """Return the declared ``type``, unwrapping OpenAPI 3.1 type lists.

    ``["string", "null"]`` yields ``"string"``. A missing or non-string
    type yields an empty string.
    """
    type_value = node.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        type_value = non_null[0] if non_null else None
    return type_value if isinstance(type_value, str) else ""


def base_type_name(type_name: str) -> str:
    """Strip every array suffix: ``User[][]`` -> ``User``."""
    while type_name.endswith(ARRAY_SUFFIX):
        type_name = type_name[: -len(ARRAY_SUFFIX)]
    return type_name
