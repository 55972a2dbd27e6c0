"""Dereference ``$ref`` JSON Reference pointers in API documents.

OpenAPI documents use ``$ref`` pointers (e.g.
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition. This module
performs a recursive deep-copy traversal of the document, inlining every
``$ref`` with the object it points to.

Unlike a plain dereference, the ``$ref`` key itself is **kept** on each
inlined node::

    {"$ref": "#/components/schemas/Pet", "type": "object", "properties": {...}}

Consumers that want the structure read the inlined keys; the type resolver
reads the ``$ref`` key and still names the node ``Pet``.

Only **internal** references (those starting with ``#/``) are supported.
Circular references are detected and left as bare ``$ref`` nodes at the
cycle point.

With ``strict=False`` (lenient mode) an external or dangling reference is
left in place with a logged warning instead of raising.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from rapidfront.exceptions import SpecParseError

logger = logging.getLogger(__name__)


def dereference(spec: dict[str, Any], strict: bool = True) -> dict[str, Any]:
    """Inline all ``$ref`` pointers in *spec*, keeping the ``$ref`` keys.

    Args:
        spec: The raw document, as returned by
            :func:`~rapidfront.parser.loader.load_spec`.
        strict: Raise on unresolvable references. When ``False`` they are
            kept unresolved and a warning is logged.

    Returns:
        A **new** dictionary (deep copy); the input is never modified.

    Raises:
        SpecParseError: In strict mode, if a ``$ref`` is external or points
            to a non-existent location.
    """
    root = copy.deepcopy(spec)
    return _deep_resolve(root, root, seen=frozenset(), strict=strict)


def _resolve_ref(ref: str, root: dict[str, Any]) -> Any:
    """Resolve a single ``$ref`` string against the root document.

    Handles RFC 6901 JSON Pointer escaping (``~0`` for ``~``, ``~1`` for ``/``).

    Raises:
        SpecParseError: If the reference is external or any pointer segment
            does not exist.
    """
    if not ref.startswith("#/"):
        raise SpecParseError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found at path"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': "
                f"cannot navigate into {type(current).__name__}"
            )

    return current


def _deep_resolve(obj: Any, root: dict[str, Any], seen: frozenset[str], strict: bool) -> Any:
    """Recursively inline all ``$ref`` pointers within *obj*.

    ``seen`` holds the references currently on the resolution stack; a
    reference already in it is a cycle and is returned unmodified. Sibling
    keys next to a ``$ref`` (allowed in OpenAPI 3.1) override the inlined
    target's keys.
    """
    if isinstance(obj, dict):
        ref = obj.get("$ref")
        if isinstance(ref, str):
            if ref in seen:
                return obj
            try:
                target = _resolve_ref(ref, root)
            except SpecParseError:
                if strict:
                    raise
                logger.warning("Leaving unresolvable $ref '%s' in place", ref)
                return obj
            resolved = _deep_resolve(target, root, seen | {ref}, strict)
            if not isinstance(resolved, dict):
                return resolved
            siblings = {
                key: _deep_resolve(value, root, seen, strict)
                for key, value in obj.items()
                if key != "$ref"
            }
            merged = {key: value for key, value in resolved.items() if key != "$ref"}
            merged.update(siblings)
            return {"$ref": ref, **merged}

        return {key: _deep_resolve(value, root, seen, strict) for key, value in obj.items()}

    if isinstance(obj, list):
        return [_deep_resolve(item, root, seen, strict) for item in obj]

    return obj
