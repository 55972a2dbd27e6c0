"""Index the named schemas of an API document.

The catalog is built in two phases: every definition container is scanned
into a plain dict, and only then is the table frozen behind a read-only
mapping. Nothing downstream can observe a half-built catalog, and nothing
can insert into it after :func:`index_schemas` returns.

Both container styles are read and merged into one name-keyed table:

* OpenAPI 3.x ``components.schemas``
* Swagger 2.0 ``definitions`` (scanned second, so it wins on a name clash)
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from rapidfront.models import SchemaRecord

logger = logging.getLogger(__name__)

SchemaCatalog = Mapping[str, SchemaRecord]
"""Read-only mapping of schema name to :class:`~rapidfront.models.SchemaRecord`."""

EMPTY_CATALOG: SchemaCatalog = MappingProxyType({})


def index_schemas(document: dict[str, Any]) -> SchemaCatalog:
    """Build the schema catalog for *document*.

    Missing ``properties`` or ``required`` on a definition default to empty.
    Property schemas are stored as-is; nothing is validated here.

    Args:
        document: The (dereferenced) API document.

    Returns:
        A read-only mapping from schema name to record. Empty when the
        document declares no schemas.
    """
    table: dict[str, SchemaRecord] = {}
    for name, raw in _iter_definitions(document):
        table[name] = _build_record(name, raw)
    logger.debug("Indexed %d schema(s)", len(table))
    return MappingProxyType(table)


def _iter_definitions(document: dict[str, Any]) -> Iterator[tuple[str, dict[str, Any]]]:
    components = document.get("components")
    if isinstance(components, dict):
        yield from _iter_container(components.get("schemas"))
    yield from _iter_container(document.get("definitions"))


def _iter_container(container: Any) -> Iterator[tuple[str, dict[str, Any]]]:
    if not isinstance(container, dict):
        return
    for name, raw in container.items():
        if isinstance(raw, dict):
            yield str(name), raw


def _build_record(name: str, raw: dict[str, Any]) -> SchemaRecord:
    properties = raw.get("properties")
    required = raw.get("required")
    return SchemaRecord(
        name=name,
        properties=dict(properties) if isinstance(properties, dict) else {},
        required=frozenset(r for r in required if isinstance(r, str))
        if isinstance(required, list)
        else frozenset(),
    )
