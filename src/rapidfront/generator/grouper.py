"""Group endpoint records into per-tag modules.

**Algorithm summary**

1. Compute each endpoint's *effective tags*: its declared tags, or a single
   tag inferred from the first path segment when it declares none.
2. Drop tags outside the optional inclusion filter.
3. Insert the endpoint into the module of **every** remaining tag. An
   endpoint with two tags is duplicated into two modules so that each module
   stays a self-contained generation target.
4. Within a module, endpoints are keyed by call name; a later endpoint with
   the same call name replaces the earlier one in place.
5. Attach the catalog schemas referenced by each module's request and
   response types.

Modules come out in first-seen tag order and endpoints in declaration order,
so grouping the same endpoints twice yields identical modules.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from rapidfront.models import EndpointRecord, ModuleRecord, SchemaRecord
from rapidfront.naming import tag_from_path, tag_to_module_name
from rapidfront.parser.catalog import SchemaCatalog
from rapidfront.parser.types import base_type_name

logger = logging.getLogger(__name__)


def effective_tags(endpoint: EndpointRecord) -> list[str]:
    """Return the declared tags, or the tag inferred from the endpoint's path."""
    if endpoint.tags:
        return list(endpoint.tags)
    return [tag_from_path(endpoint.path)]


def group_modules(
    endpoints: Iterable[EndpointRecord],
    catalog: SchemaCatalog,
    tag_filter: Optional[Iterable[str]] = None,
) -> list[ModuleRecord]:
    """Group *endpoints* into modules, one per tag.

    Args:
        endpoints: Endpoints in declaration order.
        catalog: Schema catalog used to attach referenced schemas.
        tag_filter: Optional set of tags to keep. ``None`` keeps every tag;
            an empty collection keeps none.

    Returns:
        The modules in first-seen tag order.
    """
    allowed = set(tag_filter) if tag_filter is not None else None
    buckets: dict[str, dict[str, EndpointRecord]] = {}

    for endpoint in endpoints:
        for tag in effective_tags(endpoint):
            if allowed is not None and tag not in allowed:
                continue
            bucket = buckets.setdefault(tag, {})
            if endpoint.call_name in bucket:
                logger.debug(
                    "Call name '%s' repeated in tag '%s'; keeping %s %s",
                    endpoint.call_name,
                    tag,
                    endpoint.method.value,
                    endpoint.path,
                )
            bucket[endpoint.call_name] = endpoint

    modules = [
        ModuleRecord(
            module_name=tag_to_module_name(tag),
            tag=tag,
            endpoints=list(bucket.values()),
            referenced_schemas=referenced_schemas(bucket.values(), catalog),
        )
        for tag, bucket in buckets.items()
    ]
    logger.debug("Grouped endpoints into %d module(s)", len(modules))
    return modules


def referenced_schemas(
    endpoints: Iterable[EndpointRecord], catalog: SchemaCatalog
) -> list[SchemaRecord]:
    """Collect the catalog schemas named by request and response types.

    Array suffixes are stripped before lookup. Names missing from the catalog
    are omitted. The result is deduplicated in first-reference order.
    """
    seen: dict[str, SchemaRecord] = {}
    for endpoint in endpoints:
        for type_name in _schema_refs(endpoint):
            name = base_type_name(type_name)
            if name in seen:
                continue
            record = catalog.get(name)
            if record is not None:
                seen[name] = record
    return list(seen.values())


def _schema_refs(endpoint: EndpointRecord) -> list[str]:
    refs: list[str] = []
    if endpoint.request_body is not None:
        refs.append(endpoint.request_body.schema_ref)
    refs.extend(r.schema_ref for r in endpoint.responses if r.schema_ref)
    return refs
