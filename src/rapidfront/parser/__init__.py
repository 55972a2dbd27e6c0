"""API document parser -- load, dereference, index schemas, and extract endpoints.

This sub-package is responsible for the first half of the rapidfront
pipeline: turning a raw OpenAPI 3.x or Swagger 2.0 document (JSON or YAML,
local file or remote URL) into schema records and endpoint records that the
generator can consume.

Typical usage::

    from rapidfront.parser import (
        dereference, extract_endpoints, index_schemas, load_spec,
        validate_spec_version,
    )

    raw = load_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    validate_spec_version(raw)
    document = dereference(raw)
    catalog = index_schemas(document)
    endpoints = extract_endpoints(document)

Sub-modules:

* :mod:`~rapidfront.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and version validation.
* :mod:`~rapidfront.parser.resolver` -- Recursive ``$ref`` inlining that keeps
  reference names.
* :mod:`~rapidfront.parser.catalog` -- Immutable name-keyed schema table.
* :mod:`~rapidfront.parser.types` -- Schema node to type name resolution.
* :mod:`~rapidfront.parser.extractor` -- Walks ``paths`` and produces
  :class:`~rapidfront.models.EndpointRecord` objects.
"""

from rapidfront.parser.catalog import EMPTY_CATALOG, SchemaCatalog, index_schemas
from rapidfront.parser.extractor import extract_endpoint, extract_endpoints, extract_tags
from rapidfront.parser.loader import load_spec, validate_spec_version
from rapidfront.parser.resolver import dereference
from rapidfront.parser.types import base_type_name, resolve_type

__all__ = [
    "EMPTY_CATALOG",
    "SchemaCatalog",
    "base_type_name",
    "dereference",
    "extract_endpoint",
    "extract_endpoints",
    "extract_tags",
    "index_schemas",
    "load_spec",
    "resolve_type",
    "validate_spec_version",
]
