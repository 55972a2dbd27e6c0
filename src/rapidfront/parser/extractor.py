"""Extract endpoint records from a dereferenced API document.

This module walks the ``paths`` object of an OpenAPI 3.x or Swagger 2.0
document and builds one :class:`~rapidfront.models.EndpointRecord` per
path + HTTP method combination. Only the five methods in
:class:`~rapidfront.models.HTTPMethod` are extracted, in the fixed order
get, post, put, delete, patch.

Parameter merging follows the OpenAPI specification: path-level parameters
provide defaults, and operation-level parameters override them when they share
the same ``name`` and ``in`` values.

Swagger 2.0 shapes are folded into the same records:

* an ``in: body`` parameter becomes the request body, with its content type
  taken from the operation's ``consumes``, then the document's;
* a response carrying ``schema`` directly is read like an
  ``application/json`` response.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from rapidfront.models import (
    EndpointRecord,
    HTTPMethod,
    ParameterLocation,
    ParameterRecord,
    RequestBodyRecord,
    ResponseRecord,
)
from rapidfront.naming import build_call_name
from rapidfront.parser.types import ANY_TYPE, resolve_type

_HTTP_METHODS = ("get", "post", "put", "delete", "patch")

_JSON_CONTENT_TYPE = "application/json"


def extract_endpoints(document: dict[str, Any]) -> list[EndpointRecord]:
    """Extract every endpoint of *document* in declaration order.

    Args:
        document: The dereferenced API document.

    Returns:
        Endpoints ordered by path (document order), then by method in the
        order get, post, put, delete, patch.
    """
    paths = document.get("paths")
    if not isinstance(paths, dict):
        return []

    document_consumes = document.get("consumes")
    endpoints: list[EndpointRecord] = []

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue

        # Path-level parameters apply to all operations under this path
        path_params = path_item.get("parameters") or []

        for method in _HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue
            endpoints.append(
                extract_endpoint(
                    str(path),
                    method,
                    operation,
                    path_parameters=path_params,
                    default_consumes=document_consumes,
                )
            )

    return endpoints


def extract_endpoint(
    path: str,
    method: str,
    operation: dict[str, Any],
    path_parameters: Iterable[dict[str, Any]] = (),
    default_consumes: Optional[list[str]] = None,
) -> EndpointRecord:
    """Build the :class:`~rapidfront.models.EndpointRecord` for one operation.

    Args:
        path: Path template, e.g. ``/users/{id}``.
        method: HTTP method in any case; must be one of the five extracted
            methods.
        operation: The operation object.
        path_parameters: Parameters declared on the enclosing path item.
        default_consumes: Document-level Swagger 2 ``consumes`` list.

    Returns:
        The endpoint record. ``operation_id`` falls back to the call name.
    """
    call_name = build_call_name(method, path)
    merged = _merge_parameters(
        [p for p in path_parameters if isinstance(p, dict)],
        [p for p in operation.get("parameters") or [] if isinstance(p, dict)],
    )

    request_body = _extract_request_body(operation.get("requestBody"))
    if request_body is None:
        request_body = _extract_body_parameter(
            merged, operation.get("consumes") or default_consumes
        )

    tags = operation.get("tags")
    return EndpointRecord(
        operation_id=operation.get("operationId") or call_name,
        call_name=call_name,
        method=HTTPMethod(method.upper()),
        path=path,
        summary=operation.get("summary"),
        description=operation.get("description"),
        parameters=_extract_parameters(merged),
        request_body=request_body,
        responses=_extract_responses(operation.get("responses")),
        tags=[str(t) for t in tags] if isinstance(tags, list) else [],
    )


def extract_tags(document: dict[str, Any]) -> list[str]:
    """Return every tag used by an operation of *document*, sorted.

    Tags listed in the top-level ``tags`` array but never used by an
    operation are not included.
    """
    tags: set[str] = set()
    for endpoint in extract_endpoints(document):
        tags.update(endpoint.tags)
    return sorted(tags)


def _merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level parameters with the same
    name and location (``in`` field).
    """
    op_keys = {(p.get("name", ""), p.get("in", "")) for p in op_params}

    merged = [
        p for p in path_params if (p.get("name", ""), p.get("in", "")) not in op_keys
    ]
    merged.extend(op_params)
    return merged


def _extract_parameters(params_list: list[dict[str, Any]]) -> list[ParameterRecord]:
    """Convert raw parameter dicts into :class:`~rapidfront.models.ParameterRecord` models.

    Parameters with unrecognised ``in`` locations (including Swagger 2
    ``body`` and ``formData``) are skipped.
    """
    parameters: list[ParameterRecord] = []

    for param in params_list:
        try:
            location = ParameterLocation(param.get("in", "query"))
        except ValueError:
            continue

        parameters.append(
            ParameterRecord(
                name=str(param.get("name", "")),
                location=location,
                required=bool(param.get("required", False)),
                resolved_type=_parameter_type(param),
                description=param.get("description"),
            )
        )

    return parameters


def _parameter_type(param: dict[str, Any]) -> str:
    """Resolve a parameter's type from ``schema`` (3.x) or inline ``type`` (2.0)."""
    schema = param.get("schema")
    if isinstance(schema, dict):
        return resolve_type(schema)
    # The parameter node itself may carry a preserved $ref key, so only the
    # type fields are considered.
    inline = {key: param[key] for key in ("type", "items") if key in param}
    return resolve_type(inline)


def _extract_request_body(body: Any) -> Optional[RequestBodyRecord]:
    """Extract an OpenAPI 3.x ``requestBody``.

    The first declared media type is used. A body without any media type
    defaults to ``application/json`` with an ``any`` schema.
    """
    if not isinstance(body, dict):
        return None

    content = body.get("content")
    content_type = _JSON_CONTENT_TYPE
    schema_ref = ANY_TYPE
    if isinstance(content, dict) and content:
        content_type, media = next(iter(content.items()))
        if isinstance(media, dict) and isinstance(media.get("schema"), dict):
            schema_ref = resolve_type(media["schema"])

    return RequestBodyRecord(
        required=bool(body.get("required", False)),
        content_type=str(content_type),
        schema_ref=schema_ref,
    )


def _extract_body_parameter(
    params_list: list[dict[str, Any]], consumes: Any
) -> Optional[RequestBodyRecord]:
    """Turn a Swagger 2.0 ``in: body`` parameter into a request body."""
    for param in params_list:
        if param.get("in") != "body":
            continue
        content_type = _JSON_CONTENT_TYPE
        if isinstance(consumes, list) and consumes:
            content_type = str(consumes[0])
        return RequestBodyRecord(
            required=bool(param.get("required", False)),
            content_type=content_type,
            schema_ref=resolve_type(param.get("schema")),
        )
    return None


def _extract_responses(responses: Any) -> list[ResponseRecord]:
    """Extract responses in declaration order.

    The schema comes from the ``application/json`` entry when one is
    declared, otherwise from the first content type. Swagger 2.0 responses
    carry ``schema`` directly on the response object.
    """
    if not isinstance(responses, dict):
        return []

    records: list[ResponseRecord] = []
    for status_code, response in responses.items():
        if not isinstance(response, dict):
            continue
        records.append(
            ResponseRecord(
                status_code=str(status_code),
                description=response.get("description"),
                schema_ref=_response_schema_ref(response),
            )
        )
    return records


def _response_schema_ref(response: dict[str, Any]) -> Optional[str]:
    content = response.get("content")
    if isinstance(content, dict) and content:
        if _JSON_CONTENT_TYPE in content:
            media = content[_JSON_CONTENT_TYPE]
        else:
            media = next(iter(content.values()))
        if isinstance(media, dict) and isinstance(media.get("schema"), dict):
            return resolve_type(media["schema"])
        return None

    schema = response.get("schema")
    if isinstance(schema, dict):
        return resolve_type(schema)
    return None
