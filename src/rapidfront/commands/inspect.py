"""Inspect commands -- examine what a document would generate.

``rapidfront tags`` lists the tags declared by the document's operations.
``rapidfront inspect`` lists every module with its endpoints and the call
names the generated code will use. Both are read-only and print tables (or
JSON / plain text with ``--json`` / ``--plain``).
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from rapidfront.exceptions import RapidFrontError
from rapidfront.output import error, info, print_table


def _load_document(spec: str) -> dict[str, Any]:
    from rapidfront.parser import load_spec
    from rapidfront.pipeline import prepare_document

    try:
        return prepare_document(load_spec(spec))
    except RapidFrontError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def tags_command(
    spec: str = typer.Argument(..., help="OpenAPI/Swagger URL or file path ('-' for stdin)."),
) -> None:
    """List the tags used by the document's operations.

    Example::

        rapidfront tags ./openapi.yaml
        rapidfront --json tags ./openapi.yaml
    """
    from rapidfront.naming import tag_to_module_name
    from rapidfront.parser import extract_tags

    tags = extract_tags(_load_document(spec))
    if not tags:
        info("No tags declared; modules will be named after the first path segment.")
        return

    rows = [[tag, tag_to_module_name(tag)] for tag in tags]
    print_table(["Tag", "Module"], rows, title="Tags")


def inspect_command(
    spec: str = typer.Argument(..., help="OpenAPI/Swagger URL or file path ('-' for stdin)."),
    tags: Optional[list[str]] = typer.Option(
        None, "--tag", "-t", help="Only show modules for this tag (repeatable)."
    ),
) -> None:
    """List the modules and endpoints the document would generate.

    Example::

        rapidfront inspect ./openapi.yaml
        rapidfront inspect ./openapi.yaml --tag Users
    """
    from rapidfront.generator import group_modules
    from rapidfront.generator.helpers import response_type
    from rapidfront.parser import extract_endpoints, index_schemas

    document = _load_document(spec)
    catalog = index_schemas(document)
    modules = group_modules(extract_endpoints(document), catalog, tags or None)

    if not modules:
        info("No modules matched the selection.")
        return

    rows = [
        [
            module.module_name,
            endpoint.method.value,
            endpoint.path,
            endpoint.call_name,
            response_type(endpoint),
        ]
        for module in modules
        for endpoint in module.endpoints
    ]
    print_table(
        ["Module", "Method", "Path", "Call", "Response"],
        rows,
        title=f"{len(modules)} module(s), {len(catalog)} schema(s)",
    )
