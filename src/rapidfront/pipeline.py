"""Run the generation core: document in, file plan out.

:func:`build_plan` wires the parser and generator stages together::

    catalog   = index_schemas(document)
    endpoints = extract_endpoints(document)
    modules   = group_modules(endpoints, catalog, options.tag_filter)
    files     = one rendered file per module + index + types + README

It performs no I/O apart from reading templates when no registry is given.
Loading the document happens before (:func:`prepare_document`) and writing
the files after (:func:`rapidfront.writer.write_plan`).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from rapidfront.exceptions import SpecParseError
from rapidfront.generator.grouper import group_modules
from rapidfront.generator.planner import (
    file_extension,
    plan_index,
    plan_module_path,
    plan_readme,
    plan_types,
)
from rapidfront.generator.renderer import (
    TemplateRegistry,
    TemplateRenderer,
    build_template_registry,
)
from rapidfront.models import GeneratedFile, GenerationOptions, GenerationPlan, Language
from rapidfront.parser.catalog import index_schemas
from rapidfront.parser.extractor import extract_endpoints
from rapidfront.parser.loader import validate_spec_version
from rapidfront.parser.resolver import dereference

logger = logging.getLogger(__name__)


def prepare_document(raw: dict[str, Any]) -> dict[str, Any]:
    """Validate the version of *raw* and dereference it.

    Dereferencing is strict first. When a reference cannot be resolved the
    document is dereferenced again in lenient mode, leaving the broken
    references in place; their names still resolve because ``$ref`` keys
    are kept.

    Raises:
        SpecParseError: If the document declares no supported version.
    """
    validate_spec_version(raw)
    try:
        return dereference(raw)
    except SpecParseError as exc:
        logger.warning("Failed to dereference spec, continuing with unresolved refs: %s", exc)
        return dereference(raw, strict=False)


def build_plan(
    document: dict[str, Any],
    options: GenerationOptions,
    registry: Optional[TemplateRegistry] = None,
) -> GenerationPlan:
    """Build every file of a generation run.

    Args:
        document: The dereferenced API document.
        options: Resolved generation options.
        registry: Compiled templates; built from ``options.template_dir``
            when omitted.

    Returns:
        The plan. When the selection yields no module the plan is empty,
        a warning is logged, and nothing else is rendered.

    Raises:
        UnknownLibraryError: If the library has no registered template.
        RenderError: If any module fails to render. No partial plan is
            returned.
    """
    catalog = index_schemas(document)
    endpoints = extract_endpoints(document)
    modules = group_modules(endpoints, catalog, options.tag_filter)
    logger.debug(
        "Extracted %d endpoint(s) into %d module(s)", len(endpoints), len(modules)
    )

    if not modules:
        logger.warning("No modules selected; nothing to generate")
        return GenerationPlan(options=options)

    if registry is None:
        registry = build_template_registry(options.template_dir)
    renderer = TemplateRenderer(registry, catalog)

    files = [
        GeneratedFile(
            path=plan_module_path(module, options.library, options.language),
            content=renderer.render(
                module, options.library, options.language, options.js_strategy
            ),
        )
        for module in modules
    ]

    ext = file_extension(options.language)
    files.append(
        GeneratedFile(
            path=f"index{ext}",
            content=plan_index(modules, options.library, options.language),
        )
    )
    if options.language == Language.TYPESCRIPT:
        files.append(GeneratedFile(path="types.ts", content=plan_types(modules, catalog)))
    files.append(
        GeneratedFile(path="README.md", content=plan_readme(modules, options, renderer))
    )

    return GenerationPlan(options=options, modules=modules, files=files)
