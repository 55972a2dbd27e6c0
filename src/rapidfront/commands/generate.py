"""Generate command -- turn an API document into frontend modules.

Implements ``rapidfront generate``: loads the document, resolves the
generation options (CLI flags, environment, ``rapidfront.json``, defaults),
builds the plan and writes it. The npm packages the generated code imports
are suggested, never installed.
"""

from __future__ import annotations

from typing import Optional

import typer

from rapidfront.exceptions import InvalidUsageError, RapidFrontError
from rapidfront.output import debug, error, info, print_tree, success, suggest, warning


def generate_command(
    spec: Optional[str] = typer.Argument(
        None,
        help="OpenAPI/Swagger URL or file path ('-' for stdin). "
        "Defaults to 'spec' from rapidfront.json.",
    ),
    library: Optional[str] = typer.Option(
        None,
        "--library",
        "-l",
        help="zustand, redux-toolkit, axios-hooks or fetch-api.",
    ),
    language: Optional[str] = typer.Option(
        None, "--language", help="typescript or javascript."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output directory (default ./src/api)."
    ),
    tags: Optional[list[str]] = typer.Option(
        None,
        "--tag",
        "-t",
        help="Only generate modules for this tag (repeatable).",
    ),
    js_strategy: Optional[str] = typer.Option(
        None,
        "--js-strategy",
        help="native (render JavaScript directly) or downgrade (strip rendered TypeScript).",
    ),
    templates: Optional[str] = typer.Option(
        None, "--templates", help="Directory of custom templates overriding the built-ins."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Show the files that would be written."
    ),
) -> None:
    """Generate API modules for a frontend library.

    Example::

        rapidfront generate ./openapi.yaml --library zustand
        rapidfront generate https://petstore3.swagger.io/api/v3/openapi.json \\
            --library redux-toolkit --language javascript --tag pet
    """
    from rapidfront.config import load_project_config, resolve_options
    from rapidfront.parser import load_spec
    from rapidfront.pipeline import build_plan, prepare_document
    from rapidfront.writer import write_plan

    try:
        project = load_project_config()
        source = spec or (project.spec if project else None)
        if not source:
            raise InvalidUsageError(
                "No spec given. Pass a URL or file path, or set 'spec' in rapidfront.json."
            )

        options = resolve_options(
            cli_library=library,
            cli_language=language,
            cli_output=output,
            cli_tags=tags,
            cli_js_strategy=js_strategy,
            cli_template_dir=templates,
            project=project,
        )
        debug(f"Options: {options.model_dump_json()}")

        info(f"Loading spec from: {source}")
        document = prepare_document(load_spec(source))
        plan = build_plan(document, options)
    except RapidFrontError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if plan.is_empty:
        warning("No modules matched the selection. Nothing was generated.")
        suggest(f"List available tags: rapidfront tags {source}")
        return

    paths = [f.path for f in plan.files]
    if dry_run:
        info(f"Dry run: {len(paths)} file(s) would be written to {options.output_directory}")
        print_tree(options.output_directory, paths)
        return

    write_plan(plan, options.output_directory)
    print_tree(options.output_directory, paths)
    success(
        f"Generated {len(plan.modules)} module(s) for "
        f"{options.library.display_name} in {options.output_directory}"
    )

    packages = options.library.npm_packages
    if packages:
        suggest(f"Install dependencies: npm install {' '.join(packages)}")
