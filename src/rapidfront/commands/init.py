"""Init command -- write a project-local ``rapidfront.json``.

Stores the document location and generation settings so that later runs of
``rapidfront generate`` need no flags. Values are validated the same way
``generate`` validates them; an existing file is overwritten.
"""

from __future__ import annotations

from typing import Optional

import typer

from rapidfront.exceptions import RapidFrontError
from rapidfront.output import error, info, success, suggest


def init_command(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI/Swagger URL or file path."
    ),
    library: str = typer.Option(
        "zustand",
        "--library",
        "-l",
        help="zustand, redux-toolkit, axios-hooks or fetch-api.",
    ),
    language: str = typer.Option("typescript", "--language", help="typescript or javascript."),
    output: str = typer.Option("./src/api", "--output", "-o", help="Output directory."),
    tags: Optional[list[str]] = typer.Option(
        None, "--tag", "-t", help="Only generate modules for this tag (repeatable)."
    ),
    js_strategy: Optional[str] = typer.Option(
        None, "--js-strategy", help="native or downgrade."
    ),
    templates: Optional[str] = typer.Option(
        None, "--templates", help="Directory of custom templates."
    ),
) -> None:
    """Create ``rapidfront.json`` in the current directory.

    Example::

        rapidfront init --spec ./openapi.yaml --library redux-toolkit
        rapidfront generate
    """
    from rapidfront.config import project_config_path, resolve_options, save_project_config
    from rapidfront.models import ProjectConfig

    try:
        options = resolve_options(
            cli_library=library,
            cli_language=language,
            cli_output=output,
            cli_tags=tags,
            cli_js_strategy=js_strategy,
            cli_template_dir=templates,
            project=ProjectConfig(),
        )
    except RapidFrontError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if project_config_path().is_file():
        info("rapidfront.json already exists and will be overwritten.")

    config = ProjectConfig(
        spec=spec,
        library=options.library,
        language=options.language,
        output_directory=options.output_directory,
        selected_tags=options.selected_tags or None,
        js_strategy=options.js_strategy if js_strategy else None,
        template_dir=options.template_dir,
    )
    path = save_project_config(config)

    success(f"Wrote {path.name}")
    if spec:
        suggest("Generate modules: rapidfront generate")
    else:
        suggest("Generate modules: rapidfront generate <spec>")
