"""rapidfront -- Generate frontend API modules from OpenAPI/Swagger specs.

This package converts an OpenAPI 3.x or Swagger 2.0 document into source
modules for a frontend state-management or data-fetching library: one module
per tag, each exposing typed client calls, plus an index file, a ``types``
file (TypeScript only) and a README.

Typical workflow::

    rapidfront tags openapi.yaml                      # see what is in the spec
    rapidfront generate openapi.yaml --library zustand

Supported libraries: Zustand, Redux Toolkit, axios-hooks and plain Fetch API
hooks, each in TypeScript or JavaScript.

Modules:
    app: Typer application and CLI entry point.
    pipeline: The generation core, document in and file plan out.
    models: Pydantic models shared across the entire package.
    naming: Identifier and file-name derivation.
    config: Project config and option precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting system with Rich support.
    writer: Writes a generation plan to disk.
"""

__version__ = "0.1.0"
