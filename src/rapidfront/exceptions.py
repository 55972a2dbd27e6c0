"""Exception hierarchy for rapidfront.

All exceptions inherit from :class:`RapidFrontError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`rapidfront.exit_codes`.
The top-level handler in :func:`rapidfront.app.main` catches
``RapidFrontError`` and exits with the matching code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    RapidFrontError (exit 1)
    +-- InvalidUsageError    (exit 2)
    +-- SpecParseError       (exit 7)
    +-- UnknownLibraryError  (exit 8)
    +-- RenderError          (exit 9)
    +-- ConfigError          (exit 1)

Schema and type resolution problems are deliberately absent: they degrade to
the ``any`` type instead of raising.
"""

from __future__ import annotations

from rapidfront.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_RENDER_ERROR,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_UNKNOWN_LIBRARY,
)


class RapidFrontError(Exception):
    """Base exception for all rapidfront errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RapidFrontError):
    """Raised for invalid CLI arguments or option combinations."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(RapidFrontError):
    """Raised when the API document cannot be loaded, parsed, or dereferenced."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class UnknownLibraryError(RapidFrontError):
    """Raised when a library selection has no registered template.

    Fatal: generation aborts before any module is rendered.
    """

    exit_code = EXIT_UNKNOWN_LIBRARY

    def __init__(self, library: object):
        self.library = library
        super().__init__(f"Unknown library: {library}")


class RenderError(RapidFrontError):
    """Raised when a template fails to evaluate for a module.

    Fatal for the whole run: the pipeline never returns a partial plan.
    """

    exit_code = EXIT_RENDER_ERROR

    def __init__(self, module_name: str, library: object, reason: str):
        self.module_name = module_name
        self.library = library
        super().__init__(
            f"Failed to render module '{module_name}' for {library}: {reason}"
        )


class ConfigError(RapidFrontError):
    """Raised for configuration problems (invalid project config, missing templates)."""

    exit_code = EXIT_GENERIC_FAILURE
