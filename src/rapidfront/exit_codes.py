"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~rapidfront.exceptions.RapidFrontError` subclass.
Shell wrappers and CI jobs can inspect the exit code to tell a bad spec
apart from a broken template without parsing stderr.

Example::

    $ rapidfront generate openapi.json --library vue-query
    $ echo $?
    8   # EXIT_UNKNOWN_LIBRARY
"""

EXIT_SUCCESS = 0
"""The command completed successfully (including an empty tag selection)."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SPEC_PARSE_ERROR = 7
"""The API document could not be loaded, parsed, or dereferenced."""

EXIT_UNKNOWN_LIBRARY = 8
"""The requested target library has no template."""

EXIT_RENDER_ERROR = 9
"""A module template failed to render."""
