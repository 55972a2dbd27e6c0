"""Built-in CLI commands for rapidfront.

* :mod:`~rapidfront.commands.generate` -- generate frontend modules from an
  API document.
* :mod:`~rapidfront.commands.inspect` -- list the tags, modules and
  endpoints a document would produce.
* :mod:`~rapidfront.commands.init` -- write a project-local
  ``rapidfront.json``.

Each module exports plain callback functions registered directly on the
root app in :mod:`rapidfront.app`.
"""
