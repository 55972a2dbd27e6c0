"""Code generator -- group endpoints into modules and render them to source files.

Sub-modules:

* :mod:`~rapidfront.generator.grouper` -- per-tag module grouping with fan-out.
* :mod:`~rapidfront.generator.helpers` -- naming and type helpers shared by
  templates and the planner.
* :mod:`~rapidfront.generator.renderer` -- explicit template registry and the
  :class:`~rapidfront.generator.renderer.TemplateRenderer`.
* :mod:`~rapidfront.generator.downgrade` -- best-effort TypeScript to
  JavaScript text conversion.
* :mod:`~rapidfront.generator.planner` -- file and folder names, index,
  types and README files.
"""

from rapidfront.generator.downgrade import downgrade
from rapidfront.generator.grouper import effective_tags, group_modules
from rapidfront.generator.planner import (
    file_extension,
    plan_file_name,
    plan_folder_name,
    plan_index,
    plan_readme,
    plan_types,
)
from rapidfront.generator.renderer import (
    TemplateRegistry,
    TemplateRenderer,
    build_template_registry,
)

__all__ = [
    "TemplateRegistry",
    "TemplateRenderer",
    "build_template_registry",
    "downgrade",
    "effective_tags",
    "file_extension",
    "group_modules",
    "plan_file_name",
    "plan_folder_name",
    "plan_index",
    "plan_readme",
    "plan_types",
]
