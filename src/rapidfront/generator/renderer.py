"""Render module source files from Jinja2 templates.

The template registry is built once, up front, by
:func:`build_template_registry` and handed to :class:`TemplateRenderer`
explicitly. Nothing in this module keeps process-wide template state, so a
renderer can be constructed in isolation with any registry (tests build one
from string templates).

Templates receive the :class:`~rapidfront.models.ModuleRecord` plus the
helpers from :mod:`rapidfront.generator.helpers`, and a ``typed`` toggle.
JavaScript is normally rendered with ``typed`` off, so no type syntax is ever
produced. With :attr:`~rapidfront.models.JavaScriptStrategy.DOWNGRADE` the
TypeScript rendering is produced instead and passed through
:func:`~rapidfront.generator.downgrade.downgrade`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterator, Optional

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    pass_context,
)

from rapidfront.exceptions import ConfigError, RenderError, UnknownLibraryError
from rapidfront.generator import helpers
from rapidfront.generator.downgrade import downgrade
from rapidfront.models import (
    GenerationOptions,
    JavaScriptStrategy,
    Language,
    Library,
    ModuleRecord,
)
from rapidfront.naming import capitalize, lower_first, to_kebab_case
from rapidfront.parser.catalog import SchemaCatalog
from rapidfront.parser.types import resolve_type

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
"""Path to the built-in Jinja2 template directory (``rapidfront/templates/``)."""

TEMPLATE_FILES: dict[Library, str] = {
    Library.ZUSTAND: "zustand.ts.j2",
    Library.REDUX_TOOLKIT: "redux-toolkit.ts.j2",
    Library.AXIOS_HOOKS: "axios-hooks.ts.j2",
    Library.FETCH_API: "fetch-api.ts.j2",
}

README_TEMPLATE = "README.md.j2"

BASE_URL_ENV = "REACT_APP_API_BASE_URL"
"""Environment variable the generated clients read their base URL from."""


class TemplateRegistry(Mapping):
    """Read-only mapping of :class:`~rapidfront.models.Library` to compiled template.

    Also carries the README template used by
    :meth:`TemplateRenderer.render_readme`.
    """

    def __init__(self, templates: Mapping[Library, Template], readme: Optional[Template] = None):
        self._templates = dict(templates)
        self.readme = readme

    def __getitem__(self, library: Library) -> Template:
        return self._templates[library]

    def __iter__(self) -> Iterator[Library]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


def create_environment(template_dir: Optional[str | Path] = None) -> Environment:
    """Create the Jinja2 environment used for every rendering.

    Templates in *template_dir* take precedence over the built-in ones;
    any template it does not provide falls back to the built-in copy.
    Undefined variables raise instead of rendering as empty strings.

    Raises:
        ConfigError: If *template_dir* is given but is not a directory.
    """
    loaders = [FileSystemLoader(str(TEMPLATE_DIR))]
    if template_dir is not None:
        custom = Path(template_dir)
        if not custom.is_dir():
            raise ConfigError(f"Template directory not found: {custom}")
        loaders.insert(0, FileSystemLoader(str(custom)))

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    _register_helpers(env)
    return env


def build_template_registry(
    template_dir: Optional[str | Path] = None,
    environment: Optional[Environment] = None,
) -> TemplateRegistry:
    """Compile one template per library, plus the README template.

    Args:
        template_dir: Optional directory of user templates overriding the
            built-in ones by file name.
        environment: Pre-built environment; defaults to
            :func:`create_environment` for *template_dir*.

    Raises:
        ConfigError: If a template cannot be found or does not compile.
    """
    env = environment or create_environment(template_dir)
    templates = {library: _load(env, name) for library, name in TEMPLATE_FILES.items()}
    registry = TemplateRegistry(templates, readme=_load(env, README_TEMPLATE))
    logger.debug("Compiled %d library template(s)", len(registry))
    return registry


def _load(env: Environment, name: str) -> Template:
    try:
        return env.get_template(name)
    except TemplateError as exc:
        raise ConfigError(f"Cannot load template '{name}': {exc}") from exc


class TemplateRenderer:
    """Render modules with the templates of an explicit registry.

    Args:
        registry: Compiled templates, usually from :func:`build_template_registry`.
        catalog: Schema catalog of the document. Its names decide which
            types the generated code may refer to; without it only each
            module's own referenced schemas are known.
    """

    def __init__(self, registry: Mapping[Library, Template], catalog: Optional[SchemaCatalog] = None):
        self._registry = registry
        self._catalog = catalog

    def known_types(self, module: Optional[ModuleRecord] = None) -> frozenset[str]:
        if self._catalog is not None:
            return frozenset(self._catalog)
        if module is None:
            return frozenset()
        return frozenset(s.name for s in module.referenced_schemas)

    def render(
        self,
        module: ModuleRecord,
        library: Library | str,
        language: Language = Language.TYPESCRIPT,
        strategy: JavaScriptStrategy = JavaScriptStrategy.NATIVE,
    ) -> str:
        """Render the source file of *module* for *library*.

        Raises:
            UnknownLibraryError: If no template is registered for *library*.
            RenderError: If the template fails to evaluate.
        """
        template = self._template_for(library)
        library = Library(library)
        downgrading = language == Language.JAVASCRIPT and strategy == JavaScriptStrategy.DOWNGRADE
        known = self.known_types(module)
        context = {
            "module": module,
            "library": library,
            "typed": language.is_typed or downgrading,
            "known": known,
            "imports": helpers.type_imports(module, known),
            "base_url_env": BASE_URL_ENV,
        }

        logger.debug("Rendering %s module %s", library.value, module.module_name)
        source = _render(template, context, module.module_name, library.value)
        if downgrading:
            source = downgrade(source)
        return source

    def render_readme(self, modules: list[ModuleRecord], options: GenerationOptions) -> str:
        """Render the usage README for the generated modules.

        Raises:
            ConfigError: If the registry carries no README template.
            RenderError: If the template fails to evaluate.
        """
        readme = getattr(self._registry, "readme", None)
        if readme is None:
            raise ConfigError("No README template registered")
        context = {
            "modules": modules,
            "options": options,
            "library": options.library,
            "typed": options.language.is_typed,
            "known": self.known_types(),
            "base_url_env": BASE_URL_ENV,
        }
        return _render(readme, context, "README", options.library.value)

    def _template_for(self, library: Library | str) -> Template:
        try:
            return self._registry[Library(library)]
        except (KeyError, ValueError):
            raise UnknownLibraryError(getattr(library, "value", library)) from None


def _render(template: Template, context: dict[str, Any], name: str, library: str) -> str:
    try:
        return template.render(context)
    except (TemplateError, TypeError, ValueError, AttributeError) as exc:
        raise RenderError(name, library, str(exc)) from exc


# ---------------------------------------------------------------------------
# Template helpers
# ---------------------------------------------------------------------------


@pass_context
def _type_reference(context, type_name: str) -> str:
    return helpers.type_reference(type_name, context["known"])


@pass_context
def _response_type(context, endpoint) -> str:
    return helpers.response_type(endpoint, context["known"])


@pass_context
def _parameter_list(context, endpoint, include_body: bool = True) -> str:
    return helpers.parameter_list(endpoint, context["typed"], context["known"], include_body)


@pass_context
def _call_arguments(context, endpoint, include_body: bool = True) -> list[helpers.Argument]:
    return helpers.argument_fields(endpoint, context["known"], include_body)


@pass_context
def _request_call(context, endpoint) -> str:
    return helpers.request_call(endpoint, context["typed"], context["known"])


@pass_context
def _annotate(context, name: str, type_name: str, optional: bool = False) -> str:
    return helpers.annotate(name, type_name, context["typed"], optional)


@pass_context
def _generic(context, type_name: str) -> str:
    return helpers.generic(type_name, context["typed"])


@pass_context
def _returns(context, type_name: str) -> str:
    return helpers.returns(type_name, context["typed"])


@pass_context
def _cast(context, expression: str, type_name: str) -> str:
    return helpers.cast(expression, type_name, context["typed"])


def _register_helpers(env: Environment) -> None:
    env.filters.update(
        capitalize=capitalize,
        lower_first=lower_first,
        comment_text=helpers.comment_text,
        kebab_case=to_kebab_case,
        property_key=helpers.property_key,
    )
    env.globals.update(
        resolve_type=resolve_type,
        type_reference=_type_reference,
        response_type=_response_type,
        parameter_list=_parameter_list,
        call_arguments=_call_arguments,
        argument_names=helpers.argument_names,
        request_call=_request_call,
        fetch_options=helpers.fetch_options,
        url_template=helpers.url_template,
        params_type_name=helpers.params_type_name,
        args_type_name=helpers.args_type_name,
        annotate=_annotate,
        generic=_generic,
        returns=_returns,
        cast=_cast,
    )
