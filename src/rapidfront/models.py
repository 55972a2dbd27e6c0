"""Canonical Pydantic models shared across all rapidfront modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Selection enums** -- the configuration surface a caller picks from:
    :class:`Library`, :class:`Language`, :class:`SelectionMode`,
    :class:`JavaScriptStrategy`.

**Extraction records** -- built fresh per run from the API document and never
mutated afterwards (every record model is ``frozen``):
    :class:`SchemaRecord`, :class:`ParameterRecord`,
    :class:`RequestBodyRecord`, :class:`ResponseRecord`,
    :class:`EndpointRecord`, :class:`ModuleRecord`.

**Generation models** -- options in, files out:
    :class:`ProjectConfig`, :class:`GenerationOptions`,
    :class:`GeneratedFile`, :class:`GenerationPlan`.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


_RECORD_CONFIG = ConfigDict(frozen=True)


# --- Selection enums ---


class Library(str, enum.Enum):
    """Frontend libraries a module can be generated for.

    Each member owns exactly one template under ``rapidfront/templates``.
    """

    ZUSTAND = "zustand"
    REDUX_TOOLKIT = "redux-toolkit"
    AXIOS_HOOKS = "axios-hooks"
    FETCH_API = "fetch-api"

    @property
    def display_name(self) -> str:
        return _LIBRARY_DISPLAY_NAMES[self]

    @property
    def npm_packages(self) -> list[str]:
        """npm packages the generated code imports (suggested, never installed)."""
        return list(_LIBRARY_NPM_PACKAGES[self])


_LIBRARY_DISPLAY_NAMES: dict[Library, str] = {
    Library.ZUSTAND: "Zustand",
    Library.REDUX_TOOLKIT: "Redux Toolkit",
    Library.AXIOS_HOOKS: "Axios Hooks",
    Library.FETCH_API: "Fetch API",
}

_LIBRARY_NPM_PACKAGES: dict[Library, tuple[str, ...]] = {
    Library.ZUSTAND: ("zustand", "axios"),
    Library.REDUX_TOOLKIT: ("@reduxjs/toolkit", "react-redux", "axios"),
    Library.AXIOS_HOOKS: ("axios-hooks", "axios"),
    Library.FETCH_API: (),
}


class Language(str, enum.Enum):
    """Output language. TypeScript is statically typed, JavaScript is not."""

    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"

    @property
    def is_typed(self) -> bool:
        return self is Language.TYPESCRIPT


class SelectionMode(str, enum.Enum):
    """Whether every tag becomes a module or only a selected subset."""

    ALL = "all"
    SELECTIVE = "selective"


class JavaScriptStrategy(str, enum.Enum):
    """How JavaScript output is produced.

    ``NATIVE`` renders the templates with the type toggle switched off.
    ``DOWNGRADE`` renders TypeScript and strips it with
    :func:`~rapidfront.generator.downgrade.downgrade`.
    """

    NATIVE = "native"
    DOWNGRADE = "downgrade"


class HTTPMethod(str, enum.Enum):
    """HTTP methods that produce endpoint records, in extraction order."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class ParameterLocation(str, enum.Enum):
    """Locations where an operation parameter can appear (OpenAPI ``in``)."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


# --- Extraction records ---


class SchemaRecord(BaseModel):
    """A named data shape from ``components.schemas`` or ``definitions``.

    ``properties`` holds the raw property schema nodes untouched; their types
    are resolved lazily by :func:`~rapidfront.parser.types.resolve_type`.
    """

    model_config = _RECORD_CONFIG

    name: str
    properties: dict[str, Any] = Field(default_factory=dict)
    required: frozenset[str] = Field(default_factory=frozenset)


class ParameterRecord(BaseModel):
    """A single operation parameter with its resolved type name."""

    model_config = _RECORD_CONFIG

    name: str
    location: ParameterLocation
    required: bool = False
    resolved_type: str = "any"
    description: Optional[str] = None


class RequestBodyRecord(BaseModel):
    """Request body of an operation. ``schema_ref`` is ``any`` when unresolved."""

    model_config = _RECORD_CONFIG

    required: bool = False
    content_type: str = "application/json"
    schema_ref: str = "any"


class ResponseRecord(BaseModel):
    """One declared response, keyed by its status code string."""

    model_config = _RECORD_CONFIG

    status_code: str
    description: Optional[str] = None
    schema_ref: Optional[str] = None


class EndpointRecord(BaseModel):
    """One operation (path + method) of the API document.

    ``call_name`` is derived from method and path only, so it is stable across
    runs and identical wherever it is recomputed. ``operation_id`` falls back
    to ``call_name`` when the document declares none.
    """

    model_config = _RECORD_CONFIG

    operation_id: str
    call_name: str = Field(min_length=1)
    method: HTTPMethod
    path: str
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: list[ParameterRecord] = Field(default_factory=list)
    request_body: Optional[RequestBodyRecord] = None
    responses: list[ResponseRecord] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @property
    def path_parameters(self) -> list[ParameterRecord]:
        return [p for p in self.parameters if p.location == ParameterLocation.PATH]

    @property
    def query_parameters(self) -> list[ParameterRecord]:
        return [p for p in self.parameters if p.location == ParameterLocation.QUERY]


class ModuleRecord(BaseModel):
    """A generated unit of output: one tag and the endpoints carrying it."""

    model_config = _RECORD_CONFIG

    module_name: str
    tag: str
    endpoints: list[EndpointRecord] = Field(min_length=1)
    referenced_schemas: list[SchemaRecord] = Field(default_factory=list)


# --- Generation models ---


class ProjectConfig(BaseModel):
    """Contents of a project-local ``rapidfront.json``.

    Every field is optional; unset fields fall through to environment
    variables and then to the defaults in :class:`GenerationOptions`.
    """

    model_config = ConfigDict(extra="forbid")

    spec: Optional[str] = Field(default=None, description="URL or path of the API document")
    library: Optional[Library] = None
    language: Optional[Language] = None
    output_directory: Optional[str] = None
    selected_tags: Optional[list[str]] = None
    js_strategy: Optional[JavaScriptStrategy] = None
    template_dir: Optional[str] = None


class GenerationOptions(BaseModel):
    """Fully resolved settings for one generation run."""

    library: Library = Library.ZUSTAND
    language: Language = Language.TYPESCRIPT
    output_directory: str = "./src/api"
    selection_mode: SelectionMode = SelectionMode.ALL
    selected_tags: list[str] = Field(default_factory=list)
    js_strategy: JavaScriptStrategy = JavaScriptStrategy.NATIVE
    template_dir: Optional[str] = None

    @property
    def tag_filter(self) -> Optional[set[str]]:
        """The inclusion filter for the grouper, or ``None`` in ``all`` mode."""
        if self.selection_mode == SelectionMode.SELECTIVE:
            return set(self.selected_tags)
        return None


class GeneratedFile(BaseModel):
    """A file to write, addressed relative to the output directory."""

    model_config = _RECORD_CONFIG

    path: str = Field(description="POSIX-style path relative to the output directory")
    content: str


class GenerationPlan(BaseModel):
    """Everything one run produces, ready for :func:`~rapidfront.writer.write_plan`."""

    model_config = _RECORD_CONFIG

    options: GenerationOptions
    modules: list[ModuleRecord] = Field(default_factory=list)
    files: list[GeneratedFile] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the selection produced no modules (nothing to write)."""
        return not self.modules
