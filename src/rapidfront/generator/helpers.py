"""Template helpers shared by the renderer and the output planner.

Every helper is a plain function of its inputs. The renderer exposes them to
Jinja2 templates, binding ``typed`` and ``known`` from the render context, so
a template never derives a name or a type on its own: it calls the same
function the planner uses for the index and ``types`` files.

``typed`` is the type-annotation toggle. With ``typed=False`` the helpers
emit plain JavaScript and never produce type syntax.

``known`` is the set of schema names that will be declared in the generated
``types`` file. A type name outside it (and outside the built-in names)
prints as ``any``.
"""

from __future__ import annotations

import re
from typing import AbstractSet, NamedTuple, Optional

from rapidfront.models import EndpointRecord, ModuleRecord
from rapidfront.naming import capitalize, is_identifier, to_identifier, type_identifier
from rapidfront.parser.types import ANY_TYPE, BUILTIN_TYPE_NAMES, base_type_name

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")

_SUCCESS_STATUSES = ("200", "201")

_BODY_ARGUMENT = "body"
_PARAMS_ARGUMENT = "params"

# Names the templates bind next to the call arguments.
_TEMPLATE_LOCALS = frozenset(
    {
        _BODY_ARGUMENT,
        _PARAMS_ARGUMENT,
        "apiClient",
        "args",
        "data",
        "error",
        "errorMessage",
        "loading",
        "request",
        "response",
        "result",
        "run",
        "set",
        "thunkApi",
    }
)


class Argument(NamedTuple):
    """One argument of a generated call signature."""

    name: str
    type_name: str
    optional: bool = False


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def params_type_name(endpoint: EndpointRecord) -> str:
    """Name of the interface describing an endpoint's query parameters."""
    return capitalize(endpoint.call_name) + "Params"


def args_type_name(endpoint: EndpointRecord) -> str:
    """Name of the interface bundling an endpoint's arguments (redux thunks)."""
    return capitalize(endpoint.call_name) + "Args"


def property_key(name: str) -> str:
    """Print a property name, quoting it when it is not a bare identifier."""
    if is_identifier(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def placeholder_argument(name: str) -> str:
    """Argument name for the path placeholder ``{name}``.

    A name the templates already bind (``body``, ``params``, ``args``, ...)
    gets a ``Param`` suffix: ``{body}`` -> ``bodyParam``.
    """
    ident = to_identifier(name)
    if ident in _TEMPLATE_LOCALS:
        return ident + "Param"
    return ident


def comment_text(text: str) -> str:
    """Collapse *text* onto one line for a ``//`` comment."""
    return " ".join(text.split())


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def type_reference(type_name: str, known: AbstractSet[str]) -> str:
    """Print *type_name*, degrading undeclared schema names to ``any``.

    Array suffixes are kept: an unknown ``Foo[]`` prints as ``any[]``.
    Declared schemas print under :func:`~rapidfront.naming.type_identifier`,
    so ``app.User[]`` prints as ``AppUser[]``.
    """
    base = base_type_name(type_name)
    suffix = type_name[len(base):]
    if base in BUILTIN_TYPE_NAMES:
        return type_name
    if base in known:
        return type_identifier(base) + suffix
    return ANY_TYPE + suffix


def response_type(endpoint: EndpointRecord, known: Optional[AbstractSet[str]] = None) -> str:
    """Type of the first ``200`` or ``201`` response, else ``any``.

    When *known* is given the result goes through :func:`type_reference`.
    """
    type_name = ANY_TYPE
    for response in endpoint.responses:
        if response.status_code in _SUCCESS_STATUSES:
            type_name = response.schema_ref or ANY_TYPE
            break
    if known is None:
        return type_name
    return type_reference(type_name, known)


def referenced_type_names(module: ModuleRecord, known: AbstractSet[str]) -> set[str]:
    """Catalog names of the schemas a module's source refers to."""
    names: set[str] = set()
    for endpoint in module.endpoints:
        type_names = [p.resolved_type for p in endpoint.path_parameters]
        type_names.extend(p.resolved_type for p in endpoint.query_parameters)
        if endpoint.request_body is not None:
            type_names.append(endpoint.request_body.schema_ref)
        type_names.append(response_type(endpoint))
        for type_name in type_names:
            base = base_type_name(type_name)
            if base in known and base not in BUILTIN_TYPE_NAMES:
                names.add(base)
    return names


def type_imports(module: ModuleRecord, known: AbstractSet[str]) -> list[str]:
    """Printed names of the schemas a module refers to, sorted, for its type import."""
    return sorted({type_identifier(name) for name in referenced_type_names(module, known)})


# ---------------------------------------------------------------------------
# Type-annotation toggle
# ---------------------------------------------------------------------------


def annotate(name: str, type_name: str, typed: bool, optional: bool = False) -> str:
    """``name: T`` (or ``name?: T``) when typed, bare ``name`` otherwise."""
    if not typed:
        return name
    return f"{name}{'?' if optional else ''}: {type_name}"


def generic(type_name: str, typed: bool) -> str:
    """``<T>`` when typed, empty otherwise."""
    return f"<{type_name}>" if typed else ""


def returns(type_name: str, typed: bool) -> str:
    """A return-type annotation suffix, ``: T`` when typed."""
    return f": {type_name}" if typed else ""


def cast(expression: str, type_name: str, typed: bool) -> str:
    """``(expr as T)`` when typed, the bare expression otherwise."""
    return f"({expression} as {type_name})" if typed else expression


# ---------------------------------------------------------------------------
# Call signatures
# ---------------------------------------------------------------------------


def path_placeholders(path: str) -> list[str]:
    """Placeholder names of a path template, in order: ``/a/{b}/{c}`` -> ``[b, c]``."""
    return _PLACEHOLDER_RE.findall(path)


def argument_fields(
    endpoint: EndpointRecord,
    known: AbstractSet[str],
    include_body: bool = True,
) -> list[Argument]:
    """Arguments of the generated call for *endpoint*.

    Path placeholders come first (always required, named by
    :func:`placeholder_argument`), then ``body`` when the endpoint has a
    request body, then ``params`` when it has query parameters. ``params``
    is optional unless a query parameter is required. Header and cookie
    parameters are not part of the signature.
    """
    declared = {p.name: p.resolved_type for p in endpoint.path_parameters}
    fields = [
        Argument(placeholder_argument(name), type_reference(declared.get(name, "string"), known))
        for name in path_placeholders(endpoint.path)
    ]
    if include_body and endpoint.request_body is not None:
        fields.append(
            Argument(_BODY_ARGUMENT, type_reference(endpoint.request_body.schema_ref, known))
        )
    query = endpoint.query_parameters
    if query:
        fields.append(
            Argument(
                _PARAMS_ARGUMENT,
                params_type_name(endpoint),
                optional=not any(p.required for p in query),
            )
        )
    return fields


def parameter_list(
    endpoint: EndpointRecord,
    typed: bool,
    known: AbstractSet[str],
    include_body: bool = True,
) -> str:
    """Comma-separated parameter declarations for the generated call."""
    return ", ".join(
        annotate(a.name, a.type_name, typed, a.optional)
        for a in argument_fields(endpoint, known, include_body)
    )


def argument_names(endpoint: EndpointRecord, include_body: bool = True) -> str:
    """Comma-separated argument names, matching :func:`parameter_list`."""
    return ", ".join(a.name for a in argument_fields(endpoint, frozenset(), include_body))


def url_template(path: str) -> str:
    """A JavaScript expression for the request URL.

    Paths with placeholders become template literals
    (``/users/{user-id}`` -> ```/users/${userId}```); other paths become
    single-quoted strings.
    """
    if not path_placeholders(path):
        return "'" + path.replace("\\", "\\\\").replace("'", "\\'") + "'"
    literal = path.replace("`", "\\`")
    literal = _PLACEHOLDER_RE.sub(lambda m: "${" + placeholder_argument(m.group(1)) + "}", literal)
    return "`" + literal + "`"


def request_call(endpoint: EndpointRecord, typed: bool, known: AbstractSet[str]) -> str:
    """The ``apiClient`` call expression for an axios-based module.

    ``get`` and ``delete`` carry params and body in the config object;
    ``post``, ``put`` and ``patch`` take the body positionally.
    """
    method = endpoint.method.value.lower()
    callee = f"apiClient.{method}{generic(response_type(endpoint, known), typed)}"
    has_params = bool(endpoint.query_parameters)
    has_body = endpoint.request_body is not None

    args = [url_template(endpoint.path)]
    if method in ("get", "delete"):
        config = []
        if has_params:
            config.append(_PARAMS_ARGUMENT)
        if has_body:
            config.append(f"data: {_BODY_ARGUMENT}")
        if config:
            args.append("{ " + ", ".join(config) + " }")
    else:
        if has_body or has_params:
            args.append(_BODY_ARGUMENT if has_body else "undefined")
        if has_params:
            args.append("{ " + _PARAMS_ARGUMENT + " }")

    return f"{callee}({', '.join(args)})"


def fetch_options(endpoint: EndpointRecord) -> str:
    """Trailing options argument for the fetch-api ``request`` helper."""
    options = []
    if endpoint.query_parameters:
        options.append(_PARAMS_ARGUMENT)
    if endpoint.request_body is not None:
        options.append(_BODY_ARGUMENT)
    if not options:
        return ""
    return ", { " + ", ".join(options) + " }"
