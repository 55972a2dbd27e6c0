"""Identifier and file-name derivation shared by extraction, grouping, and templates.

Every generated symbol name is computed by exactly one function in this
module. The extractor, the grouper, the template helpers, and the output
planner all import from here, so a call name or module name computed while
extracting is byte-identical to the one a template prints into another file.

Examples::

    >>> build_call_name("GET", "/order-history/{id}")
    'getOrderHistoryById'
    >>> tag_to_module_name("User Management")
    'UserManagement'
    >>> to_kebab_case("UserManagement")
    'user-management'
"""

from __future__ import annotations

import re

_SEPARATOR_RE = re.compile(r"[-_](.)")
_TAG_SPLIT_RE = re.compile(r"[\s\-_]+")
_NON_IDENTIFIER_RE = re.compile(r"[^0-9A-Za-z_$]")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][0-9A-Za-z_$]*$")

DEFAULT_TAG = "Default"
"""Tag given to endpoints that declare no tags and live at the root path."""

RESERVED_WORDS = frozenset(
    """
    await break case catch class const continue debugger default delete do
    else enum export extends false finally for function if implements import
    in instanceof interface let new null package private protected public
    return static super switch this throw true try typeof var void while
    with yield
    """.split()
)
"""Words a generated binding or function name must never be."""


def capitalize(text: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def lower_first(text: str) -> str:
    """Lowercase the first character, leaving the rest untouched."""
    return text[:1].lower() + text[1:]


def to_camel_case(text: str) -> str:
    """Normalise hyphen and underscore boundaries to camelCase.

    ``order-history`` -> ``orderHistory``, ``user_id`` -> ``userId``.
    Characters outside the boundaries keep their case.
    """
    return _SEPARATOR_RE.sub(lambda m: m.group(1).upper(), text)


def to_kebab_case(text: str) -> str:
    """Convert a PascalCase module name to a kebab-case folder name."""
    text = re.sub(r"([a-z])([A-Z])", r"\1-\2", text)
    text = re.sub(r"[\s_]+", "-", text)
    return text.lower()


def _sanitize(name: str) -> str:
    ident = _NON_IDENTIFIER_RE.sub("", to_camel_case(name))
    if not ident:
        return "param"
    if ident[0].isdigit():
        return "_" + ident
    return ident


def to_identifier(name: str) -> str:
    """Turn a parameter name into a JavaScript identifier.

    ``user-id`` -> ``userId``; characters that cannot appear in an identifier
    are dropped and a leading digit gets an underscore prefix. A reserved
    word gets a ``Param`` suffix: ``class`` -> ``classParam``.
    """
    ident = _sanitize(name)
    if ident in RESERVED_WORDS:
        return ident + "Param"
    return ident


def type_identifier(name: str) -> str:
    """The name a schema is declared and referenced under.

    Valid identifiers are kept as they are. Anything else is sanitised and
    capitalised: ``app.User`` -> ``AppUser``, ``user-dto`` -> ``UserDto``.
    Two schemas may sanitise to the same name (``app.User`` and
    ``appUser``); TypeScript then merges their interfaces.
    """
    if is_identifier(name) and name not in RESERVED_WORDS:
        return name
    return capitalize(_sanitize(name))


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER_RE.match(name))


def _is_path_param(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def _split_segments(path: str) -> list[str]:
    return [s for s in path.split("/") if s]


def path_tokens(path: str) -> list[str]:
    """Tokenise a path template for call-name construction.

    Literal segments become their camelCase form; ``{x}`` parameter
    segments become ``By<X>``.
    """
    tokens: list[str] = []
    for segment in _split_segments(path):
        if _is_path_param(segment):
            tokens.append("By" + capitalize(to_camel_case(segment[1:-1])))
        else:
            tokens.append(to_camel_case(segment))
    return tokens


def build_call_name(method: str, path: str) -> str:
    """Build the deterministic call name for an operation.

    The lowercase HTTP method is followed by every path token, capitalised
    and concatenated. The result is always a non-empty identifier: a root
    path yields the bare method name, and characters that are not valid in
    an identifier (``.``, ``~``, ...) are removed. ``DELETE /`` would be the
    reserved word ``delete`` and becomes ``deleteRoot``.

    Two different paths may produce the same name (``/a-b`` and ``/a_b``);
    callers treat that as last-registered-wins.

    Args:
        method: HTTP method in any case.
        path: Path template, e.g. ``/order-history/{id}``.

    Returns:
        The call name, e.g. ``getOrderHistoryById``.
    """
    name = method.lower() + "".join(capitalize(t) for t in path_tokens(path))
    name = _NON_IDENTIFIER_RE.sub("", name)
    if name in RESERVED_WORDS:
        return name + "Root"
    return name


def tag_from_path(path: str) -> str:
    """Infer a tag from the first path segment: ``/users/{id}`` -> ``Users``."""
    segments = _split_segments(path)
    if not segments:
        return DEFAULT_TAG
    first = segments[0].replace("{", "").replace("}", "")
    return capitalize(first) or DEFAULT_TAG


def tag_to_module_name(tag: str) -> str:
    """Derive a PascalCase module name from a tag.

    The tag is split on whitespace, hyphens and underscores and each word is
    capitalised: ``"User Management"`` -> ``UserManagement``. Remaining
    non-identifier characters are dropped; a name that would start with a
    digit is prefixed with ``Module``.
    """
    words = [capitalize(w) for w in _TAG_SPLIT_RE.split(tag) if w]
    name = _NON_IDENTIFIER_RE.sub("", "".join(words))
    if not name:
        return DEFAULT_TAG
    if name[0].isdigit():
        return "Module" + name
    return name
