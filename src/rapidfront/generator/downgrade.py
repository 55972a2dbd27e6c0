"""Strip TypeScript syntax from rendered source text.

:func:`downgrade` is a textual, best-effort pipeline. It is **lossy**: it
works on regular expressions rather than a syntax tree, so annotations inside
strings or comments, nested function types, or unusual formatting may be
mis-stripped. It is only used with
:attr:`~rapidfront.models.JavaScriptStrategy.DOWNGRADE`; the default
strategy renders JavaScript directly from the templates instead.

Passes, in order:

1. Remove ``interface`` blocks, ``type`` aliases and ``import type`` lines.
2. Strip ``name: Type`` annotations from variable declarations and from
   parameter lists. Parenthesised groups containing braces, quotes or
   backticks are left alone so object literals and strings survive.
3. Remove generic argument lists directly before a call (``get<User>(``).
4. Remove ``as Type`` assertions (import and re-export lines are skipped).
5. Remove return-type annotations before ``=>`` or a function body.
"""

from __future__ import annotations

import re

_INTERFACE_RE = re.compile(
    r"^[ \t]*(?:export\s+)?interface\s+[\w$]+(?:\s+extends\s+[^{]+)?\s*\{[^}]*\}[ \t]*\n?(?:[ \t]*\n)?",
    re.MULTILINE,
)
_TYPE_ALIAS_RE = re.compile(
    r"^[ \t]*(?:export\s+)?type\s+[\w$]+(?:<[^=\n]*>)?\s*=[^;]*;[ \t]*\n?(?:[ \t]*\n)?",
    re.MULTILINE,
)
_IMPORT_TYPE_RE = re.compile(r"^[ \t]*import\s+type\s+[^;]*;[ \t]*\n?", re.MULTILINE)

_DECLARATION_RE = re.compile(r"\b(const|let|var)(\s+[\w$]+)\s*:\s*[^=;\n]+?(\s*=)")
_PAREN_GROUP_RE = re.compile(r"\(([^()]*)\)")
_ANNOTATED_PARAM_RE = re.compile(r"^(\s*(?:\.\.\.)?[\w$]+)\??\s*:\s*\S.*?(\s*)$", re.DOTALL)

_GENERIC_CALL_RE = re.compile(r"(?<=[\w$])<(?:[^<>()\n]|<[^<>()\n]*>)*>(?=\s*\()")

_ASSERTION_RE = re.compile(r"\s+as\s+[\w$.]+(?:<[^<>\n]*>)?(?:\[\])*")
_ASSERTION_SKIP_PREFIXES = ("import ", "export {", "export *")

_RETURN_TYPE_RE = re.compile(r"\)\s*:\s*[\w$][^=(){};\n]*?\s*(=>|\{)")

_BLANK_RUN_RE = re.compile(r"\n{3,}")

_LITERAL_MARKERS = ("{", "'", '"', "`")


def downgrade(source: str) -> str:
    """Convert rendered TypeScript to JavaScript.

    Args:
        source: TypeScript source text.

    Returns:
        The source with type syntax removed.
    """
    text = _INTERFACE_RE.sub("", source)
    text = _TYPE_ALIAS_RE.sub("", text)
    text = _IMPORT_TYPE_RE.sub("", text)

    text = _DECLARATION_RE.sub(r"\1\2\3", text)
    text = _PAREN_GROUP_RE.sub(_strip_parameter_group, text)

    text = _GENERIC_CALL_RE.sub("", text)
    text = "\n".join(_strip_assertions(line) for line in text.split("\n"))
    text = _RETURN_TYPE_RE.sub(r") \1", text)

    return _BLANK_RUN_RE.sub("\n\n", text)


def _strip_parameter_group(match: re.Match) -> str:
    content = match.group(1)
    if ":" not in content or any(marker in content for marker in _LITERAL_MARKERS):
        return match.group(0)
    pieces = [_ANNOTATED_PARAM_RE.sub(r"\1\2", piece) for piece in _split_top_level(content)]
    return "(" + ",".join(pieces) + ")"


def _split_top_level(content: str) -> list[str]:
    """Split on commas that are not nested inside ``<>`` or ``[]``."""
    pieces: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(content):
        if char in "<[":
            depth += 1
        elif char in ">]" and depth:
            depth -= 1
        elif char == "," and depth == 0:
            pieces.append(content[start:index])
            start = index + 1
    pieces.append(content[start:])
    return pieces


def _strip_assertions(line: str) -> str:
    if line.lstrip().startswith(_ASSERTION_SKIP_PREFIXES):
        return line
    return _ASSERTION_RE.sub("", line)
