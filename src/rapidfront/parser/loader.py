"""Read an API document into a plain dictionary.

A source is ``-`` (stdin), an ``http(s)://`` URL, or a local path. JSON and
YAML are both accepted. A file extension or a response content type picks
the parser; without one, JSON is tried first and YAML second.

Nothing here checks the document's structure beyond it being a mapping.
:func:`validate_spec_version` only looks at the ``openapi``/``swagger``
field; everything the generator later fails to understand degrades to
``any``.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from rapidfront.exceptions import SpecParseError

logger = logging.getLogger(__name__)

_YAML_MARKERS = ("yaml", "yml")


def load_spec(source: str, timeout: float = 30.0) -> dict[str, Any]:
    """Load the document at *source*.

    Args:
        source: ``-`` for stdin, an ``http://``/``https://`` URL, or a path.
        timeout: Seconds to wait for a URL.

    Raises:
        SpecParseError: If the source is unreadable, empty, not JSON/YAML,
            or not a mapping.
    """
    if source == "-":
        content, hint = _read_stdin(), ""
    elif source.startswith(("http://", "https://")):
        content, hint = _fetch(source, timeout)
    else:
        content, hint = _read_file(Path(source))
    return _parse_content(content, hint)


def _read_stdin() -> str:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc
    if not content.strip():
        raise SpecParseError("No input received from stdin")
    return content


def _fetch(url: str, timeout: float) -> tuple[str, str]:
    logger.debug("Fetching spec from %s", url)
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc
    return response.text, _format_hint(response.headers.get("content-type"))


def _read_file(path: Path) -> tuple[str, str]:
    if not path.is_file():
        raise SpecParseError(f"Spec file not found: {path.resolve()}")
    logger.debug("Reading spec file %s", path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc
    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")
    return content, _format_hint(path.suffix)


def _format_hint(marker: Optional[str]) -> str:
    """``json`` or ``yaml`` from a file suffix or content type, else ``""``."""
    marker = (marker or "").lower()
    if "json" in marker:
        return "json"
    if any(m in marker for m in _YAML_MARKERS):
        return "yaml"
    return ""


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML and require a mapping.

    With ``hint="json"`` a JSON error is final. With ``hint="yaml"`` JSON is
    not attempted. Otherwise YAML is the fallback for anything JSON rejects.

    Raises:
        SpecParseError: If neither parser accepts *content*, or the result
            is not a mapping.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise SpecParseError("\n  ".join(["Failed to parse spec as JSON or YAML", *errors]))


def _require_mapping(result: Any) -> dict[str, Any]:
    if isinstance(result, dict):
        return result
    kind = "empty document" if result is None else type(result).__name__
    raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")


def validate_spec_version(spec: dict[str, Any]) -> str:
    """Return the declared version of *spec*.

    OpenAPI 3.x passes silently. Swagger 2.x passes with a warning: its
    ``definitions``, body parameters and response schemas are understood,
    but less of the document is used than for OpenAPI 3.

    Raises:
        SpecParseError: If neither ``openapi`` nor ``swagger`` is set, or
            the major version is not 2 or 3.
    """
    declared = spec.get("openapi") or spec.get("swagger")
    if declared is None:
        raise SpecParseError("Invalid schema: Missing OpenAPI/Swagger version")

    version = str(declared)
    major = version.split(".", 1)[0]
    if major == "2":
        logger.warning(
            "Swagger %s detected. Some features may be limited; "
            "consider upgrading to OpenAPI 3.x",
            version,
        )
    elif major != "3":
        raise SpecParseError(
            f"Unsupported OpenAPI/Swagger version: {version}. "
            "Supported versions: OpenAPI 3.x and Swagger 2.0"
        )
    return version
