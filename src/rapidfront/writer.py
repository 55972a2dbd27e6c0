"""Write a generation plan to disk.

This is the only place rapidfront writes generated files. Folders are
created as needed and existing files are overwritten; when two planned files
share a path, the later one wins.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rapidfront.models import GenerationPlan

logger = logging.getLogger(__name__)


def write_plan(plan: GenerationPlan, output_directory: str | Path) -> list[Path]:
    """Write every file of *plan* under *output_directory*.

    Args:
        plan: The plan from :func:`~rapidfront.pipeline.build_plan`.
        output_directory: Root directory; created if missing.

    Returns:
        The written paths, in plan order.
    """
    root = Path(output_directory)
    written: list[Path] = []
    for generated in plan.files:
        target = root.joinpath(*generated.path.split("/"))
        target.parent.mkdir(parents=True, exist_ok=True)
        content = generated.content
        if not content.endswith("\n"):
            content += "\n"
        target.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", target)
        written.append(target)
    return written
