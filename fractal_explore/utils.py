"""Small predicates kept as public API for the component scanner.

Nothing in the CLI calls these yet. Unlike the detector they never raise
on a missing, unreadable or broken manifest; they answer ``False``/``None``
instead.
"""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path, PurePosixPath
from typing import Optional

from fractal_explore.detector.manifest import merge_dependencies, read_manifest
from fractal_explore.errors import ManifestParseError, ProjectNotFoundError
from fractal_explore.models import ProjectFlavor

logger = logging.getLogger("fractal_explore.utils")

_COMPONENT_SUFFIX = re.compile(r"\.(tsx|jsx|ts|js)$")


def is_valid_path(path: str | os.PathLike) -> bool:
    return Path(path).exists()


def _safe_dependencies(root: Path) -> Optional[dict[str, str]]:
    try:
        return merge_dependencies(read_manifest(root))
    except (ProjectNotFoundError, ManifestParseError, OSError) as e:
        logger.debug("No usable manifest under %s: %s", root, e)
        return None


def is_react_project(root_path: str | os.PathLike) -> bool:
    deps = _safe_dependencies(Path(root_path))
    return deps is not None and "react" in deps


def detect_framework(root_path: str | os.PathLike) -> Optional[ProjectFlavor]:
    """Best-effort project flavor: ``next`` > ``vite`` > ``react``, else None."""
    deps = _safe_dependencies(Path(root_path))
    if deps is None:
        return None
    for flavor in ("next", "vite", "react"):
        if flavor in deps:
            return flavor  # type: ignore[return-value]
    return None


def normalize_component_name(file_path: str) -> str:
    """``src/components/Button.tsx`` -> ``Button``."""
    file_name = PurePosixPath(file_path.replace("\\", "/")).name
    return _COMPONENT_SUFFIX.sub("", file_name)
