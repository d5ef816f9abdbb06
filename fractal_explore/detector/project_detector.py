"""Project detector.

Reads package.json, confirms the project is a React project, classifies the
build tool and static typing usage, and probes the conventional component
directories. Everything here is read-only.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Mapping

from fractal_explore.constants import (
    BUILD_TOOL_MARKERS,
    BUILD_TOOL_UNKNOWN,
    COMPONENT_DIR_CANDIDATES,
    FALLBACK_COMPONENT_DIR,
    REACT_MARKER,
    STATIC_TYPING_MARKERS,
)
from fractal_explore.errors import NotReactProjectError
from fractal_explore.models import BuildTool, ProjectClassification

from .manifest import manifest_path, merge_dependencies, read_manifest

logger = logging.getLogger("fractal_explore.detector")


def classify_build_tool(deps: Mapping[str, str]) -> BuildTool:
    """Return the build tool for a merged dependency map.

    Markers are tested in priority order (vite, webpack, next, react-scripts),
    so a project mid-migration with both vite and webpack is reported as vite.
    """
    for label, marker in BUILD_TOOL_MARKERS:
        if marker in deps:
            return label  # type: ignore[return-value]
    return BUILD_TOOL_UNKNOWN


def detect_static_typing(deps: Mapping[str, str]) -> bool:
    """True when TypeScript or the React type definitions are declared."""
    return any(marker in deps for marker in STATIC_TYPING_MARKERS)


def _probe(path: Path) -> bool:
    try:
        return path.exists()
    except OSError as e:
        logger.debug("Probe failed for %s: %s", path, e)
        return False


class ProjectDetector:
    """Classifies a directory as a React project."""

    def __init__(self, candidates: Iterable[str] = COMPONENT_DIR_CANDIDATES):
        self.candidates: tuple[str, ...] = tuple(candidates)

    def detect(self, root_dir: str | os.PathLike) -> ProjectClassification:
        """Detect the project rooted at ``root_dir``.

        Args:
            root_dir: Project root. Stored on the result as ``Path(root_dir)``,
                so a trailing slash or ``.`` segment is normalised away;
                nothing is resolved against the working directory.

        Returns:
            A ProjectClassification.

        Raises:
            ProjectNotFoundError: No package.json under ``root_dir``.
            ManifestParseError: package.json is not valid JSON.
            NotReactProjectError: react is not a declared dependency.
        """
        root = Path(root_dir)
        logger.info("Detecting project at %s", root)

        manifest = read_manifest(root)
        deps = merge_dependencies(manifest, str(manifest_path(root)))

        if REACT_MARKER not in deps:
            raise NotReactProjectError(str(manifest_path(root)))

        build_tool = classify_build_tool(deps)
        typed = detect_static_typing(deps)
        component_dirs = self.find_component_dirs(root)
        logger.debug(
            "Classified %s: build_tool=%s typed=%s dirs=%s",
            root, build_tool, typed, component_dirs,
        )

        return ProjectClassification(
            build_tool=build_tool,
            uses_static_typing=typed,
            component_directories=component_dirs,
            root_path=root,
        )

    def find_component_dirs(self, root: Path) -> tuple[str, ...]:
        """Return the candidates that exist under ``root``, in declared order.

        Probes run concurrently; ``map`` yields results in submission order,
        so completion order never affects the output.
        """
        if not self.candidates:
            return (FALLBACK_COMPONENT_DIR,)
        paths = [root / candidate for candidate in self.candidates]
        with ThreadPoolExecutor(max_workers=len(paths)) as pool:
            found = list(pool.map(_probe, paths))

        existing = tuple(c for c, hit in zip(self.candidates, found) if hit)
        if not existing:
            logger.debug("No component directories found, using %s", FALLBACK_COMPONENT_DIR)
            return (FALLBACK_COMPONENT_DIR,)
        return existing


def detect(root_dir: str | os.PathLike) -> ProjectClassification:
    """Convenience wrapper around ``ProjectDetector().detect``."""
    return ProjectDetector().detect(root_dir)
