"""Reading and merging package.json dependency declarations."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from fractal_explore.constants import MANIFEST_NAME
from fractal_explore.errors import ManifestParseError, ProjectNotFoundError

logger = logging.getLogger("fractal_explore.detector.manifest")

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")


def manifest_path(root: Path) -> Path:
    return Path(root) / MANIFEST_NAME


def read_manifest(root: Path) -> dict:
    """Load and parse the manifest at ``root``.

    Raises:
        ProjectNotFoundError: No manifest file exists under ``root``.
        ManifestParseError: The file exists but is not a JSON object.
    """
    path = manifest_path(root)
    try:
        text = path.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        # a root that is a regular file has no manifest either
        raise ProjectNotFoundError(str(path)) from None
    except IsADirectoryError as e:
        raise ManifestParseError(str(path), "is a directory, not a file") from e
    except UnicodeDecodeError as e:
        raise ManifestParseError(str(path), f"not UTF-8 text ({e.reason})") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(str(path), e.msg, line=e.lineno, column=e.colno) from e

    if not isinstance(data, dict):
        raise ManifestParseError(
            str(path), f"expected a JSON object, got {type(data).__name__}"
        )

    logger.debug("Read manifest %s", path)
    return data


def merge_dependencies(manifest: dict, path: str = MANIFEST_NAME) -> dict[str, str]:
    """Merge direct and development dependencies into one name -> version map.

    Only key presence matters downstream, so development entries simply
    overwrite direct ones on collision.
    """
    merged: dict[str, str] = {}
    for section in DEPENDENCY_SECTIONS:
        group = manifest.get(section)
        if group is None:
            continue
        if not isinstance(group, dict):
            raise ManifestParseError(
                path, f"'{section}' must be an object, got {type(group).__name__}"
            )
        merged.update(group)
    return merged
