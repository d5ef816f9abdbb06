"""React project detection."""

from .manifest import merge_dependencies, read_manifest
from .project_detector import (
    ProjectDetector,
    classify_build_tool,
    detect,
    detect_static_typing,
)

__all__ = [
    "ProjectDetector",
    "classify_build_tool",
    "detect",
    "detect_static_typing",
    "merge_dependencies",
    "read_manifest",
]
