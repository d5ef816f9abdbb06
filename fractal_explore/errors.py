"""Custom exception hierarchy for fractal-explore.

All fractal-explore exceptions derive from FractalExploreError. Each
exception carries an optional ``context`` dict with structured metadata
(manifest path, parse position, etc.) that the CLI error handler can
render.

Exception hierarchy::

    FractalExploreError
    ├── ProjectNotFoundError
    ├── ManifestParseError
    ├── NotReactProjectError
    └── ConfigError
"""
from __future__ import annotations

from typing import Optional


class FractalExploreError(Exception):
    """Base class for all fractal-explore exceptions.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured metadata.
    """

    exit_code: int = 1

    def __init__(self, message: str, context: Optional[dict] = None):
        self.context = context or {}
        super().__init__(message)


# ── Detection Errors ───────────────────────────────────────────────

class ProjectNotFoundError(FractalExploreError):
    """Raised when the project root has no manifest file."""

    def __init__(self, manifest_path: str):
        self.path = manifest_path
        super().__init__(
            "No package.json found! "
            "Please run this command in a valid React project directory.",
            context={"path": manifest_path},
        )


class ManifestParseError(FractalExploreError):
    """Raised when the manifest exists but is not valid structured data."""

    def __init__(
        self,
        manifest_path: str,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.path = manifest_path
        self.reason = reason
        position = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(
            f"Could not parse {manifest_path}{position}: {reason}",
            context={
                "path": manifest_path,
                "reason": reason,
                "line": line,
                "column": column,
            },
        )


class NotReactProjectError(FractalExploreError):
    """Raised when the manifest does not declare a react dependency."""

    def __init__(self, manifest_path: str):
        self.path = manifest_path
        super().__init__(
            "React is not a dependency of this project. "
            "Please run this command in a valid React project directory.",
            context={"path": manifest_path},
        )


# ── Configuration Errors ───────────────────────────────────────────

class ConfigError(FractalExploreError):
    """Raised when configuration is invalid or missing."""
    pass
