"""Core data models for fractal-explore."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional

from .constants import DEFAULT_EXCLUDE_PATTERNS

BuildTool = Literal["vite", "webpack", "next", "cra", "unknown"]
ProjectFlavor = Literal["react", "next", "vite"]


# ── Detection Result ──
@dataclass(frozen=True)
class ProjectClassification:
    """What the detector learned about a project root."""

    build_tool: BuildTool
    uses_static_typing: bool
    component_directories: tuple[str, ...]
    root_path: Path
    framework: Literal["react"] = "react"

    def to_dict(self) -> dict:
        return {
            "framework": self.framework,
            "buildTool": self.build_tool,
            "usesStaticTyping": self.uses_static_typing,
            "componentDirectories": list(self.component_directories),
            "rootPath": str(self.root_path),
        }


# ── Registry Models ──
# Produced by a component scanner; kept here so the scanner and the
# detector agree on one contract.
@dataclass
class PropDescriptor:
    name: str
    type: str
    required: bool = False
    default_value: Any = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, d: dict) -> PropDescriptor:
        return cls(
            name=d["name"],
            type=d.get("type", "unknown"),
            required=d.get("required", False),
            default_value=d.get("defaultValue"),
            description=d.get("description"),
        )

    def to_dict(self) -> dict:
        d: dict = {"name": self.name, "type": self.type, "required": self.required}
        if self.default_value is not None:
            d["defaultValue"] = self.default_value
        if self.description:
            d["description"] = self.description
        return d


@dataclass
class UsageExample:
    name: str
    code: str
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, d: dict) -> UsageExample:
        return cls(name=d["name"], code=d.get("code", ""), description=d.get("description"))

    def to_dict(self) -> dict:
        d = {"name": self.name, "code": self.code}
        if self.description:
            d["description"] = self.description
        return d


@dataclass
class ComponentDescriptor:
    name: str
    file_path: str
    props: list[PropDescriptor] = field(default_factory=list)
    docstring: Optional[str] = None
    examples: Optional[list[UsageExample]] = None

    @classmethod
    def from_dict(cls, d: dict) -> ComponentDescriptor:
        examples = d.get("examples")
        return cls(
            name=d["name"],
            file_path=d["filePath"],
            props=[PropDescriptor.from_dict(p) for p in d.get("props", [])],
            docstring=d.get("docstring"),
            examples=[UsageExample.from_dict(e) for e in examples] if examples is not None else None,
        )

    def to_dict(self) -> dict:
        d: dict = {
            "name": self.name,
            "filePath": self.file_path,
            "props": [p.to_dict() for p in self.props],
        }
        if self.docstring:
            d["docstring"] = self.docstring
        if self.examples is not None:
            d["examples"] = [e.to_dict() for e in self.examples]
        return d


@dataclass
class ProjectConfig:
    """Scan settings for one project."""

    name: str
    root_path: Path
    framework: ProjectFlavor
    components_path: list[str] = field(default_factory=list)
    exclude: Optional[list[str]] = None

    @classmethod
    def from_classification(
        cls,
        classification: ProjectClassification,
        name: Optional[str] = None,
    ) -> ProjectConfig:
        """Derive scan settings from a detection result.

        The flavor follows the build tool for Next.js and Vite projects and
        is plain ``react`` for everything else.
        """
        flavor: ProjectFlavor = "react"
        if classification.build_tool in ("next", "vite"):
            flavor = classification.build_tool
        return cls(
            name=name or Path(classification.root_path).name,
            root_path=Path(classification.root_path),
            framework=flavor,
            components_path=list(classification.component_directories),
            exclude=list(DEFAULT_EXCLUDE_PATTERNS),
        )

    @classmethod
    def from_dict(cls, d: dict) -> ProjectConfig:
        return cls(
            name=d["name"],
            root_path=Path(d["rootPath"]),
            framework=d.get("framework", "react"),
            components_path=list(d.get("componentsPath", [])),
            exclude=d.get("exclude"),
        )

    def to_dict(self) -> dict:
        d: dict = {
            "name": self.name,
            "rootPath": str(self.root_path),
            "framework": self.framework,
            "componentsPath": list(self.components_path),
        }
        if self.exclude is not None:
            d["exclude"] = list(self.exclude)
        return d


@dataclass
class ScanResult:
    components: list[ComponentDescriptor]
    project_config: ProjectConfig
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))  # epoch ms

    @classmethod
    def from_dict(cls, d: dict) -> ScanResult:
        return cls(
            components=[ComponentDescriptor.from_dict(c) for c in d.get("components", [])],
            project_config=ProjectConfig.from_dict(d["projectConfig"]),
            timestamp=int(d["timestamp"]),
        )

    def to_dict(self) -> dict:
        return {
            "components": [c.to_dict() for c in self.components],
            "projectConfig": self.project_config.to_dict(),
            "timestamp": self.timestamp,
        }
