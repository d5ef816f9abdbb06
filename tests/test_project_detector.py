"""Tests for the project detector."""

import threading
from pathlib import Path

import pytest

from fractal_explore.constants import COMPONENT_DIR_CANDIDATES
from fractal_explore.detector import (
    ProjectDetector,
    classify_build_tool,
    detect,
    detect_static_typing,
    merge_dependencies,
    read_manifest,
)
from fractal_explore.detector import project_detector
from fractal_explore.errors import (
    ManifestParseError,
    NotReactProjectError,
    ProjectNotFoundError,
)

# ── Manifest ─────────────────────────────────────────────────────────────


class TestReadManifest:
    def test_reads_object(self, make_project):
        root = make_project(dependencies={"react": "^18.0.0"})
        data = read_manifest(root)
        assert data["dependencies"] == {"react": "^18.0.0"}

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(ProjectNotFoundError) as exc_info:
            read_manifest(tmp_path)
        assert exc_info.value.context["path"] == str(tmp_path / "package.json")

    def test_invalid_json_is_parse_error(self, make_project):
        root = make_project(raw='{"dependencies": {"react": "^18",}')
        with pytest.raises(ManifestParseError) as exc_info:
            read_manifest(root)
        assert exc_info.value.context["line"] == 1
        assert exc_info.value.context["column"] is not None

    def test_parse_error_is_not_project_not_found(self, make_project):
        root = make_project(raw="not json at all")
        with pytest.raises(ManifestParseError):
            read_manifest(root)
        assert not issubclass(ManifestParseError, ProjectNotFoundError)

    def test_top_level_array_rejected(self, make_project):
        root = make_project(raw='["react"]')
        with pytest.raises(ManifestParseError, match="expected a JSON object"):
            read_manifest(root)

    def test_manifest_directory_rejected(self, tmp_path):
        (tmp_path / "package.json").mkdir()
        with pytest.raises(ManifestParseError):
            read_manifest(tmp_path)

    def test_root_is_a_file(self, tmp_path):
        readme = tmp_path / "README.md"
        readme.write_text("# hi")
        with pytest.raises(ProjectNotFoundError):
            read_manifest(readme)


class TestMergeDependencies:
    def test_merges_both_groups(self):
        merged = merge_dependencies({
            "dependencies": {"react": "^18"},
            "devDependencies": {"vite": "^5"},
        })
        assert merged == {"react": "^18", "vite": "^5"}

    def test_missing_groups(self):
        assert merge_dependencies({"name": "app"}) == {}

    def test_non_object_group_rejected(self):
        with pytest.raises(ManifestParseError, match="devDependencies"):
            merge_dependencies({"devDependencies": ["vite"]})


# ── Pure classifiers ────────────────────────────────────────────────────


class TestClassifyBuildTool:
    @pytest.mark.parametrize(
        "deps, expected",
        [
            ({"vite": "^5"}, "vite"),
            ({"webpack": "^5"}, "webpack"),
            ({"next": "14"}, "next"),
            ({"react-scripts": "5.0.0"}, "cra"),
            ({}, "unknown"),
            ({"parcel": "^2"}, "unknown"),
        ],
    )
    def test_single_marker(self, deps, expected):
        assert classify_build_tool(deps) == expected

    def test_vite_beats_webpack(self):
        assert classify_build_tool({"webpack": "^5", "vite": "^5"}) == "vite"

    def test_webpack_beats_next(self):
        assert classify_build_tool({"next": "14", "webpack": "^5"}) == "webpack"

    def test_next_beats_cra(self):
        assert classify_build_tool({"react-scripts": "5", "next": "14"}) == "next"

    def test_all_markers(self):
        deps = {"react-scripts": "5", "next": "14", "webpack": "5", "vite": "5"}
        assert classify_build_tool(deps) == "vite"


class TestDetectStaticTyping:
    def test_typescript(self):
        assert detect_static_typing({"typescript": "^5"}) is True

    def test_react_types(self):
        assert detect_static_typing({"@types/react": "^18"}) is True

    def test_neither(self):
        assert detect_static_typing({"react": "^18", "@types/node": "^20"}) is False


# ── Detector ────────────────────────────────────────────────────────────


class TestProjectDetector:
    def test_vite_project(self, make_project):
        root = make_project(
            dependencies={"react": "^18.0.0", "vite": "^5.0.0"},
            dirs=["src/components"],
        )
        info = ProjectDetector().detect(root)
        assert info.framework == "react"
        assert info.build_tool == "vite"
        assert info.uses_static_typing is False
        assert info.component_directories == ("src/components",)
        assert info.root_path == root

    def test_no_manifest(self, tmp_path):
        with pytest.raises(ProjectNotFoundError) as exc_info:
            ProjectDetector().detect(tmp_path)
        assert "valid React project" in str(exc_info.value)

    def test_cra_with_components_dir(self, make_project):
        root = make_project(
            dependencies={"react": "^18.2.0"},
            dev_dependencies={"react-scripts": "5.0.0"},
            dirs=["components"],
        )
        info = ProjectDetector().detect(root)
        assert info.build_tool == "cra"
        assert info.component_directories == ("components",)

    def test_not_react(self, make_project):
        root = make_project(dependencies={"vue": "^3.0.0"})
        with pytest.raises(NotReactProjectError) as exc_info:
            ProjectDetector().detect(root)
        assert "valid React project" in str(exc_info.value)

    def test_react_only_in_dev_dependencies(self, make_project):
        root = make_project(dev_dependencies={"react": "^18"})
        assert ProjectDetector().detect(root).build_tool == "unknown"

    def test_typed_project_falls_back_to_default_dir(self, make_project):
        root = make_project(dependencies={
            "react": "^18",
            "typescript": "^5",
            "@types/react": "^18",
        })
        info = ProjectDetector().detect(root)
        assert info.uses_static_typing is True
        assert info.component_directories == ("src/components",)

    def test_unknown_build_tool_is_not_an_error(self, make_project):
        root = make_project(dependencies={"react": "^18"})
        assert ProjectDetector().detect(root).build_tool == "unknown"

    def test_malformed_manifest_propagates(self, make_project):
        root = make_project(raw="{")
        with pytest.raises(ManifestParseError):
            ProjectDetector().detect(root)

    def test_root_path_kept_as_given(self, make_project):
        root = make_project(dependencies={"react": "^18"})
        info = ProjectDetector().detect(str(root))
        assert info.root_path == Path(str(root))

    def test_trailing_slash_dropped_from_root_path(self, make_project):
        root = make_project(dependencies={"react": "^18"})
        info = ProjectDetector().detect(str(root) + "/")
        assert info.root_path == root
        assert info.to_dict()["rootPath"] == str(root)

    def test_root_is_a_file(self, tmp_path):
        readme = tmp_path / "README.md"
        readme.write_text("# hi")
        with pytest.raises(ProjectNotFoundError):
            ProjectDetector().detect(readme)

    def test_idempotent(self, make_project):
        root = make_project(
            dependencies={"react": "^18", "next": "14"},
            dirs=["app/components", "lib"],
        )
        detector = ProjectDetector()
        assert detector.detect(root) == detector.detect(root)

    def test_result_is_frozen(self, make_project):
        root = make_project(dependencies={"react": "^18"})
        info = detect(root)
        with pytest.raises(AttributeError):
            info.build_tool = "vite"


class TestFindComponentDirs:
    def test_declared_order_preserved(self, make_project):
        # created in reverse to make sure creation order is irrelevant
        root = make_project(
            dependencies={"react": "^18"},
            dirs=list(reversed(COMPONENT_DIR_CANDIDATES)),
        )
        info = ProjectDetector().detect(root)
        assert info.component_directories == COMPONENT_DIR_CANDIDATES

    def test_subset(self, make_project):
        root = make_project(
            dependencies={"react": "^18"},
            dirs=["ui", "src/ui", "app/components"],
        )
        info = ProjectDetector().detect(root)
        assert info.component_directories == ("src/ui", "ui", "app/components")

    def test_file_counts_as_existing(self, make_project):
        root = make_project(dependencies={"react": "^18"})
        (root / "lib").write_text("not a directory")
        assert ProjectDetector().find_component_dirs(root) == ("lib",)

    def test_probe_errors_are_absorbed(self, make_project, monkeypatch):
        root = make_project(dependencies={"react": "^18"}, dirs=["src/components", "ui"])
        real_exists = Path.exists

        def flaky_exists(self, *args, **kwargs):
            if self.name == "ui":
                raise PermissionError("denied")
            return real_exists(self, *args, **kwargs)

        monkeypatch.setattr(Path, "exists", flaky_exists)
        assert ProjectDetector().find_component_dirs(root) == ("src/components",)

    def test_probes_run_concurrently(self, make_project, monkeypatch):
        root = make_project(dependencies={"react": "^18"})
        barrier = threading.Barrier(len(COMPONENT_DIR_CANDIDATES), timeout=5)

        def waiting_probe(path):
            # every probe must be in flight at once for the barrier to release
            barrier.wait()
            return path.name == "components"

        monkeypatch.setattr(project_detector, "_probe", waiting_probe)
        dirs = ProjectDetector().find_component_dirs(root)
        assert dirs == ("src/components", "components", "src/pages/components", "app/components")

    def test_custom_candidates(self, make_project):
        root = make_project(dependencies={"react": "^18"}, dirs=["widgets"])
        detector = ProjectDetector(candidates=["widgets", "ui"])
        assert detector.find_component_dirs(root) == ("widgets",)

    def test_empty_candidates_fall_back(self, tmp_path):
        assert ProjectDetector(candidates=[]).find_component_dirs(tmp_path) == ("src/components",)
