"""Shared fixtures for fractal-explore tests."""
import json
import logging

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep every test away from the real home directory and config.

    HOME points to a temp directory, the working directory is an empty
    temp directory, FRACTAL_EXPLORE_* variables are cleared, and the config
    singleton and plain-output mode are reset afterwards.
    """
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(work)
    for var in (
        "FRACTAL_EXPLORE_PORT",
        "FRACTAL_EXPLORE_HOST",
        "FRACTAL_EXPLORE_DIR",
        "FRACTAL_EXPLORE_CACHE",
        "FRACTAL_EXPLORE_PLAIN",
        "FRACTAL_EXPLORE_DEBUG",
    ):
        monkeypatch.delenv(var, raising=False)

    from fractal_explore import ui
    from fractal_explore.core.config_service import reset_config_service

    reset_config_service()
    yield work
    reset_config_service()
    ui.set_plain_mode(False)

    # the CLI callback installs a handler on every invocation
    logger = logging.getLogger("fractal_explore")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def make_project(tmp_path):
    """Factory that writes a synthetic project and returns its root.

    Usage::

        root = make_project(dependencies={"react": "^18"}, dirs=["src/components"])
    """
    counter = {"n": 0}

    def _make(dependencies=None, dev_dependencies=None, dirs=(), manifest=True, raw=None):
        counter["n"] += 1
        root = tmp_path / f"project-{counter['n']}"
        root.mkdir()
        if raw is not None:
            (root / "package.json").write_text(raw)
        elif manifest:
            data = {"name": root.name, "version": "0.1.0"}
            if dependencies is not None:
                data["dependencies"] = dependencies
            if dev_dependencies is not None:
                data["devDependencies"] = dev_dependencies
            (root / "package.json").write_text(json.dumps(data, indent=2))
        for d in dirs:
            (root / d).mkdir(parents=True)
        return root

    return _make
