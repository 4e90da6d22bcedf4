"""Shared fixtures for go-scaffold tests."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def config():
    """Bundled templates with git setup turned off."""
    from go_scaffold.config import ScaffoldConfig

    return ScaffoldConfig(git_enabled=False)


@pytest.fixture
def template_dir(tmp_path):
    """A small template tree with one base file and two features."""
    root = tmp_path / "templates"
    base = root / "base"
    (base / "internal" / "app").mkdir(parents=True)
    (base / "go.mod").write_text("module go_platform_template\n\ngo 1.21\n")
    (base / "Makefile").write_text("BINARY_NAME=go-platform-template\n")
    (base / "internal" / "app" / "server.go").write_text(
        'package bootstrap\n\nimport "go_platform_template/internal/platform/config"\n'
    )

    extra = root / "features" / "database"
    (extra / "internal" / "platform" / "database").mkdir(parents=True)
    (extra / "internal" / "platform" / "database" / "postgres.go").write_text("package database\n")
    (extra / "feature.json").write_text(json.dumps({
        "directories_to_copy": ["internal/platform/database"],
        "files": [],
    }))

    docker = root / "features" / "docker"
    docker.mkdir(parents=True)
    (docker / "Dockerfile").write_text("CMD [\"./go-platform-template\"]\n")
    (docker / "feature.json").write_text(json.dumps({"files": ["Dockerfile"]}))

    return root


@pytest.fixture
def small_config(template_dir):
    """ScaffoldConfig pointed at the small template tree."""
    from go_scaffold.config import ScaffoldConfig

    return ScaffoldConfig(template_dir=template_dir, git_enabled=False)


@pytest.fixture
def make_spec(tmp_path):
    """Build a ProjectSpec targeting tmp_path/out; every feature by default."""
    from go_scaffold.generator.materializer import ProjectSpec
    from go_scaffold.wizard.features import FEATURE_IDS

    def factory(name: str = "widget", module: str = "github.com/acme/widget", features=None, target: Path = None):
        selected = frozenset(FEATURE_IDS) if features is None else frozenset(features)
        return ProjectSpec(
            project_name=name,
            module_name=module,
            target_path=str(target or tmp_path / "out"),
            selected_features=selected,
        )

    return factory
