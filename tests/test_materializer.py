"""Tests for project materialization."""

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest


def rewritable_files(root: Path):
    from go_scaffold.generator.rewrite import is_rewritable

    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            path = Path(dirpath) / filename
            if is_rewritable(path) or path.name == "go.mod":
                yield path


class TestProjectSpec:
    """Test the frozen wizard answers."""

    def test_display_path(self):
        from go_scaffold.generator.materializer import ProjectSpec

        assert ProjectSpec("svc", "a.com/svc").display_path() == "./svc"
        assert ProjectSpec("svc", "a.com/svc", target_path="../work/").display_path() == "../work/svc"

    def test_is_immutable(self):
        from dataclasses import FrozenInstanceError

        from go_scaffold.generator.materializer import ProjectSpec

        spec = ProjectSpec("svc", "a.com/svc")
        with pytest.raises(FrozenInstanceError):
            spec.project_name = "other"

    def test_relative_target_resolves_from_cwd(self, tmp_path, monkeypatch):
        from go_scaffold.generator.materializer import ProjectSpec, resolve_project_dir

        monkeypatch.chdir(tmp_path)
        assert resolve_project_dir(ProjectSpec("svc", "a.com/svc", target_path="./sub")) == tmp_path.resolve() / "sub" / "svc"


class TestMaterialize:
    """Test building a project from the bundled templates."""

    def test_all_features(self, config, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir

        spec = make_spec()
        message = Materializer(config).materialize(spec)
        project = resolve_project_dir(spec)

        assert message == "Project 'widget' created successfully"
        assert (project / "cmd" / "server" / "main.go").is_file()
        assert (project / "internal" / "app" / "routes.go").is_file()
        assert (project / "internal" / "domain" / "auth").is_dir()
        assert (project / "internal" / "domain" / "user").is_dir()
        assert (project / "internal" / "domain" / "file").is_dir()
        assert (project / "internal" / "platform" / "database" / "postgres.go").is_file()
        assert (project / "docs" / "docs.go").is_file()
        assert (project / "internal" / "app" / "swagger.go").is_file()
        assert (project / "Dockerfile").is_file()
        assert (project / "docker-compose" / "docker-compose.yml").is_file()
        assert not (project / "feature.json").exists()
        assert not (project / ".git").exists()

    def test_rewrite_completeness(self, config, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir

        spec = make_spec(name="widget", module="github.com/acme/widget")
        Materializer(config).materialize(spec)
        project = resolve_project_dir(spec)

        checked = 0
        for path in rewritable_files(project):
            content = path.read_text()
            assert "go_platform_template" not in content, path
            assert "go-platform-template" not in content, path
            checked += 1
        assert checked > 10

        assert (project / "go.mod").read_text().startswith("module github.com/acme/widget\n")
        assert "BINARY_NAME=widget" in (project / "Makefile").read_text()

    def test_only_selected_features(self, config, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir
        from go_scaffold.wizard.features import AUTH

        spec = make_spec(name="svc-a", module="github.com/example/svc-a", features={AUTH})
        Materializer(config).materialize(spec)
        project = resolve_project_dir(spec)

        assert (project / "internal" / "domain" / "auth").is_dir()
        assert not (project / "internal" / "domain" / "user").exists()
        assert not (project / "internal" / "domain" / "file").exists()
        assert not (project / "docs").exists()
        assert not (project / "Dockerfile").exists()

        routes = (project / "internal" / "app" / "routes.go").read_text()
        assert "github.com/example/svc-a/internal/domain/auth/api" in routes
        assert "internal/domain/user" not in routes

    def test_file_permissions(self, config, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir

        spec = make_spec()
        Materializer(config).materialize(spec)
        project = resolve_project_dir(spec)

        for relative in ("go.mod", "Makefile", "cmd/server/main.go", "Dockerfile"):
            assert stat.S_IMODE((project / relative).stat().st_mode) == 0o600, relative

    def test_conflict(self, config, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir
        from go_scaffold.wizard.exceptions import ConflictError

        spec = make_spec()
        project = resolve_project_dir(spec)
        project.mkdir(parents=True)
        (project / "keep.txt").write_text("mine")

        with pytest.raises(ConflictError) as exc_info:
            Materializer(config).materialize(spec)

        assert exc_info.value.message == "directory 'widget' already exists"
        assert (project / "keep.txt").read_text() == "mine"
        assert list(project.iterdir()) == [project / "keep.txt"]

    def test_rollback_on_generation_failure(self, config, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir
        from go_scaffold.wizard.exceptions import MaterializeError

        spec = make_spec()
        with patch(
            "go_scaffold.generator.materializer.write_generated_files",
            side_effect=OSError("disk full")
        ):
            with pytest.raises(MaterializeError) as exc_info:
                Materializer(config).materialize(spec)

        assert exc_info.value.step == "generate main.go and routes.go"
        assert "disk full" in exc_info.value.message
        assert not resolve_project_dir(spec).exists()

    def test_rollback_on_copy_failure(self, config, make_spec):
        from go_scaffold.generator import materializer
        from go_scaffold.wizard.exceptions import MaterializeError

        real_copy = materializer.copy_file
        calls = []

        def failing_copy(src, dst):
            calls.append(src)
            if len(calls) == 5:
                raise PermissionError("denied")
            real_copy(src, dst)

        spec = make_spec()
        with patch.object(materializer, "copy_file", side_effect=failing_copy):
            with pytest.raises(MaterializeError) as exc_info:
                materializer.Materializer(config).materialize(spec)

        assert exc_info.value.step == "copy base files"
        assert not materializer.resolve_project_dir(spec).exists()

    def test_rollback_on_rewrite_failure(self, config, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir
        from go_scaffold.wizard.exceptions import MaterializeError

        spec = make_spec()
        with patch(
            "go_scaffold.generator.materializer.replace_placeholders",
            side_effect=PermissionError("read-only file")
        ):
            with pytest.raises(MaterializeError):
                Materializer(config).materialize(spec)

        assert not resolve_project_dir(spec).exists()

    def test_unknown_overlay_mode(self, config):
        from go_scaffold.generator.materializer import Materializer

        with pytest.raises(ValueError):
            Materializer(config, overlay="symlink")


class TestOverlay:
    """Test feature overlays against a small template tree."""

    def test_manifest_mode(self, small_config, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir
        from go_scaffold.wizard.features import DATABASE, DOCKER

        spec = make_spec(features={DATABASE, DOCKER})
        Materializer(small_config).materialize(spec)
        project = resolve_project_dir(spec)

        assert (project / "internal" / "platform" / "database" / "postgres.go").is_file()
        assert (project / "Dockerfile").read_text() == 'CMD ["./widget"]\n'
        assert not (project / "feature.json").exists()

    def test_missing_manifest_skips_extras(self, small_config, template_dir, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir
        from go_scaffold.wizard.features import DATABASE

        (template_dir / "features" / "database" / "feature.json").unlink()

        spec = make_spec(features={DATABASE})
        Materializer(small_config).materialize(spec)
        project = resolve_project_dir(spec)

        assert not (project / "internal" / "platform" / "database").exists()
        # Generated files still reflect the selection
        assert "InitDB" in (project / "cmd" / "server" / "main.go").read_text()

    def test_missing_source_is_skipped(self, small_config, template_dir, make_spec):
        import json

        from go_scaffold.generator.materializer import Materializer, resolve_project_dir
        from go_scaffold.wizard.features import DOCKER

        (template_dir / "features" / "docker" / "feature.json").write_text(
            json.dumps({"directories_to_copy": ["nowhere"], "files": ["Dockerfile", "missing.txt"]})
        )

        spec = make_spec(features={DOCKER})
        Materializer(small_config).materialize(spec)
        project = resolve_project_dir(spec)
        assert (project / "Dockerfile").is_file()
        assert not (project / "missing.txt").exists()

    def test_feature_without_template_directory(self, small_config, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir
        from go_scaffold.wizard.features import API_DOCS

        spec = make_spec(features={API_DOCS})
        Materializer(small_config).materialize(spec)
        assert (resolve_project_dir(spec) / "go.mod").is_file()

    def test_non_utf8_template_file(self, small_config, template_dir, make_spec):
        from go_scaffold.generator.materializer import Materializer, resolve_project_dir

        (template_dir / "base" / "seed.json").write_bytes(b'{"name": "go-platform-template", "x": "\xff"}')

        spec = make_spec(features=set())
        Materializer(small_config).materialize(spec)

        seed = resolve_project_dir(spec) / "seed.json"
        assert seed.read_bytes() == b'{"name": "widget", "x": "\xff"}'

    def test_copy_mode(self, small_config, template_dir, make_spec):
        from go_scaffold.generator.materializer import OVERLAY_COPY, Materializer, resolve_project_dir
        from go_scaffold.wizard.features import DATABASE

        # Copy mode ignores the manifest and takes the whole subtree
        (template_dir / "features" / "database" / "feature.json").write_text("{}")
        (template_dir / "features" / "database" / "seed.sql").write_text("-- seed\n")

        spec = make_spec(features={DATABASE})
        Materializer(small_config, overlay=OVERLAY_COPY).materialize(spec)
        project = resolve_project_dir(spec)

        assert (project / "internal" / "platform" / "database" / "postgres.go").is_file()
        assert (project / "seed.sql").is_file()
        assert not (project / "feature.json").exists()


class TestGitStep:
    """Test that version control is best-effort."""

    def test_git_called_when_enabled(self, small_config, make_spec):
        from dataclasses import replace

        from go_scaffold.generator.materializer import Materializer, resolve_project_dir

        config = replace(small_config, git_enabled=True, git_author_name="Ada")
        spec = make_spec()
        with patch("go_scaffold.generator.materializer.is_git_available", return_value=True), \
                patch("go_scaffold.generator.materializer.init_repository") as mock_init:
            Materializer(config).materialize(spec)

        mock_init.assert_called_once()
        args, kwargs = mock_init.call_args
        assert args[0] == resolve_project_dir(spec)
        assert kwargs["author_name"] == "Ada"

    def test_git_missing_is_not_an_error(self, small_config, make_spec):
        from dataclasses import replace

        from go_scaffold.generator.materializer import Materializer, resolve_project_dir

        config = replace(small_config, git_enabled=True)
        spec = make_spec()
        with patch("go_scaffold.generator.materializer.is_git_available", return_value=False), \
                patch("go_scaffold.generator.materializer.init_repository") as mock_init:
            message = Materializer(config).materialize(spec)

        mock_init.assert_not_called()
        assert "created successfully" in message
        assert resolve_project_dir(spec).exists()

    def test_git_failure_keeps_project(self, small_config, make_spec):
        from dataclasses import replace

        from go_scaffold.generator.materializer import Materializer, resolve_project_dir

        config = replace(small_config, git_enabled=True)
        spec = make_spec()
        with patch("go_scaffold.generator.materializer.is_git_available", return_value=True), \
                patch("go_scaffold.generator.materializer.init_repository", return_value=False):
            Materializer(config).materialize(spec)

        assert (resolve_project_dir(spec) / "go.mod").is_file()
