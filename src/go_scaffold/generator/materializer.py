"""
Project Materializer

Builds a new project directory from the template tree: base files, feature
overlays, the two generated Go files, placeholder rewriting and an initial
git commit. Anything that fails before git setup removes the partial
project directory.
"""

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, FrozenSet, Optional

from go_scaffold.config import ScaffoldConfig
from go_scaffold.generator.manifest import MANIFEST_FILE, try_load_manifest
from go_scaffold.generator.renderer import build_context, write_generated_files
from go_scaffold.generator.rewrite import replace_placeholders, rewrite_go_mod
from go_scaffold.wizard.exceptions import ConflictError, MaterializeError, ScaffoldError
from go_scaffold.wizard.features import FEATURE_IDS
from go_scaffold.wizard.git_utils import init_repository, is_git_available
from go_scaffold.wizard.logging_config import get_logger


logger = get_logger("materializer")

FILE_MODE = 0o600
DIR_MODE = 0o755

OVERLAY_MANIFEST = "manifest"
OVERLAY_COPY = "copy"


@dataclass(frozen=True)
class ProjectSpec:
    """Everything the materializer needs, frozen at confirmation time."""
    project_name: str
    module_name: str
    target_path: str = "."
    selected_features: FrozenSet[str] = field(default_factory=frozenset)

    def display_path(self) -> str:
        """Project location as shown to the user."""
        if self.target_path in ("", "."):
            return f"./{self.project_name}"
        return f"{self.target_path.rstrip('/')}/{self.project_name}"


def resolve_project_dir(spec: ProjectSpec) -> Path:
    """Absolute target_path/project_name."""
    base = Path(spec.target_path or ".")
    return (Path.cwd() / base).resolve() / spec.project_name


def copy_tree(src: Path, dst: Path, skip: Optional[Callable[[Path], bool]] = None) -> int:
    """Copy a directory tree, writing files with FILE_MODE.

    Returns:
        Number of files copied
    """
    copied = 0
    for root, dirs, files in os.walk(src):
        dirs.sort()
        relative = Path(root).relative_to(src)
        target_root = dst / relative
        target_root.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        for filename in sorted(files):
            source = Path(root) / filename
            if skip and skip(source):
                continue
            copy_file(source, target_root / filename)
            copied += 1
    return copied


def copy_file(src: Path, dst: Path):
    """Copy one file's bytes, creating parents, with FILE_MODE permissions."""
    dst.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    dst.write_bytes(src.read_bytes())
    os.chmod(dst, FILE_MODE)


class Materializer:
    """Turns a ProjectSpec into a project directory on disk."""

    def __init__(self, config: ScaffoldConfig, overlay: str = OVERLAY_MANIFEST):
        if overlay not in (OVERLAY_MANIFEST, OVERLAY_COPY):
            raise ValueError(f"Unknown overlay mode: {overlay}")
        self.config = config
        self.overlay = overlay

    def materialize(self, spec: ProjectSpec) -> str:
        """Create the project.

        Args:
            spec: Finalized wizard answers

        Returns:
            Human-readable confirmation message

        Raises:
            ConflictError: If the project directory already exists
            MaterializeError: If any filesystem step fails (after rollback)
        """
        project_dir = resolve_project_dir(spec)

        if project_dir.exists():
            raise ConflictError(
                f"directory '{spec.project_name}' already exists",
                path=str(project_dir)
            )

        logger.info("Creating %s in %s", spec.project_name, project_dir)

        try:
            project_dir.mkdir(mode=DIR_MODE, parents=True)
        except FileExistsError:
            raise ConflictError(
                f"directory '{spec.project_name}' already exists",
                path=str(project_dir)
            ) from None
        except OSError as e:
            raise MaterializeError(
                f"failed to create project directory: {e}",
                step="create project directory",
                partial_path=str(project_dir)
            ) from e

        step = "copy base files"
        try:
            count = copy_tree(self.config.base_dir, project_dir)
            logger.debug("Copied %d base files", count)

            step = "copy features"
            self._overlay_features(project_dir, spec.selected_features)

            step = "generate main.go and routes.go"
            context = build_context(spec.module_name, spec.selected_features)
            write_generated_files(project_dir, context, file_mode=FILE_MODE)

            step = "update module names"
            replace_placeholders(
                project_dir,
                spec.project_name,
                spec.module_name,
                self.config.placeholder_module,
                self.config.placeholder_name,
            )
            rewrite_go_mod(project_dir, spec.module_name)
        except Exception as e:
            self._rollback(project_dir)
            if isinstance(e, ScaffoldError):
                raise
            raise MaterializeError(
                f"failed to {step}: {e}",
                step=step,
                partial_path=str(project_dir),
                details=repr(e)
            ) from e

        self._init_git(project_dir)

        logger.info("Project '%s' created at %s", spec.project_name, project_dir)
        return f"Project '{spec.project_name}' created successfully"

    def _overlay_features(self, project_dir: Path, selected: FrozenSet[str]):
        features_dir = self.config.features_dir

        for name in sorted(selected):
            feature_id = FEATURE_IDS.get(name)
            if feature_id is None:
                logger.debug("No template subtree for feature '%s'", name)
                continue

            feature_root = features_dir / feature_id

            if self.overlay == OVERLAY_COPY:
                if feature_root.is_dir():
                    copy_tree(feature_root, project_dir, skip=lambda p: p.name == MANIFEST_FILE)
                continue

            manifest = try_load_manifest(features_dir, feature_id)
            if manifest is None:
                continue

            for entry in manifest.directories_to_copy:
                source = feature_root / entry
                if not source.is_dir():
                    logger.warning("Feature '%s': directory %s not found, skipping", feature_id, entry)
                    continue
                copy_tree(source, project_dir / entry)

            for entry in manifest.files:
                source = feature_root / entry
                if not source.is_file():
                    logger.warning("Feature '%s': file %s not found, skipping", feature_id, entry)
                    continue
                copy_file(source, project_dir / entry)

    def _rollback(self, project_dir: Path):
        if project_dir.exists():
            logger.warning("Removing partially created %s", project_dir)
            shutil.rmtree(project_dir, ignore_errors=True)

    def _init_git(self, project_dir: Path):
        if not self.config.git_enabled:
            logger.debug("Git setup disabled")
            return
        if not is_git_available():
            logger.warning("git not found; skipping repository setup")
            return
        init_repository(
            project_dir,
            author_name=self.config.git_author_name,
            author_email=self.config.git_author_email,
            commit_message=self.config.commit_message,
        )
