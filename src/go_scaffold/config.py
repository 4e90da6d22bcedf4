"""
go-scaffold Configuration

Settings are resolved once at startup into a ScaffoldConfig and passed to
whatever needs them.
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from go_scaffold.wizard.exceptions import ConfigError
from go_scaffold.wizard.logging_config import is_debug_mode


BUNDLED_TEMPLATE_DIR = Path(__file__).parent / "templates"

PLACEHOLDER_MODULE = "go_platform_template"
PLACEHOLDER_NAME = "go-platform-template"


@dataclass(frozen=True)
class ScaffoldConfig:
    """Resolved settings for one go-scaffold run."""
    template_dir: Path = field(default_factory=lambda: BUNDLED_TEMPLATE_DIR)
    placeholder_module: str = PLACEHOLDER_MODULE
    placeholder_name: str = PLACEHOLDER_NAME
    git_enabled: bool = True
    git_author_name: str = "Developer"
    git_author_email: str = "dev@example.com"
    commit_message: str = "Initial commit: created from go-platform-template"
    log_file: Optional[Path] = None
    debug: bool = False

    @property
    def base_dir(self) -> Path:
        return self.template_dir / "base"

    @property
    def features_dir(self) -> Path:
        return self.template_dir / "features"

    def check(self) -> "ScaffoldConfig":
        """Fail early if the template tree is unusable."""
        if not self.base_dir.is_dir():
            raise ConfigError(
                f"Template directory has no base/ tree: {self.template_dir}",
                config_key="template_dir"
            )
        if not self.placeholder_module or not self.placeholder_name:
            raise ConfigError("Placeholder tokens must not be empty", config_key="placeholders")
        return self


def _read_config_file(path: Path) -> Dict[str, Any]:
    """Load a YAML config file into a flat dict of ScaffoldConfig fields."""
    try:
        raw = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}", config_key="config", details=str(e))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}", config_key="config", details=str(e))

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping", config_key="config")

    values: Dict[str, Any] = {}

    if "template_dir" in raw:
        values["template_dir"] = Path(raw["template_dir"]).expanduser()
    if "log_file" in raw and raw["log_file"]:
        values["log_file"] = Path(raw["log_file"]).expanduser()
    if "debug" in raw:
        values["debug"] = bool(raw["debug"])

    git = raw.get("git") or {}
    if not isinstance(git, dict):
        raise ConfigError("'git' must be a mapping", config_key="git")
    for key, target in (
        ("enabled", "git_enabled"),
        ("author_name", "git_author_name"),
        ("author_email", "git_author_email"),
        ("commit_message", "commit_message"),
    ):
        if key in git:
            values[target] = bool(git[key]) if key == "enabled" else str(git[key])

    placeholders = raw.get("placeholders") or {}
    if not isinstance(placeholders, dict):
        raise ConfigError("'placeholders' must be a mapping", config_key="placeholders")
    if "module" in placeholders:
        values["placeholder_module"] = str(placeholders["module"])
    if "name" in placeholders:
        values["placeholder_name"] = str(placeholders["name"])

    return values


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> ScaffoldConfig:
    """Resolve settings from defaults, config file, environment and CLI flags.

    Args:
        config_path: YAML file to read (falls back to GO_SCAFFOLD_CONFIG)
        overrides: Values from command-line flags; None entries are ignored

    Returns:
        Checked ScaffoldConfig
    """
    config = ScaffoldConfig()

    if config_path is None and os.environ.get("GO_SCAFFOLD_CONFIG"):
        config_path = Path(os.environ["GO_SCAFFOLD_CONFIG"]).expanduser()

    if config_path is not None:
        config = replace(config, **_read_config_file(config_path))

    env_template_dir = os.environ.get("GO_SCAFFOLD_TEMPLATE_DIR")
    if env_template_dir:
        config = replace(config, template_dir=Path(env_template_dir).expanduser())

    if is_debug_mode():
        config = replace(config, debug=True)

    if overrides:
        config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    return config.check()
