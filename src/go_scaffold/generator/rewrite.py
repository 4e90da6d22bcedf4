"""
Placeholder rewriting

Swaps the template's placeholder module path and project name for the real
ones across Go sources and config files, then fixes go.mod's module line.
"""

import os
from pathlib import Path
from typing import List

from go_scaffold.wizard.logging_config import get_logger


logger = get_logger("rewrite")

SOURCE_SUFFIXES = (".go",)
CONFIG_SUFFIXES = (".yaml", ".yml", ".json", ".toml")
CONFIG_NAMES = ("Makefile", "Dockerfile")


def is_rewritable(path: Path) -> bool:
    """Go sources, config files by extension, and the two build files."""
    return (
        path.suffix in SOURCE_SUFFIXES
        or path.suffix in CONFIG_SUFFIXES
        or path.name in CONFIG_NAMES
    )


def replace_placeholders(
    project_dir: Path,
    project_name: str,
    module_name: str,
    placeholder_module: str,
    placeholder_name: str
) -> List[Path]:
    """Rewrite placeholder tokens in every matching file under project_dir.

    Files are rewritten as raw bytes, so content in any encoding survives;
    only the UTF-8 form of each token is replaced.

    Returns:
        Files whose content changed
    """
    replacements = [
        (placeholder_module.encode("utf-8"), module_name.encode("utf-8")),
        (placeholder_name.encode("utf-8"), project_name.encode("utf-8")),
    ]

    changed = []
    for root, dirs, files in os.walk(project_dir):
        dirs[:] = [d for d in dirs if d != ".git"]
        for filename in files:
            path = Path(root) / filename
            if not is_rewritable(path):
                continue

            content = path.read_bytes()
            updated = content
            for old, new in replacements:
                updated = updated.replace(old, new)
            if updated != content:
                path.write_bytes(updated)
                changed.append(path)

    logger.debug("Rewrote placeholders in %d files", len(changed))
    return changed


def rewrite_go_mod(project_dir: Path, module_name: str) -> bool:
    """Replace the first line of go.mod with the real module declaration.

    Returns:
        True if go.mod existed and was rewritten
    """
    go_mod = project_dir / "go.mod"
    if not go_mod.is_file():
        return False

    lines = go_mod.read_bytes().split(b"\n")
    lines[0] = f"module {module_name}".encode("utf-8")
    go_mod.write_bytes(b"\n".join(lines))
    return True
