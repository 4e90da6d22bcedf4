"""
go-scaffold Validators

Format checks for the three free-text wizard fields.
"""

import re
from typing import Tuple


PROJECT_NAME_MAX_LENGTH = 50

PROJECT_NAME_PATTERN = re.compile(r'^[a-z0-9_-]+$')
MODULE_NAME_PATTERN = re.compile(r'^[a-z0-9./_-]+$')

# ., .., ./a/b, ../a, a/b/c
PATH_PATTERN = re.compile(
    r'^\.{1,2}(/[a-zA-Z0-9._-]+)*$'
    r'|^[a-zA-Z0-9._-]+(/[a-zA-Z0-9._-]+)*$'
    r'|^\./?$'
)

DEFAULT_MODULE_PREFIX = "github.com/example"
DEFAULT_PROJECT_PATH = "."


def is_valid_project_name(name: str) -> bool:
    """Non-empty, at most 50 characters, lowercase letters/digits/_/- only."""
    if not name or len(name) > PROJECT_NAME_MAX_LENGTH:
        return False
    return PROJECT_NAME_PATTERN.fullmatch(name) is not None


def is_valid_module_name(name: str) -> bool:
    """Non-empty Go module path containing at least one '/'."""
    if not name or "/" not in name:
        return False
    return MODULE_NAME_PATTERN.fullmatch(name) is not None


def is_valid_path(path: str) -> bool:
    """Relative target path; the empty string is valid and means '.'."""
    if not path:
        return True
    return PATH_PATTERN.fullmatch(path) is not None


def default_module_name(project_name: str) -> str:
    """Module path used when the module field is left empty."""
    return f"{DEFAULT_MODULE_PREFIX}/{project_name}"


def validate_project_name(name: str) -> Tuple[bool, str]:
    """Validate a project name.

    Args:
        name: The project name to validate

    Returns:
        Tuple of (is_valid, message)
    """
    if not name:
        return False, "project name is required"

    if len(name) > PROJECT_NAME_MAX_LENGTH:
        return False, f"project name must be at most {PROJECT_NAME_MAX_LENGTH} characters"

    if not is_valid_project_name(name):
        return False, "invalid format: use lowercase, numbers, hyphens, underscores"

    return True, "Valid project name"


def validate_module_name(name: str) -> Tuple[bool, str]:
    """Validate a Go module path.

    Args:
        name: The module path to validate

    Returns:
        Tuple of (is_valid, message)
    """
    if not is_valid_module_name(name):
        return False, "invalid module format: use 'domain.com/org/project'"

    return True, "Valid module name"


def validate_path(path: str) -> Tuple[bool, str]:
    """Validate a relative target path.

    Args:
        path: The path to validate

    Returns:
        Tuple of (is_valid, message)
    """
    if not is_valid_path(path):
        return False, "invalid path: use relative path like '.' or './projects'"

    return True, "Valid path"


def is_script_project_name(name: str) -> bool:
    """Lighter check used by the non-interactive `new` command."""
    return bool(name) and PROJECT_NAME_PATTERN.fullmatch(name) is not None


def is_script_module_name(name: str) -> bool:
    """Lighter check used by the non-interactive `new` command."""
    return bool(name) and MODULE_NAME_PATTERN.fullmatch(name) is not None
