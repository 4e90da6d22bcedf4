"""
go-scaffold: interactive scaffolder for Go platform API projects

Collects a project name, module path and feature selection, then builds a
new project from the bundled template tree.
"""

try:
    from importlib.metadata import version
    __version__ = version("go-scaffold")
except Exception:
    __version__ = "0.0.0"  # Fallback for development

__all__ = ["__version__"]
