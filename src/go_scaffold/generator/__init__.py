"""
go-scaffold Project Generator

Turns finalized wizard answers into a project directory on disk.
"""

from go_scaffold.generator.materializer import Materializer, ProjectSpec

__all__ = ["Materializer", "ProjectSpec"]
