"""
go-scaffold Feature Catalog

The fixed set of selectable features, their dependency graph, and the
resolver that keeps a selection consistent with that graph.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from go_scaffold.wizard.exceptions import ConfigError
from go_scaffold.wizard.logging_config import get_logger


logger = get_logger("features")


AUTH = "Authentication (JWT)"
USER_MANAGEMENT = "User Management"
DATABASE = "Database"
FILE_STORAGE = "File Storage"
API_DOCS = "API Docs"
DOCKER = "Docker"


@dataclass
class Feature:
    """A selectable unit of generated functionality."""
    name: str
    description: str
    selected: bool = True
    is_default: bool = True


# (name, description), in display order
FEATURE_CATALOG = [
    (AUTH, "JWT-based auth with token rotation"),
    (USER_MANAGEMENT, "User registration, profiles, RBAC"),
    (DATABASE, "PostgreSQL integration with migrations"),
    (FILE_STORAGE, "MinIO S3-compatible file storage"),
    (API_DOCS, "Auto-generated Swagger documentation"),
    (DOCKER, "Docker & Docker Compose setup"),
]

DEPENDENCY_GRAPH: Dict[str, List[str]] = {
    USER_MANAGEMENT: [AUTH],
    FILE_STORAGE: [DATABASE],
    AUTH: [],
    DATABASE: [],
    API_DOCS: [],
    DOCKER: [],
}

# Feature name -> directory under templates/features/
FEATURE_IDS: Dict[str, str] = {
    AUTH: "auth",
    USER_MANAGEMENT: "user-management",
    DATABASE: "database",
    FILE_STORAGE: "file-storage",
    API_DOCS: "api-docs",
    DOCKER: "docker",
}

# Shown on the success screen
FEATURE_HIGHLIGHTS: Dict[str, str] = {
    AUTH: "JWT Authentication & Token Rotation",
    USER_MANAGEMENT: "User Management with RBAC",
    DATABASE: "PostgreSQL Database Integration",
    FILE_STORAGE: "MinIO File Storage",
    API_DOCS: "Auto-Generated Swagger Docs",
    DOCKER: "Docker & Docker Compose Setup",
}

# Always part of the base tree
BASE_HIGHLIGHTS = [
    "Structured Logging (Zap)",
    "Error Handling & Response Formatting",
]


def default_features() -> List[Feature]:
    """Build a fresh catalog with every feature selected by default."""
    return [Feature(name=name, description=description) for name, description in FEATURE_CATALOG]


def check_dependency_graph(features: List[Feature], graph: Dict[str, List[str]]):
    """Check the graph only references known features and has no cycle.

    Raises:
        ConfigError: If the graph is not a DAG over the catalog
    """
    names = {feature.name for feature in features}

    for name, deps in graph.items():
        if name not in names:
            raise ConfigError(
                f"Dependency graph references unknown feature '{name}'",
                config_key="features"
            )
        for dep in deps:
            if dep not in names:
                raise ConfigError(
                    f"Feature '{name}' requires unknown feature '{dep}'",
                    config_key="features"
                )

    # Three-colour DFS
    visiting: Set[str] = set()
    done: Set[str] = set()

    def visit(name: str, path: List[str]):
        if name in done:
            return
        if name in visiting:
            cycle = " -> ".join(path[path.index(name):] + [name])
            raise ConfigError(
                "Feature dependency graph contains a cycle",
                config_key="features",
                details=cycle
            )
        visiting.add(name)
        for dep in graph.get(name, []):
            visit(dep, path + [name])
        visiting.discard(name)
        done.add(name)

    for name in graph:
        visit(name, [])


class DependencyResolver:
    """Keeps a feature selection closed under the dependency graph.

    After every call, each selected feature has all of its requirements
    selected as well. The feature list is mutated in place; callers re-read
    it for rendering.
    """

    def __init__(
        self,
        features: Optional[List[Feature]] = None,
        graph: Optional[Dict[str, List[str]]] = None
    ):
        self.features = features if features is not None else default_features()
        self.graph = graph if graph is not None else DEPENDENCY_GRAPH
        check_dependency_graph(self.features, self.graph)
        self._by_name = {feature.name: feature for feature in self.features}

    def get(self, name: str) -> Feature:
        """Look up a feature by name."""
        try:
            return self._by_name[name]
        except KeyError:
            raise ConfigError(f"Unknown feature '{name}'", config_key="features") from None

    def is_selected(self, name: str) -> bool:
        return self.get(name).selected

    def selected_names(self) -> Set[str]:
        return {feature.name for feature in self.features if feature.selected}

    def on_select(self, name: str):
        """Select a feature and, recursively, everything it requires."""
        feature = self.get(name)
        feature.selected = True
        self._enable_dependencies(name)

    def _enable_dependencies(self, name: str):
        for dep in self.graph.get(name, []):
            dependency = self.get(dep)
            if dependency.selected:
                continue
            dependency.selected = True
            logger.debug("Auto-enabled %s (required by %s)", dep, name)
            self._enable_dependencies(dep)

    def on_deselect(self, name: str):
        """Deselect a feature and every selected feature left unsatisfied.

        Repeats full passes until nothing changes, so the result is the same
        fixed point regardless of catalog order.
        """
        self.get(name).selected = False

        changed = True
        while changed:
            changed = False
            for feature in self.features:
                if feature.selected and self.missing_dependencies(feature.name):
                    feature.selected = False
                    changed = True
                    logger.debug("Auto-disabled %s (requirement removed)", feature.name)

    def toggle(self, name: str):
        """Flip a feature, resolving dependencies in the right direction."""
        if self.get(name).selected:
            self.on_deselect(name)
        else:
            self.on_select(name)

    def missing_dependencies(self, name: str) -> List[str]:
        """Requirements of `name` that are not currently selected."""
        return [dep for dep in self.graph.get(name, []) if not self.get(dep).selected]

    def is_consistent(self) -> bool:
        return all(
            not self.missing_dependencies(feature.name)
            for feature in self.features
            if feature.selected
        )

    def dependency_warning(self) -> str:
        """One-line hint about unmet requirements or auto-enabled features."""
        warnings = []
        for feature in self.features:
            if not feature.selected:
                continue
            missing = self.missing_dependencies(feature.name)
            if missing:
                warnings.append(f"ℹ {feature.name} requires: {', '.join(missing)}")

        if warnings:
            return " | ".join(warnings)

        auto_enabled = [f.name for f in self.features if f.selected and not f.is_default]
        if auto_enabled:
            return f"ℹ Auto-enabled: {', '.join(auto_enabled)}"

        return ""
