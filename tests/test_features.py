"""Tests for the feature catalog and dependency resolver."""

import itertools
import random

import pytest


def _resolver(selected=None):
    from go_scaffold.wizard.features import DependencyResolver, default_features

    features = default_features()
    if selected is not None:
        for feature in features:
            feature.selected = feature.name in selected
    return DependencyResolver(features)


class TestCatalog:
    """Test the fixed feature catalog."""

    def test_catalog_order_and_defaults(self):
        from go_scaffold.wizard.features import default_features

        features = default_features()
        assert [f.name for f in features] == [
            "Authentication (JWT)",
            "User Management",
            "Database",
            "File Storage",
            "API Docs",
            "Docker",
        ]
        assert all(f.selected and f.is_default for f in features)

    def test_every_feature_has_a_template_directory(self):
        from go_scaffold.config import BUNDLED_TEMPLATE_DIR
        from go_scaffold.wizard.features import FEATURE_IDS, default_features

        for feature in default_features():
            feature_id = FEATURE_IDS[feature.name]
            assert (BUNDLED_TEMPLATE_DIR / "features" / feature_id / "feature.json").is_file()

    def test_default_features_are_independent_copies(self):
        from go_scaffold.wizard.features import default_features

        first = default_features()
        first[0].selected = False
        assert default_features()[0].selected is True


class TestGraphCheck:
    """Test dependency graph validation at construction."""

    def test_cycle_is_rejected(self):
        from go_scaffold.wizard.exceptions import ConfigError
        from go_scaffold.wizard.features import DependencyResolver, Feature

        features = [Feature("a", ""), Feature("b", ""), Feature("c", "")]
        graph = {"a": ["b"], "b": ["c"], "c": ["a"]}

        with pytest.raises(ConfigError) as exc_info:
            DependencyResolver(features, graph)
        assert "cycle" in exc_info.value.message
        assert "a -> b -> c -> a" in exc_info.value.details

    def test_self_dependency_is_a_cycle(self):
        from go_scaffold.wizard.exceptions import ConfigError
        from go_scaffold.wizard.features import DependencyResolver, Feature

        with pytest.raises(ConfigError):
            DependencyResolver([Feature("a", "")], {"a": ["a"]})

    def test_unknown_dependency_is_rejected(self):
        from go_scaffold.wizard.exceptions import ConfigError
        from go_scaffold.wizard.features import DependencyResolver, Feature

        with pytest.raises(ConfigError) as exc_info:
            DependencyResolver([Feature("a", "")], {"a": ["ghost"]})
        assert "ghost" in exc_info.value.message

    def test_unknown_feature_lookup(self):
        from go_scaffold.wizard.exceptions import ConfigError

        resolver = _resolver()
        with pytest.raises(ConfigError):
            resolver.on_select("Telemetry")


class TestResolver:
    """Test selection and deselection cascades."""

    def test_select_enables_requirements(self):
        from go_scaffold.wizard.features import AUTH, USER_MANAGEMENT

        resolver = _resolver(selected=set())
        resolver.on_select(USER_MANAGEMENT)
        assert resolver.selected_names() == {USER_MANAGEMENT, AUTH}

    def test_deselect_disables_dependents(self):
        from go_scaffold.wizard.features import AUTH, USER_MANAGEMENT

        resolver = _resolver(selected=set())
        resolver.on_select(USER_MANAGEMENT)
        resolver.on_deselect(AUTH)
        assert not resolver.is_selected(AUTH)
        assert not resolver.is_selected(USER_MANAGEMENT)

    def test_file_storage_pulls_in_database(self):
        from go_scaffold.wizard.features import DATABASE, FILE_STORAGE

        resolver = _resolver(selected=set())
        resolver.toggle(FILE_STORAGE)
        assert resolver.is_selected(DATABASE)

        resolver.toggle(DATABASE)
        assert not resolver.is_selected(FILE_STORAGE)
        assert not resolver.is_selected(DATABASE)

    def test_deselect_keeps_unrelated_features(self):
        from go_scaffold.wizard.features import API_DOCS, AUTH, DATABASE, DOCKER, FILE_STORAGE

        resolver = _resolver()
        resolver.on_deselect(AUTH)
        assert resolver.selected_names() == {DATABASE, FILE_STORAGE, API_DOCS, DOCKER}

    def test_deselect_dependent_keeps_requirement(self):
        from go_scaffold.wizard.features import AUTH, USER_MANAGEMENT

        resolver = _resolver()
        resolver.on_deselect(USER_MANAGEMENT)
        assert resolver.is_selected(AUTH)

    def test_select_is_idempotent(self):
        from go_scaffold.wizard.features import FEATURE_IDS

        for name in FEATURE_IDS:
            once = _resolver(selected=set())
            once.on_select(name)
            twice = _resolver(selected=set())
            twice.on_select(name)
            twice.on_select(name)
            assert once.selected_names() == twice.selected_names()

    def test_transitive_cascade(self):
        from go_scaffold.wizard.features import DependencyResolver, Feature

        features = [Feature(n, "", selected=False) for n in ("a", "b", "c", "d")]
        graph = {"c": ["b"], "b": ["a"], "d": ["c"]}
        resolver = DependencyResolver(features, graph)

        resolver.on_select("d")
        assert resolver.selected_names() == {"a", "b", "c", "d"}

        resolver.on_deselect("a")
        assert resolver.selected_names() == set()

    def test_invariant_holds_after_random_toggles(self):
        from go_scaffold.wizard.features import FEATURE_IDS

        names = list(FEATURE_IDS)
        rng = random.Random(7)
        resolver = _resolver()
        for _ in range(200):
            if rng.random() < 0.5:
                resolver.on_select(rng.choice(names))
            else:
                resolver.on_deselect(rng.choice(names))
            assert resolver.is_consistent()

    def test_invariant_from_every_starting_selection(self):
        from go_scaffold.wizard.features import FEATURE_IDS

        names = list(FEATURE_IDS)
        for mask in itertools.product([False, True], repeat=len(names)):
            start = {n for n, on in zip(names, mask) if on}
            for target in names:
                resolver = _resolver(selected=start)
                resolver.toggle(target)
                # Toggling only fixes what it touches, so check the touched chain
                if resolver.is_selected(target):
                    assert not resolver.missing_dependencies(target)
                else:
                    for name in resolver.selected_names():
                        assert target not in resolver.graph.get(name, [])


class TestDependencyWarning:
    """Test the hint line shown on the feature screen."""

    def test_no_warning_for_defaults(self):
        resolver = _resolver()
        assert resolver.dependency_warning() == ""

    def test_unmet_requirement_warning(self):
        from go_scaffold.wizard.features import FILE_STORAGE

        resolver = _resolver(selected={FILE_STORAGE})
        assert resolver.dependency_warning() == "ℹ File Storage requires: Database"

    def test_auto_enabled_warning(self):
        from go_scaffold.wizard.features import Feature, DependencyResolver

        features = [Feature("a", ""), Feature("b", "", is_default=False)]
        resolver = DependencyResolver(features, {"a": ["b"]})
        assert resolver.dependency_warning() == "ℹ Auto-enabled: b"
