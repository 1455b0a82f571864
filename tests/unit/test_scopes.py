"""Unit tests for search scopes."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

import samplepkg
from dynresolve.scopes import (
    FinderScope,
    ModuleScope,
    NamespaceScope,
    PathScope,
    as_search_scope,
    walk_qualified,
)
from samplepkg.widgets import Part, Widget


class TestWalkQualified:
    """Tests for walk_qualified."""

    def test_module_attribute(self) -> None:
        assert walk_qualified("samplepkg.widgets.Widget", importlib.import_module) is Widget

    def test_nested_class(self) -> None:
        assert walk_qualified("samplepkg.widgets.Widget.Inner", importlib.import_module) is Widget.Inner

    def test_module(self) -> None:
        assert walk_qualified("samplepkg", importlib.import_module) is samplepkg

    def test_missing_module(self) -> None:
        assert walk_qualified("dynresolve_nowhere.Thing", importlib.import_module) is None

    def test_missing_attribute(self) -> None:
        assert walk_qualified("samplepkg.widgets.Nope", importlib.import_module) is None

    def test_missing_dependency_is_not_found(self) -> None:
        assert walk_qualified("samplepkg.broken.Unreachable", importlib.import_module) is None

    @pytest.mark.parametrize("name", ["", "a..b", "1abc", "pkg.Widget()", "a b"])
    def test_invalid_names(self, name: str) -> None:
        assert walk_qualified(name, importlib.import_module) is None


class TestModuleScope:
    """Tests for ModuleScope."""

    def test_relative_lookup(self) -> None:
        scope = ModuleScope("samplepkg")
        assert scope.find("widgets.Part") is Part

    def test_accepts_module_object(self) -> None:
        assert ModuleScope(samplepkg).base == "samplepkg"

    def test_not_found(self) -> None:
        assert ModuleScope("samplepkg").find("widgets.Missing") is None

    def test_equality(self) -> None:
        assert ModuleScope("samplepkg") == ModuleScope(samplepkg)
        assert hash(ModuleScope("samplepkg")) == hash(ModuleScope(samplepkg))
        assert ModuleScope("samplepkg") != ModuleScope("other")


class TestNamespaceScope:
    """Tests for NamespaceScope."""

    def test_exact_name(self) -> None:
        scope = NamespaceScope({"plugins.Widget": Widget})
        assert scope.find("plugins.Widget") is Widget

    def test_prefix_then_attributes(self) -> None:
        scope = NamespaceScope({"plugins.Widget": Widget})
        assert scope.find("plugins.Widget.Inner") is Widget.Inner
        assert scope.find("plugins.Widget.Missing") is None

    def test_not_found(self) -> None:
        assert NamespaceScope({}).find("anything") is None

    def test_equality_is_by_mapping_identity(self) -> None:
        mapping = {"a": Widget}
        assert NamespaceScope(mapping) == NamespaceScope(mapping)
        assert NamespaceScope(mapping) != NamespaceScope(dict(mapping))


class TestPathScope:
    """Tests for PathScope."""

    def test_loads_without_touching_sys_modules(self, plugin_dir: tuple[Path, str]) -> None:
        root, package = plugin_dir
        scope = PathScope(root)

        gizmo = scope.find(f"{package}.gizmos.Gizmo")

        assert isinstance(gizmo, type)
        assert gizmo.__name__ == "Gizmo"
        assert package not in sys.modules
        assert f"{package}.gizmos" not in sys.modules

    def test_modules_loaded_once(self, plugin_dir: tuple[Path, str]) -> None:
        root, package = plugin_dir
        scope = PathScope(root)
        assert scope.find(f"{package}.gizmos.Gizmo") is scope.find(f"{package}.gizmos.Gizmo")

    def test_invalidate_reloads(self, plugin_dir: tuple[Path, str]) -> None:
        root, package = plugin_dir
        scope = PathScope(root)
        first = scope.find(f"{package}.gizmos.Gizmo")
        scope.invalidate()
        assert scope.find(f"{package}.gizmos.Gizmo") is not first

    def test_not_found(self, plugin_dir: tuple[Path, str]) -> None:
        root, package = plugin_dir
        scope = PathScope(root)
        assert scope.find(f"{package}.gizmos.Missing") is None
        assert scope.find(f"{package}.nothing.Gizmo") is None
        assert scope.find("dynresolve_not_a_plugin.Thing") is None

    def test_equality(self, tmp_path: Path) -> None:
        assert PathScope(tmp_path) == PathScope(str(tmp_path))
        assert hash(PathScope(tmp_path)) == hash(PathScope(str(tmp_path)))

    def test_requires_directory(self) -> None:
        with pytest.raises(ValueError):
            PathScope()


class TestAsSearchScope:
    """Tests for as_search_scope."""

    def test_passthrough(self) -> None:
        scope = ModuleScope("samplepkg")
        assert as_search_scope(scope) is scope

    def test_module(self) -> None:
        assert as_search_scope(samplepkg) == ModuleScope("samplepkg")

    def test_mapping(self) -> None:
        assert isinstance(as_search_scope({"a": Widget}), NamespaceScope)

    def test_path(self, tmp_path: Path) -> None:
        assert as_search_scope(tmp_path) == PathScope(tmp_path)

    def test_finder_object(self) -> None:
        finder = SimpleNamespace(find=lambda name: Widget if name == "w" else None)
        scope = as_search_scope(finder)
        assert isinstance(scope, FinderScope)
        assert scope.find("w") is Widget
        assert scope == as_search_scope(finder)

    @pytest.mark.parametrize("value", ["samplepkg", b"samplepkg", 42, None])
    def test_rejected(self, value: object) -> None:
        with pytest.raises(TypeError):
            as_search_scope(value)
