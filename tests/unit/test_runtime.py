"""Unit tests for the process-wide default resolver."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from dynresolve import runtime
from dynresolve.backends.basic import BasicResolver
from dynresolve.backends.reflective import ReflectiveResolver
from dynresolve.core.config import ResolverConfig
from dynresolve.core.errors import BackendError
from dynresolve.scopes import ModuleScope, PathScope
from samplepkg.widgets import Widget


def _config(**values) -> ResolverConfig:
    return ResolverConfig(_env_file=None, **values)


class TestCreateResolver:
    """Tests for create_resolver."""

    def test_backend_from_config(self) -> None:
        resolver = runtime.create_resolver(_config(backend="basic"))
        assert isinstance(resolver, BasicResolver)

    def test_backend_override(self) -> None:
        resolver = runtime.create_resolver(_config(backend="basic"), backend="reflective")
        assert isinstance(resolver, ReflectiveResolver)

    def test_unknown_backend(self) -> None:
        with pytest.raises(BackendError):
            runtime.create_resolver(_config(backend="no_such_backend"))

    def test_configured_scopes(self, plugin_dir: tuple[Path, str]) -> None:
        root, package = plugin_dir
        resolver = runtime.create_resolver(
            _config(search_paths=[str(root)], search_modules=["samplepkg"])
        )
        assert resolver.search_scopes == (PathScope(root), ModuleScope("samplepkg"))
        assert resolver.get_type("widgets.Widget") is Widget
        assert resolver.get_type(f"{package}.gizmos.Gizmo") is not None

    def test_instances_are_independent(self) -> None:
        first = runtime.create_resolver(_config())
        second = runtime.create_resolver(_config())
        first.get_type("samplepkg.widgets.Widget")
        assert len(first.cache) == 1
        assert len(second.cache) == 0


class TestDefaultResolver:
    """Tests for get_resolver, set_resolver and use_backend."""

    def test_built_once(self) -> None:
        with patch.object(runtime, "get_config", return_value=_config()):
            first = runtime.get_resolver()
            assert runtime.get_resolver() is first

    def test_set_resolver(self) -> None:
        replacement = BasicResolver()
        previous = runtime.set_resolver(replacement)
        assert previous is None
        assert runtime.get_resolver() is replacement
        assert runtime.set_resolver(None) is replacement

    def test_swap_starts_cold(self) -> None:
        with patch.object(runtime, "get_config", return_value=_config()):
            old = runtime.get_resolver()
            old.get_type("samplepkg.widgets.Widget")
            new = runtime.use_backend("reflective")

        assert new is not old
        assert runtime.get_resolver() is new
        assert len(new.cache) == 0
        assert len(old.cache) == 1

    def test_use_backend_class(self) -> None:
        with patch.object(runtime, "get_config", return_value=_config()):
            resolver = runtime.use_backend(BasicResolver)
        assert isinstance(resolver, BasicResolver)
        assert runtime.get_resolver() is resolver

    def test_reset(self) -> None:
        with patch.object(runtime, "get_config", return_value=_config()):
            first = runtime.get_resolver()
            runtime.reset_resolver()
            assert runtime.get_resolver() is not first
