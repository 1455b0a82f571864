"""Search scopes consulted when the default import system cannot find a name.

A search scope plays the role an extra class loader plays on other platforms:
plugins living outside ``sys.path``, packages whose members should resolve by
short name, or an explicit registry of objects.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from importlib.machinery import PathFinder
from pathlib import Path
from types import ModuleType

logger = logging.getLogger(__name__)

ModuleImporter = Callable[[str], ModuleType]


def walk_qualified(name: str, import_module: ModuleImporter) -> object | None:
    """Resolve a dotted name by importing its longest module prefix.

    The remaining segments are looked up as attributes, so nested classes
    (``pkg.mod.Outer.Inner``) resolve too.

    Args:
        name: Dotted name to resolve.
        import_module: Function importing a module by absolute name.

    Returns:
        The object the name designates, or None if it does not exist.
        Exceptions other than ``ImportError`` raised while a module executes
        are not caught.
    """
    parts = name.split(".")
    if not all(part.isidentifier() for part in parts):
        return None

    for split in range(len(parts), 0, -1):
        module_name = ".".join(parts[:split])
        try:
            target: object = import_module(module_name)
        except ModuleNotFoundError as e:
            missing = e.name or ""
            if module_name == missing or module_name.startswith(missing + "."):
                continue
            logger.debug(f"Module {module_name} needs missing module {missing}")
            return None
        except ImportError as e:
            logger.debug(f"Failed to import {module_name}: {e}")
            return None

        for attribute in parts[split:]:
            try:
                target = getattr(target, attribute)
            except AttributeError:
                return None
        return target
    return None


class SearchScope(ABC):
    """A lookup context consulted after the default one."""

    @property
    def label(self) -> str:
        """Human-readable description used in logs."""
        return type(self).__name__

    @abstractmethod
    def find(self, name: str) -> object | None:
        """Return the object designated by ``name``, or None if absent."""

    def invalidate(self) -> None:
        """Drop anything cached by the scope itself."""

    def __repr__(self) -> str:
        return f"<{self.label}>"


class ModuleScope(SearchScope):
    """Resolve names relative to a package or module.

    ``ModuleScope("myapp.plugins").find("csv.Reader")`` looks up
    ``myapp.plugins.csv.Reader``.
    """

    def __init__(self, module: ModuleType | str) -> None:
        self._base = module.__name__ if isinstance(module, ModuleType) else module

    @property
    def base(self) -> str:
        return self._base

    @property
    def label(self) -> str:
        return f"ModuleScope({self._base})"

    def find(self, name: str) -> object | None:
        return walk_qualified(f"{self._base}.{name}", importlib.import_module)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ModuleScope) and other._base == self._base

    def __hash__(self) -> int:
        return hash((ModuleScope, self._base))


class NamespaceScope(SearchScope):
    """Resolve names from an explicit mapping of names to objects.

    Names not present verbatim are matched against their longest mapped
    prefix, the rest being attribute lookups.
    """

    def __init__(self, mapping: Mapping[str, object]) -> None:
        self._mapping = mapping

    @property
    def label(self) -> str:
        return f"NamespaceScope({len(self._mapping)} names)"

    def find(self, name: str) -> object | None:
        if name in self._mapping:
            return self._mapping[name]
        parts = name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            prefix = ".".join(parts[:split])
            if prefix not in self._mapping:
                continue
            target = self._mapping[prefix]
            for attribute in parts[split:]:
                target = getattr(target, attribute, None)
                if target is None:
                    return None
            return target
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NamespaceScope) and other._mapping is self._mapping

    def __hash__(self) -> int:
        return hash((NamespaceScope, id(self._mapping)))


class PathScope(SearchScope):
    """Load modules from extra directories without touching ``sys.modules``.

    Modules are executed once and kept in a table private to the scope, so
    dropping the scope makes them unreachable by name. Relative imports inside
    such modules go through the regular import system and therefore only see
    packages already importable from ``sys.path``.
    """

    def __init__(self, *directories: str | Path) -> None:
        if not directories:
            raise ValueError("PathScope needs at least one directory")
        self._paths = tuple(str(Path(directory).resolve()) for directory in directories)
        self._modules: dict[str, ModuleType] = {}
        self._lock = threading.RLock()

    @property
    def paths(self) -> tuple[str, ...]:
        return self._paths

    @property
    def label(self) -> str:
        return f"PathScope({', '.join(self._paths)})"

    def find(self, name: str) -> object | None:
        return walk_qualified(name, self._import)

    def invalidate(self) -> None:
        with self._lock:
            self._modules.clear()

    def _import(self, module_name: str) -> ModuleType:
        with self._lock:
            module = self._modules.get(module_name)
            if module is not None:
                return module

            parent_name, _, child_name = module_name.rpartition(".")
            if parent_name:
                parent = self._import(parent_name)
                search_path = getattr(parent, "__path__", None)
                if search_path is None:
                    raise ModuleNotFoundError(
                        f"No module named {module_name!r}; {parent_name!r} is not a package",
                        name=module_name,
                    )
            else:
                search_path = self._paths

            spec = PathFinder.find_spec(module_name, list(search_path))
            if spec is None or spec.loader is None:
                raise ModuleNotFoundError(f"No module named {module_name!r}", name=module_name)

            module = importlib.util.module_from_spec(spec)
            self._modules[module_name] = module
            try:
                spec.loader.exec_module(module)
            except BaseException:
                del self._modules[module_name]
                raise
            if parent_name:
                setattr(self._modules[parent_name], child_name, module)
            logger.debug(f"Loaded {module_name} from {spec.origin}")
            return module

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PathScope) and other._paths == self._paths

    def __hash__(self) -> int:
        return hash((PathScope, self._paths))


class FinderScope(SearchScope):
    """Adapter for any object exposing a ``find(name)`` method."""

    def __init__(self, finder: object) -> None:
        self._finder = finder

    @property
    def label(self) -> str:
        return f"FinderScope({self._finder!r})"

    def find(self, name: str) -> object | None:
        return self._finder.find(name)  # type: ignore[attr-defined]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FinderScope) and other._finder is self._finder

    def __hash__(self) -> int:
        return hash((FinderScope, id(self._finder)))


def as_search_scope(scope: object) -> SearchScope:
    """Adapt a caller-supplied object to a ``SearchScope``.

    Accepts a ``SearchScope``, a module, a mapping of names to objects, a
    ``pathlib.Path`` directory, or any object with a callable ``find``.

    Raises:
        TypeError: If the object cannot act as a search scope.
    """
    if isinstance(scope, SearchScope):
        return scope
    if isinstance(scope, ModuleType):
        return ModuleScope(scope)
    if isinstance(scope, Mapping):
        return NamespaceScope(scope)
    if isinstance(scope, Path):
        return PathScope(scope)
    if callable(getattr(scope, "find", None)) and not isinstance(scope, (str, bytes, bytearray)):
        return FinderScope(scope)
    raise TypeError(
        f"Cannot use {type(scope).__name__} as a search scope "
        "(wrap module names in ModuleScope and directories in PathScope)"
    )
