"""Resolver facade shared by every backend.

The facade owns the type cache and the search scope registry, parses
signatures and resolves parameter tokens. Backends decide how a resolved
owner type turns into a constructor or method handle and how much of the
type hierarchy they can report.
"""

from __future__ import annotations

import builtins
import importlib
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence

from dynresolve.core.cache import TypeCache
from dynresolve.core.models import PRIMITIVES, ArrayType, Signature, TypeHandle
from dynresolve.core.text import normalize_name
from dynresolve.handles import ConstructorHandle, MethodHandle
from dynresolve.parsing.descriptor import array_descriptor, is_descriptor, parse_descriptor
from dynresolve.parsing.signature import parse_constructor_signature, parse_method_signature
from dynresolve.scopes import SearchScope, as_search_scope, walk_qualified

logger = logging.getLogger(__name__)

NameLike = str | bytes | bytearray | memoryview | Iterable[str]


def _is_class(obj: object) -> bool:
    return isinstance(obj, type)


class Resolver(ABC):
    """Resolve types, constructors and methods from their names.

    Unresolvable names produce ``None``. Malformed signatures raise
    ``MalformedSignatureError``.
    """

    #: Registry name of the backend.
    name: str = "abstract"

    def __init__(self) -> None:
        self._cache = TypeCache()
        self._scopes: list[SearchScope] = []
        self._scopes_lock = threading.RLock()

    @property
    def cache(self) -> TypeCache:
        return self._cache

    @property
    def search_scopes(self) -> tuple[SearchScope, ...]:
        """Registered search scopes in registration order."""
        with self._scopes_lock:
            return tuple(self._scopes)

    # ------------------------------------------------------------------
    # Search scopes
    # ------------------------------------------------------------------

    def add_search_scope(self, scope: object) -> SearchScope:
        """Register an additional lookup context.

        Registering a scope equal to one already present has no effect.

        Returns:
            The registered ``SearchScope`` (the adapted form of ``scope``).
        """
        adapted = as_search_scope(scope)
        with self._scopes_lock:
            if adapted in self._scopes:
                return self._scopes[self._scopes.index(adapted)]
            self._scopes.append(adapted)
        logger.debug(f"Added search scope {adapted.label}")
        return adapted

    def remove_search_scope(self, scope: object) -> bool:
        """Unregister a lookup context and clear the whole type cache.

        Returns:
            True if the scope was registered.
        """
        adapted = as_search_scope(scope)
        removed: SearchScope | None = None
        with self._scopes_lock:
            if adapted in self._scopes:
                removed = self._scopes.pop(self._scopes.index(adapted))
            self._cache.clear()
        if removed is None:
            return False
        removed.invalidate()
        logger.debug(f"Removed search scope {removed.label}; type cache cleared")
        return True

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def get_type(self, name: NameLike) -> TypeHandle | None:
        """Resolve a type by name.

        Accepts dotted class names (``"collections.OrderedDict"``), builtin
        names (``"str"``) and array descriptors (``"[[I"``,
        ``"[Lpkg.Part;"``). Results are cached until a search scope is
        removed.

        Returns:
            The type handle, or None if no scope can provide the type.
        """
        name = normalize_name(name)
        handle = self._cache.get(name)
        if handle is not None:
            return handle

        generation = self._cache.generation
        if is_descriptor(name):
            handle = self._resolve_array(name)
        else:
            found = self._search(name, _is_class)
            handle = found if isinstance(found, type) else None
        if handle is None:
            logger.debug(f"Type {name} not found")
            return None
        return self._cache.put(name, handle, generation)

    def _resolve_array(self, name: str) -> ArrayType | None:
        decoded = parse_descriptor(name)
        if decoded is None:
            return None
        dimensions, element = decoded
        component: TypeHandle | None
        if dimensions > 1:
            component = self.get_type(name[1:])
        elif isinstance(element, str):
            component = self.get_type(element)
        else:
            component = element
        if component is None:
            return None
        return ArrayType(component)

    def _find_default(self, name: str) -> object | None:
        """Look a name up in the default scope (the regular import system)."""
        found = walk_qualified(name, importlib.import_module)
        if found is None and "." not in name:
            found = getattr(builtins, name, None)
        return found

    def _search(self, name: str, accept: Callable[[object], bool]) -> object | None:
        """Try the default scope, then every search scope in registration order."""
        found = self._find_default(name)
        if found is not None and accept(found):
            return found
        for scope in self.search_scopes:
            found = scope.find(name)
            if found is not None and accept(found):
                logger.debug(f"Resolved {name} through {scope.label}")
                return found
        return None

    @abstractmethod
    def get_super_type(self, handle: TypeHandle) -> TypeHandle | None:
        """Parent type of ``handle``, or None for root and interface-like types."""

    @abstractmethod
    def get_interfaces(self, handle: TypeHandle) -> tuple[TypeHandle, ...]:
        """Interfaces directly implemented by ``handle``, in declaration order."""

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def resolve_parameter_type(self, token: str) -> TypeHandle | None:
        """Resolve one trimmed parameter token.

        Raises:
            MalformedSignatureError: If the token's array depth exceeds 3.
        """
        if not token:
            return None
        primitive = PRIMITIVES.get(token)
        if primitive is not None:
            return primitive
        descriptor = array_descriptor(token)
        return self.get_type(descriptor if descriptor is not None else token)

    def resolve_parameter_types(
        self, tokens: Sequence[str]
    ) -> tuple[TypeHandle, ...] | None:
        """Resolve every token, or return None if any of them is unresolvable."""
        resolved: list[TypeHandle] = []
        for token in tokens:
            handle = self.resolve_parameter_type(token)
            if handle is None:
                logger.debug(f"Parameter type {token} not found")
                return None
            resolved.append(handle)
        return tuple(resolved)

    # ------------------------------------------------------------------
    # Constructors and methods
    # ------------------------------------------------------------------

    def get_constructor(self, signature: str) -> ConstructorHandle | None:
        """Resolve ``"pkg.Type(argType, ...)"`` to a constructor handle.

        Raises:
            MalformedSignatureError: If the signature cannot be parsed.
        """
        parsed = parse_constructor_signature(signature)
        owner = self.get_type(parsed.qualified_name)
        if not isinstance(owner, type):
            return None
        parameter_types = self.resolve_parameter_types(parsed.parameters)
        if parameter_types is None:
            return None
        return self._bind_constructor(parsed, owner, parameter_types)

    def get_method(self, signature: str) -> MethodHandle | None:
        """Resolve ``"pkg.Type.member(argType, ...)"`` to a method handle.

        Raises:
            MalformedSignatureError: If the signature cannot be parsed.
        """
        parsed = parse_method_signature(signature)
        owner = self._resolve_owner(parsed.qualified_name)
        if owner is None:
            return None
        parameter_types = self.resolve_parameter_types(parsed.parameters)
        if parameter_types is None:
            return None
        return self._bind_method(parsed, owner, parameter_types)

    def _resolve_owner(self, name: str) -> object | None:
        return self.get_type(name)

    @abstractmethod
    def _bind_constructor(
        self, signature: Signature, owner: type, parameter_types: tuple[TypeHandle, ...]
    ) -> ConstructorHandle | None:
        """Build a handle for a resolved owner, or None if no constructor matches."""

    @abstractmethod
    def _bind_method(
        self, signature: Signature, owner: object, parameter_types: tuple[TypeHandle, ...]
    ) -> MethodHandle | None:
        """Build a handle for a resolved owner, or None if no method matches."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} scopes={len(self.search_scopes)} cached={len(self._cache)}>"
