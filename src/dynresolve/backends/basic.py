"""Reduced-profile backend.

Used when the interpreter cannot introspect call signatures. Types resolve
exactly as in the full backend, but only no-argument constructors can be
bound, methods are never found and the type hierarchy is not reported.
"""

from __future__ import annotations

from dynresolve.backends.base import Resolver
from dynresolve.backends.reflective import allocator_for
from dynresolve.core.models import Signature, TypeHandle
from dynresolve.handles import ConstructorHandle, MethodHandle


class BasicResolver(Resolver):
    """Backend without signature introspection."""

    name = "basic"

    def get_super_type(self, handle: TypeHandle) -> TypeHandle | None:
        return None

    def get_interfaces(self, handle: TypeHandle) -> tuple[TypeHandle, ...]:
        return ()

    def _bind_constructor(
        self, signature: Signature, owner: type, parameter_types: tuple[TypeHandle, ...]
    ) -> ConstructorHandle | None:
        if parameter_types:
            return None
        return ConstructorHandle(signature.text, (), allocator_for(owner, signature.text))

    def _bind_method(
        self, signature: Signature, owner: object, parameter_types: tuple[TypeHandle, ...]
    ) -> MethodHandle | None:
        return None
