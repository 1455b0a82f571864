"""dynresolve: resolve types, constructors and methods from their names.

Names that cannot be resolved yield ``None`` instead of raising, so code can
probe for optional capabilities cheaply::

    from dynresolve.runtime import get_resolver

    perf_counter_ns = get_resolver().get_method("time.perf_counter_ns()")
    if perf_counter_ns is not None:
        now = perf_counter_ns.invoke(None)
"""

from dynresolve.backends import BasicResolver, ReflectiveResolver, Resolver
from dynresolve.core import (
    ArityMismatchError,
    ArrayType,
    InvocationError,
    MalformedSignatureError,
    PrimitiveType,
    ReflectionError,
    TypeHandle,
)
from dynresolve.handles import ConstructorHandle, MethodHandle
from dynresolve.runtime import create_resolver, get_resolver, set_resolver, use_backend
from dynresolve.scopes import ModuleScope, NamespaceScope, PathScope, SearchScope

__all__ = [
    "ArityMismatchError",
    "ArrayType",
    "BasicResolver",
    "ConstructorHandle",
    "InvocationError",
    "MalformedSignatureError",
    "MethodHandle",
    "ModuleScope",
    "NamespaceScope",
    "PathScope",
    "PrimitiveType",
    "ReflectionError",
    "ReflectiveResolver",
    "Resolver",
    "SearchScope",
    "TypeHandle",
    "create_resolver",
    "get_resolver",
    "set_resolver",
    "use_backend",
]
