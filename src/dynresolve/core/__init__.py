"""Core module containing type handles, errors, configuration and the type cache."""

from dynresolve.core.cache import TypeCache
from dynresolve.core.config import ResolverConfig, get_config, reload_config
from dynresolve.core.errors import (
    ArityMismatchError,
    BackendError,
    InvocationError,
    MalformedSignatureError,
    ReflectionError,
)
from dynresolve.core.models import (
    PRIMITIVES,
    ArrayType,
    PrimitiveKind,
    PrimitiveType,
    Signature,
    TypeHandle,
    type_name,
)
from dynresolve.core.text import normalize_name, scratch_buffer

__all__ = [
    "PRIMITIVES",
    "ArityMismatchError",
    "ArrayType",
    "BackendError",
    "InvocationError",
    "MalformedSignatureError",
    "PrimitiveKind",
    "PrimitiveType",
    "ReflectionError",
    "ResolverConfig",
    "Signature",
    "TypeCache",
    "TypeHandle",
    "get_config",
    "normalize_name",
    "reload_config",
    "scratch_buffer",
    "type_name",
]
