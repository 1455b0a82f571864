"""Resolver backends: the shared facade and its implementations."""

from dynresolve.backends.base import NameLike, Resolver
from dynresolve.backends.basic import BasicResolver
from dynresolve.backends.reflective import ReflectiveResolver
from dynresolve.backends.registry import (
    BACKENDS,
    detect_backend,
    load_backend,
    signatures_available,
)

__all__ = [
    "BACKENDS",
    "BasicResolver",
    "NameLike",
    "ReflectiveResolver",
    "Resolver",
    "detect_backend",
    "load_backend",
    "signatures_available",
]
