"""Backend registry and selection."""

from __future__ import annotations

import inspect
import logging

from dynresolve.backends.base import Resolver
from dynresolve.backends.basic import BasicResolver
from dynresolve.backends.reflective import ReflectiveResolver
from dynresolve.core.errors import BackendError

logger = logging.getLogger(__name__)

AUTO = "auto"

BACKENDS: dict[str, type[Resolver]] = {
    ReflectiveResolver.name: ReflectiveResolver,
    BasicResolver.name: BasicResolver,
}


def _probe(first, second=None):
    return first, second


def signatures_available() -> bool:
    """Check whether ``inspect.signature`` works for functions and builtins."""
    try:
        return (
            len(inspect.signature(_probe).parameters) == 2
            and "key" in inspect.signature(dict.get).parameters
        )
    except (TypeError, ValueError):
        return False


def detect_backend() -> type[Resolver]:
    """Pick the most capable backend the interpreter supports."""
    if signatures_available():
        return ReflectiveResolver
    logger.debug("Signature introspection unavailable; using basic resolver")
    return BasicResolver


def load_backend(backend: str | type[Resolver]) -> type[Resolver]:
    """Resolve a backend from a registered name, a dotted class path or a class.

    Dotted paths are resolved by a throwaway ``ReflectiveResolver``.

    Raises:
        BackendError: If the backend is unknown or not a concrete ``Resolver``.
    """
    if isinstance(backend, str):
        if backend == AUTO:
            return detect_backend()
        if backend in BACKENDS:
            return BACKENDS[backend]
        found = ReflectiveResolver().get_type(backend)
        if found is None:
            raise BackendError(f"Unknown resolver backend '{backend}'")
        backend_class = found
    else:
        backend_class = backend

    if (
        not isinstance(backend_class, type)
        or not issubclass(backend_class, Resolver)
        or inspect.isabstract(backend_class)
    ):
        raise BackendError(
            f"Resolver backend must be a concrete Resolver subclass, got {backend_class!r}"
        )
    return backend_class
