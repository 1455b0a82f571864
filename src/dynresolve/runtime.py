"""Process-wide default resolver.

Code that can receive a ``Resolver`` should take one as an argument and let
its caller build it with ``create_resolver``. The default instance kept here
is a convenience for everything else; swapping it never migrates cached
types, the replacement starts cold.
"""

from __future__ import annotations

import logging
import threading

from dynresolve.backends.base import Resolver
from dynresolve.backends.registry import load_backend
from dynresolve.core.config import ResolverConfig, get_config
from dynresolve.scopes import ModuleScope, PathScope

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_default: Resolver | None = None


def create_resolver(
    config: ResolverConfig | None = None,
    backend: str | type[Resolver] | None = None,
) -> Resolver:
    """Build a new resolver.

    Args:
        config: Settings to use (defaults to ``get_config()``).
        backend: Overrides ``config.backend``.

    Returns:
        A resolver with the configured search paths and modules registered.
    """
    config = config or get_config()
    resolver_class = load_backend(backend if backend is not None else config.backend)
    resolver = resolver_class()
    for path in config.search_paths:
        resolver.add_search_scope(PathScope(path))
    for module in config.search_modules:
        resolver.add_search_scope(ModuleScope(module))
    return resolver


def get_resolver() -> Resolver:
    """Return the default resolver, building it on first use."""
    global _default
    with _lock:
        if _default is None:
            _default = create_resolver()
            logger.debug(f"Created default resolver {_default!r}")
        return _default


def set_resolver(resolver: Resolver | None) -> Resolver | None:
    """Replace the default resolver.

    Passing None makes the next ``get_resolver()`` build a fresh one.

    Returns:
        The previous default (None if it was never built).
    """
    global _default
    with _lock:
        previous, _default = _default, resolver
    logger.debug(f"Default resolver swapped to {resolver!r}")
    return previous


def use_backend(backend: str | type[Resolver]) -> Resolver:
    """Swap the default resolver for a new instance of ``backend``."""
    resolver = create_resolver(backend=backend)
    set_resolver(resolver)
    return resolver


def reset_resolver() -> None:
    """Forget the default resolver."""
    set_resolver(None)
