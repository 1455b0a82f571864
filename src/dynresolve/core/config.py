"""Global configuration for dynresolve.

This module provides centralized configuration management with support for
environment variables and sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class ResolverConfig(BaseSettings):
    """dynresolve configuration settings.

    Values can be overridden via environment variables with DYNRESOLVE_ prefix.
    Example: DYNRESOLVE_BACKEND=basic selects the reduced backend.
    """

    # Backend selection
    backend: str = Field(
        default="auto",
        min_length=1,
        description=(
            "Resolver backend: 'auto' (feature detection), a registered name "
            "('reflective', 'basic') or a dotted class path"
        ),
    )

    # Search scopes registered on the default resolver
    search_paths: list[str] = Field(
        default_factory=list,
        description="Extra directories searched for modules (JSON list in env)",
    )
    search_modules: list[str] = Field(
        default_factory=list,
        description="Packages whose members resolve by relative name (JSON list in env)",
    )

    # Scratch buffers
    scratch_pool_size: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Maximum number of idle scratch buffers kept for name normalization",
    )

    model_config = {
        "env_prefix": "DYNRESOLVE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_config() -> ResolverConfig:
    """Get cached configuration instance.

    Returns:
        ResolverConfig singleton instance.
    """
    return ResolverConfig()


def reload_config() -> ResolverConfig:
    """Reload configuration (clears cache).

    Returns:
        Fresh ResolverConfig instance.
    """
    get_config.cache_clear()
    return get_config()
