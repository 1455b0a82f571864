"""Shared pytest fixtures for dynresolve tests."""

import itertools
import textwrap
from pathlib import Path

import pytest
from dotenv import load_dotenv
from hypothesis import settings

from dynresolve.backends.reflective import ReflectiveResolver
from dynresolve.runtime import reset_resolver

# Load environment variables from .env file
load_dotenv()

# Configure hypothesis for property-based testing
settings.register_profile("ci", max_examples=100, deadline=None)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.load_profile("dev")

_plugin_counter = itertools.count()


@pytest.fixture
def resolver() -> ReflectiveResolver:
    """Provide a fresh full-profile resolver (cold cache, no scopes)."""
    return ReflectiveResolver()


@pytest.fixture(autouse=True)
def _reset_default_resolver():
    """Keep the process-wide default resolver from leaking between tests."""
    reset_resolver()
    yield
    reset_resolver()


@pytest.fixture
def plugin_dir(tmp_path: Path) -> tuple[Path, str]:
    """Create a plugin package outside sys.path.

    Returns:
        (directory, package_name); the package defines ``gizmos.Gizmo``.
    """
    package = f"dynresolve_plugin_{next(_plugin_counter)}"
    root = tmp_path / "plugins"
    (root / package).mkdir(parents=True)
    (root / package / "__init__.py").write_text("")
    (root / package / "gizmos.py").write_text(
        textwrap.dedent(
            """
            class Gizmo:
                def __init__(self, label="gizmo"):
                    self.label = label

                def shout(self, suffix):
                    return self.label.upper() + suffix

                @staticmethod
                def version():
                    return 3
            """
        )
    )
    return root, package
