"""Test configuration for manifix."""

import pytest
from pathlib import Path
import tempfile

from manifix.core.config import BuildConfig, Config, get_config
from manifix.graph import InMemoryBuildGraph
from manifix.models import ModuleContext

OUT_DIR = Path("out/soong/.intermediates")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_ctx():
    """Factory for module contexts.

    Keyword arguments other than ``name`` and ``test_suites`` are passed to
    BuildConfig, so each test states exactly the build configuration it needs.

    Returns:
        Callable returning a ModuleContext.
    """
    def _make(name="TestApp", test_suites=None, **build):
        config = Config(build=BuildConfig(**build))
        return ModuleContext(name=name, config=config, out_dir=OUT_DIR, test_suites=test_suites)

    return _make


@pytest.fixture
def ctx(make_ctx):
    """Module context with the default (bundled, unfinalized) build configuration."""
    return make_ctx()


@pytest.fixture
def graph():
    """Create an empty in-memory build graph."""
    return InMemoryBuildGraph()


@pytest.fixture
def clean_config_cache():
    """Drop the cached configuration before and after a test."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()
