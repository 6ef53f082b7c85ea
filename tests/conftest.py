"""
Pytest configuration and shared fixtures for legisvote tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock / MagicMock for failure injection
- Unit tests go in tests/unit/
"""

from collections.abc import Iterator

import pytest

from legisvote.api.dependencies.chamber import (
    reset_chamber_dependencies,
    set_chamber_config,
)
from legisvote.config.chamber_config import TEST_CHAMBER_CONFIG
from tests.helpers import ChamberHarness


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from legisvote import __version__

    return __version__


@pytest.fixture
def chamber() -> ChamberHarness:
    """A fresh in-memory chamber with five active legislators."""
    return ChamberHarness.build(legislators=5)


@pytest.fixture
def api_dependencies() -> Iterator[None]:
    """Reset the API singletons around a test, with test configuration."""
    reset_chamber_dependencies()
    set_chamber_config(TEST_CHAMBER_CONFIG)
    yield
    reset_chamber_dependencies()
