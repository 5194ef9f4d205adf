"""
Pytest configuration and shared fixtures for promptvars tests.
"""

import sys
from pathlib import Path

import pytest

# Add src and tests to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from promptvars_core.store import InMemoryVariableStore  # noqa: E402
from promptvars_core.types import TemplateVariable, TextPosition  # noqa: E402
from tests.mocks import VirtualScheduler  # noqa: E402

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def scheduler() -> VirtualScheduler:
    """Virtual clock starting at t=0ms."""
    return VirtualScheduler()


@pytest.fixture
def shared_store() -> InMemoryVariableStore:
    """Empty shared variable store."""
    return InMemoryVariableStore()


@pytest.fixture
def topic_variable() -> TemplateVariable:
    """Required variable named 'topic'."""
    return TemplateVariable(name="topic", position=TextPosition(10, 19), is_required=True)


@pytest.fixture
def optional_variable() -> TemplateVariable:
    """Optional variable with a default."""
    return TemplateVariable(
        name="tone",
        position=TextPosition(0, 18),
        is_required=False,
        default_value="friendly",
    )


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "sync: Debounce timing tests")
