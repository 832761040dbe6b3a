"""Global pytest fixtures and default marks for TESSERA."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tessera.adapters.latency import RecordingLatency
from tessera.service_layer import DataProcessingService, UserService

pytest_plugins = [
    "tests.fixtures.datagen",
]

# pylint: disable=redefined-outer-name, unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()

# Top-level test folders and the mark every test inside them receives
LAYER_MARKERS = {
    "unit": "unit",
    "contract": "contract",
    "integration": "integration",
}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the default layer mark (unit/contract/integration) by test folder."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if TESTS_ROOT not in path.parents:
            continue
        layer = path.relative_to(TESTS_ROOT).parts[0]
        if (marker_name := LAYER_MARKERS.get(layer)) is None:
            continue
        if not any(marker.name == marker_name for marker in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, marker_name))


# ============================================================================
#                               Fixtures
# ============================================================================


@pytest.fixture
def latency() -> RecordingLatency:
    """A zero-delay latency that records every simulated wait."""
    return RecordingLatency()


@pytest.fixture
def user_service(latency: RecordingLatency) -> UserService:
    """A fresh, empty user service with no real delays.

    Every test gets its own instance, so no setup or teardown is needed to
    isolate tests from one another.
    """
    return UserService(latency)


@pytest.fixture
def data_service(latency: RecordingLatency) -> DataProcessingService:
    """A fresh data processing service with no real delays."""
    return DataProcessingService(latency)


@pytest.fixture
def restore_project_logger():
    """Undo handler and level changes made to the `tessera` logger by a test."""
    project = logging.getLogger("tessera")
    handlers, level = list(project.handlers), project.level
    yield project
    for handler in project.handlers[:]:
        if handler not in handlers:
            project.removeHandler(handler)
            target = getattr(handler, "target", None)
            handler.close()
            if target is not None:
                target.close()
    project.setLevel(level)
