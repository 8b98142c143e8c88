"""Shared fixtures: mock collaborators, router and dispatcher."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from hookrelay.config import DEFAULT_SENSITIVE_FILES
from hookrelay.router import EventRouter
from hookrelay.routing import create_default_dispatcher


@pytest.fixture
def collaborators():
    """Collaborators whose calls are recorded in order on one parent mock."""
    parent = MagicMock()
    parent.event_logger.log_event = AsyncMock()
    parent.notifier.notify = AsyncMock()
    parent.pipeline_trigger.trigger = AsyncMock()
    return parent


@pytest.fixture
def router(collaborators):
    return EventRouter(
        event_logger=collaborators.event_logger,
        notifier=collaborators.notifier,
        pipeline_trigger=collaborators.pipeline_trigger,
        sensitive_files=DEFAULT_SENSITIVE_FILES,
    )


@pytest.fixture
def dispatcher(router):
    return create_default_dispatcher(router)
