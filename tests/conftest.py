from __future__ import annotations

import pytest

from tests.support.reviews import FakeUnitOfWorkFactory, RecordingEventSink


@pytest.fixture
def uow_factory() -> FakeUnitOfWorkFactory:
    return FakeUnitOfWorkFactory()


@pytest.fixture
def event_sink() -> RecordingEventSink:
    return RecordingEventSink()
