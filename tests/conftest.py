"""
Test fixtures for the messages and blog views API.

Provides a controllable clock, fresh in-memory stores per test and a
TestClient bound to the application.
"""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from app.main import app
from app.services.messages import MessageStore
from app.services.views import ViewCounter


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def message_store(clock: FakeClock) -> MessageStore:
    return MessageStore(clock=clock)


@pytest.fixture
def view_counter(clock: FakeClock) -> ViewCounter:
    return ViewCounter(clock=clock)


@pytest.fixture(autouse=True)
def reset_app_state(message_store: MessageStore, view_counter: ViewCounter):
    """Give every test its own stores so state never leaks between tests."""
    original_store = app.state.message_store
    original_counter = app.state.view_counter

    app.state.message_store = message_store
    app.state.view_counter = view_counter

    yield

    app.state.message_store = original_store
    app.state.view_counter = original_counter


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
