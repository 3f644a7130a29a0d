"""Shared pytest fixtures for the rotating sink test suite."""

from datetime import datetime

import pytest


class FakeClock:
    """Callable clock whose time the test moves by hand."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 15, 10, 0, 0))


@pytest.fixture()
def log_path(tmp_path) -> str:
    return str(tmp_path / "app.log")
