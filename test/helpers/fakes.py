"""Lightweight stand-ins for network and browser objects used across tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock


class FakeResponse:
    """Minimal aiohttp response usable as an async context manager."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body

    async def text(self) -> str:
        return self._body

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


def make_session(status: int, body: str) -> MagicMock:
    """RetryClient mock whose get/post always answer with the given response"""
    session = MagicMock()
    session.get = MagicMock(return_value=FakeResponse(status, body))
    session.post = MagicMock(return_value=FakeResponse(status, body))
    return session


class FakeClock:
    """Monotonic clock which only moves forward when something sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
