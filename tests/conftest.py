"""Shared pytest fixtures for httpchain-pool tests."""

import copy
from typing import Any

import pytest

from httpchain_pool import NetworkError, ResponsePool


class FakeTransport:
    """Transport serving canned JSON bodies by URL and recording every call."""

    def __init__(self, responses: dict[str, Any]):
        self.responses = responses
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    def perform(self, method: str, url: str) -> Any:
        self.calls.append((method, url))
        if url not in self.responses:
            raise NetworkError(f"HTTP status 404 for {method} {url}")
        return copy.deepcopy(self.responses[url])

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_transport():
    """Factory fixture for creating fake transports.

    Usage:
        def test_example(fake_transport):
            transport = fake_transport({"http://h/api": {"id": 1}})
    """

    def _create(responses: dict[str, Any]) -> FakeTransport:
        return FakeTransport(responses)

    return _create


@pytest.fixture
def make_pool(fake_transport):
    """Factory fixture building a pool over a fake transport.

    Returns the pool together with its transport so tests can inspect calls.
    """

    def _create(definitions: dict[str, Any], responses: dict[str, Any]) -> tuple[ResponsePool, FakeTransport]:
        transport = fake_transport(responses)
        return ResponsePool(definitions, transport=transport), transport

    return _create
