"""
Steam Market — Shared pytest Fixtures

Provides common fixtures for all test modules:
- Scripted in-memory transport (replays queued responses, records requests)
- Mock HTTP client (respx) for HttpxTransport tests
- structlog reset between tests (sample payloads live in payloads.py)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

import pytest
import respx
import structlog

from steam_market.config import settings
from steam_market.errors import TransportError
from steam_market.transport import HttpResponse


# ---------------------------------------------------------------------------
# Scripted transport
# ---------------------------------------------------------------------------


@dataclass
class RecordedRequest:
    method: str
    url: str
    form: dict[str, str] | None
    headers: dict[str, str] | None


@dataclass
class ScriptedTransport:
    """
    Transport double that replays queued responses in order.

    Queue a dict/list to send it as a JSON body, bytes/str to send it raw,
    or an Exception instance to raise it from issue().
    """

    base_url: str = settings.STEAM_COMMUNITY_URL
    responses: list[Any] = field(default_factory=list)
    requests: list[RecordedRequest] = field(default_factory=list)

    def queue(self, body: Any, status_code: int = 200) -> ScriptedTransport:
        self.responses.append((body, status_code))
        return self

    def fail(self, error: Exception) -> ScriptedTransport:
        self.responses.append(error)
        return self

    def issue(
        self,
        method: str,
        url: str,
        form: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        self.requests.append(
            RecordedRequest(
                method=method,
                url=url,
                form=dict(form) if form is not None else None,
                headers=dict(headers) if headers is not None else None,
            )
        )
        if not self.responses:
            raise AssertionError(f"unexpected request: {method} {url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        body, status_code = item
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode()
        elif isinstance(body, str):
            body = body.encode()
        return HttpResponse(body=body, status_code=status_code)


@pytest.fixture
def transport() -> ScriptedTransport:
    return ScriptedTransport()


@pytest.fixture
def broken_transport() -> ScriptedTransport:
    return ScriptedTransport().fail(TransportError("connection refused"))


@pytest.fixture
def mock_steam() -> Iterator[respx.MockRouter]:
    """
    respx router scoped to the configured community URL.

    All HTTP requests are intercepted and must be explicitly mocked.
    Prevents accidental calls to the live service in tests.
    """
    with respx.mock(base_url=settings.STEAM_COMMUNITY_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """main() reconfigures structlog globally; undo it after each test."""
    yield
    structlog.reset_defaults()
