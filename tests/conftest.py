# ruff: noqa: D100,D101,D102,D103,D104,D105,D106,D107,INP001
from __future__ import annotations

import asyncio
import inspect
import json
from collections.abc import Callable, Mapping
from typing import Any
from unittest.mock import MagicMock

import pytest

from custom_components.comelit_sb.api import ComelitSbClient
from custom_components.comelit_sb.domain import DeviceCategory, DeviceRecord
from custom_components.comelit_sb.vedo import VedoClient


def pytest_configure(config: pytest.Config) -> None:
    """Register custom pytest markers used across the suite."""

    if not config.pluginmanager.hasplugin("pytest_asyncio"):
        config.addinivalue_line(
            "markers", "asyncio: mark test as requiring asyncio event loop support."
        )


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute async tests when pytest-asyncio is unavailable."""

    if pyfuncitem.config.pluginmanager.hasplugin("pytest_asyncio"):
        return None

    testfunction = pyfuncitem.obj
    if not inspect.iscoroutinefunction(testfunction):
        return None

    marker = pyfuncitem.get_closest_marker("asyncio")
    if marker is None:
        return None

    with asyncio.Runner(debug=False) as runner:
        runner.run(testfunction(**pyfuncitem.funcargs))
    return True


class FakeResponse:
    """Minimal stand-in for an aiohttp response used as a context manager."""

    def __init__(
        self,
        payload: Any = None,
        *,
        status: int = 200,
        text: str | None = None,
    ) -> None:
        self.status = status
        self._payload = payload
        self._text = text

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> bool:
        return False

    async def json(self, content_type: str | None = None) -> Any:
        if self._payload is None:
            raise ValueError("body is not JSON")
        return self._payload

    async def text(self) -> str:
        if self._text is not None:
            return self._text
        return json.dumps(self._payload)


class FakeSession:
    """Route GET/POST calls to canned responses keyed by URL."""

    def __init__(self, routes: Mapping[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[tuple[str, str, dict[str, Any] | None, Any]] = []

    def _respond(self, url: str) -> FakeResponse:
        result = self.routes.get(url)
        if result is None:
            return FakeResponse(status=404, text="not found")
        if isinstance(result, BaseException):
            raise result
        if isinstance(result, FakeResponse):
            return result
        return FakeResponse(result)

    def get(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        timeout: Any = None,
    ) -> FakeResponse:
        self.calls.append(("GET", url, dict(params) if params else None, None))
        return self._respond(url)

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        data: Any = None,
        timeout: Any = None,
    ) -> FakeResponse:
        self.calls.append((method, url, dict(params) if params else None, data))
        return self._respond(url)


@pytest.fixture
def fake_session() -> FakeSession:
    """Return an empty fake aiohttp session."""

    return FakeSession()


@pytest.fixture
def bridge_client() -> MagicMock:
    """Return a bridge client double whose coroutine methods are AsyncMocks."""

    return MagicMock(spec=ComelitSbClient)


@pytest.fixture
def alarm_client() -> MagicMock:
    """Return an alarm client double whose coroutine methods are AsyncMocks."""

    return MagicMock(spec=VedoClient)


@pytest.fixture
def make_record() -> Callable[..., DeviceRecord]:
    """Return a factory for device records."""

    def _factory(
        category: DeviceCategory | str,
        identifier: str = "0",
        name: str | None = None,
        **payload: Any,
    ) -> DeviceRecord:
        resolved = DeviceCategory(category)
        return DeviceRecord(
            identifier=identifier,
            name=name or f"{resolved.value} {identifier}",
            category=resolved,
            payload=payload,
        )

    return _factory
