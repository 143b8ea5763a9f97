from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from planwise.api.client import PlanwiseClient  # noqa: E402
from planwise.db.storage import MemoryStorage  # noqa: E402


class FakeService:
    """Routes requests to per-path handlers and records every call."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], Any]] = {}
        self.calls: list[httpx.Request] = []

    def on(self, method: str, path: str, handler: Callable[[httpx.Request], Any]) -> None:
        self.routes[(method, path)] = handler

    def reply(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.on(method, path, lambda _req: httpx.Response(status, json=body))

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.url.path == path]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": f"no route {request.url.path}"})
        result = handler(request)
        if hasattr(result, "__await__"):
            result = await result
        return result


@pytest.fixture()
def service() -> FakeService:
    return FakeService()


@pytest.fixture()
def client(service: FakeService) -> PlanwiseClient:
    return PlanwiseClient("http://planwise.test", transport=httpx.MockTransport(service))


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()