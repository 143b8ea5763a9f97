"""
Analysis service client and it does:
- Fetches plan history (GET /plans)
- Sends plans for analysis (POST /analyze)
- Uploads documents for analysis (POST /upload)
- Health check (GET /ping)
- Maps transport / status / body problems to typed errors

Main purpose:
Single interface for every remote call the client makes.
"""


from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from planwise.api.types import PastPlan, SubmissionPayload, SuggestionsPayload, decode_suggestions
from planwise.core.config import settings
from planwise.core.errors import MalformedResponse, MalformedSuggestions, NetworkError, ServerError
from planwise.core.logging import get_logger

log = get_logger("api.client")

_PLAN_LIST = TypeAdapter(List[PastPlan])


def _safe_snippet(text: str, n: int = 200) -> str:
    return (text or "")[:n].replace("\n", "\\n").replace("\r", "\\r")


def _json_or_none(r: httpx.Response) -> Any:
    try:
        return r.json()
    except ValueError:
        return None


def _raise_for_status(r: httpx.Response) -> None:
    if r.is_success:
        return
    body = _json_or_none(r)
    message = body.get("error") if isinstance(body, dict) else None
    if not isinstance(message, str) or not message:
        message = None
    log.warning(f"{r.request.method} {r.request.url.path} -> {r.status_code}: {_safe_snippet(r.text)}")
    raise ServerError(r.status_code, message)


class PlanwiseClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_S
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        kwargs: dict = {"base_url": self.base_url}
        if self.timeout is not None:
            kwargs["timeout"] = httpx.Timeout(self.timeout)
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with self._http() as client:
                r = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise NetworkError(str(e) or type(e).__name__) from e
        _raise_for_status(r)
        return r

    def _suggestions(self, r: httpx.Response) -> SuggestionsPayload:
        body = _json_or_none(r)
        if not isinstance(body, dict):
            raise MalformedSuggestions(f"Expected a JSON object, got: {_safe_snippet(r.text)}")
        return decode_suggestions(body.get("suggestions"))

    async def list_plans(self) -> List[PastPlan]:
        r = await self._request("GET", "/plans")
        body = _json_or_none(r)
        if body is None and r.text.strip() not in ("", "null"):
            raise MalformedResponse(f"Plan history is not JSON: {_safe_snippet(r.text)}")
        try:
            # The history service encodes "no plans" as null.
            return _PLAN_LIST.validate_python([] if body is None else body)
        except ValidationError as e:
            raise MalformedResponse(f"Unexpected plan history shape: {e.error_count()} error(s)") from e

    async def analyze(self, payload: SubmissionPayload) -> SuggestionsPayload:
        r = await self._request("POST", "/analyze", json=payload.model_dump())
        return self._suggestions(r)

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> SuggestionsPayload:
        r = await self._request("POST", "/upload", files={"file": (filename, content, content_type)})
        return self._suggestions(r)

    async def ping(self) -> bool:
        r = await self._request("GET", "/ping")
        body = _json_or_none(r)
        return isinstance(body, dict) and body.get("message") == "pong"
