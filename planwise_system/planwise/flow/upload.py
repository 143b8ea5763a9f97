"""
Document upload pathway.
What it does:
- Sends one file as multipart field "file" to /upload
- Normalizes text or array suggestions from the response
- Keeps its own request state and a human-readable upload summary
- Refreshes plan history after a successful upload

And, the main purpose:
Analyze an uploaded document independently of the draft submission.
"""


import asyncio
import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

from planwise.api.client import PlanwiseClient
from planwise.core.errors import MalformedResponse, NetworkError, ServerError
from planwise.core.ids import new_id
from planwise.core.logging import get_logger
from planwise.flow.history import PlanHistory
from planwise.flow.normalizer import normalize
from planwise.flow.state import RequestSlot, RequestState

log = get_logger("flow.upload")

UPLOAD_OK = "File analyzed successfully."
UPLOAD_FAILED = "Upload failed."


@dataclass(frozen=True)
class UploadDocument:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike]) -> "UploadDocument":
        p = Path(path)
        guessed, _ = mimetypes.guess_type(p.name)
        return cls(p.name, p.read_bytes(), guessed or "application/octet-stream")


async def _as_document(file: Union[UploadDocument, str, os.PathLike]) -> UploadDocument:
    if isinstance(file, UploadDocument):
        return file
    return await asyncio.to_thread(UploadDocument.from_path, file)


class UploadPathway:
    def __init__(
        self,
        client: PlanwiseClient,
        history: Optional[PlanHistory] = None,
        on_success: Optional[Callable[[List[str]], None]] = None,
    ):
        self.client = client
        self.history = history
        self.on_success = on_success
        self.slot = RequestSlot()
        self.summary = ""

    @property
    def state(self) -> RequestState:
        return self.slot.state

    async def upload_and_analyze(
        self, file: Union[UploadDocument, str, os.PathLike, None]
    ) -> Optional[RequestState]:
        if not file:
            return None

        doc = await _as_document(file)
        attempt = new_id("upl")
        generation = self.slot.begin()
        log.info(f"[{attempt}] uploading {doc.filename} ({len(doc.content)} bytes)")

        try:
            raw = await self.client.upload(doc.filename, doc.content, doc.content_type)
            suggestions = normalize(raw)
        except ServerError as e:
            outcome = RequestState.failed(e.message or UPLOAD_FAILED)
        except (NetworkError, MalformedResponse) as e:
            outcome = RequestState.failed(f"Upload error: {e}")
        else:
            outcome = RequestState.succeeded(suggestions)

        if self.slot.settle(generation, outcome):
            self.summary = UPLOAD_OK if outcome.ok else outcome.message
            if outcome.ok and self.on_success is not None:
                self.on_success(list(outcome.payload))
        else:
            log.info(f"[{attempt}] superseded by a newer upload, result discarded")
        if not outcome.ok:
            log.warning(f"[{attempt}] upload failed: {outcome.message}")

        if outcome.ok and self.history is not None:
            await self.history.refresh()
        return outcome
