"""
Holds the in-progress plan draft.
What it does:
- Keeps the goal title + ordered step slots (always at least one)
- Editing operations used by the presentation layer
- Derives the trimmed submission payload
- Loads / saves the draft through an injected key-value storage

And, the main purpose:
Survive reloads without ever blocking startup on bad stored data.
"""


import json
from typing import Any, List, NamedTuple, Optional

from pydantic import BaseModel, Field, field_validator

from planwise.api.types import SubmissionPayload
from planwise.core.config import settings
from planwise.core.errors import StorageCorrupt
from planwise.core.logging import get_logger
from planwise.db.storage import KeyValueStorage

log = get_logger("flow.draft")


EXAMPLE_TITLE = "Launch a YouTube Channel"
EXAMPLE_STEPS = [
    "Pick a niche",
    "Buy a webcam and mic",
    "Plan first 3 videos",
    "Edit using CapCut",
    "Upload weekly",
]


class PlanDraft(BaseModel):
    title: str = ""
    steps: List[str] = Field(default_factory=lambda: [""])

    @field_validator("steps")
    @classmethod
    def _keep_one_slot(cls, v: List[str]) -> List[str]:
        return v if v else [""]

    def set_title(self, value: str) -> None:
        self.title = value

    def set_step(self, index: int, value: str) -> None:
        self.steps[index] = value

    def add_step(self) -> None:
        self.steps.append("")

    def clear(self) -> None:
        self.title = ""
        self.steps = [""]

    def fill_example(self) -> None:
        self.title = EXAMPLE_TITLE
        self.steps = list(EXAMPLE_STEPS)

    def to_payload(self) -> SubmissionPayload:
        cleaned = [s.strip() for s in self.steps]
        return SubmissionPayload(title=self.title.strip(), steps=[s for s in cleaned if s])


class DraftLoad(NamedTuple):
    draft: PlanDraft
    problem: Optional[StorageCorrupt] = None


def _coerce_record(record: Any) -> PlanDraft:
    if not isinstance(record, dict):
        raise StorageCorrupt(f"Stored draft is not an object ({type(record).__name__})")

    title = record.get("title")
    if not isinstance(title, str):
        title = ""

    steps = record.get("steps")
    if not isinstance(steps, list) or not all(isinstance(s, str) for s in steps):
        steps = [""]

    return PlanDraft(title=title, steps=steps)


class DraftStore:
    def __init__(self, storage: KeyValueStorage, key: Optional[str] = None):
        self.storage = storage
        self.key = key or settings.DRAFT_STORAGE_KEY

    async def load_outcome(self) -> DraftLoad:
        try:
            raw = await self.storage.get(self.key)
        except Exception as e:
            return DraftLoad(PlanDraft(), StorageCorrupt(f"Draft storage read failed: {e}"))

        if raw is None:
            return DraftLoad(PlanDraft())
        try:
            record = json.loads(raw)
        except ValueError as e:
            return DraftLoad(PlanDraft(), StorageCorrupt(f"Stored draft is not JSON: {e}"))
        if record is None:
            return DraftLoad(PlanDraft())
        try:
            return DraftLoad(_coerce_record(record))
        except StorageCorrupt as e:
            return DraftLoad(PlanDraft(), e)

    async def load(self) -> PlanDraft:
        outcome = await self.load_outcome()
        if outcome.problem is not None:
            log.warning(f"{outcome.problem}. Starting from an empty draft.")
        return outcome.draft

    async def save(self, draft: PlanDraft) -> None:
        try:
            await self.storage.set(self.key, draft.model_dump_json())
        except Exception as e:
            log.warning(f"Could not save draft: {e}")

    async def discard(self) -> None:
        try:
            await self.storage.delete(self.key)
        except Exception as e:
            log.warning(f"Could not discard stored draft: {e}")
