"""
Analyze pathway state machine.
What it does:
- Derives the trimmed payload from the draft
- Calls /analyze and normalizes the suggestions
- Idle -> Pending -> Succeeded | Failed, reset to Pending on every submit
- Drops responses of superseded submissions
- Refreshes plan history after a successful analysis

And, the main purpose:
Turn one draft submission into exactly one visible outcome.
"""


from typing import Callable, List, Optional

from planwise.api.client import PlanwiseClient
from planwise.core.errors import MalformedResponse, NetworkError, ServerError
from planwise.core.ids import new_id
from planwise.core.logging import get_logger
from planwise.flow.draft import PlanDraft
from planwise.flow.history import PlanHistory
from planwise.flow.normalizer import normalize
from planwise.flow.state import RequestSlot, RequestState

log = get_logger("flow.submission")

UNKNOWN_SERVER_ERROR = "Unknown error from server."


class SubmissionMachine:
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

    @property
    def state(self) -> RequestState:
        return self.slot.state

    @property
    def suggestions(self) -> List[str]:
        return list(self.state.payload) if self.state.ok else []

    @property
    def error(self) -> str:
        return self.state.message

    def reset(self) -> None:
        self.slot.reset()

    async def submit(self, draft: PlanDraft) -> RequestState:
        payload = draft.to_payload()
        attempt = new_id("sub")
        generation = self.slot.begin()
        log.info(f"[{attempt}] analyzing '{payload.title}' ({len(payload.steps)} steps)")

        try:
            raw = await self.client.analyze(payload)
            suggestions = normalize(raw)
        except ServerError as e:
            outcome = RequestState.failed(e.message or UNKNOWN_SERVER_ERROR)
        except NetworkError as e:
            outcome = RequestState.failed(f"Network error: {e}")
        except MalformedResponse as e:
            outcome = RequestState.failed(f"Malformed response from server: {e}")
        else:
            outcome = RequestState.succeeded(suggestions)

        if not outcome.ok:
            log.warning(f"[{attempt}] analysis failed: {outcome.message}")
        if self.slot.settle(generation, outcome):
            if outcome.ok and self.on_success is not None:
                self.on_success(list(outcome.payload))
        else:
            log.info(f"[{attempt}] superseded by a newer submission, result discarded")

        if outcome.ok and self.history is not None:
            await self.history.refresh()
        return outcome
