# planwise/flow/state.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class RequestStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RequestState:
    status: RequestStatus = RequestStatus.IDLE
    payload: Any = None
    message: str = ""

    @classmethod
    def idle(cls) -> "RequestState":
        return cls()

    @classmethod
    def pending(cls) -> "RequestState":
        return cls(status=RequestStatus.PENDING)

    @classmethod
    def succeeded(cls, payload: Any) -> "RequestState":
        return cls(status=RequestStatus.SUCCEEDED, payload=payload)

    @classmethod
    def failed(cls, message: str) -> "RequestState":
        return cls(status=RequestStatus.FAILED, message=message)

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.PENDING

    @property
    def ok(self) -> bool:
        return self.status is RequestStatus.SUCCEEDED


class RequestSlot:
    """Visible state of one operation plus a generation counter.

    Every ``begin()`` starts a new generation; ``settle()`` only applies the
    outcome of the latest generation, so a slow response from an earlier call
    can never overwrite the result of a newer one.
    """

    def __init__(self) -> None:
        self.state = RequestState.idle()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        self._generation += 1
        self.state = RequestState.pending()
        return self._generation

    def settle(self, generation: int, outcome: RequestState) -> bool:
        if generation != self._generation:
            return False
        self.state = outcome
        return True

    def reset(self) -> None:
        # bumping the generation drops whatever is still in flight
        self._generation += 1
        self.state = RequestState.idle()
