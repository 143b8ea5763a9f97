"""
Caches the list of previously analyzed plans.
What it does:
- Refreshes the whole list from the history endpoint (no diffing)
- Keeps the last good list when a refresh fails
- Derives display views (task lines + feedback excerpt)

And, the main purpose:
Best-effort background history; it never blocks or fails the user's flow.
"""


from typing import List

from pydantic import BaseModel

from planwise.api.client import PlanwiseClient
from planwise.api.types import PastPlan
from planwise.core.errors import PlanwiseError
from planwise.core.logging import get_logger
from planwise.flow.state import RequestSlot, RequestState

log = get_logger("flow.history")

FEEDBACK_EXCERPT_CHARS = 200


class PlanView(BaseModel):
    goal: str
    task_lines: List[str]
    feedback_excerpt: str


def display_plan(plan: PastPlan) -> PlanView:
    tasks = plan.tasks.split("\n") if isinstance(plan.tasks, str) else []
    feedback = plan.feedback[:FEEDBACK_EXCERPT_CHARS] + "..." if isinstance(plan.feedback, str) else ""
    return PlanView(goal=plan.goal, task_lines=tasks, feedback_excerpt=feedback)


class PlanHistory:
    def __init__(self, client: PlanwiseClient):
        self.client = client
        self.slot = RequestSlot()
        self._plans: List[PastPlan] = []

    @property
    def plans(self) -> List[PastPlan]:
        return list(self._plans)

    @property
    def state(self) -> RequestState:
        return self.slot.state

    def views(self) -> List[PlanView]:
        return [display_plan(p) for p in self._plans]

    async def refresh(self) -> bool:
        """Returns True when the cached list was replaced."""
        generation = self.slot.begin()
        try:
            plans = await self.client.list_plans()
        except PlanwiseError as e:
            log.warning(f"Failed to load past plans: {e}")
            self.slot.settle(generation, RequestState.failed(str(e)))
            return False

        if not self.slot.settle(generation, RequestState.succeeded(len(plans))):
            log.info("Discarding plan history from a superseded refresh")
            return False
        self._plans = plans
        return True
