from __future__ import annotations

import asyncio

import httpx
import pytest

from planwise.api.types import PastPlan
from planwise.flow.history import FEEDBACK_EXCERPT_CHARS, PlanHistory, display_plan
from planwise.flow.state import RequestStatus


def test_display_plan_splits_tasks_and_cuts_feedback() -> None:
    plan = PastPlan(goal="Run a marathon", tasks="Buy shoes\nTrain\nRace", feedback="x" * 500)

    view = display_plan(plan)

    assert view.goal == "Run a marathon"
    assert view.task_lines == ["Buy shoes", "Train", "Race"]
    assert view.feedback_excerpt == "x" * FEEDBACK_EXCERPT_CHARS + "..."


def test_short_feedback_still_gets_ellipsis() -> None:
    assert display_plan(PastPlan(feedback="Nice.")).feedback_excerpt == "Nice...."


def test_non_string_fields_give_empty_views() -> None:
    view = display_plan(PastPlan(goal="g", tasks=["a", "b"], feedback=None))

    assert view.task_lines == []
    assert view.feedback_excerpt == ""


@pytest.mark.asyncio
async def test_refresh_replaces_cache(service, client) -> None:
    history = PlanHistory(client)
    service.reply("GET", "/plans", body=[{"goal": "a"}, {"goal": "b"}])
    assert await history.refresh() is True

    service.reply("GET", "/plans", body=[{"goal": "c"}])
    assert await history.refresh() is True

    assert [p.goal for p in history.plans] == ["c"]
    assert [v.goal for v in history.views()] == ["c"]


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_plans(service, client) -> None:
    history = PlanHistory(client)
    service.reply("GET", "/plans", body=[{"goal": "kept", "tasks": "t", "feedback": "f"}])
    await history.refresh()

    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    service.on("GET", "/plans", boom)

    assert await history.refresh() is False
    assert [p.goal for p in history.plans] == ["kept"]
    assert history.state.status is RequestStatus.FAILED


@pytest.mark.asyncio
async def test_server_and_decode_failures_are_not_raised(service, client) -> None:
    history = PlanHistory(client)

    service.reply("GET", "/plans", status=500, body={"error": "Failed to fetch plans"})
    assert await history.refresh() is False

    service.reply("GET", "/plans", body={"unexpected": True})
    assert await history.refresh() is False

    assert history.plans == []


@pytest.mark.asyncio
async def test_older_refresh_finishing_last_is_discarded(service, client) -> None:
    history = PlanHistory(client)
    first_arrived = asyncio.Event()
    release_first = asyncio.Event()
    calls = 0

    async def plans(_req: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        if calls == 1:
            first_arrived.set()
            await release_first.wait()
            return httpx.Response(200, json=[{"goal": "old"}])
        return httpx.Response(200, json=[{"goal": "new"}])

    service.on("GET", "/plans", plans)

    first = asyncio.create_task(history.refresh())
    await first_arrived.wait()
    assert await history.refresh() is True
    release_first.set()

    assert await first is False
    assert [p.goal for p in history.plans] == ["new"]


def test_plans_property_is_a_copy(client) -> None:
    history = PlanHistory(client)
    history.plans.append(PastPlan(goal="sneaky"))

    assert history.plans == []
