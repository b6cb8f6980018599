from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from termuxkit.config import Settings
from termuxkit.core.executor import ExecutionResult, Executor
from termuxkit.core.policy import evaluate
from termuxkit.dependencies import get_tool_context, require_token
from termuxkit.schemas.action_plan import ActionPlan
from termuxkit.schemas.command import (
    CommandRequest,
    CommandResponse,
    ConfirmRequest,
    StepOutcome,
)
from termuxkit.tools.base import ToolContext
from termuxkit.tools.loader import discover_and_load_skills
from termuxkit.tools.registry import get_tool

log = structlog.get_logger()

discover_and_load_skills()

router = APIRouter(dependencies=[Depends(require_token)])

# plan_id -> (plan, idempotency keys already executed)
_pending_plans: dict[str, tuple[ActionPlan, set[str]]] = {}


def _expired(plan: ActionPlan, ttl_seconds: int) -> bool:
    return datetime.now(UTC) - plan.created_at > timedelta(seconds=ttl_seconds)


def _store_pending(plan: ActionPlan, executed: set[str], s: Settings) -> None:
    for plan_id, (pending, _) in list(_pending_plans.items()):
        if _expired(pending, s.pending_plan_ttl_seconds):
            del _pending_plans[plan_id]

    _pending_plans[plan.plan_id] = (plan, executed)

    # dicts keep insertion order, so the first key is the oldest plan
    while len(_pending_plans) > s.max_pending_plans:
        evicted = next(iter(_pending_plans))
        del _pending_plans[evicted]
        log.info("command.pending_evicted", plan_id=evicted)


def _outcomes(result: ExecutionResult) -> list[StepOutcome]:
    return [
        StepOutcome(
            tool_name=sr.step.tool_name,
            success=sr.success,
            result=sr.result,
            error=sr.error,
            error_kind=sr.error_kind,
        )
        for sr in result.step_results
    ]


def _confirmation_prompt(plan: ActionPlan) -> str | None:
    phrases = [s.confirmation_phrase for s in plan.steps if s.requires_confirmation and s.confirmation_phrase]
    return " ".join(phrases) or None


@router.post("", response_model=CommandResponse)
async def run_command(
    body: CommandRequest,
    context: Annotated[ToolContext, Depends(get_tool_context)],
):
    """Run a plan of tool calls. Outbound steps wait for POST /command/confirm."""
    unknown = [s.tool_name for s in body.steps if get_tool(s.tool_name) is None]
    if unknown:
        raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, f"Unknown tools: {', '.join(unknown)}")

    plan = ActionPlan(description=body.description, steps=body.steps)
    policy = evaluate(plan)
    if policy.blocked:
        raise HTTPException(status.HTTP_403_FORBIDDEN, policy.block_reason or "Plan blocked by policy")

    executor = Executor()
    result = await executor.execute_plan(plan, context)

    if plan.needs_confirmation and result.all_succeeded:
        executed = {sr.step.idempotency_key for sr in result.step_results if sr.success}
        _store_pending(plan, executed, context.settings)
        log.info("command.pending_confirmation", plan_id=plan.plan_id, max_risk=plan.max_risk)
        return CommandResponse(
            plan_id=plan.plan_id,
            action_plan=plan,
            results=_outcomes(result),
            all_succeeded=result.all_succeeded,
            requires_confirmation=True,
            confirmation_prompt=_confirmation_prompt(plan),
        )

    return CommandResponse(
        plan_id=plan.plan_id,
        action_plan=plan,
        results=_outcomes(result),
        all_succeeded=result.all_succeeded,
    )


@router.post("/confirm", response_model=CommandResponse)
async def confirm_command(
    body: ConfirmRequest,
    context: Annotated[ToolContext, Depends(get_tool_context)],
):
    pending = _pending_plans.pop(body.plan_id, None)
    if pending is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "No pending plan with that id")

    plan, executed = pending
    if _expired(plan, context.settings.pending_plan_ttl_seconds):
        log.info("command.pending_expired", plan_id=plan.plan_id)
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Pending plan expired")

    executor = Executor(executed_keys=executed)
    result = await executor.execute_confirmed_plan(plan, context)
    log.info("command.confirmed", plan_id=plan.plan_id, all_succeeded=result.all_succeeded)

    return CommandResponse(
        plan_id=plan.plan_id,
        action_plan=plan,
        results=_outcomes(result),
        all_succeeded=result.all_succeeded,
    )
