from __future__ import annotations

from typing import Any

import structlog

from termuxkit.core.errors import ErrorKind, TermuxError
from termuxkit.schemas.action_plan import ActionPlan, ActionStep
from termuxkit.tools.base import ToolContext
from termuxkit.tools.registry import get_tool

log = structlog.get_logger()


class StepResult:
    def __init__(
        self,
        step: ActionStep,
        success: bool,
        result: dict[str, Any] | None = None,
        error: str | None = None,
        error_kind: ErrorKind | None = None,
    ):
        self.step = step
        self.success = success
        self.result = result
        self.error = error
        self.error_kind = error_kind


class ExecutionResult:
    def __init__(self):
        self.step_results: list[StepResult] = []
        self.all_succeeded: bool = True

    def add(self, sr: StepResult) -> None:
        self.step_results.append(sr)
        if not sr.success:
            self.all_succeeded = False


class Executor:
    def __init__(self, executed_keys: set[str] | None = None):
        self._executed_keys: set[str] = executed_keys if executed_keys is not None else set()

    async def execute_plan(
        self,
        plan: ActionPlan,
        context: ToolContext,
    ) -> ExecutionResult:
        """Run every step that does not need confirmation, stopping at the first failure."""
        return await self._run(plan, context, include_unconfirmed=False)

    async def execute_confirmed_plan(
        self,
        plan: ActionPlan,
        context: ToolContext,
    ) -> ExecutionResult:
        """Execute all steps in a confirmed plan, including those that needed confirmation."""
        return await self._run(plan, context, include_unconfirmed=True)

    async def _run(
        self,
        plan: ActionPlan,
        context: ToolContext,
        include_unconfirmed: bool,
    ) -> ExecutionResult:
        result = ExecutionResult()

        for step in plan.steps:
            if step.requires_confirmation and not include_unconfirmed:
                continue

            sr = await self._execute_step(step, context)
            result.add(sr)

            if not sr.success:
                log.error(
                    "executor.step_failed",
                    tool=step.tool_name,
                    error=sr.error,
                    error_kind=sr.error_kind,
                    plan_id=plan.plan_id,
                )
                break

        return result

    async def _execute_step(self, step: ActionStep, context: ToolContext) -> StepResult:
        if step.idempotency_key in self._executed_keys:
            log.info("executor.idempotent_skip", key=step.idempotency_key, tool=step.tool_name)
            return StepResult(step=step, success=True, result={"skipped": True})

        tool = get_tool(step.tool_name)
        if tool is None:
            return StepResult(
                step=step,
                success=False,
                error=f"Unknown tool: {step.tool_name}",
                error_kind=ErrorKind.invalid_input,
            )

        try:
            result = await tool.execute(step.args, context)
        except TermuxError as exc:
            return StepResult(step=step, success=False, error=str(exc), error_kind=exc.kind)
        except Exception as exc:
            log.exception("executor.step_exception", tool=step.tool_name)
            return StepResult(step=step, success=False, error=str(exc))

        self._executed_keys.add(step.idempotency_key)
        log.info("executor.step_ok", tool=step.tool_name, key=step.idempotency_key)
        return StepResult(step=step, success=True, result=result)
