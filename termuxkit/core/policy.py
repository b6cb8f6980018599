from __future__ import annotations

import structlog

from termuxkit.schemas.action_plan import ActionPlan, ActionStep, RiskLevel

log = structlog.get_logger()

# Tools that reach another person: an SMS leaves the device, a call rings someone.
OUTBOUND_TOOLS = {
    "sms.send",
    "telephony.call",
}


class PolicyResult:
    def __init__(self, plan: ActionPlan, blocked: bool = False, block_reason: str | None = None):
        self.plan = plan
        self.blocked = blocked
        self.block_reason = block_reason


def evaluate(plan: ActionPlan) -> PolicyResult:
    """Apply hard policy rules to an ActionPlan.

    Mutates step-level risk_level and requires_confirmation where policy demands it.
    Never downgrades risk, only upgrades.
    """
    for step in plan.steps:
        _apply_step_policy(step)

    block_reason = _outbound_without_recipient(plan)
    if block_reason:
        log.warning("policy.blocked", plan_id=plan.plan_id, reason=block_reason)
        return PolicyResult(plan=plan, blocked=True, block_reason=block_reason)

    log.info(
        "policy.evaluated",
        plan_id=plan.plan_id,
        needs_confirmation=plan.needs_confirmation,
        max_risk=plan.max_risk,
    )
    return PolicyResult(plan=plan)


def _outbound_without_recipient(plan: ActionPlan) -> str | None:
    for step in plan.steps:
        if step.tool_name in OUTBOUND_TOOLS and not (step.args.get("number") or step.args.get("contact")):
            return f"{step.tool_name} needs a number or a contact"
    return None


def _apply_step_policy(step: ActionStep) -> None:
    if step.tool_name in OUTBOUND_TOOLS:
        _upgrade_risk(step, RiskLevel.medium)
        step.requires_confirmation = True
        if not step.confirmation_phrase:
            step.confirmation_phrase = _outbound_phrase(step)

    _check_missing_fields(step)


def _outbound_phrase(step: ActionStep) -> str:
    who = step.args.get("number") or step.args.get("contact") or "this recipient"
    if step.tool_name == "telephony.call":
        return f"This will call {who}. Confirm?"
    return f"This will send an SMS to {who}. Confirm?"


def _upgrade_risk(step: ActionStep, target: RiskLevel) -> None:
    order = {RiskLevel.low: 0, RiskLevel.medium: 1, RiskLevel.high: 2}
    if order[target] > order[step.risk_level]:
        step.risk_level = target


def _check_missing_fields(step: ActionStep) -> None:
    """Flag steps that are missing critical arguments for their tool."""
    required_by_tool = {
        "contacts.search": ["query"],
        "contacts.resolve": ["query"],
        "contacts.resolve_number": ["query"],
        "sms.send": ["text"],
        "sms.whatsapp_link": ["message"],
        "dialog.choose": ["options"],
        "dialog.checkbox": ["options"],
        "device.copy_to_clipboard": ["text"],
    }
    required = required_by_tool.get(step.tool_name, [])
    missing = [f for f in required if f not in step.args]
    if missing:
        log.warning(
            "policy.missing_fields",
            tool=step.tool_name,
            missing=missing,
        )
