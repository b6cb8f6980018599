from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from termuxkit.core.errors import ErrorKind
from termuxkit.schemas.action_plan import ActionPlan, ActionStep
from termuxkit.schemas.contact import Contact


class CommandRequest(BaseModel):
    description: str = ""
    steps: list[ActionStep] = Field(..., min_length=1)


class StepOutcome(BaseModel):
    tool_name: str
    success: bool
    result: dict[str, Any] | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None


class CommandResponse(BaseModel):
    plan_id: str
    action_plan: ActionPlan | None = None
    results: list[StepOutcome] = Field(default_factory=list)
    all_succeeded: bool = True
    requires_confirmation: bool = False
    confirmation_prompt: str | None = None


class ConfirmRequest(BaseModel):
    plan_id: str


class ResolveContactRequest(BaseModel):
    query: str
    interactive: bool = Field(
        default=False,
        description="Prompt on the device when several contacts match instead of returning them.",
    )


class ResolveContactResponse(BaseModel):
    status: Literal["resolved", "ambiguous"]
    contact: Contact | None = None
    candidates: list[Contact] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    kind: ErrorKind
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
