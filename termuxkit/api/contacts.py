from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from termuxkit.core.contacts import Resolved
from termuxkit.dependencies import get_tool_context, require_token
from termuxkit.schemas.command import ResolveContactRequest, ResolveContactResponse
from termuxkit.tools.base import ToolContext

router = APIRouter(dependencies=[Depends(require_token)])


# Sync on purpose: FastAPI runs it in its threadpool while a device prompt is open.
@router.post("/resolve", response_model=ResolveContactResponse)
def resolve_contact(
    body: ResolveContactRequest,
    context: Annotated[ToolContext, Depends(get_tool_context)],
):
    """Resolve a name fragment.

    Several matches come back as ``ambiguous`` with the candidates in address-book
    order, unless ``interactive`` is set, in which case the user picks on the device.
    """
    resolver = context.contact_resolver()
    if body.interactive:
        return ResolveContactResponse(status="resolved", contact=resolver.resolve_contact(body.query))

    resolution = resolver.lookup(body.query)
    if isinstance(resolution, Resolved):
        return ResolveContactResponse(status="resolved", contact=resolution.contact)
    return ResolveContactResponse(status="ambiguous", candidates=list(resolution.candidates))
