from __future__ import annotations

from fastapi import APIRouter, Depends

from termuxkit.dependencies import require_token
from termuxkit.tools.loader import discover_and_load_skills
from termuxkit.tools.registry import tool_specs

discover_and_load_skills()

router = APIRouter(dependencies=[Depends(require_token)])


@router.get("")
async def list_tools():
    return {"tools": tool_specs()}
