from __future__ import annotations

from fastapi import APIRouter

from termuxkit.config import settings
from termuxkit.tools.loader import discover_and_load_skills, missing_commands

router = APIRouter()


@router.get("/health")
async def health():
    manifests = discover_and_load_skills()
    missing = missing_commands(manifests, settings.termux_bin_dir)
    return {
        "status": "ok" if not missing else "degraded",
        "environment": settings.environment,
        "skills": [m.name for m in manifests],
        "missing_commands": missing,
    }
