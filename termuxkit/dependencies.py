from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from termuxkit.config import settings
from termuxkit.connectors.termux import TermuxRunner
from termuxkit.tools.base import ToolContext

bearer_scheme = HTTPBearer(auto_error=False)


async def require_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> None:
    """Reject requests without the configured API token; open when no token is set."""
    if not settings.api_token:
        return
    if credentials is None or not secrets.compare_digest(credentials.credentials, settings.api_token):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid or missing API token")


def get_tool_context() -> ToolContext:
    return ToolContext(runner=TermuxRunner.from_settings(settings), settings=settings)
