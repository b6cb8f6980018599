from __future__ import annotations

from pydantic import BaseModel, Field

AUTH_RESULT_SUCCESS = "AUTH_RESULT_SUCCESS"


class FingerprintResult(BaseModel):
    errors: list[str] = Field(default_factory=list)
    failed_attempts: int = 0
    auth_result: str = ""

    @property
    def succeeded(self) -> bool:
        return not self.errors and self.auth_result == AUTH_RESULT_SUCCESS
