from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Contact(BaseModel):
    """One address-book entry as reported by termux-contact-list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., description="Display name")
    number: str = Field(..., description="Dialable number, passed through untouched")
