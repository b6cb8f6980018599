from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Sms(BaseModel):
    """One message as printed by termux-sms-list."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int = Field(default=0, alias="_id")
    thread_id: int = Field(default=0, alias="threadid")
    type: str = ""
    read: bool = False
    number: str = ""
    received: str = ""
    body: str = ""
