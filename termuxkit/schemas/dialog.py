from __future__ import annotations

from pydantic import BaseModel, Field

# termux-dialog reports Android's RESULT_OK when the user confirms.
DIALOG_OK = -1


class DialogValue(BaseModel):
    index: int
    text: str


class DialogResult(BaseModel):
    """Raw JSON printed by termux-dialog and termux-confirm."""

    code: int = 0
    text: str = ""
    index: int | None = None
    values: list[DialogValue] = Field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.code == DIALOG_OK


class Choice(BaseModel):
    index: int
    text: str
