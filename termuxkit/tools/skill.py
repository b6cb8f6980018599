from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SkillManifest:
    name: str                                   # "messaging"
    display_name: str                           # "Messaging"
    description: str
    tool_modules: list[str] = field(default_factory=list)   # ["termux_sms"]
    commands: list[str] = field(default_factory=list)       # termux-* executables the skill shells out to
