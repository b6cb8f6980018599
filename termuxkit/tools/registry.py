"""Process-wide table of Termux tools, keyed by dotted name such as ``sms.send``."""

from __future__ import annotations

import structlog

from termuxkit.tools.base import BaseTool
from termuxkit.tools.skill import SkillManifest

log = structlog.get_logger()

_REGISTRY: dict[str, BaseTool] = {}
_SKILLS: list[SkillManifest] = []


def register_tool(tool: BaseTool) -> None:
    if tool.name in _REGISTRY:
        log.warning("skills.tool_replaced", tool=tool.name)
    _REGISTRY[tool.name] = tool


def register_skill(manifest: SkillManifest) -> None:
    _SKILLS.append(manifest)


def get_skill_manifests() -> list[SkillManifest]:
    return list(_SKILLS)


def get_tool(name: str) -> BaseTool | None:
    return _REGISTRY.get(name)


def all_tools() -> list[BaseTool]:
    return list(_REGISTRY.values())


def tool_specs() -> list[dict]:
    return [t.to_spec() for t in _REGISTRY.values()]
