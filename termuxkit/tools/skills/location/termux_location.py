from __future__ import annotations

from typing import Any

from termuxkit.tools.base import BaseTool, ToolContext
from termuxkit.tools.registry import register_tool


class GetLocationTool(BaseTool):
    name = "location.get"
    description = "Get the device's latitude, longitude and speed (m/s and km/h)."

    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "provider": {
                    "type": "string",
                    "enum": ["gps", "network", "passive"],
                    "description": "Location provider; defaults to the configured one.",
                },
            },
            "required": [],
        }

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        place = context.location().get_location(args.get("provider"))
        return {"place": place.model_dump()}


_TOOLS = [
    GetLocationTool(),
]

for _t in _TOOLS:
    register_tool(_t)
