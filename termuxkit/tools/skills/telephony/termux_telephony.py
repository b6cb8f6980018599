from __future__ import annotations

from typing import Any

from termuxkit.core.errors import InvalidInput
from termuxkit.tools.base import BaseTool, ToolContext
from termuxkit.tools.registry import register_tool


class CallTool(BaseTool):
    name = "telephony.call"
    description = "Call a phone number, or a contact looked up by part of their name."

    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "number": {"type": "string", "description": "Phone number to dial as-is."},
                "contact": {"type": "string", "description": "Name fragment to look up."},
            },
            "required": [],
        }

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        if args.get("number"):
            number = args["number"]
        elif args.get("contact"):
            number = context.contact_resolver().resolve_number(args["contact"])
        else:
            raise InvalidInput("Either number or contact is required")
        context.device().call(number)
        return {"called": True, "number": number}


_TOOLS = [
    CallTool(),
]

for _t in _TOOLS:
    register_tool(_t)
