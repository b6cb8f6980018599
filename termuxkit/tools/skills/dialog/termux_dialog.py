from __future__ import annotations

from typing import Any

from termuxkit.tools.base import BaseTool, ToolContext
from termuxkit.tools.registry import register_tool

_OPTIONS_SCHEMA = {
    "type": "object",
    "properties": {
        "options": {"type": "array", "items": {"type": "string"}, "minItems": 1},
    },
    "required": ["options"],
}


class ConfirmTool(BaseTool):
    name = "dialog.confirm"
    description = "Ask the user a yes/no confirmation."

    def parameters_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "required": []}

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        return {"confirmed": context.dialog().confirm()}


class TextInputTool(BaseTool):
    name = "dialog.text"
    description = "Ask the user for a short name or a longer multi-line text."

    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "multiline": {"type": "boolean", "default": False},
            },
            "required": [],
        }

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        dialog = context.dialog()
        text = dialog.ask_text() if args.get("multiline") else dialog.ask_name()
        return {"text": text}


class ChooseTool(BaseTool):
    name = "dialog.choose"
    description = "Ask the user to pick exactly one option."

    def parameters_schema(self) -> dict[str, Any]:
        return _OPTIONS_SCHEMA

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        choice = context.dialog().radio(list(args["options"]))
        return {"index": choice.index, "text": choice.text}


class CheckboxTool(BaseTool):
    name = "dialog.checkbox"
    description = "Ask the user to tick any number of options."

    def parameters_schema(self) -> dict[str, Any]:
        return _OPTIONS_SCHEMA

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        choices = context.dialog().checkbox(list(args["options"]))
        return {
            "indexes": [c.index for c in choices],
            "texts": [c.text for c in choices],
        }


_TOOLS = [
    ConfirmTool(),
    TextInputTool(),
    ChooseTool(),
    CheckboxTool(),
]

for _t in _TOOLS:
    register_tool(_t)
