from __future__ import annotations

from typing import Any

from termuxkit.tools.base import BaseTool, ToolContext
from termuxkit.tools.registry import register_tool


class CopyToClipboardTool(BaseTool):
    name = "device.copy_to_clipboard"
    description = "Copy text to the device clipboard."

    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "text": {"type": "string", "description": "Text to copy to clipboard"},
            },
            "required": ["text"],
        }

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        context.device().copy_to_clipboard(args["text"])
        return {"copied": True}


class TakePhotoTool(BaseTool):
    name = "device.take_photo"
    description = "Take a photo; saved under the configured photo directory unless a path is given."

    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "path": {"type": "string", "description": "Output file path (.jpg)"},
            },
            "required": [],
        }

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        return {"path": context.device().take_photo(args.get("path"))}


class FingerprintTool(BaseTool):
    name = "device.fingerprint"
    description = "Ask the user to authenticate with their fingerprint."

    def parameters_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "required": []}

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        return {"authenticated": context.device().fingerprint()}


class SpeechToTextTool(BaseTool):
    name = "device.speech_to_text"
    description = "Listen through the microphone and return the recognised text."

    def parameters_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "required": []}

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        return {"text": context.device().speech_to_text()}


_TOOLS = [
    CopyToClipboardTool(),
    TakePhotoTool(),
    FingerprintTool(),
    SpeechToTextTool(),
]

for _t in _TOOLS:
    register_tool(_t)
