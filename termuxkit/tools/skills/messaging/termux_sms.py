from __future__ import annotations

from typing import Any

from termuxkit.core.errors import InvalidInput
from termuxkit.core.messaging import copy_last_sms_code, send_sms_to, whatsapp_link
from termuxkit.tools.base import BaseTool, ToolContext
from termuxkit.tools.registry import register_tool

_RECIPIENT_PROPERTIES = {
    "number": {"type": "string", "description": "Phone number to use as-is."},
    "contact": {
        "type": "string",
        "description": "Name fragment resolved through the address book when no number is given.",
    },
}


def _recipient_number(args: dict[str, Any], context: ToolContext) -> str:
    if args.get("number"):
        return args["number"]
    if args.get("contact"):
        return context.contact_resolver().resolve_number(args["contact"])
    raise InvalidInput("Either number or contact is required")


class LastSmsTool(BaseTool):
    name = "sms.last"
    description = "Read the most recent SMS on the device."

    def parameters_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "required": []}

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        sms = context.sms().last_sms()
        return {"sms": sms.model_dump()}


class CopySmsCodeTool(BaseTool):
    name = "sms.copy_code"
    description = (
        "Copy the numeric code from the most recent SMS to the clipboard, "
        "or the whole message when it carries no code."
    )

    def parameters_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "required": []}

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        result = copy_last_sms_code(context.sms(), context.device())
        return {"copied": result.copied, "is_code": result.is_code, "body": result.sms.body}


class SendSmsTool(BaseTool):
    name = "sms.send"
    description = "Send an SMS to a phone number or to a contact looked up by name."

    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                **_RECIPIENT_PROPERTIES,
                "text": {"type": "string", "minLength": 1, "description": "Message body"},
            },
            "required": ["text"],
        }

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        text = args.get("text", "")
        if not text:
            raise InvalidInput("Nothing to send")
        if args.get("number"):
            number = args["number"]
            context.sms().send_sms(number, text)
        elif args.get("contact"):
            number = send_sms_to(context.contact_resolver(), context.sms(), args["contact"], text)
        else:
            raise InvalidInput("Either number or contact is required")
        return {"sent": True, "number": number}


class WhatsAppLinkTool(BaseTool):
    name = "sms.whatsapp_link"
    description = "Compose a WhatsApp click-to-chat link for a number or contact with a pre-filled message."

    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                **_RECIPIENT_PROPERTIES,
                "message": {"type": "string", "description": "Pre-filled message text"},
            },
            "required": ["message"],
        }

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        number = _recipient_number(args, context)
        link = whatsapp_link(
            number,
            args.get("message", ""),
            rewrite_trunk_prefix=context.settings.whatsapp_rewrite_trunk_prefix,
        )
        return {"url": link}


_TOOLS = [
    LastSmsTool(),
    CopySmsCodeTool(),
    SendSmsTool(),
    WhatsAppLinkTool(),
]

for _t in _TOOLS:
    register_tool(_t)
