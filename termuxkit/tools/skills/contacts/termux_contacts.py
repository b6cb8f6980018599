from __future__ import annotations

from typing import Any

from termuxkit.core.contacts import Resolved
from termuxkit.tools.base import BaseTool, ToolContext
from termuxkit.tools.registry import register_tool

_QUERY_SCHEMA = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "minLength": 1,
            "description": "Part of the contact's name, matched case-insensitively.",
        },
    },
    "required": ["query"],
}


class ListContactsTool(BaseTool):
    name = "contacts.list"
    description = "List every contact in the device address book."

    def parameters_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "required": []}

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        contacts = context.address_book().contact_list()
        return {"contacts": [c.model_dump() for c in contacts], "count": len(contacts)}


class SearchContactsTool(BaseTool):
    name = "contacts.search"
    description = (
        "Find the contact matching a name fragment without prompting. "
        "Returns the contact, or the candidates when several match."
    )

    def parameters_schema(self) -> dict[str, Any]:
        return _QUERY_SCHEMA

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        resolution = context.contact_resolver().lookup(args.get("query", ""))
        if isinstance(resolution, Resolved):
            return {"status": "resolved", "contact": resolution.contact.model_dump()}
        return {
            "status": "ambiguous",
            "candidates": [c.model_dump() for c in resolution.candidates],
        }


class ResolveContactTool(BaseTool):
    name = "contacts.resolve"
    description = (
        "Resolve a name fragment to one contact, asking the user on the device "
        "to pick when several contacts match."
    )

    def parameters_schema(self) -> dict[str, Any]:
        return _QUERY_SCHEMA

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        contact = context.contact_resolver().resolve_contact(args.get("query", ""))
        return {"contact": contact.model_dump()}


class ResolveNumberTool(BaseTool):
    name = "contacts.resolve_number"
    description = "Like contacts.resolve, but return only the phone number."

    def parameters_schema(self) -> dict[str, Any]:
        return _QUERY_SCHEMA

    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        return {"number": context.contact_resolver().resolve_number(args.get("query", ""))}


_TOOLS = [
    ListContactsTool(),
    SearchContactsTool(),
    ResolveContactTool(),
    ResolveNumberTool(),
]

for _t in _TOOLS:
    register_tool(_t)
