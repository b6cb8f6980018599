from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from termuxkit.config import Settings, settings as default_settings
from termuxkit.connectors.contacts import TermuxAddressBook
from termuxkit.connectors.device import TermuxDevice
from termuxkit.connectors.dialog import TermuxDialog
from termuxkit.connectors.location import TermuxLocation
from termuxkit.connectors.sms import TermuxSms
from termuxkit.connectors.termux import TermuxRunner
from termuxkit.core.contacts import ContactResolver


class BaseTool(ABC):
    name: str
    description: str

    async def execute(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        """Run the tool on a worker thread; an open termux-dialog must not stall the event loop."""
        return await asyncio.to_thread(self.run, args, context)

    @abstractmethod
    def run(self, args: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        """Blocking tool body; spawns whatever termux-* commands it needs."""

    def to_spec(self) -> dict[str, Any]:
        """Return the tool specification advertised by GET /tools."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters_schema(),
        }

    @abstractmethod
    def parameters_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's arguments."""


class ToolContext:
    """Runtime context passed to every tool execution."""

    def __init__(
        self,
        runner: TermuxRunner | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or default_settings
        self.runner = runner or TermuxRunner.from_settings(self.settings)

    def address_book(self) -> TermuxAddressBook:
        return TermuxAddressBook(self.runner)

    def dialog(self) -> TermuxDialog:
        return TermuxDialog(self.runner, self.settings)

    def sms(self) -> TermuxSms:
        return TermuxSms(self.runner)

    def location(self) -> TermuxLocation:
        return TermuxLocation(self.runner, self.settings)

    def device(self) -> TermuxDevice:
        return TermuxDevice(self.runner, self.settings)

    def contact_resolver(self) -> ContactResolver:
        return ContactResolver(self.address_book(), self.dialog())
