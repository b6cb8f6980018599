from __future__ import annotations

import structlog

from termuxkit.connectors.termux import TermuxRunner
from termuxkit.schemas.contact import Contact

log = structlog.get_logger()


class TermuxAddressBook:
    """Reads the device address book through termux-contact-list."""

    def __init__(self, runner: TermuxRunner):
        self._runner = runner

    def contact_list(self) -> list[Contact]:
        contacts = self._runner.run_json(list[Contact], "termux-contact-list")
        log.debug("contacts.fetched", count=len(contacts))
        return contacts
