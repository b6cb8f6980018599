from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import structlog

from termuxkit.core.errors import EmptyAddressBook, InvalidInput, NotFound
from termuxkit.schemas.contact import Contact
from termuxkit.schemas.dialog import Choice

log = structlog.get_logger()


class AddressBook(Protocol):
    def contact_list(self) -> list[Contact]: ...


class Chooser(Protocol):
    def choose(self, options: list[str]) -> Choice:
        """Return the picked index, or raise SelectionCancelled."""
        ...


@dataclass(frozen=True)
class Resolved:
    contact: Contact


@dataclass(frozen=True)
class NeedsDisambiguation:
    candidates: tuple[Contact, ...]

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.candidates]


Resolution = Resolved | NeedsDisambiguation


def match_contacts(snapshot: Sequence[Contact], query: str) -> list[Contact]:
    """Contacts whose name contains ``query``, case-insensitively, in snapshot order."""
    needle = query.lower()
    return [c for c in snapshot if needle in c.name.lower()]


def resolve(snapshot: Sequence[Contact], query: str) -> Resolution:
    """Narrow ``snapshot`` down to the contacts matching ``query``.

    A single match is Resolved. Several matches are returned for the caller to
    disambiguate, in snapshot order so that a picked index maps back to the
    right entry.

    Raises:
        InvalidInput: ``query`` is empty.
        EmptyAddressBook: ``snapshot`` has no entries.
        NotFound: nothing matched.
    """
    if not query:
        raise InvalidInput("No Name")
    if not snapshot:
        raise EmptyAddressBook("EMPTY CONTACTS")

    matches = match_contacts(snapshot, query)
    if not matches:
        raise NotFound("Contact not found", details={"query": query})
    if len(matches) == 1:
        return Resolved(matches[0])
    return NeedsDisambiguation(tuple(matches))


class ContactResolver:
    """Turns a name fragment into exactly one contact.

    The address book is read fresh on every call. Ambiguous matches are put to
    the user through ``chooser``.
    """

    def __init__(self, address_book: AddressBook, chooser: Chooser):
        self._address_book = address_book
        self._chooser = chooser

    def lookup(self, query: str) -> Resolution:
        """Resolve without prompting; ambiguity is handed back to the caller."""
        if not query:
            raise InvalidInput("No Name")
        return resolve(self._address_book.contact_list(), query)

    def resolve_contact(self, query: str) -> Contact:
        resolution = self.lookup(query)
        if isinstance(resolution, Resolved):
            return resolution.contact

        log.info("contacts.disambiguate", query=query, candidates=len(resolution.candidates))
        choice = self._chooser.choose(resolution.names)
        return resolution.candidates[choice.index]

    def resolve_number(self, query: str) -> str:
        return self.resolve_contact(query).number
