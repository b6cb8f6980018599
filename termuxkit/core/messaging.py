from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote_plus

import structlog

from termuxkit.connectors.device import TermuxDevice
from termuxkit.connectors.sms import TermuxSms
from termuxkit.core.contacts import ContactResolver
from termuxkit.core.errors import InvalidInput
from termuxkit.schemas.sms import Sms

log = structlog.get_logger()

_CODE_RE = re.compile(r"\d{4,7}\.?")

WHATSAPP_SEND_URL = "https://api.whatsapp.com/send"


def extract_code(body: str) -> str | None:
    """Return the first word of ``body`` carrying a 4-7 digit code, without trailing dots."""
    for word in body.split():
        if _CODE_RE.search(word):
            return word.rstrip(".")
    return None


def whatsapp_number(number: str, rewrite_trunk_prefix: bool = True) -> str:
    # Only the literal leading 8 -> 7 substitution; no other dialing rules are applied.
    if rewrite_trunk_prefix and number.startswith("8"):
        return "7" + number[1:]
    return number


def whatsapp_link(number: str, message: str, rewrite_trunk_prefix: bool = True) -> str:
    phone = whatsapp_number(number, rewrite_trunk_prefix)
    return f"{WHATSAPP_SEND_URL}?phone={phone}&text={quote_plus(message)}"


@dataclass(frozen=True)
class CopiedSms:
    copied: str
    sms: Sms
    is_code: bool


def copy_last_sms_code(sms_client: TermuxSms, device: TermuxDevice) -> CopiedSms:
    """Copy the code from the newest SMS to the clipboard, or the whole body if it has none."""
    sms = sms_client.last_sms()
    code = extract_code(sms.body)
    copied = code if code is not None else sms.body
    device.copy_to_clipboard(copied)
    log.info("sms.copied", is_code=code is not None)
    return CopiedSms(copied=copied, sms=sms, is_code=code is not None)


def send_sms_to(resolver: ContactResolver, sms_client: TermuxSms, query: str, text: str) -> str:
    """Resolve ``query`` to a number and text it. Returns the number used."""
    if not text:
        raise InvalidInput("Nothing to send")
    number = resolver.resolve_number(query)
    sms_client.send_sms(number, text)
    return number
