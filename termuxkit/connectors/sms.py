from __future__ import annotations

import structlog

from termuxkit.connectors.termux import TermuxRunner
from termuxkit.core.errors import NoMessages
from termuxkit.schemas.sms import Sms

log = structlog.get_logger()


class TermuxSms:
    def __init__(self, runner: TermuxRunner):
        self._runner = runner

    def last_sms(self) -> Sms:
        """Return the most recent message in the inbox.

        Raises:
            NoMessages: the device has no messages.
        """
        messages = self._runner.run_json(list[Sms], "termux-sms-list", "-l", "1")
        if not messages:
            raise NoMessages("No sms")
        return messages[0]

    def send_sms(self, number: str, text: str) -> None:
        self._runner.run("termux-sms-send", "-n", number, text)
        log.info("sms.sent", length=len(text))
