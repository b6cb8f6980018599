from __future__ import annotations

import os
from datetime import datetime

import structlog

from termuxkit.config import Settings, settings as default_settings
from termuxkit.connectors.termux import TermuxRunner
from termuxkit.core.errors import AuthenticationFailed, InvalidInput, NoSpeech
from termuxkit.schemas.auth import FingerprintResult

log = structlog.get_logger()


def timestamp_name(now: datetime | None = None) -> str:
    """File-name friendly timestamp, e.g. ``240131-184502``."""
    return (now or datetime.now()).strftime("%y%m%d-%H%M%S")


class TermuxDevice:
    """Clipboard, camera, fingerprint, speech and telephony wrappers."""

    def __init__(self, runner: TermuxRunner, s: Settings | None = None):
        self._runner = runner
        self._settings = s or default_settings

    def copy_to_clipboard(self, text: str) -> None:
        self._runner.run("termux-clipboard-set", text)

    def take_photo(self, path: str | None = None) -> str:
        """Take a photo and return the path it was written to."""
        if not path:
            path = os.path.join(self._settings.photo_dir, f"{timestamp_name()}.jpg")
        self._runner.run("termux-camera-photo", path)
        log.info("device.photo_taken", path=path)
        return path

    def fingerprint(self) -> bool:
        """Prompt for a fingerprint.

        Returns True on success. Any other outcome raises AuthenticationFailed.
        """
        result = self._runner.run_json(FingerprintResult, "termux-fingerprint")
        if result.succeeded:
            return True
        log.warning(
            "device.fingerprint_failed",
            auth_result=result.auth_result,
            failed_attempts=result.failed_attempts,
            errors=result.errors,
        )
        raise AuthenticationFailed(
            "Fingerprint authentication failed",
            details={"auth_result": result.auth_result},
        )

    def speech_to_text(self) -> str:
        text = self._runner.run("termux-speech-to-text")
        if text in ("", "\n"):
            raise NoSpeech("Not responding")
        return text.rstrip("\n")

    def call(self, number: str) -> None:
        if not number:
            raise InvalidInput("No number to call")
        self._runner.run("termux-telephony-call", number)
        log.info("device.call_placed")
