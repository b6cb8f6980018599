from __future__ import annotations

import os
import subprocess
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from termuxkit.config import Settings, settings as default_settings
from termuxkit.core.errors import CollaboratorError

log = structlog.get_logger()


class TermuxRunner:
    """Spawns termux-* executables and hands back their stdout.

    Every call is a short-lived, blocking child process. No timeout is applied
    unless one is configured.
    """

    def __init__(self, bin_dir: str = "", timeout: float | None = None):
        self._bin_dir = bin_dir
        self._timeout = timeout

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> TermuxRunner:
        s = s or default_settings
        return cls(bin_dir=s.termux_bin_dir, timeout=s.command_timeout)

    def _executable(self, command: str) -> str:
        if self._bin_dir:
            return os.path.join(self._bin_dir, command)
        return command

    def _spawn(self, argv: list[str]) -> subprocess.CompletedProcess[str]:
        return subprocess.run(argv, capture_output=True, text=True, timeout=self._timeout)

    def run(self, command: str, *args: str) -> str:
        """Run ``command`` with ``args`` and return its stdout.

        Raises:
            CollaboratorError: the executable is missing, timed out or exited non-zero.
        """
        argv = [self._executable(command), *args]
        log.debug("termux.run", command=command, argc=len(args))

        try:
            proc = self._spawn(argv)
        except FileNotFoundError as exc:
            log.error("termux.command_missing", command=command)
            raise CollaboratorError(f"{command} is not installed") from exc
        except subprocess.TimeoutExpired as exc:
            log.error("termux.command_timeout", command=command, timeout=self._timeout)
            raise CollaboratorError(f"{command} timed out after {self._timeout}s") from exc

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            log.error(
                "termux.command_failed",
                command=command,
                returncode=proc.returncode,
                stderr=stderr,
            )
            raise CollaboratorError(
                f"{command} exited with status {proc.returncode}",
                details={"stderr": stderr} if stderr else None,
            )

        return proc.stdout

    def run_json(self, type_: Any, command: str, *args: str) -> Any:
        """Run ``command`` and validate its JSON stdout against ``type_``."""
        out = self.run(command, *args)
        try:
            return TypeAdapter(type_).validate_json(out)
        except ValidationError as exc:
            log.error("termux.malformed_output", command=command, errors=exc.error_count())
            raise CollaboratorError(f"{command} returned malformed output") from exc
