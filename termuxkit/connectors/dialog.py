from __future__ import annotations

import structlog

from termuxkit.config import Settings, settings as default_settings
from termuxkit.connectors.termux import TermuxRunner
from termuxkit.core.errors import CollaboratorError, InputCancelled, SelectionCancelled
from termuxkit.schemas.dialog import Choice, DialogResult

log = structlog.get_logger()


def _option_label(option: str) -> str:
    # termux-dialog splits -v on commas; a comma inside a label would shift every index after it.
    return option.replace(",", ";")


class TermuxDialog:
    """Modal prompts shown on the device through termux-dialog and termux-confirm."""

    def __init__(self, runner: TermuxRunner, s: Settings | None = None):
        self._runner = runner
        self._settings = s or default_settings

    def _dialog(self, *args: str) -> DialogResult:
        return self._runner.run_json(DialogResult, "termux-dialog", *args)

    def radio(self, options: list[str]) -> Choice:
        """Ask the user to pick exactly one of ``options``.

        Returns:
            The chosen 0-based index and its label.

        Raises:
            SelectionCancelled: the user dismissed the dialog.
            CollaboratorError: the dialog reported an index outside ``options``.
        """
        values = ",".join(_option_label(o) for o in options)
        result = self._dialog("radio", "-t", self._settings.dialog_select_title, "-v", values)
        if not result.accepted:
            log.info("dialog.radio_cancelled", code=result.code)
            raise SelectionCancelled("Selection cancelled")
        if result.index is None or not 0 <= result.index < len(options):
            raise CollaboratorError(
                "termux-dialog returned an invalid selection",
                details={"index": result.index, "options": len(options)},
            )
        return Choice(index=result.index, text=options[result.index])

    # The contact resolver only needs a single-choice prompt.
    choose = radio

    def checkbox(self, options: list[str]) -> list[Choice]:
        values = ",".join(_option_label(o) for o in options)
        result = self._dialog("checkbox", "-t", self._settings.dialog_select_title, "-v", values)
        if not result.accepted:
            log.info("dialog.checkbox_cancelled", code=result.code)
            raise SelectionCancelled("Selection cancelled")

        choices = []
        for value in result.values:
            if not 0 <= value.index < len(options):
                raise CollaboratorError(
                    "termux-dialog returned an invalid selection",
                    details={"index": value.index, "options": len(options)},
                )
            choices.append(Choice(index=value.index, text=options[value.index]))
        return choices

    def ask_name(self) -> str:
        """Single-line text prompt."""
        result = self._dialog("-t", self._settings.dialog_name_title)
        if not result.accepted:
            raise InputCancelled("Input cancelled")
        return result.text

    def ask_text(self) -> str:
        """Multi-line text prompt."""
        result = self._dialog("-m", "-t", self._settings.dialog_text_title)
        if not result.accepted:
            raise InputCancelled("Input cancelled")
        return result.text

    def confirm(self) -> bool:
        result = self._runner.run_json(DialogResult, "termux-confirm")
        return result.text == "yes"
