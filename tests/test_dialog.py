"""Tests for termux-dialog / termux-confirm wrappers."""

import pytest

from termuxkit.connectors.dialog import TermuxDialog
from termuxkit.core.errors import CollaboratorError, InputCancelled, SelectionCancelled


@pytest.fixture
def dialog(runner, test_settings):
    return TermuxDialog(runner, test_settings)


def test_radio_returns_original_label(dialog, runner):
    runner.reply("termux-dialog", {"code": -1, "text": "Smith; John", "index": 0})

    choice = dialog.radio(["Smith, John", "Doe"])

    assert choice.index == 0
    assert choice.text == "Smith, John"
    # commas inside a label must not add options
    assert runner.calls[0][-1] == "Smith; John,Doe"


def test_radio_out_of_range_index(dialog, runner):
    runner.reply("termux-dialog", {"code": -1, "text": "x", "index": 5})
    with pytest.raises(CollaboratorError):
        dialog.radio(["a", "b"])


def test_radio_cancel(dialog, runner):
    runner.reply("termux-dialog", {"code": -2, "text": ""})
    with pytest.raises(SelectionCancelled):
        dialog.choose(["a", "b"])


def test_checkbox(dialog, runner):
    runner.reply(
        "termux-dialog",
        {
            "code": -1,
            "text": "[a, c]",
            "values": [{"index": 0, "text": "a"}, {"index": 2, "text": "c"}],
        },
    )

    choices = dialog.checkbox(["a", "b", "c"])

    assert [(c.index, c.text) for c in choices] == [(0, "a"), (2, "c")]
    assert runner.calls[0][:2] == ["termux-dialog", "checkbox"]


def test_checkbox_cancel(dialog, runner):
    runner.reply("termux-dialog", {"code": -2, "text": ""})
    with pytest.raises(SelectionCancelled):
        dialog.checkbox(["a"])


def test_ask_name(dialog, runner):
    runner.reply("termux-dialog", {"code": -1, "text": "Bob"})
    assert dialog.ask_name() == "Bob"
    assert runner.calls[0] == ["termux-dialog", "-t", "  NAME"]


def test_ask_text_multiline(dialog, runner):
    runner.reply("termux-dialog", {"code": -1, "text": "line one\nline two"})
    assert dialog.ask_text() == "line one\nline two"
    assert runner.calls[0] == ["termux-dialog", "-m", "-t", "  TEXT"]


def test_ask_text_cancel(dialog, runner):
    runner.reply("termux-dialog", {"code": -2, "text": ""})
    with pytest.raises(InputCancelled):
        dialog.ask_text()


@pytest.mark.parametrize("answer,expected", [("yes", True), ("no", False), ("", False)])
def test_confirm(dialog, runner, answer, expected):
    runner.reply("termux-confirm", {"code": -1, "text": answer})
    assert dialog.confirm() is expected
