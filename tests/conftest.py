import json
import subprocess

import pytest

from termuxkit.config import Settings
from termuxkit.connectors.termux import TermuxRunner
from termuxkit.schemas.action_plan import ActionPlan, ActionStep, RiskLevel
from termuxkit.tools.base import ToolContext


class FakeRunner(TermuxRunner):
    """TermuxRunner whose child processes are canned replies keyed by executable."""

    def __init__(self, replies=None):
        super().__init__()
        self.replies = dict(replies or {})
        self.calls: list[list[str]] = []

    def reply(self, command, stdout="", returncode=0, stderr=""):
        if not isinstance(stdout, str):
            stdout = json.dumps(stdout)
        self.replies[command] = (stdout, returncode, stderr)

    def commands(self) -> list[str]:
        return [argv[0] for argv in self.calls]

    def _spawn(self, argv):
        self.calls.append(argv)
        reply = self.replies.get(argv[0])
        if reply is None:
            raise FileNotFoundError(argv[0])
        if isinstance(reply, tuple):
            stdout, returncode, stderr = reply
        else:
            stdout, returncode, stderr = reply, 0, ""
        return subprocess.CompletedProcess(argv, returncode, stdout, stderr)


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, photo_dir="/sdcard/photos")


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def tool_context(runner, test_settings):
    return ToolContext(runner=runner, settings=test_settings)


@pytest.fixture
def snapshot():
    return [
        {"name": "Alice Smith", "number": "+1"},
        {"name": "bob", "number": "+2"},
        {"name": "ALICE Jones", "number": "+3"},
    ]


@pytest.fixture
def sample_plan():
    return ActionPlan(
        description="Copy the login code",
        steps=[
            ActionStep(
                tool_name="sms.copy_code",
                risk_level=RiskLevel.low,
                requires_confirmation=False,
            )
        ],
    )


@pytest.fixture
def outbound_plan():
    return ActionPlan(
        description="Text Bob",
        steps=[
            ActionStep(
                tool_name="sms.send",
                args={"contact": "bob", "text": "on my way"},
                risk_level=RiskLevel.low,
                requires_confirmation=False,
            )
        ],
    )
