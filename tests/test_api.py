"""Tests for the HTTP surface."""

import asyncio
import threading
from datetime import timedelta

import httpx
import pytest
from fastapi.testclient import TestClient

from termuxkit.api import command
from termuxkit.config import settings
from termuxkit.dependencies import get_tool_context
from termuxkit.main import app


@pytest.fixture
def client(tool_context):
    app.dependency_overrides[get_tool_context] = lambda: tool_context
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client, monkeypatch):
    monkeypatch.setattr("shutil.which", lambda cmd: f"/bin/{cmd}")
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert "contacts" in resp.json()["skills"]


def test_list_tools(client):
    resp = client.get("/tools")
    assert resp.status_code == 200
    assert "contacts.resolve" in {t["name"] for t in resp.json()["tools"]}


def test_token_required_when_configured(client, monkeypatch):
    monkeypatch.setattr(settings, "api_token", "s3cret")
    assert client.get("/tools").status_code == 401
    assert client.get("/tools", headers={"Authorization": "Bearer wrong"}).status_code == 401
    assert client.get("/tools", headers={"Authorization": "Bearer s3cret"}).status_code == 200


def test_resolve_contact_unique(client, runner, snapshot):
    runner.reply("termux-contact-list", snapshot)

    resp = client.post("/contacts/resolve", json={"query": "bob"})

    assert resp.status_code == 200
    assert resp.json() == {"status": "resolved", "contact": {"name": "bob", "number": "+2"}, "candidates": []}


def test_resolve_contact_ambiguous(client, runner, snapshot):
    runner.reply("termux-contact-list", snapshot)

    resp = client.post("/contacts/resolve", json={"query": "alice"})

    body = resp.json()
    assert body["status"] == "ambiguous"
    assert [c["name"] for c in body["candidates"]] == ["Alice Smith", "ALICE Jones"]


def test_resolve_contact_interactive(client, runner, snapshot):
    runner.reply("termux-contact-list", snapshot)
    runner.reply("termux-dialog", {"code": -1, "text": "ALICE Jones", "index": 1})

    resp = client.post("/contacts/resolve", json={"query": "alice", "interactive": True})

    assert resp.json()["contact"] == {"name": "ALICE Jones", "number": "+3"}


@pytest.mark.parametrize(
    "contacts,query,status,kind",
    [
        ([{"name": "bob", "number": "+2"}], "carol", 404, "not_found"),
        ([], "bob", 404, "empty_address_book"),
        ([{"name": "bob", "number": "+2"}], "", 422, "invalid_input"),
    ],
)
def test_resolve_contact_errors(client, runner, contacts, query, status, kind):
    runner.reply("termux-contact-list", contacts)

    resp = client.post("/contacts/resolve", json={"query": query})

    assert resp.status_code == status
    assert resp.json()["kind"] == kind


def test_resolve_contact_cancelled(client, runner, snapshot):
    runner.reply("termux-contact-list", snapshot)
    runner.reply("termux-dialog", {"code": -2, "text": ""})

    resp = client.post("/contacts/resolve", json={"query": "alice", "interactive": True})

    assert resp.status_code == 409
    assert resp.json()["kind"] == "selection_cancelled"


def test_collaborator_failure_is_bad_gateway(client, runner):
    resp = client.post("/contacts/resolve", json={"query": "bob"})
    assert resp.status_code == 502
    assert resp.json()["kind"] == "collaborator_error"


def test_command_with_outbound_step_waits_for_confirmation(client, runner):
    runner.reply("termux-sms-list", [{"body": "code 9876"}])
    runner.reply("termux-clipboard-set", "")
    runner.reply("termux-sms-send", "")

    resp = client.post(
        "/command",
        json={
            "steps": [
                {"tool_name": "sms.copy_code"},
                {"tool_name": "sms.send", "args": {"number": "+2", "text": "9876"}},
            ]
        },
    )
    body = resp.json()
    assert resp.status_code == 200
    assert body["requires_confirmation"] is True
    assert body["confirmation_prompt"] == "This will send an SMS to +2. Confirm?"
    assert "termux-sms-send" not in runner.commands()

    resp = client.post("/command/confirm", json={"plan_id": body["plan_id"]})
    confirmed = resp.json()
    assert confirmed["all_succeeded"] is True
    assert confirmed["results"][0]["result"] == {"skipped": True}
    assert runner.commands().count("termux-sms-list") == 1
    assert runner.calls[-1] == ["termux-sms-send", "-n", "+2", "9876"]


def test_command_unknown_tool(client):
    resp = client.post("/command", json={"steps": [{"tool_name": "nope.nothing"}]})
    assert resp.status_code == 422


def test_confirm_unknown_plan(client):
    resp = client.post("/command/confirm", json={"plan_id": "missing"})
    assert resp.status_code == 404


def test_command_failure_reports_kind(client, runner):
    runner.reply("termux-sms-list", [])
    resp = client.post("/command", json={"steps": [{"tool_name": "sms.last"}]})
    body = resp.json()
    assert body["all_succeeded"] is False
    assert body["results"][0]["error_kind"] == "no_messages"


def test_outbound_step_without_recipient_is_forbidden(client, runner):
    resp = client.post("/command", json={"steps": [{"tool_name": "telephony.call"}]})

    assert resp.status_code == 403
    assert resp.json()["detail"] == "telephony.call needs a number or a contact"
    assert runner.calls == []


def _outbound_command(client, number="+2"):
    resp = client.post(
        "/command",
        json={"steps": [{"tool_name": "sms.send", "args": {"number": number, "text": "hi"}}]},
    )
    assert resp.json()["requires_confirmation"] is True
    return resp.json()["plan_id"]


def test_confirm_expired_plan(client, runner):
    runner.reply("termux-sms-send", "")
    plan_id = _outbound_command(client)
    command._pending_plans[plan_id][0].created_at -= timedelta(hours=1)

    resp = client.post("/command/confirm", json={"plan_id": plan_id})

    assert resp.status_code == 404
    assert plan_id not in command._pending_plans
    assert "termux-sms-send" not in runner.commands()


def test_pending_plans_are_capped(client, runner, test_settings, monkeypatch):
    runner.reply("termux-sms-send", "")
    monkeypatch.setattr(test_settings, "max_pending_plans", 1)

    first = _outbound_command(client, "+1")
    second = _outbound_command(client, "+2")

    assert list(command._pending_plans) == [second]
    assert client.post("/command/confirm", json={"plan_id": first}).status_code == 404
    assert client.post("/command/confirm", json={"plan_id": second}).json()["all_succeeded"] is True
    assert runner.calls[-1] == ["termux-sms-send", "-n", "+2", "hi"]


def test_expired_plans_pruned_on_store(client, runner):
    runner.reply("termux-sms-send", "")
    stale = _outbound_command(client, "+1")
    command._pending_plans[stale][0].created_at -= timedelta(hours=1)

    fresh = _outbound_command(client, "+2")

    assert stale not in command._pending_plans
    assert fresh in command._pending_plans


@pytest.mark.asyncio
async def test_open_dialog_does_not_block_health(tool_context, runner, snapshot, monkeypatch):
    monkeypatch.setattr("shutil.which", lambda cmd: f"/bin/{cmd}")
    runner.reply("termux-contact-list", snapshot)
    runner.reply("termux-dialog", {"code": -1, "text": "ALICE Jones", "index": 1})

    entered = threading.Event()
    release = threading.Event()
    dialog_timed_out = []
    spawn = runner._spawn

    def slow_spawn(argv):
        if argv[0] == "termux-dialog":
            entered.set()
            dialog_timed_out.append(not release.wait(2))
        return spawn(argv)

    monkeypatch.setattr(runner, "_spawn", slow_spawn)
    app.dependency_overrides[get_tool_context] = lambda: tool_context
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            resolve = asyncio.create_task(
                ac.post("/contacts/resolve", json={"query": "alice", "interactive": True})
            )
            assert await asyncio.to_thread(entered.wait, 2)

            health = await asyncio.wait_for(ac.get("/health"), timeout=1)
            assert health.status_code == 200
            assert not resolve.done()

            release.set()
            resp = await resolve
    finally:
        app.dependency_overrides.clear()

    assert dialog_timed_out == [False]
    assert resp.json()["contact"] == {"name": "ALICE Jones", "number": "+3"}
