"""Tests for the HTTP entry point and plugin loading."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

import main
import plugins.github as github_plugin


@pytest.fixture
def client(config_file):
    with TestClient(main.app) as test_client:
        yield test_client


def test_startup_subscribes_github_plugin(client):
    assert main.app.state.event_subscriptions == {"message": ["github"]}
    assert "github" in main.loaded_plugins
    assert github_plugin._notifier is not None


def test_command_reply_is_returned(client):
    resp = client.post("/", json={
        "post_type": "message",
        "message_type": "group",
        "user_id": 10001,
        "group_id": 100,
        "raw_message": "/githuboff",
        "sender": {"user_id": 10001, "role": "member"},
    })

    assert resp.status_code == 200
    assert resp.json() == {"reply": "GitHub URL details are now OFF for 100"}


def test_unhandled_event_returns_empty(client):
    resp = client.post("/", json={
        "post_type": "message",
        "message_type": "group",
        "user_id": 20002,
        "group_id": 100,
        "raw_message": "good morning",
        "sender": {"user_id": 20002, "role": "member"},
    })

    assert resp.json() == {}


def test_unsubscribed_post_type_returns_empty(client):
    resp = client.post("/", json={"post_type": "meta_event", "meta_event_type": "heartbeat"})

    assert resp.json() == {}


def test_shutdown_unloads_plugins(config_file):
    with TestClient(main.app):
        pass

    assert main.loaded_plugins == {}
    assert github_plugin._notifier is None


def test_failing_plugin_does_not_break_dispatch(client, monkeypatch):
    broken = SimpleNamespace(on_event=MagicMock(side_effect=RuntimeError("boom")))
    monkeypatch.setitem(main.loaded_plugins, "broken", broken)
    monkeypatch.setattr(main.app.state, "event_subscriptions", {"notice": ["broken"]})

    resp = client.post("/", json={"post_type": "notice"})

    assert resp.status_code == 200
    assert resp.json() == {}
    broken.on_event.assert_called_once()
