"""
Tests for the Slack gateway: signed slash command webhook, acknowledgement
body, follow-up via response_url and manifest publishing.
"""

import hashlib
import hmac
import time
from types import SimpleNamespace
from urllib.parse import urlencode

import httpx
import pytest

from finbot.adapters.slack import slack_adapter as slack_adapter_module
from finbot.adapters.slack.slack_adapter import SlackBotAdapter, SlackReplyError
from finbot.adapters.slack.slack_formatter import SlackFormatter
from finbot.adapters.slack.slack_routes import _verify_slack_signature
from finbot import fastapi_app as fastapi_app_module
from finbot.config.settings import Config
from finbot.fastapi_app import create_fastapi_app

SIGNING_SECRET = "test-signing-secret"
RESPONSE_URL = "https://hooks.slack.test/commands/T1/123/abc"


class FakeWebClient:
    def __init__(self, fail_login: bool = False):
        self.fail_login = fail_login
        self.manifest_updates: list[dict] = []
        self.manifest = {"display_information": {"name": "finbot"}, "features": {}}

    async def auth_test(self):
        if self.fail_login:
            raise ConnectionError("invalid_auth")
        return {"ok": True, "user": "finbot", "team": "Finapp"}

    async def apps_manifest_export(self, app_id: str):
        return {"ok": True, "manifest": self.manifest}

    async def apps_manifest_update(self, app_id: str, manifest: dict):
        self.manifest_updates.append(manifest)
        return {"ok": True}


class RecordingWebhook:
    """Stands in for slack_sdk's AsyncWebhookClient; keeps every posted body."""

    sent: list[tuple[str, dict]] = []
    status_code = 200

    def __init__(self, url: str):
        self.url = url

    async def send(self, **kwargs):
        RecordingWebhook.sent.append((self.url, kwargs))
        return SimpleNamespace(status_code=RecordingWebhook.status_code, body="ok")


def _sign(body: str | bytes, timestamp: str | None = None) -> dict:
    timestamp = timestamp or str(int(time.time()))
    raw = body.encode("utf-8") if isinstance(body, str) else body
    digest = hmac.new(
        SIGNING_SECRET.encode("utf-8"),
        b"v0:" + timestamp.encode() + b":" + raw,
        hashlib.sha256,
    ).hexdigest()
    return {
        "X-Slack-Request-Timestamp": timestamp,
        "X-Slack-Signature": f"v0={digest}",
        "Content-Type": "application/x-www-form-urlencoded",
    }


def _form(command: str, text: str = "") -> str:
    return urlencode(
        {
            "command": command,
            "text": text,
            "response_url": RESPONSE_URL,
            "user_id": "U123",
            "channel_id": "C123",
            "team_id": "T1",
        }
    )


@pytest.fixture(autouse=True)
def slack_settings(monkeypatch):
    monkeypatch.setattr(Config, "SLACK_ENABLED", True)
    monkeypatch.setattr(Config, "SLACK_SIGNING_SECRET", SIGNING_SECRET)
    monkeypatch.setattr(Config, "SLACK_APP_ID", "")
    monkeypatch.setattr(Config, "SLACK_COMMANDS_URL", "")
    monkeypatch.setattr(slack_adapter_module, "AsyncWebhookClient", RecordingWebhook)
    RecordingWebhook.sent = []
    RecordingWebhook.status_code = 200


@pytest.fixture()
def web_client():
    return FakeWebClient()


@pytest.fixture()
def adapter(dispatcher, web_client):
    return SlackBotAdapter(dispatcher, client=web_client, config_client=web_client)


@pytest.fixture()
async def client(adapter):
    app = create_fastapi_app(adapter=adapter)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestSlashCommandRoute:
    async def test_acknowledges_then_posts_reply(self, client, adapter):
        await adapter.start()
        body = _form("/car", "count")

        response = await client.post("/slack/commands", content=body, headers=_sign(body))
        await adapter.stop(grace=1)

        assert response.status_code == 200
        assert response.json() == {
            "response_type": "ephemeral",
            "text": ":hourglass_flowing_sand: Processing `/car count`...",
        }
        ((url, sent),) = RecordingWebhook.sent
        assert url == RESPONSE_URL
        assert sent["response_type"] == "in_channel"
        assert "42" in sent["text"]
        assert sent["blocks"][0]["text"]["type"] == "mrkdwn"

    async def test_unknown_command_replies_with_hint(self, client, adapter):
        await adapter.start()
        body = _form("/bogus")

        response = await client.post("/slack/commands", content=body, headers=_sign(body))
        await adapter.stop(grace=1)

        assert response.status_code == 200
        ((_, sent),) = RecordingWebhook.sent
        assert "Unknown command `/bogus`" in sent["text"]

    async def test_rejects_bad_signature(self, client, adapter, backend):
        await adapter.start()
        body = _form("/car", "count")
        headers = _sign(body)
        headers["X-Slack-Signature"] = "v0=deadbeef"

        response = await client.post("/slack/commands", content=body, headers=headers)
        await adapter.stop(grace=1)

        assert response.status_code == 401
        assert RecordingWebhook.sent == []
        assert backend.resolved == {}

    async def test_rejects_stale_timestamp(self, client, adapter):
        await adapter.start()
        body = _form("/car", "count")
        stale = str(int(time.time()) - 600)

        response = await client.post(
            "/slack/commands", content=body, headers=_sign(body, timestamp=stale)
        )
        await adapter.stop(grace=1)

        assert response.status_code == 401

    async def test_non_utf8_body_with_bad_signature_is_unauthorized(self, client, adapter):
        await adapter.start()
        body = b"command=%2Fcar&text=\xff\xfe"
        headers = _sign(b"something else")

        response = await client.post("/slack/commands", content=body, headers=headers)
        await adapter.stop(grace=1)

        assert response.status_code == 401

    async def test_unavailable_until_serving(self, client):
        body = _form("/car", "count")

        response = await client.post("/slack/commands", content=body, headers=_sign(body))

        assert response.status_code == 503

    async def test_missing_response_url_is_bad_request(self, client, adapter):
        await adapter.start()
        body = urlencode({"command": "/car", "text": "count"})

        response = await client.post("/slack/commands", content=body, headers=_sign(body))
        await adapter.stop(grace=1)

        assert response.status_code == 400

    async def test_disabled_bot_short_circuits(self, client, monkeypatch):
        monkeypatch.setattr(Config, "SLACK_ENABLED", False)
        body = _form("/car", "count")

        response = await client.post("/slack/commands", content=body, headers=_sign(body))

        assert response.status_code == 200
        assert response.json()["text"] == "This bot is disabled."


class TestSlackBotAdapter:
    async def test_failed_follow_up_raises_reply_error(self, adapter):
        RecordingWebhook.status_code = 404

        with pytest.raises(SlackReplyError) as excinfo:
            await adapter.send_reply(RESPONSE_URL, "hello")

        assert excinfo.value.status_code == 404

    async def test_publishes_commands_to_manifest(self, adapter, web_client, monkeypatch):
        monkeypatch.setattr(Config, "SLACK_APP_ID", "A123")
        monkeypatch.setattr(Config, "SLACK_COMMANDS_URL", "https://bot.test/slack/commands")

        await adapter.start()
        await adapter.stop()

        (manifest,) = web_client.manifest_updates
        commands = {c["command"]: c for c in manifest["features"]["slash_commands"]}
        assert set(commands) == {"/car", "/budget", "/housing", "/investment"}
        assert commands["/budget"]["usage_hint"] == "count | total"
        assert commands["/car"]["url"] == "https://bot.test/slack/commands"

    async def test_skips_publishing_without_app_id(self, adapter, web_client):
        await adapter.start()
        await adapter.stop()

        assert web_client.manifest_updates == []

    async def test_publish_failure_does_not_block_serving(
        self, adapter, web_client, monkeypatch
    ):
        monkeypatch.setattr(Config, "SLACK_APP_ID", "A123")
        monkeypatch.setattr(Config, "SLACK_COMMANDS_URL", "https://bot.test/slack/commands")

        async def broken_export(app_id: str):
            raise ConnectionError("slack is down")

        web_client.apps_manifest_export = broken_export

        await adapter.start()

        assert adapter.state.value == "serving"
        await adapter.stop()


def test_reply_fallback_text_is_truncated():
    payload = SlackFormatter().format_reply("x" * 400)

    assert len(payload["text"]) == 150
    assert payload["blocks"][0]["text"]["text"] == "x" * 400


class TestSignatureVerification:
    def test_accepts_signed_non_utf8_body(self):
        body = b"text=\xff\xfe"
        headers = _sign(body)

        assert _verify_slack_signature(
            body,
            headers["X-Slack-Request-Timestamp"],
            headers["X-Slack-Signature"],
            SIGNING_SECRET,
        )

    @pytest.mark.parametrize("timestamp", ["", "yesterday", None])
    def test_rejects_unparseable_timestamp(self, timestamp):
        assert not _verify_slack_signature(b"x", timestamp, "v0=abc", SIGNING_SECRET)

    def test_rejects_non_ascii_signature(self):
        body = b"text=hi"
        headers = _sign(body)

        assert not _verify_slack_signature(
            body, headers["X-Slack-Request-Timestamp"], "v0=é", SIGNING_SECRET
        )


async def test_app_starts_without_gateway_when_slack_disabled(monkeypatch):
    monkeypatch.setattr(Config, "SLACK_ENABLED", False)
    monkeypatch.setattr(Config, "SLACK_BOT_TOKEN", "")
    monkeypatch.setattr(Config, "SLACK_SIGNING_SECRET", "")
    monkeypatch.setattr(Config, "DATABASE_URL", "postgresql://localhost/finapp")
    monkeypatch.setattr(fastapi_app_module, "setup_logging", lambda *args: None)

    def refuse_gateway(*args, **kwargs):
        raise AssertionError("Slack gateway built while disabled")

    monkeypatch.setattr(slack_adapter_module, "SlackBotAdapter", refuse_gateway)
    app = create_fastapi_app()

    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            health = (await client.get("/health")).json()
            reply = await client.post(
                "/slack/commands",
                content=_form("/car", "count"),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

    assert health["gateway"] == "absent"
    assert reply.json()["text"] == "This bot is disabled."
    assert getattr(app.state, "slack_adapter", None) is None
    assert RecordingWebhook.sent == []
