"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Infrastructure: mock_settings, mock_logfire, logfire_capture, test_client
2. Messaging: recording_messaging, failing_messaging, recording_dispatcher
3. Webhook payloads: make_text_event, make_list_reply_event, make_message
"""

import os
from contextlib import contextmanager
from unittest.mock import MagicMock, Mock, patch

import pytest

os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

from src.config import Settings
from src.models.whatsapp import InboundMessage, OutboundPayload
from src.services.reply_dispatcher import ReplyDispatcher

TEST_PHONE_NUMBER_ID = "109876543210"
TEST_SENDER = "15551234567"


def build_settings(**overrides) -> Settings:
    """Settings for tests, isolated from any local .env file."""
    values = {
        "whatsapp_webhook_verify_token": "test-verify-token",
        "meta_access_token": "test-access-token",
        "whatsapp_phone_number_id": TEST_PHONE_NUMBER_ID,
        "env": "local",
        "logfire_token": None,
        "sentry_dsn": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


# =============================================================================
# Infrastructure
# =============================================================================


@pytest.fixture
def mock_settings(monkeypatch):
    """Mock application settings for the lifespan and the request handlers."""
    from src.config import get_settings
    from src.main import app

    settings = build_settings()

    monkeypatch.setattr("src.config.get_settings", lambda: settings)
    monkeypatch.setattr("src.main.get_settings", lambda: settings)
    app.dependency_overrides[get_settings] = lambda: settings
    yield settings
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def mock_logfire(monkeypatch):
    """
    Mock Logfire for testing without actual logging.

    Useful for tests that don't need to verify logging behavior.
    """

    @contextmanager
    def mock_span(*args, **kwargs):
        yield {}

    mock_logfire_module = MagicMock()
    mock_logfire_module.info = Mock()
    mock_logfire_module.warn = Mock()
    mock_logfire_module.error = Mock()
    mock_logfire_module.span = mock_span
    mock_logfire_module.configure = Mock()
    mock_logfire_module.instrument_fastapi = Mock()
    mock_logfire_module.instrument_httpx = Mock()
    mock_logfire_module.instrument_pydantic = Mock()

    for module in (
        "src.main",
        "src.logging_config",
        "src.middleware.correlation_id",
        "src.services.whatsapp_service",
        "src.services.messaging_protocol",
        "src.services.reply_dispatcher",
    ):
        monkeypatch.setattr(f"{module}.logfire", mock_logfire_module)

    return mock_logfire_module


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    This fixture patches Logfire to capture log calls for assertion.
    """
    captured_logs = []

    def capture(level):
        def _capture(*args, **kwargs):
            captured_logs.append((level, args, kwargs))

        return _capture

    with (
        patch("logfire.info", side_effect=capture("info")),
        patch("logfire.warn", side_effect=capture("warn")),
        patch("logfire.error", side_effect=capture("error")),
    ):
        yield captured_logs


@pytest.fixture
def test_client(mock_settings, mock_logfire):
    """FastAPI TestClient for E2E tests (lifespan not started)."""
    from fastapi.testclient import TestClient

    from src.main import app

    return TestClient(app)


# =============================================================================
# Messaging
# =============================================================================


class RecordingMessagingService:
    """In-memory MessagingService that records every payload it is given."""

    def __init__(self, should_fail_send: bool = False):
        self._should_fail_send = should_fail_send
        self.sent: list[OutboundPayload] = []

    async def send(self, payload: OutboundPayload) -> bool:
        self.sent.append(payload)
        return not self._should_fail_send


@pytest.fixture
def recording_messaging():
    return RecordingMessagingService()


@pytest.fixture
def failing_messaging():
    return RecordingMessagingService(should_fail_send=True)


@pytest.fixture
def recording_dispatcher(monkeypatch, recording_messaging):
    """Route the webhook's dispatcher through recording_messaging."""
    dispatcher = ReplyDispatcher(messaging=recording_messaging)
    monkeypatch.setattr(
        "src.api.webhook.get_reply_dispatcher", lambda settings: dispatcher
    )
    return recording_messaging


# =============================================================================
# Webhook payloads
# =============================================================================


def make_event(messages: list[dict] | None = None, object_type="whatsapp_business_account") -> dict:
    """Wrap messages in a WhatsApp webhook envelope."""
    value = {
        "messaging_product": "whatsapp",
        "metadata": {
            "display_phone_number": "15550001111",
            "phone_number_id": TEST_PHONE_NUMBER_ID,
        },
    }
    if messages is not None:
        value["contacts"] = [{"profile": {"name": "Test User"}, "wa_id": TEST_SENDER}]
        value["messages"] = messages
    return {
        "object": object_type,
        "entry": [{"id": "waba-1", "changes": [{"field": "messages", "value": value}]}],
    }


def text_message(body: str, sender: str = TEST_SENDER) -> dict:
    return {
        "from": sender,
        "id": "wamid.text",
        "timestamp": "1700000000",
        "type": "text",
        "text": {"body": body},
    }


def list_reply_message(option_id: str, sender: str = TEST_SENDER) -> dict:
    return {
        "from": sender,
        "id": "wamid.list",
        "timestamp": "1700000000",
        "type": "interactive",
        "interactive": {
            "type": "list_reply",
            "list_reply": {"id": option_id, "title": f"{option_id} – option"},
        },
    }


@pytest.fixture
def make_text_event():
    return lambda body, sender=TEST_SENDER: make_event([text_message(body, sender)])


@pytest.fixture
def make_list_reply_event():
    return lambda option_id, sender=TEST_SENDER: make_event(
        [list_reply_message(option_id, sender)]
    )


@pytest.fixture
def make_message():
    """Build an InboundMessage from a raw webhook message dict."""
    return InboundMessage.model_validate


@pytest.fixture
def make_webhook_event():
    """Build a raw webhook envelope around arbitrary message dicts."""
    return make_event


@pytest.fixture
def settings():
    """Standalone settings for unit tests that take Settings explicitly."""
    return build_settings()


@pytest.fixture
def settings_factory():
    """Build settings with field overrides."""
    return build_settings
