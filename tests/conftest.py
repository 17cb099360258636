import logging
from typing import Any, Dict, Optional

import httpx
import pytest
import respx

from telegram_hook.config import get_settings
from telegram_hook.logging_config import diagnostics

TOKEN = "123456:test-token"
CHAT_ID = 42
BASE = f"https://api.telegram.org/bot{TOKEN}"
GETME_URL = f"{BASE}/getme"
SEND_URL = f"{BASE}/sendmessage"

GETME_OK: Dict[str, Any] = {
    "ok": True,
    "result": {"id": 123456, "is_bot": True, "first_name": "Logs", "username": "logs_bot"},
}
SEND_OK: Dict[str, Any] = {"ok": True, "result": {"message_id": 1}}


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TELEGRAM_APP_NAME", "testing")
    monkeypatch.setenv("TELEGRAM_TOKEN", TOKEN)
    monkeypatch.setenv("TELEGRAM_TARGET", str(CHAT_ID))
    monkeypatch.delenv("TELEGRAM_API_URL", raising=False)
    get_settings.cache_clear()


@pytest.fixture()
def diag(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture what the hook reports on its diagnostic stream."""
    monkeypatch.setattr(diagnostics, "propagate", True)
    caplog.set_level(logging.ERROR, logger=diagnostics.name)
    return caplog


def mock_getme(json: Optional[Dict[str, Any]] = None, status_code: int = 200) -> respx.Route:
    return respx.get(GETME_URL).mock(
        return_value=httpx.Response(status_code, json=json if json is not None else GETME_OK)
    )


def mock_send(json: Optional[Dict[str, Any]] = None, status_code: int = 200) -> respx.Route:
    return respx.post(SEND_URL).mock(
        return_value=httpx.Response(status_code, json=json if json is not None else SEND_OK)
    )
