from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from .client import TelegramClient
from .config import DEFAULT_API_URL, Settings, get_settings
from .formatter import ERROR_KEY, write_message
from .logging_config import diagnostics
from .types import Level

# Attributes every LogRecord carries; anything else was supplied via ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

# Records from these loggers are never forwarded, they are emitted while a
# message is being delivered.
_SKIPPED_LOGGERS = ("httpx", "httpcore", "telegram_hook")


def _is_skipped(name: str) -> bool:
    return any(name == p or name.startswith(p + ".") for p in _SKIPPED_LOGGERS)


def record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the ``extra=`` fields of ``record``.

    An exception attached through ``exc_info`` is exposed under ``error``
    unless the caller already set that field.
    """
    fields = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
    if ERROR_KEY not in fields and record.exc_info and record.exc_info[1] is not None:
        fields[ERROR_KEY] = record.exc_info[1]
    return fields


class TelegramHook(logging.Handler):
    """``logging.Handler`` that posts ERROR and above to a Telegram chat.

    Build one with ``TelegramHook.create`` (verifies the token first) and
    attach it like any other handler:

        >>> hook = TelegramHook.create("billing", token, chat_id)
        >>> logging.getLogger().addHandler(hook)
        >>> logging.getLogger("billing").error("charge failed", extra={"order": 17})

    Delivery is synchronous and attempted once. ``fire`` raises on failure;
    ``emit`` hands the failure to ``Handler.handleError``.
    """

    def __init__(self, client: TelegramClient, level: int = logging.ERROR) -> None:
        super().__init__(level)
        self.client = client

    @classmethod
    def create(
        cls,
        app_name: str,
        auth_token: str,
        chat_id: Union[int, str],
        *,
        level: int = logging.ERROR,
        http_client: Optional[httpx.Client] = None,
        api_url: str = DEFAULT_API_URL,
    ) -> "TelegramHook":
        client = TelegramClient(
            app_name, auth_token, chat_id, http_client=http_client, api_url=api_url
        )
        return cls(client, level=level)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs: Any) -> "TelegramHook":
        settings = settings or get_settings()
        return cls.create(
            settings.app_name,
            settings.telegram_token,
            settings.chat_id,
            api_url=settings.telegram_api_url,
            **kwargs,
        )

    @staticmethod
    def levels() -> List[Level]:
        return [Level.ERROR, Level.FATAL, Level.PANIC]

    def fire(self, record: logging.LogRecord) -> None:
        """Format ``record`` and deliver it, raising if delivery fails."""
        fields = record_fields(record)
        with self.client.text_buffers.acquire() as buff:
            try:
                write_message(buff, record.levelno, record.getMessage(), fields, self.client.app_name)
                self.client.send_message(buff)
            except Exception as e:
                diagnostics.error("Unable to send message, %s", e)
                raise

    def emit(self, record: logging.LogRecord) -> None:
        if _is_skipped(record.name):
            return
        try:
            self.fire(record)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.client.close()
        finally:
            super().close()
