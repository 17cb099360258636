from __future__ import annotations

from typing import Optional

from .api import ApiResponse


class TelegramAPIError(RuntimeError):
    """Telegram answered a request with ``{"ok": false}``.

    Transport and decode failures are not wrapped in this type; they surface
    as the ``httpx`` / ``json`` / ``pydantic`` exceptions that caused them.
    """

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[int] = None,
        description: Optional[str] = None,
        response: Optional[ApiResponse] = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.description = description
        self.response = response
