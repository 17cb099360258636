"""Core types for the Telegram log hook.

Enums, request/response envelopes and the error raised for API-reported
failures live here so the client and hook modules share one vocabulary.

Usage:
    from telegram_hook.types import ApiRequest, ApiResponse, Level
"""

from .api import ApiRequest, ApiResponse
from .enums import PANIC_LEVEL, Level
from .errors import TelegramAPIError

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "Level",
    "PANIC_LEVEL",
    "TelegramAPIError",
]
