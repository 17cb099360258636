"""Forward error-level log records to a Telegram chat."""

from .buffers import BufferPool, MarshalingEncoder, RequestBuffer, TextBuffer, dumps_json, write_json
from .client import TelegramClient
from .config import Settings, get_settings
from .formatter import ERROR_KEY, format_message, write_message
from .hook import TelegramHook, record_fields
from .logging_config import configure_logging
from .types import PANIC_LEVEL, ApiRequest, ApiResponse, Level, TelegramAPIError

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "BufferPool",
    "ERROR_KEY",
    "Level",
    "MarshalingEncoder",
    "PANIC_LEVEL",
    "RequestBuffer",
    "Settings",
    "TelegramAPIError",
    "TelegramClient",
    "TelegramHook",
    "TextBuffer",
    "configure_logging",
    "dumps_json",
    "format_message",
    "get_settings",
    "record_fields",
    "write_json",
    "write_message",
]

__version__ = "0.1.0"
