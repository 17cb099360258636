"""Logging configuration for the Telegram hook."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import get_settings

# Delivery failures are reported here. The logger keeps its own stderr
# handler and never propagates, so a TelegramHook on the root logger cannot
# receive (and try to deliver) reports about its own failures.
diagnostics = logging.getLogger("telegram_hook.diagnostics")


def _configure_diagnostics() -> None:
    if diagnostics.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    diagnostics.addHandler(handler)
    diagnostics.setLevel(logging.ERROR)
    diagnostics.propagate = False


_configure_diagnostics()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure process logging with a plain format and configurable level."""
    log_level = (level or get_settings().log_level).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Suppress noisy HTTP client logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
