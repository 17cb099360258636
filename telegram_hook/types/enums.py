from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional

PANIC_LEVEL = 60

logging.addLevelName(PANIC_LEVEL, "PANIC")


class Level(IntEnum):
    """Severities the hook reports, expressed as stdlib ``logging`` levels.

    The values are the numeric ``levelno`` a ``LogRecord`` carries, so a
    ``Level`` compares equal to the raw integer and can be passed straight to
    ``Logger.log``:

        >>> import logging
        >>> from telegram_hook.types import Level
        >>> logging.getLogger("app").log(Level.PANIC, "disk gone")

    - ERROR: ``logging.ERROR``
    - FATAL: ``logging.CRITICAL``
    - PANIC: above CRITICAL, registered under the name ``PANIC``
    """

    ERROR = logging.ERROR
    FATAL = logging.CRITICAL
    PANIC = PANIC_LEVEL

    @classmethod
    def from_levelno(cls, levelno: int) -> Optional["Level"]:
        try:
            return cls(levelno)
        except ValueError:
            return None
