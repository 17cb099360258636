"""Render a log event as an HTML message for the Telegram Bot API."""

from __future__ import annotations

from typing import IO, Any, Mapping

from .buffers import TextBuffer, dumps_json
from .types import Level

# Key under which an attached exception is expected in the record fields.
ERROR_KEY = "error"

_LEVEL_PREFIXES = {
    Level.PANIC: "<b>PANIC</b>",
    Level.FATAL: "<b>FATAL</b>",
    Level.ERROR: "<b>ERROR</b>",
}


def _encode_fields(fields: Mapping[str, Any]) -> str:
    try:
        body = dumps_json(dict(fields), indent="\t")
    except (TypeError, ValueError):
        # non-string nested keys or reference cycles: fall back to str() of
        # each top-level value
        body = dumps_json({str(k): str(v) for k, v in fields.items()}, indent="\t")
    return body + "\n"


def write_message(
    buff: IO[str],
    level: int,
    message: str,
    fields: Mapping[str, Any],
    app_name: str,
) -> None:
    """Write the message for one log event into ``buff``.

    Layout::

        <b>ERROR</b>@<app_name> - <message>[: <error>]
        <pre>
        {fields as tab-indented JSON}
        </pre>

    Levels below ERROR get no bold prefix. The ``error`` field contributes
    the ``: <error>`` suffix only when it holds an exception instance, and it
    stays in the JSON dump either way. Message text is not escaped for HTML.
    """
    prefix = _LEVEL_PREFIXES.get(Level.from_levelno(level))
    if prefix:
        buff.write(prefix)

    buff.write("@")
    buff.write(app_name)
    buff.write(" - ")
    buff.write(message)

    err = fields.get(ERROR_KEY)
    if isinstance(err, BaseException):
        buff.write(": ")
        buff.write(str(err))

    buff.write("\n<pre>\n")
    buff.write(_encode_fields(fields))
    buff.write("\n</pre>")


def format_message(level: int, message: str, fields: Mapping[str, Any], app_name: str) -> str:
    buff = TextBuffer()
    write_message(buff, level, message, fields, app_name)
    return buff.getvalue()
