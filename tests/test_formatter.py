from __future__ import annotations

import logging

import pytest

from telegram_hook.buffers import TextBuffer
from telegram_hook.formatter import ERROR_KEY, format_message, write_message
from telegram_hook.types import Level

WALRUS = {"animal": "walrus", "number": 1, "size": 10}


def test_error_message_layout() -> None:
    got = format_message(logging.ERROR, "A walrus appears", WALRUS, "testing")
    assert got == (
        "<b>ERROR</b>@testing - A walrus appears\n"
        "<pre>\n"
        "{\n"
        '\t"animal": "walrus",\n'
        '\t"number": 1,\n'
        '\t"size": 10\n'
        "}\n"
        "\n</pre>"
    )


@pytest.mark.parametrize(
    "level, prefix",
    [
        (Level.ERROR, "<b>ERROR</b>"),
        (Level.FATAL, "<b>FATAL</b>"),
        (logging.CRITICAL, "<b>FATAL</b>"),
        (Level.PANIC, "<b>PANIC</b>"),
    ],
)
def test_levels_get_bold_prefix(level: int, prefix: str) -> None:
    got = format_message(level, "boom", {}, "svc")
    assert got.startswith(prefix + "@svc - boom")


@pytest.mark.parametrize("level", [logging.DEBUG, logging.INFO, logging.WARNING, 45])
def test_lower_or_unknown_levels_have_no_prefix(level: int) -> None:
    got = format_message(level, "just saying", {}, "svc")
    assert got.startswith("@svc - just saying\n<pre>\n")


def test_empty_fields_render_empty_object() -> None:
    got = format_message(logging.ERROR, "m", {}, "svc")
    assert got.endswith("\n<pre>\n{}\n\n</pre>")


def test_attached_exception_follows_message_and_stays_in_fields() -> None:
    fields = {ERROR_KEY: ValueError("disk full"), "path": "/var/data"}
    got = format_message(logging.ERROR, "write failed", fields, "svc")

    assert got.startswith("<b>ERROR</b>@svc - write failed: disk full\n<pre>\n")
    assert '\t"error": "disk full",\n' in got
    assert '\t"path": "/var/data"\n' in got


def test_non_exception_error_value_is_not_appended() -> None:
    got = format_message(logging.ERROR, "write failed", {ERROR_KEY: "disk full"}, "svc")
    assert got.startswith("<b>ERROR</b>@svc - write failed\n<pre>\n")
    assert '"error": "disk full"' in got


def test_none_error_value_is_ignored() -> None:
    got = format_message(logging.ERROR, "write failed", {ERROR_KEY: None}, "svc")
    assert got.startswith("<b>ERROR</b>@svc - write failed\n")
    assert '"error": null' in got


def test_message_text_is_not_escaped_but_field_values_are() -> None:
    got = format_message(logging.ERROR, "<i>raw</i> & co", {"tag": "<b>"}, "svc")
    assert "@svc - <i>raw</i> & co\n" in got
    assert '"tag": "\\u003cb\\u003e"' in got


def test_output_is_deterministic_regardless_of_field_order() -> None:
    a = {"b": 2, "a": [1, 2], "c": {"y": None, "x": True}}
    b = {"c": {"x": True, "y": None}, "a": [1, 2], "b": 2}

    first = format_message(Level.FATAL, "same", a, "svc")
    assert first == format_message(Level.FATAL, "same", a, "svc")
    assert first == format_message(Level.FATAL, "same", b, "svc")


def test_app_name_and_message_appear_in_order() -> None:
    got = format_message(logging.ERROR, "the message", {"k": "@svc"}, "svc")
    at = got.index("@svc - ")
    assert got.index("the message") > at


def test_write_message_appends_to_existing_buffer() -> None:
    buff = TextBuffer()
    write_message(buff, logging.ERROR, "m", {"n": 1}, "svc")
    assert buff.marshal_text() == format_message(logging.ERROR, "m", {"n": 1}, "svc")


def test_fields_with_non_string_nested_keys_still_format() -> None:
    got = format_message(logging.ERROR, "payment failed", {"counts": {("eu", "card"): 3}, "n": 1}, "svc")

    assert got.startswith("<b>ERROR</b>@svc - payment failed\n<pre>\n")
    assert "\t\"counts\": \"{('eu', 'card'): 3}\",\n" in got
    assert '\t"n": "1"\n' in got
    assert got.endswith("}\n\n</pre>")


def test_self_referencing_fields_still_format() -> None:
    ctx: dict = {"id": 7}
    ctx["self"] = ctx

    got = format_message(logging.ERROR, "loop", {"ctx": ctx}, "svc")

    assert got.startswith("<b>ERROR</b>@svc - loop\n<pre>\n")
    assert "\t\"ctx\": \"{'id': 7, 'self': {...}}\"\n" in got


@pytest.mark.parametrize(
    "levelno, level",
    [
        (logging.ERROR, Level.ERROR),
        (logging.CRITICAL, Level.FATAL),
        (60, Level.PANIC),
        (logging.WARNING, None),
        (45, None),
    ],
)
def test_level_from_levelno(levelno: int, level: object) -> None:
    assert Level.from_levelno(levelno) is level
