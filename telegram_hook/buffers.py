"""Reusable message buffers and the JSON encoding that understands them.

A ``TextBuffer`` is embedded directly in the request envelope: the encoder
asks it for its text through ``marshal_text`` at encode time, so the
formatted message is escaped exactly once on its way to the wire.
"""

from __future__ import annotations

import io
import json
import threading
from contextlib import contextmanager
from typing import IO, Any, Callable, Generic, Iterator, List, Optional, Protocol, TypeVar, Union

# Characters escaped inside JSON strings even though JSON allows them raw.
_HTML_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


class TextMarshaler(Protocol):
    """Objects that know how to render themselves as a JSON string value."""

    def marshal_text(self) -> str:
        ...


class Resettable(Protocol):
    def reset(self) -> None:
        ...


class TextBuffer(io.StringIO):
    """In-memory text buffer that serializes as its own contents."""

    def reset(self) -> None:
        self.seek(0)
        self.truncate(0)

    def marshal_text(self) -> str:
        return self.getvalue()


class RequestBuffer(io.BytesIO):
    """In-memory byte buffer holding one encoded request body."""

    def reset(self) -> None:
        self.seek(0)
        self.truncate(0)


class MarshalingEncoder(json.JSONEncoder):
    """``json.JSONEncoder`` that honours ``marshal_text`` and escapes HTML.

    - objects exposing ``marshal_text()`` are encoded as the string it returns
    - anything else JSON has no representation for (exceptions included) is
      encoded as ``str(obj)``
    - ``<``, ``>``, ``&``, U+2028 and U+2029 inside strings become ``\\uXXXX``
      escapes; remaining non-ASCII text is left as UTF-8
    """

    def __init__(self, *, escape_html: bool = True, **kwargs: Any) -> None:
        kwargs.setdefault("ensure_ascii", False)
        super().__init__(**kwargs)
        self.escape_html = escape_html

    def default(self, o: Any) -> Any:
        marshal = getattr(o, "marshal_text", None)
        if callable(marshal):
            return marshal()
        return str(o)

    def encode(self, o: Any) -> str:
        return "".join(self.iterencode(o, _one_shot=True))

    def iterencode(self, o: Any, _one_shot: bool = False) -> Iterator[str]:
        for chunk in super().iterencode(o, _one_shot):
            yield chunk.translate(_HTML_ESCAPES) if self.escape_html else chunk


def dumps_json(
    obj: Any,
    *,
    indent: Optional[Union[int, str]] = None,
    sort_keys: bool = True,
    separators: Optional[tuple[str, str]] = None,
) -> str:
    """Encode ``obj`` with ``MarshalingEncoder`` and return the text."""
    return MarshalingEncoder(indent=indent, sort_keys=sort_keys, separators=separators).encode(obj)


def write_json(
    fp: IO[Any],
    obj: Any,
    *,
    indent: Optional[Union[int, str]] = None,
    sort_keys: bool = True,
) -> None:
    """Stream ``obj`` as JSON into ``fp`` followed by a newline.

    Text streams receive ``str`` chunks; binary streams receive UTF-8 bytes.
    """
    encoder = MarshalingEncoder(indent=indent, sort_keys=sort_keys)
    binary = not isinstance(fp, io.TextIOBase)
    for chunk in encoder.iterencode(obj):
        fp.write(chunk.encode("utf-8") if binary else chunk)
    fp.write(b"\n" if binary else "\n")


B = TypeVar("B", bound=Resettable)


class BufferPool(Generic[B]):
    """Thread-safe free list of reusable buffers.

    A buffer handed out by ``acquire`` belongs to the caller until the
    ``with`` block exits, after which it goes back on the free list whether
    the block raised or not.

    Example:
        >>> pool = BufferPool(TextBuffer)
        >>> with pool.acquire() as buff:
        ...     buff.write("hello")
    """

    def __init__(self, factory: Callable[[], B]) -> None:
        self._factory = factory
        self._idle: List[B] = []
        self._lock = threading.Lock()

    @contextmanager
    def acquire(self) -> Iterator[B]:
        with self._lock:
            buff = self._idle.pop() if self._idle else self._factory()
        buff.reset()
        try:
            yield buff
        finally:
            with self._lock:
                self._idle.append(buff)

    def idle(self) -> int:
        """Number of buffers currently waiting in the pool."""
        with self._lock:
            return len(self._idle)
