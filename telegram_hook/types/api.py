from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class ApiRequest(BaseModel):
    """Body of a ``sendMessage`` call.

    ``text`` is either a plain string or a buffer implementing the
    text-marshaling hook (``marshal_text``); the JSON encoder in
    ``telegram_hook.buffers`` asks the buffer for its contents at encode time
    instead of copying them into the model.

    Example:
        >>> from telegram_hook.types import ApiRequest
        >>> ApiRequest(chat_id=42, text="<b>hi</b>", parse_mode="HTML")
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    chat_id: Union[int, str]
    text: Any
    parse_mode: Optional[str] = None

    @field_validator("text")
    @classmethod
    def _validate_text(cls, v: Any) -> Any:
        if isinstance(v, str) or callable(getattr(v, "marshal_text", None)):
            return v
        raise ValueError("text must be a string or implement marshal_text()")

    @field_validator("parse_mode")
    @classmethod
    def _drop_empty_parse_mode(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    def to_payload(self) -> Dict[str, Any]:
        """Wire body with ``text`` left as-is for the encoder to marshal."""
        payload: Dict[str, Any] = {"chat_id": self.chat_id, "text": self.text}
        if self.parse_mode:
            payload["parse_mode"] = self.parse_mode
        return payload


class ApiResponse(BaseModel):
    """Envelope returned by every Bot API method.

    Attributes:
        ok: True when the call succeeded. Missing means failure.
        error_code: Numeric error code on failure (e.g. 401, 400).
        description: Human-readable explanation supplied by Telegram.
        result: Method-specific payload on success.
    """

    ok: bool = False
    error_code: Optional[int] = None
    description: Optional[str] = None
    result: Optional[Any] = None
