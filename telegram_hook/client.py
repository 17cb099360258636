from __future__ import annotations

from typing import Any, Optional, Union

import httpx

from .buffers import BufferPool, RequestBuffer, TextBuffer, TextMarshaler, dumps_json, write_json
from .config import DEFAULT_API_URL
from .logging_config import diagnostics
from .types import ApiRequest, ApiResponse, TelegramAPIError

PARSE_MODE_HTML = "HTML"


def _decode_response(response: httpx.Response) -> ApiResponse:
    # json.JSONDecodeError / pydantic.ValidationError propagate to the caller
    return ApiResponse.model_validate(response.json())


def _api_error(api_res: ApiResponse, *, dump_body: bool = False) -> TelegramAPIError:
    msg = "Received error response from Telegram API"
    if api_res.error_code is not None:
        msg = f"{msg} (error code {api_res.error_code})"
    if api_res.description is not None:
        msg = f"{msg}: {api_res.description}"
    if dump_body:
        body = dumps_json(api_res.model_dump(exclude_none=True), indent="\t", sort_keys=False)
        msg = f"{msg}\n{body}"
    return TelegramAPIError(
        msg,
        error_code=api_res.error_code,
        description=api_res.description,
        response=api_res,
    )


class TelegramClient:
    """Synchronous Telegram Bot API client bound to one token and one chat.

    The token is checked with ``getMe`` before the constructor returns, so an
    instance is always usable; a rejected token, a transport failure or an
    undecodable reply raises out of ``__init__`` instead.

    Example:
        >>> client = TelegramClient("billing", "123:abc", -1001234567890)
        >>> client.send_text("<b>hello</b>")
    """

    def __init__(
        self,
        app_name: str,
        auth_token: str,
        chat_id: Union[int, str],
        *,
        http_client: Optional[httpx.Client] = None,
        api_url: str = DEFAULT_API_URL,
    ) -> None:
        self.app_name = app_name
        self._auth_token = auth_token
        self._chat_id = chat_id
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client()

        self.api_endpoint = f"{api_url.rstrip('/')}/bot{auth_token}"
        self.api_endpoint_get = f"{self.api_endpoint}/getme"
        self.api_endpoint_send = f"{self.api_endpoint}/sendmessage"

        self.text_buffers: BufferPool[TextBuffer] = BufferPool(TextBuffer)
        self._request_buffers: BufferPool[RequestBuffer] = BufferPool(RequestBuffer)

        try:
            self.verify_token()
        except Exception:
            self.close()
            raise

    @property
    def auth_token(self) -> str:
        return self._auth_token

    @property
    def chat_id(self) -> Union[int, str]:
        return self._chat_id

    def verify_token(self) -> None:
        """Call ``getMe`` and raise unless Telegram accepts the token.

        On ``ok: false`` the raised ``TelegramAPIError`` also carries the
        decoded response, pretty-printed, after the summary line.
        """
        res = self._http.get(self.api_endpoint_get)
        api_res = _decode_response(res)
        if not api_res.ok:
            err = _api_error(api_res, dump_body=True)
            diagnostics.error("Unable to verify Telegram API token, %s", err)
            raise err

    def send_message(self, msg: Union[TextMarshaler, str]) -> None:
        """POST ``msg`` to ``sendMessage`` with HTML parse mode.

        ``msg`` is usually a pooled ``TextBuffer``; it is marshaled straight
        into the request body.
        """
        api_req = ApiRequest(chat_id=self._chat_id, text=msg, parse_mode=PARSE_MODE_HTML)

        with self._request_buffers.acquire() as buff:
            write_json(buff, api_req.to_payload(), sort_keys=False)
            try:
                res = self._http.post(
                    self.api_endpoint_send,
                    content=buff.getvalue(),
                    headers={"Content-Type": "application/json"},
                )
            except httpx.HTTPError as e:
                diagnostics.error("Encountered error when issuing request to Telegram API, %s", e)
                raise

        api_res = _decode_response(res)
        if not api_res.ok:
            raise _api_error(api_res)

    def send_text(self, text: str) -> None:
        """Send a plain string through a pooled text buffer."""
        with self.text_buffers.acquire() as buff:
            buff.write(text)
            self.send_message(buff)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "TelegramClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
