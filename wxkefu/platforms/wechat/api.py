"""WeChat API helpers."""

from __future__ import annotations

import json
from typing import Any, Mapping, TypeVar

import requests

from wxkefu.utils.logging import get_logger

from .models import ApiResponse

LOGGER = get_logger(__name__)

API_BASE = "https://api.weixin.qq.com"

_ResponseT = TypeVar("_ResponseT", bound=ApiResponse)


class WeChatApiError(RuntimeError):
    """Raised when WeChat API calls fail."""

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = dict(details or {})

    def __str__(self) -> str:
        base = super().__str__()
        if not self.details:
            return base
        try:
            detail_repr = json.dumps(self.details, ensure_ascii=False)
        except TypeError:
            detail_repr = str(self.details)
        return f"{base} | 详情: {detail_repr}"


class RequestEncodingError(WeChatApiError):
    """The request body could not be built locally."""


class TransportError(WeChatApiError):
    """The request did not produce a readable HTTP response."""


class ResponseDecodingError(WeChatApiError):
    """The response body is not the JSON object WeChat documents."""


class RemoteApiError(WeChatApiError):
    """WeChat answered with a nonzero ``errcode``."""

    def __init__(
        self,
        errcode: int,
        errmsg: str,
        *,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            errmsg or f"微信接口返回错误码 {errcode}",
            details={"errcode": errcode, "errmsg": errmsg, **(details or {})},
        )
        self.errcode = errcode
        self.errmsg = errmsg


class WeChatApiClient:
    """Sends prepared requests to WeChat and maps the ``errcode`` convention to errors.

    Without an injected ``session`` every call opens and closes its own
    ``requests.Session``. ``timeout`` is handed to ``requests`` untouched;
    ``None`` waits indefinitely.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float | None = 10.0,
    ) -> None:
        self._session = session
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def call(
        self,
        request: requests.Request,
        *,
        action: str,
        response_type: type[_ResponseT],
    ) -> _ResponseT:
        """Execute ``request`` and return the parsed, successful response."""
        LOGGER.debug(
            "Calling WeChat API",
            extra={"event": "wechat.request", "action": action},
        )
        if self._session is not None:
            data = self._exchange(self._session, request, action=action)
        else:
            with requests.Session() as session:
                data = self._exchange(session, request, action=action)

        try:
            response = response_type.from_payload(data)
        except (TypeError, ValueError) as exc:
            raise ResponseDecodingError(
                "微信响应字段格式不正确",
                details={"action": action, "reason": str(exc)},
            ) from exc

        if not response.ok:
            raise RemoteApiError(response.errcode, response.errmsg, details={"action": action})

        LOGGER.debug(
            "WeChat API call succeeded",
            extra={"event": "wechat.response", "action": action},
        )
        return response

    def _exchange(
        self,
        session: requests.Session,
        request: requests.Request,
        *,
        action: str,
    ) -> dict[str, Any]:
        try:
            prepared = session.prepare_request(request)
        except (TypeError, ValueError, requests.RequestException) as exc:
            raise RequestEncodingError(
                "构造微信请求失败",
                details={"action": action, "reason": str(exc)},
            ) from exc

        try:
            # body is read inside ``with response`` below
            response = session.send(prepared, timeout=self._timeout, stream=True)
        except requests.RequestException as exc:
            raise TransportError(
                "无法连接至微信服务器",
                details={"action": action, "reason": str(exc)},
            ) from exc

        with response:
            if not response.ok:
                raise TransportError(
                    "调用微信服务器失败",
                    details={
                        "action": action,
                        "status": response.status_code,
                        "reason": response.reason,
                    },
                )
            try:
                body = response.content
            except requests.RequestException as exc:
                raise TransportError(
                    "读取微信响应失败",
                    details={"action": action, "reason": str(exc)},
                ) from exc

        return decode_response(body, action=action)


def decode_response(body: bytes, *, action: str) -> dict[str, Any]:
    """Decode a WeChat response body into a JSON object."""
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ResponseDecodingError(
            "解析微信响应失败",
            details={"action": action, "body": body[:200].decode("utf-8", "replace")},
        ) from exc

    if not isinstance(data, dict):
        raise ResponseDecodingError(
            "微信响应不是 JSON 对象",
            details={"action": action, "body": body[:200].decode("utf-8", "replace")},
        )
    return data
