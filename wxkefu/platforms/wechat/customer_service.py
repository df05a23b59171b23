"""Customer-service message delivery."""

from __future__ import annotations

import json

import requests

from .api import API_BASE, RequestEncodingError, WeChatApiClient
from .models import SendMessageRequest, SendMessageResponse


class WeChatMessageSender:
    """Sends 客服消息 to a mini program user."""

    _SEND_URL = f"{API_BASE}/cgi-bin/message/custom/send"

    def __init__(self, api_client: WeChatApiClient | None = None) -> None:
        self._api = api_client or WeChatApiClient()

    def send(self, request: SendMessageRequest) -> None:
        """Deliver ``request.message`` to ``request.touser``.

        Raises:
            RequestEncodingError: The message could not be serialized to JSON.
            TransportError: WeChat could not be reached or answered with an HTTP error.
            ResponseDecodingError: The response body was not valid JSON.
            RemoteApiError: WeChat rejected the message.
        """
        msgtype = request.message.msgtype
        try:
            body = json.dumps(request.to_payload(), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise RequestEncodingError(
                "客服消息序列化失败",
                details={"msgtype": msgtype, "reason": str(exc)},
            ) from exc

        http_request = requests.Request(
            "POST",
            self._SEND_URL,
            params={"access_token": request.access_token},
            data=body,
            headers={"Content-Type": "application/json"},
        )
        self._api.call(
            http_request,
            action="message.custom.send",
            response_type=SendMessageResponse,
        )
