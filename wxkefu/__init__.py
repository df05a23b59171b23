"""Client for the WeChat mini program customer-service API."""

from __future__ import annotations

from .platforms.wechat import (
    ImageMessage,
    LinkMessage,
    Message,
    MiniProgramPageMessage,
    RemoteApiError,
    RequestEncodingError,
    ResponseDecodingError,
    SendMessageRequest,
    SendMessageResponse,
    TextMessage,
    TransportError,
    UploadTempMediaRequest,
    UploadTempMediaResponse,
    WeChatApiClient,
    WeChatApiError,
    WeChatMessageSender,
    WeChatTempMediaUploader,
    build_message,
    check_signature,
    compute_signature,
    verify_callback,
)

__all__ = [
    "ImageMessage",
    "LinkMessage",
    "Message",
    "MiniProgramPageMessage",
    "RemoteApiError",
    "RequestEncodingError",
    "ResponseDecodingError",
    "SendMessageRequest",
    "SendMessageResponse",
    "TextMessage",
    "TransportError",
    "UploadTempMediaRequest",
    "UploadTempMediaResponse",
    "WeChatApiClient",
    "WeChatApiError",
    "WeChatMessageSender",
    "WeChatTempMediaUploader",
    "build_message",
    "check_signature",
    "compute_signature",
    "verify_callback",
]
