"""WeChat platform adapters."""

from __future__ import annotations

from .api import (
    RemoteApiError,
    RequestEncodingError,
    ResponseDecodingError,
    TransportError,
    WeChatApiClient,
    WeChatApiError,
)
from .customer_service import WeChatMessageSender
from .media import WeChatTempMediaUploader
from .models import (
    ImageMessage,
    LinkMessage,
    Message,
    MiniProgramPageMessage,
    SendMessageRequest,
    SendMessageResponse,
    TextMessage,
    UploadTempMediaRequest,
    UploadTempMediaResponse,
    build_message,
)
from .signature import check_signature, compute_signature, verify_callback

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
