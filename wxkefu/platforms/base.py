"""Base contracts for messaging platforms."""

from __future__ import annotations

from typing import Protocol

from .wechat.models import SendMessageRequest, UploadTempMediaRequest, UploadTempMediaResponse


class MessageSender(Protocol):
    """Delivers a single customer-service message."""

    def send(self, request: SendMessageRequest) -> None:
        """Send the message or raise on failure."""


class MediaUploader(Protocol):
    """Uploads a temporary media asset."""

    def upload(self, request: UploadTempMediaRequest) -> UploadTempMediaResponse:
        """Upload the payload and return the remote handle."""
