"""WeChat temporary media upload implementation."""

from __future__ import annotations

import requests

from .api import API_BASE, RequestEncodingError, WeChatApiClient
from .models import UploadTempMediaRequest, UploadTempMediaResponse


class WeChatTempMediaUploader:
    """Uploads images to the WeChat 临时素材 store."""

    _UPLOAD_URL = f"{API_BASE}/cgi-bin/media/upload"
    _FIELD_NAME = "media"
    _FILENAME = "temp.png"
    _PART_CONTENT_TYPE = "application/octet-stream"

    def __init__(self, api_client: WeChatApiClient | None = None) -> None:
        self._api = api_client or WeChatApiClient()

    def upload(self, request: UploadTempMediaRequest) -> UploadTempMediaResponse:
        """Upload ``request.image`` and return the issued media handle."""
        if not isinstance(request.image, (bytes, bytearray, memoryview)):
            raise RequestEncodingError(
                "图片内容必须是字节串",
                details={"type": type(request.image).__name__},
            )
        files = {
            self._FIELD_NAME: (self._FILENAME, bytes(request.image), self._PART_CONTENT_TYPE),
        }
        http_request = requests.Request(
            "POST",
            self._UPLOAD_URL,
            params={"access_token": request.access_token, "type": "image"},
            files=files,
        )
        return self._api.call(
            http_request,
            action="media.upload",
            response_type=UploadTempMediaResponse,
        )
