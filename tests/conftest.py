from __future__ import annotations

import io
import json
import logging
from typing import Any

import pytest
import requests

from wxkefu.platforms.wechat import WeChatApiClient
from wxkefu.utils.logging import PACKAGE_LOGGER


class StubBody(io.BytesIO):
    """Raw response stream that records whether the connection was released."""

    def __init__(self, data: bytes, *, read_error: Exception | None = None) -> None:
        super().__init__(data)
        self.released = False
        self.read_error = read_error

    def read(self, size: int | None = -1) -> bytes:
        if self.read_error is not None:
            raise self.read_error
        return super().read(size)

    def release_conn(self) -> None:
        self.released = True


def make_response(
    payload: Any = None,
    *,
    body: bytes | None = None,
    status: int = 200,
    reason: str = "OK",
    read_error: Exception | None = None,
) -> requests.Response:
    if body is None:
        body = json.dumps(payload).encode("utf-8")
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.raw = StubBody(body, read_error=read_error)
    return response


class StubSession(requests.Session):
    """Session whose ``send`` returns a canned response or raises."""

    def __init__(
        self,
        response: requests.Response | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.response = response
        self.error = error
        self.sent: list[requests.PreparedRequest] = []
        self.timeouts: list[Any] = []
        self.streamed: list[bool] = []

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self.sent.append(request)
        self.timeouts.append(kwargs.get("timeout"))
        self.streamed.append(bool(kwargs.get("stream")))
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


@pytest.fixture
def stub_session() -> StubSession:
    return StubSession(make_response({"errcode": 0, "errmsg": "ok"}))


@pytest.fixture
def api_client(stub_session: StubSession) -> WeChatApiClient:
    return WeChatApiClient(session=stub_session, timeout=5.0)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
