"""Tests for message variants and response parsing."""

from __future__ import annotations

import pytest

from wxkefu.platforms.wechat import (
    ImageMessage,
    LinkMessage,
    MiniProgramPageMessage,
    SendMessageRequest,
    TextMessage,
    UploadTempMediaResponse,
    build_message,
)
from wxkefu.platforms.wechat.models import SendMessageResponse


class TestSendMessageRequest:
    def test_text_payload(self) -> None:
        request = SendMessageRequest("TOKEN", "OPENID", TextMessage("你好"))
        assert request.to_payload() == {
            "touser": "OPENID",
            "msgtype": "text",
            "text": {"content": "你好"},
        }

    def test_access_token_stays_out_of_body(self) -> None:
        request = SendMessageRequest("TOKEN", "OPENID", ImageMessage("MEDIA"))
        assert "access_token" not in request.to_payload()

    def test_link_payload_omits_empty_fields(self) -> None:
        request = SendMessageRequest(
            "TOKEN", "OPENID", LinkMessage(title="标题", url="https://example.com")
        )
        assert request.to_payload()["link"] == {"title": "标题", "url": "https://example.com"}

    def test_miniprogrampage_payload(self) -> None:
        message = MiniProgramPageMessage(
            title="卡片", pagepath="pages/index", thumb_media_id="THUMB"
        )
        payload = SendMessageRequest("TOKEN", "OPENID", message).to_payload()
        assert payload["msgtype"] == "miniprogrampage"
        assert payload["miniprogrampage"] == {
            "title": "卡片",
            "pagepath": "pages/index",
            "thumb_media_id": "THUMB",
        }

    def test_only_the_active_variant_is_serialised(self) -> None:
        payload = SendMessageRequest("TOKEN", "OPENID", ImageMessage("MEDIA")).to_payload()
        assert set(payload) == {"touser", "msgtype", "image"}


class TestBuildMessage:
    @pytest.mark.parametrize(
        ("msgtype", "values", "expected"),
        [
            ("text", {"content": "hi"}, TextMessage("hi")),
            ("image", {"media_id": "M"}, ImageMessage("M")),
            ("link", {"title": "T", "thumb_url": "U"}, LinkMessage(title="T", thumb_url="U")),
            ("miniprogrampage", {"title": "T"}, MiniProgramPageMessage(title="T")),
        ],
    )
    def test_builds_registered_variant(self, msgtype, values, expected) -> None:
        message = build_message(msgtype, **values)
        assert message == expected
        assert message.msgtype == msgtype

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="news"):
            build_message("news", title="x")

    def test_field_from_another_variant(self) -> None:
        with pytest.raises(ValueError, match="media_id"):
            build_message("text", content="hi", media_id="M")

    def test_missing_required_field(self) -> None:
        with pytest.raises(ValueError):
            build_message("image")


class TestResponses:
    def test_missing_errcode_means_success(self) -> None:
        response = SendMessageResponse.from_payload({})
        assert response.ok
        assert response.errcode == 0

    def test_upload_response_maps_type_field(self) -> None:
        response = UploadTempMediaResponse.from_payload(
            {"media_id": "abc123", "type": "image", "created_at": 1234567890}
        )
        assert response == UploadTempMediaResponse(
            errcode=0,
            errmsg="",
            media_id="abc123",
            media_type="image",
            created_at=1234567890,
        )

    @pytest.mark.parametrize(
        "payload",
        [
            {"errcode": "oops"},
            {"errcode": "40001"},
            {"errcode": True},
            {"errmsg": 123},
        ],
    )
    def test_common_fields_must_have_json_types(self, payload: dict) -> None:
        with pytest.raises(TypeError):
            SendMessageResponse.from_payload(payload)

    @pytest.mark.parametrize(
        "payload",
        [
            {"created_at": [1]},
            {"created_at": "1234567890"},
            {"media_id": 42},
            {"type": {"kind": "image"}},
        ],
    )
    def test_upload_fields_must_have_json_types(self, payload: dict) -> None:
        with pytest.raises(TypeError):
            UploadTempMediaResponse.from_payload(payload)

    def test_null_fields_fall_back_to_defaults(self) -> None:
        response = UploadTempMediaResponse.from_payload(
            {"errcode": None, "media_id": None, "created_at": None}
        )
        assert response == UploadTempMediaResponse()


def test_package_root_exports_public_api() -> None:
    import wxkefu
    import wxkefu.platforms.wechat as wechat

    assert sorted(wxkefu.__all__) == sorted(wechat.__all__)
    for name in wechat.__all__:
        assert getattr(wxkefu, name) is getattr(wechat, name)
