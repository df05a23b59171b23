"""Request and response models for the WeChat customer-service API."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Mapping, TypeVar


def _compact(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Drop empty values, mirroring the API's optional-field convention."""
    return {key: value for key, value in payload.items() if value not in ("", None)}


@dataclass(slots=True, frozen=True)
class TextMessage:
    """Plain text message."""

    msgtype: ClassVar[str] = "text"

    content: str

    def to_payload(self) -> dict[str, Any]:
        return _compact({"content": self.content})


@dataclass(slots=True, frozen=True)
class ImageMessage:
    """Image message referencing a previously uploaded temporary media."""

    msgtype: ClassVar[str] = "image"

    media_id: str

    def to_payload(self) -> dict[str, Any]:
        return _compact({"media_id": self.media_id})


@dataclass(slots=True, frozen=True)
class LinkMessage:
    """图文链接: a titled link card with a thumbnail."""

    msgtype: ClassVar[str] = "link"

    title: str
    description: str = ""
    url: str = ""
    thumb_url: str = ""

    def to_payload(self) -> dict[str, Any]:
        return _compact(
            {
                "title": self.title,
                "description": self.description,
                "url": self.url,
                "thumb_url": self.thumb_url,
            }
        )


@dataclass(slots=True, frozen=True)
class MiniProgramPageMessage:
    """小程序卡片: a card that opens a page of the mini program."""

    msgtype: ClassVar[str] = "miniprogrampage"

    title: str
    pagepath: str = ""
    thumb_media_id: str = ""

    def to_payload(self) -> dict[str, Any]:
        return _compact(
            {
                "title": self.title,
                "pagepath": self.pagepath,
                "thumb_media_id": self.thumb_media_id,
            }
        )


Message = TextMessage | ImageMessage | LinkMessage | MiniProgramPageMessage

MESSAGE_TYPES: dict[str, type[Message]] = {
    cls.msgtype: cls
    for cls in (TextMessage, ImageMessage, LinkMessage, MiniProgramPageMessage)
}


def build_message(msgtype: str, **values: str) -> Message:
    """Construct the message variant registered for ``msgtype``.

    Raises:
        ValueError: The type tag is unknown, or ``values`` does not match the
            fields of that message type.
    """
    try:
        cls = MESSAGE_TYPES[msgtype]
    except KeyError as exc:
        supported = ", ".join(sorted(MESSAGE_TYPES))
        raise ValueError(f"不支持的客服消息类型 '{msgtype}'，可用类型: {supported}") from exc

    allowed = {item.name for item in fields(cls)}
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise ValueError(f"消息类型 '{msgtype}' 不支持字段: {', '.join(unknown)}")
    try:
        return cls(**values)
    except TypeError as exc:
        raise ValueError(f"消息类型 '{msgtype}' 缺少必填字段: {exc}") from exc


@dataclass(slots=True)
class SendMessageRequest:
    """Parameters for sending one customer-service message."""

    access_token: str
    touser: str
    message: Message

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body; the access token travels in the query string."""
        msgtype = self.message.msgtype
        payload = _compact({"touser": self.touser})
        payload["msgtype"] = msgtype
        payload[msgtype] = self.message.to_payload()
        return payload


@dataclass(slots=True)
class UploadTempMediaRequest:
    """Parameters for uploading a temporary image."""

    access_token: str
    image: bytes


_ResponseT = TypeVar("_ResponseT", bound="ApiResponse")


@dataclass(slots=True)
class ApiResponse:
    """Fields shared by every WeChat API response."""

    errcode: int = 0
    errmsg: str = ""

    @property
    def ok(self) -> bool:
        return self.errcode == 0

    @classmethod
    def from_payload(cls: type[_ResponseT], data: Mapping[str, Any]) -> _ResponseT:
        """Build the response from decoded JSON.

        Raises ``TypeError`` when a field is not of the documented JSON type.
        """
        return cls(**cls._parse(data))

    @classmethod
    def _parse(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "errcode": _field(data, "errcode", int, 0),
            "errmsg": _field(data, "errmsg", str, ""),
        }


@dataclass(slots=True)
class SendMessageResponse(ApiResponse):
    """Response of ``message/custom/send``."""


@dataclass(slots=True)
class UploadTempMediaResponse(ApiResponse):
    """Response of ``media/upload``. ``media_id`` stays valid for three days."""

    media_id: str = ""
    media_type: str = ""
    created_at: int = 0

    @classmethod
    def _parse(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        parsed = ApiResponse._parse(data)
        parsed.update(
            media_id=_field(data, "media_id", str, ""),
            media_type=_field(data, "type", str, ""),
            created_at=_field(data, "created_at", int, 0),
        )
        return parsed


def _field(data: Mapping[str, Any], name: str, kind: type, default: Any) -> Any:
    """Return ``data[name]`` when it is a JSON value of ``kind``; absent or null gives ``default``."""
    value = data.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, kind):
        raise TypeError(f"{name} 字段类型不正确: {value!r}")
    return value
