"""Command-line interface for the WeChat customer-service API."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Callable, Sequence

from ..platforms import MediaUploader, MessageSender
from ..platforms.wechat import (
    SendMessageRequest,
    UploadTempMediaRequest,
    WeChatApiClient,
    WeChatApiError,
    WeChatMessageSender,
    WeChatTempMediaUploader,
    build_message,
    check_signature,
)
from ..settings import AppConfig, load_config
from ..utils.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)

ACCESS_TOKEN_ENV_VAR = "WECHAT_ACCESS_TOKEN"

# CLI option -> message field, per message type
_MESSAGE_OPTIONS: dict[str, tuple[tuple[str, str, bool], ...]] = {
    "text": (("--content", "content", True),),
    "image": (("--media-id", "media_id", True),),
    "link": (
        ("--title", "title", True),
        ("--description", "description", False),
        ("--url", "url", False),
        ("--thumb-url", "thumb_url", False),
    ),
    "miniprogrampage": (
        ("--title", "title", True),
        ("--pagepath", "pagepath", False),
        ("--thumb-media-id", "thumb_media_id", False),
    ),
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"加载配置失败: {exc}") from exc
    configure_logging(
        level=config.logging.level_number,
        structured=config.logging.structured and not args.log_plain,
    )

    handler: Callable[[argparse.Namespace, AppConfig], int] | None = getattr(
        args, "handler", None
    )
    if handler is None:
        parser.print_help(sys.stderr)
        return 1
    return handler(args, config)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wxkefu", description="WeChat customer-service CLI")
    parser.add_argument("--config", help="Path to configuration file", default=None)
    parser.add_argument(
        "--log-plain",
        action="store_true",
        help="Use plain-text logs instead of JSON",
    )

    subparsers = parser.add_subparsers(dest="command")

    _add_verify_command(subparsers)
    _add_send_command(subparsers)
    _add_upload_command(subparsers)

    return parser


def _add_verify_command(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    verify_parser = subparsers.add_parser("verify", help="Check a callback signature")
    verify_parser.add_argument("--token", required=True, help="Server token from the console")
    verify_parser.add_argument("--nonce", required=True)
    verify_parser.add_argument("--timestamp", required=True)
    verify_parser.add_argument("--signature", required=True)
    verify_parser.set_defaults(handler=_handle_verify)


def _add_access_token_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--access-token",
        dest="access_token",
        default=None,
        help=f"Access token; defaults to ${ACCESS_TOKEN_ENV_VAR}",
    )


def _add_send_command(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    send_parser = subparsers.add_parser("send", help="Send a customer-service message")
    _add_access_token_option(send_parser)
    send_parser.add_argument("--to", dest="touser", required=True, help="Recipient OpenID")

    type_subparsers = send_parser.add_subparsers(dest="msgtype", required=True)
    for msgtype, options in _MESSAGE_OPTIONS.items():
        type_parser = type_subparsers.add_parser(msgtype, help=f"Send a {msgtype} message")
        for flag, dest, required in options:
            type_parser.add_argument(flag, dest=dest, required=required, default="")
    send_parser.set_defaults(handler=_handle_send)


def _add_upload_command(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    upload_parser = subparsers.add_parser("upload", help="Upload a temporary image")
    _add_access_token_option(upload_parser)
    upload_parser.add_argument("--file", type=Path, required=True, help="Image to upload")
    upload_parser.set_defaults(handler=_handle_upload)


def _handle_verify(args: argparse.Namespace, config: AppConfig) -> int:
    valid = check_signature(args.token, args.nonce, args.timestamp, args.signature)
    LOGGER.info("Signature checked", extra={"event": "cli.verify", "valid": valid})
    print("signature valid" if valid else "signature mismatch")
    return 0 if valid else 1


def _handle_send(args: argparse.Namespace, config: AppConfig) -> int:
    access_token = _resolve_access_token(args)
    fields = {dest: getattr(args, dest) for _, dest, _ in _MESSAGE_OPTIONS[args.msgtype]}
    try:
        message = build_message(args.msgtype, **fields)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    sender: MessageSender = _build_sender(config)
    LOGGER.info(
        "Sending customer-service message",
        extra={"event": "cli.command", "command": "send", "msgtype": args.msgtype},
    )
    try:
        sender.send(
            SendMessageRequest(access_token=access_token, touser=args.touser, message=message)
        )
    except WeChatApiError as exc:
        raise SystemExit(f"发送失败: {exc}") from exc

    print("发送成功")
    return 0


def _handle_upload(args: argparse.Namespace, config: AppConfig) -> int:
    access_token = _resolve_access_token(args)
    try:
        image = args.file.read_bytes()
    except OSError as exc:
        raise SystemExit(f"无法读取图片 {args.file}: {exc}") from exc

    uploader: MediaUploader = _build_uploader(config)
    LOGGER.info(
        "Uploading temporary media",
        extra={"event": "cli.command", "command": "upload", "bytes": len(image)},
    )
    try:
        result = uploader.upload(UploadTempMediaRequest(access_token=access_token, image=image))
    except WeChatApiError as exc:
        raise SystemExit(f"上传失败: {exc}") from exc

    print("media_id:", result.media_id)
    print("type:", result.media_type)
    print("created_at:", result.created_at)
    return 0


def _resolve_access_token(args: argparse.Namespace) -> str:
    token = args.access_token or os.environ.get(ACCESS_TOKEN_ENV_VAR)
    if not token:
        raise SystemExit(f"缺少 access_token，请通过 --access-token 或环境变量 {ACCESS_TOKEN_ENV_VAR} 提供")
    return token


def _build_api_client(config: AppConfig) -> WeChatApiClient:
    return WeChatApiClient(timeout=config.http.timeout)


def _build_sender(config: AppConfig) -> MessageSender:
    return WeChatMessageSender(_build_api_client(config))


def _build_uploader(config: AppConfig) -> MediaUploader:
    return WeChatTempMediaUploader(_build_api_client(config))


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
