"""Platform integration package."""

from __future__ import annotations

from .base import MediaUploader, MessageSender

__all__ = [
    "MediaUploader",
    "MessageSender",
]
