"""Payload schemas for exchanging upload commands and resolution results."""

from __future__ import annotations

from .schema import BulkUploadCommandPayload, ResolveBulkUploadPayload
from .translator import parse_command, translate_resolution

__all__ = [
    "BulkUploadCommandPayload",
    "ResolveBulkUploadPayload",
    "parse_command",
    "translate_resolution",
]
