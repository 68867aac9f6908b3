# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Message kind enumeration for build notifications."""

from enum import Enum


class EnumMessageKind(str, Enum):
    """The four message shapes every platform builder renders."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"
    FALLBACK = "fallback"


__all__ = ["EnumMessageKind"]
