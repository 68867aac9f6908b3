# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Chat platform enumeration.

Each member maps to one notifier implementation and one webhook URL
setting on ``ModelNotifyConfig``.
"""

from enum import Enum


class EnumNotificationPlatform(str, Enum):
    """Supported chat platforms for build notifications."""

    SLACK = "slack"
    LARK = "lark"
    DISCORD = "discord"

    @property
    def display_name(self) -> str:
        """Human readable platform name used in log messages."""
        return self.value.capitalize()


__all__ = ["EnumNotificationPlatform"]
