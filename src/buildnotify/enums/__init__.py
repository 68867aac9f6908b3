# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Enumerations for build notification classification and routing.

Exports:
    EnumMessageKind: Succeeded / failed / cancelled / fallback message shapes
    EnumNotificationPlatform: Supported chat platforms (Slack, Lark, Discord)
"""

from buildnotify.enums.enum_message_kind import EnumMessageKind
from buildnotify.enums.enum_notification_platform import EnumNotificationPlatform

__all__: list[str] = [
    "EnumMessageKind",
    "EnumNotificationPlatform",
]
