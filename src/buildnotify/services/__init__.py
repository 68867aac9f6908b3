# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Event processing and dispatch services."""

from buildnotify.services.service_build_event_processor import (
    process_batch,
    process_event,
)
from buildnotify.services.service_notification_dispatch import send_notifications

__all__: list[str] = [
    "process_batch",
    "process_event",
    "send_notifications",
]
