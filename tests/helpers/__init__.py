# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for buildnotify unit tests.

Available Utilities:
    Build Events:
        - make_raw_event: camelCase event dict as delivered by the queue
        - make_event: Parsed ModelBuildEvent
        - make_notification_data: ModelNotificationData around an event

    Mocks:
        - make_mock_response: aiohttp response usable as an async context manager
        - make_mock_session: aiohttp ClientSession whose post() returns responses

    Log Helpers:
        - filter_log_records: Records from one logger at or above a level
"""

from tests.helpers.build_events import (
    make_event,
    make_notification_data,
    make_raw_event,
)
from tests.helpers.log_helpers import filter_log_records
from tests.helpers.mock_helpers import make_mock_response, make_mock_session

__all__ = [
    "filter_log_records",
    "make_event",
    "make_mock_response",
    "make_mock_session",
    "make_notification_data",
    "make_raw_event",
]
