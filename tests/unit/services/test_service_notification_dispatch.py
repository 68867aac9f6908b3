# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the dispatch coordinator.

Covers:
- Fan-out to every configured platform, each exactly once
- Failure isolation between platforms (HTTP errors, build errors, raises)
- Concurrent scheduling of platform sends
- Zero configured platforms
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID

import pytest

from buildnotify.enums import EnumNotificationPlatform
from buildnotify.models import (
    ModelNotificationData,
    ModelNotifierSendResult,
    ModelNotifyConfig,
)
from buildnotify.notifiers import (
    NotifierRegistryEntry,
    NotifierDiscord,
    NotifierLark,
    NotifierSlack,
)
from buildnotify.services import send_notifications
from buildnotify.services.service_notification_dispatch import NO_WEBHOOKS_WARNING
from tests.helpers import (
    filter_log_records,
    make_event,
    make_mock_response,
    make_mock_session,
    make_notification_data,
)

DISPATCH_LOGGER = "buildnotify.services.service_notification_dispatch"


class _RecordingNotifier:
    """Protocol-conforming notifier that records sends."""

    def __init__(
        self,
        platform: EnumNotificationPlatform,
        send_hook: Any = None,
    ) -> None:
        self.platform = platform
        self.sent: list[dict[str, object]] = []
        self._send_hook = send_hook

    @property
    def name(self) -> str:
        return self.platform.display_name

    def build_payload(self, data: ModelNotificationData) -> dict[str, object]:
        return {"worker": data.event.worker_name}

    async def send(
        self,
        webhook_url: str,
        payload: dict[str, object],
        correlation_id: UUID | None = None,
    ) -> ModelNotifierSendResult:
        if self._send_hook is not None:
            await self._send_hook()
        self.sent.append(payload)
        return ModelNotifierSendResult(
            platform=self.platform, success=True, correlation_id=correlation_id
        )


class _BrokenSlack(NotifierSlack):
    def build_payload(self, data: ModelNotificationData) -> dict[str, object]:
        raise KeyError("blocks")


@pytest.fixture
def data() -> ModelNotificationData:
    return make_notification_data(make_event("failed"), logs=("Error: boom",))


class TestSendNotifications:
    """Tests for send_notifications."""

    @pytest.mark.asyncio
    async def test_one_failing_platform_does_not_affect_others(
        self,
        data: ModelNotificationData,
        all_platforms_config: ModelNotifyConfig,
    ) -> None:
        """Lark answering 500 leaves Slack and Discord delivered exactly once."""
        slack_session = make_mock_session()
        lark_session = make_mock_session(make_mock_response(status=500, text="boom"))
        discord_session = make_mock_session(make_mock_response(status=204, text=""))
        registry = (
            NotifierRegistryEntry(NotifierSlack(http_session=slack_session), "slack_webhook_url"),
            NotifierRegistryEntry(NotifierLark(http_session=lark_session), "lark_webhook_url"),
            NotifierRegistryEntry(
                NotifierDiscord(http_session=discord_session), "discord_webhook_url"
            ),
        )

        dispatch = await send_notifications(data, all_platforms_config, registry)

        assert slack_session.post.call_count == 1
        assert lark_session.post.call_count == 1
        assert discord_session.post.call_count == 1
        assert dispatch.delivered_platforms == [
            EnumNotificationPlatform.SLACK,
            EnumNotificationPlatform.DISCORD,
        ]
        assert dispatch.failed_platforms == [EnumNotificationPlatform.LARK]
        lark_result = dispatch.results[1]
        assert lark_result.error_code == "LARK_HTTP_500"
        assert all(r.correlation_id == data.correlation_id for r in dispatch.results)

    @pytest.mark.asyncio
    async def test_only_configured_platforms(self, data: ModelNotificationData) -> None:
        slack = _RecordingNotifier(EnumNotificationPlatform.SLACK)
        discord = _RecordingNotifier(EnumNotificationPlatform.DISCORD)
        registry = (
            NotifierRegistryEntry(slack, "slack_webhook_url"),
            NotifierRegistryEntry(discord, "discord_webhook_url"),
        )
        config = ModelNotifyConfig(discord_webhook_url="https://discord.com/api/webhooks/1/x")

        dispatch = await send_notifications(data, config, registry)

        assert slack.sent == []
        assert discord.sent == [{"worker": "my-worker"}]
        assert [r.platform for r in dispatch.results] == [
            EnumNotificationPlatform.DISCORD
        ]
        assert dispatch.all_succeeded

    @pytest.mark.asyncio
    async def test_no_platforms_configured(
        self,
        data: ModelNotificationData,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Zero webhooks logs a warning and performs no sends."""
        recorder = _RecordingNotifier(EnumNotificationPlatform.SLACK)
        registry = (NotifierRegistryEntry(recorder, "slack_webhook_url"),)

        with caplog.at_level(logging.WARNING, logger=DISPATCH_LOGGER):
            dispatch = await send_notifications(data, ModelNotifyConfig(), registry)

        assert dispatch.no_platforms_configured
        assert dispatch.results == ()
        assert recorder.sent == []
        warnings = filter_log_records(caplog.records, DISPATCH_LOGGER)
        assert [r.getMessage() for r in warnings] == [NO_WEBHOOKS_WARNING]

    @pytest.mark.asyncio
    async def test_build_error_isolated(
        self,
        data: ModelNotificationData,
        all_platforms_config: ModelNotifyConfig,
    ) -> None:
        """A payload build failure only fails its own platform."""
        slack_session = make_mock_session()
        discord = _RecordingNotifier(EnumNotificationPlatform.DISCORD)
        registry = (
            NotifierRegistryEntry(_BrokenSlack(http_session=slack_session), "slack_webhook_url"),
            NotifierRegistryEntry(discord, "discord_webhook_url"),
        )

        dispatch = await send_notifications(data, all_platforms_config, registry)

        slack_result = dispatch.results[0]
        assert slack_result.success is False
        assert slack_result.error_code == "BUILD_FAILED"
        assert slack_result.error == "KeyError: 'blocks'"
        slack_session.post.assert_not_called()
        assert len(discord.sent) == 1

    @pytest.mark.asyncio
    async def test_unexpected_send_exception_isolated(
        self,
        data: ModelNotificationData,
        all_platforms_config: ModelNotifyConfig,
    ) -> None:
        raising = _RecordingNotifier(
            EnumNotificationPlatform.LARK,
            send_hook=AsyncMock(side_effect=RuntimeError("socket exploded")),
        )
        discord = _RecordingNotifier(EnumNotificationPlatform.DISCORD)
        registry = (
            NotifierRegistryEntry(raising, "lark_webhook_url"),
            NotifierRegistryEntry(discord, "discord_webhook_url"),
        )

        dispatch = await send_notifications(data, all_platforms_config, registry)

        assert dispatch.results[0].error_code == "UNEXPECTED_ERROR"
        assert dispatch.results[1].success is True

    @pytest.mark.asyncio
    async def test_sends_run_concurrently(
        self,
        data: ModelNotificationData,
        all_platforms_config: ModelNotifyConfig,
    ) -> None:
        """Slack's send waits for Discord's to start; sequential sends would hang."""
        discord_started = asyncio.Event()

        async def wait_for_discord() -> None:
            await discord_started.wait()

        async def mark_started() -> None:
            discord_started.set()

        slack = _RecordingNotifier(EnumNotificationPlatform.SLACK, wait_for_discord)
        discord = _RecordingNotifier(EnumNotificationPlatform.DISCORD, mark_started)
        registry = (
            NotifierRegistryEntry(slack, "slack_webhook_url"),
            NotifierRegistryEntry(discord, "discord_webhook_url"),
        )

        dispatch = await asyncio.wait_for(
            send_notifications(data, all_platforms_config, registry), timeout=2.0
        )

        assert dispatch.all_succeeded
        assert len(slack.sent) == 1
        assert len(discord.sent) == 1
