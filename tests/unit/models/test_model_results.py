# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for send and dispatch result models."""

from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from buildnotify.enums import EnumNotificationPlatform
from buildnotify.models import ModelDispatchResult, ModelNotifierSendResult


def _result(
    platform: EnumNotificationPlatform, success: bool
) -> ModelNotifierSendResult:
    return ModelNotifierSendResult(
        platform=platform,
        success=success,
        duration_ms=1.0,
        error=None if success else "HTTP 500: boom",
        error_code=None if success else f"{platform.value.upper()}_HTTP_500",
    )


class TestModelNotifierSendResult:
    """Tests for ModelNotifierSendResult."""

    def test_failure_fields(self) -> None:
        correlation_id = uuid4()
        result = ModelNotifierSendResult(
            platform=EnumNotificationPlatform.LARK,
            success=False,
            error="Request timeout",
            error_code="LARK_TIMEOUT",
            correlation_id=correlation_id,
        )

        assert result.error_code == "LARK_TIMEOUT"
        assert result.correlation_id == correlation_id
        assert result.status_code is None

    def test_negative_duration_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelNotifierSendResult(
                platform=EnumNotificationPlatform.SLACK,
                success=True,
                duration_ms=-1.0,
            )


class TestModelDispatchResult:
    """Tests for ModelDispatchResult aggregation."""

    def test_partial_delivery(self) -> None:
        dispatch = ModelDispatchResult(
            results=(
                _result(EnumNotificationPlatform.SLACK, True),
                _result(EnumNotificationPlatform.LARK, False),
                _result(EnumNotificationPlatform.DISCORD, True),
            )
        )

        assert dispatch.delivered_platforms == [
            EnumNotificationPlatform.SLACK,
            EnumNotificationPlatform.DISCORD,
        ]
        assert dispatch.failed_platforms == [EnumNotificationPlatform.LARK]
        assert not dispatch.all_succeeded

    def test_empty_dispatch_is_not_success(self) -> None:
        assert not ModelDispatchResult(no_platforms_configured=True).all_succeeded
