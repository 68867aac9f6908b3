# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Outcome of one notifier delivery attempt."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from buildnotify.enums import EnumNotificationPlatform


class ModelNotifierSendResult(BaseModel):
    """Result of building and sending one platform payload.

    Attributes:
        platform: Platform the payload was sent to
        success: True if the webhook accepted the payload
        duration_ms: Time taken for the operation
        status_code: HTTP status of the webhook response, if one was received
        error: Sanitized error message (only on failure)
        error_code: Error code for programmatic handling (only on failure)
        correlation_id: Correlation ID of the event
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    platform: EnumNotificationPlatform
    success: bool
    duration_ms: float = Field(default=0.0, ge=0.0)
    status_code: Optional[int] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    correlation_id: Optional[UUID] = None


__all__ = ["ModelNotifierSendResult"]
