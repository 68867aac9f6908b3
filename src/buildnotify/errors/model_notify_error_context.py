# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Notification Error Context Model.

Bundles the structured fields shared by every build notification error so
error constructors stay small while keeping strong typing.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from buildnotify.enums import EnumNotificationPlatform


class ModelNotifyErrorContext(BaseModel):
    """Structured context attached to build notification errors.

    Attributes:
        platform: Chat platform involved, if any
        operation: Operation being performed (parse_event, fetch_logs, send, ...)
        target_name: Target resource name (worker name, API endpoint, ...)
        correlation_id: Correlation ID of the event being processed

    Example:
        >>> context = ModelNotifyErrorContext(
        ...     platform=EnumNotificationPlatform.SLACK,
        ...     operation="send",
        ...     target_name="my-worker",
        ... )
        >>> raise EnrichmentFetchError("Build API returned 500", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    platform: Optional[EnumNotificationPlatform] = Field(
        default=None,
        description="Chat platform involved in the failed operation",
    )
    operation: Optional[str] = Field(
        default=None,
        description="Operation being performed (parse_event, fetch_logs, send, ...)",
    )
    target_name: Optional[str] = Field(
        default=None,
        description="Target resource or endpoint name",
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Correlation ID of the event being processed",
    )


__all__ = ["ModelNotifyErrorContext"]
