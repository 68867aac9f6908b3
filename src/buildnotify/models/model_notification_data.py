# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Notification input model shared by every platform builder."""

from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from buildnotify.models.model_build_event import ModelBuildEvent


class ModelNotificationData(BaseModel):
    """Everything a payload builder needs for one event.

    Assembled once per event and shared read-only across all notifiers.

    Attributes:
        event: The build event being reported
        preview_url: Preview deployment URL, if fetched
        live_url: Live Worker URL, if fetched
        logs: Raw build log lines in order (failed builds only)
        production_branch: Branch whose successful builds count as production
        account_id: Fallback account id for dashboard links when the event
            metadata does not carry one
        correlation_id: Correlation ID used in logs for this event
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    event: ModelBuildEvent
    preview_url: Optional[str] = None
    live_url: Optional[str] = None
    logs: tuple[str, ...] = ()
    production_branch: str = "main"
    account_id: Optional[str] = None
    correlation_id: UUID = Field(default_factory=uuid4)


__all__ = ["ModelNotificationData"]
