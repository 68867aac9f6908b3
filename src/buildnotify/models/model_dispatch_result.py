# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Aggregate outcome of dispatching one event to all configured platforms."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from buildnotify.enums import EnumNotificationPlatform
from buildnotify.models.model_notifier_send_result import ModelNotifierSendResult


class ModelDispatchResult(BaseModel):
    """Per-platform results for one event.

    Partial delivery (some platforms notified, others not) is a normal
    outcome and is represented here rather than raised.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    correlation_id: Optional[UUID] = None
    results: tuple[ModelNotifierSendResult, ...] = ()
    no_platforms_configured: bool = False

    @property
    def delivered_platforms(self) -> list[EnumNotificationPlatform]:
        return [r.platform for r in self.results if r.success]

    @property
    def failed_platforms(self) -> list[EnumNotificationPlatform]:
        return [r.platform for r in self.results if not r.success]

    @property
    def all_succeeded(self) -> bool:
        """True when at least one platform was attempted and none failed."""
        return bool(self.results) and all(r.success for r in self.results)


__all__ = ["ModelDispatchResult"]
