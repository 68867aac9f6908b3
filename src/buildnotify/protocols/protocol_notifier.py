# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Notifier protocol: payload building plus webhook transport for one platform."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from buildnotify.enums import EnumNotificationPlatform
    from buildnotify.models.model_notification_data import ModelNotificationData
    from buildnotify.models.model_notifier_send_result import (
        ModelNotifierSendResult,
    )


@runtime_checkable
class ProtocolNotifier(Protocol):
    """Capability set every platform notifier implements.

    ``build_payload`` is pure and must not raise for a well-formed
    ModelNotificationData. ``send`` reports delivery problems through its
    result instead of raising.
    """

    @property
    def platform(self) -> EnumNotificationPlatform:
        """Platform this notifier delivers to."""
        ...

    @property
    def name(self) -> str:
        """Display name used in log messages."""
        ...

    def build_payload(self, data: ModelNotificationData) -> dict[str, object]:
        """Build the platform-specific message for ``data``."""
        ...

    async def send(
        self,
        webhook_url: str,
        payload: dict[str, object],
        correlation_id: Optional[UUID] = None,
    ) -> ModelNotifierSendResult:
        """POST ``payload`` to ``webhook_url``."""
        ...


__all__ = ["ProtocolNotifier"]
