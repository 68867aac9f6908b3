# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Notification Dispatch Service - fan-out to every configured platform.

For one event, every platform with a webhook URL gets its own task that
builds the payload and sends it. All tasks are scheduled before any is
awaited, so a slow or hung webhook never holds back the others; the
coordinator returns once every task has finished.

Failure Isolation:
    Each task captures its own outcome in a ModelNotifierSendResult. A
    payload build error, a non-2xx response or a transport error affects
    only that platform and is logged, never raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from buildnotify.models.model_dispatch_result import ModelDispatchResult
from buildnotify.models.model_notifier_send_result import ModelNotifierSendResult
from buildnotify.notifiers.registry_notifier import NOTIFIERS, NotifierRegistryEntry
from buildnotify.utils.util_error_sanitization import sanitize_error_message

if TYPE_CHECKING:
    from buildnotify.models.model_notification_data import ModelNotificationData
    from buildnotify.models.model_notify_config import ModelNotifyConfig

logger = logging.getLogger(__name__)

NO_WEBHOOKS_WARNING: str = (
    "No notification webhooks configured. "
    "Set SLACK_WEBHOOK_URL, LARK_WEBHOOK_URL, or DISCORD_WEBHOOK_URL."
)


async def _deliver(
    entry: NotifierRegistryEntry,
    webhook_url: str,
    data: ModelNotificationData,
) -> ModelNotifierSendResult:
    """Build and send one platform's payload, capturing any failure."""
    notifier = entry.notifier
    start_time = time.perf_counter()
    log_extra = {
        "correlation_id": str(data.correlation_id),
        "platform": notifier.platform.value,
        "build_uuid": data.event.payload.build_uuid,
    }

    try:
        payload = notifier.build_payload(data)
    except Exception as e:
        logger.error(
            "Failed to build %s payload",
            notifier.name,
            extra={**log_extra, "error_type": type(e).__name__},
            exc_info=True,
        )
        return ModelNotifierSendResult(
            platform=notifier.platform,
            success=False,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            error=sanitize_error_message(e),
            error_code="BUILD_FAILED",
            correlation_id=data.correlation_id,
        )

    try:
        result = await notifier.send(
            webhook_url, payload, correlation_id=data.correlation_id
        )
    except Exception as e:
        logger.error(
            "Unexpected error sending to %s",
            notifier.name,
            extra={**log_extra, "error_type": type(e).__name__},
            exc_info=True,
        )
        return ModelNotifierSendResult(
            platform=notifier.platform,
            success=False,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            error=sanitize_error_message(e),
            error_code="UNEXPECTED_ERROR",
            correlation_id=data.correlation_id,
        )

    if result.success:
        logger.info("✓ Sent notification to %s", notifier.name, extra=log_extra)
    else:
        logger.error(
            "✗ Failed to send to %s: %s",
            notifier.name,
            result.error,
            extra={**log_extra, "error_code": result.error_code},
        )
    return result


async def send_notifications(
    data: ModelNotificationData,
    config: ModelNotifyConfig,
    registry: Optional[Sequence[NotifierRegistryEntry]] = None,
) -> ModelDispatchResult:
    """Send ``data`` to every configured platform concurrently.

    Args:
        data: Notification content for one event
        config: Configuration holding the webhook URLs
        registry: Notifier registry; defaults to ``NOTIFIERS``

    Returns:
        ModelDispatchResult with one result per configured platform, or
        ``no_platforms_configured=True`` when no webhook is set.
    """
    entries = NOTIFIERS if registry is None else registry

    targets: list[tuple[NotifierRegistryEntry, str]] = []
    for entry in entries:
        webhook_url = entry.resolve_webhook_url(config)
        if webhook_url:
            targets.append((entry, webhook_url))

    if not targets:
        logger.warning(
            NO_WEBHOOKS_WARNING,
            extra={"correlation_id": str(data.correlation_id)},
        )
        return ModelDispatchResult(
            correlation_id=data.correlation_id,
            no_platforms_configured=True,
        )

    results = await asyncio.gather(
        *(_deliver(entry, webhook_url, data) for entry, webhook_url in targets)
    )

    dispatch = ModelDispatchResult(
        correlation_id=data.correlation_id,
        results=tuple(results),
    )
    logger.info(
        "Dispatch complete",
        extra={
            "correlation_id": str(data.correlation_id),
            "delivered": [p.value for p in dispatch.delivered_platforms],
            "failed": [p.value for p in dispatch.failed_platforms],
        },
    )
    return dispatch


__all__: list[str] = ["NO_WEBHOOKS_WARNING", "send_notifications"]
