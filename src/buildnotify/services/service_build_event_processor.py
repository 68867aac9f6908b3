# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Build Event Processor - turns queue messages into notifications.

Processing Flow (per event):
    1. Validate the message body (malformed -> logged, skipped)
    2. Skip started/queued events (no notification needed)
    3. Classify the build status
    4. Enrich: build URLs for succeeded builds, build logs for failed
       builds that were not cancelled. Each lookup happens at most once and
       a failed lookup degrades to null URLs / empty logs
    5. Dispatch to every configured platform

Delivery Semantics:
    ``process_event`` never raises. The caller acknowledges the message
    unconditionally afterwards, so each event gets at most one notification
    attempt per platform.

Batches:
    Events in a batch are processed one after another; only the platform
    sends of a single event run concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from buildnotify.errors import InvalidBuildEventError
from buildnotify.models.model_batch_result import ModelBatchResult
from buildnotify.models.model_build_event import ModelBuildEvent
from buildnotify.models.model_build_urls import ModelBuildUrls
from buildnotify.models.model_notification_data import ModelNotificationData
from buildnotify.services.service_notification_dispatch import send_notifications
from buildnotify.utils.util_build_status import get_build_status
from buildnotify.utils.util_error_sanitization import sanitize_error_message

if TYPE_CHECKING:
    from buildnotify.models.model_build_status import ModelBuildStatus
    from buildnotify.models.model_dispatch_result import ModelDispatchResult
    from buildnotify.models.model_notify_config import ModelNotifyConfig
    from buildnotify.notifiers.registry_notifier import NotifierRegistryEntry
    from buildnotify.protocols import ProtocolBuildEnrichment

logger = logging.getLogger(__name__)


class _Outcome(str, Enum):
    DISPATCHED = "dispatched"
    SKIPPED = "skipped"
    INVALID = "invalid"
    ERRORED = "errored"


async def _enrich(
    event: ModelBuildEvent,
    status: ModelBuildStatus,
    enrichment: Optional[ProtocolBuildEnrichment],
) -> tuple[ModelBuildUrls, list[str]]:
    urls = ModelBuildUrls()
    logs: list[str] = []
    if enrichment is None:
        return urls, logs

    log_extra = {"build_uuid": event.payload.build_uuid, "worker": event.worker_name}
    if status.is_succeeded:
        try:
            urls = await enrichment.fetch_build_urls(event)
        except Exception as e:
            logger.warning(
                "Failed to fetch build URLs, notifying without them: %s",
                sanitize_error_message(e),
                extra=log_extra,
            )
    elif status.needs_logs:
        try:
            logs = list(await enrichment.fetch_build_logs(event))
        except Exception as e:
            logger.warning(
                "Failed to fetch build logs, notifying without them: %s",
                sanitize_error_message(e),
                extra=log_extra,
            )
    return urls, logs


async def _process(
    raw_event: Any,
    config: ModelNotifyConfig,
    enrichment: Optional[ProtocolBuildEnrichment],
    registry: Optional[Sequence[NotifierRegistryEntry]],
) -> tuple[_Outcome, Optional[ModelDispatchResult]]:
    try:
        event = (
            raw_event
            if isinstance(raw_event, ModelBuildEvent)
            else ModelBuildEvent.parse_raw_event(raw_event)
        )
    except InvalidBuildEventError as e:
        logger.error(
            "Invalid event structure, skipping: %s",
            e.message,
            extra={"error_code": e.error_code},
        )
        return _Outcome.INVALID, None

    if event.is_lifecycle_start:
        logger.debug("Skipping %s event", event.type)
        return _Outcome.SKIPPED, None

    try:
        status = get_build_status(event)
        urls, logs = await _enrich(event, status, enrichment)
        data = ModelNotificationData(
            event=event,
            preview_url=urls.preview_url,
            live_url=urls.live_url,
            logs=tuple(logs),
            production_branch=config.production_branch,
            account_id=config.account_id,
        )
        dispatch = await send_notifications(data, config, registry)
    except Exception:
        logger.exception(
            "Error processing build event",
            extra={"build_uuid": event.payload.build_uuid, "event_type": event.type},
        )
        return _Outcome.ERRORED, None

    return _Outcome.DISPATCHED, dispatch


async def process_event(
    event: ModelBuildEvent | dict[str, Any],
    config: ModelNotifyConfig,
    enrichment: Optional[ProtocolBuildEnrichment] = None,
    registry: Optional[Sequence[NotifierRegistryEntry]] = None,
) -> Optional[ModelDispatchResult]:
    """Process one build event. Never raises.

    Args:
        event: Parsed event or raw decoded queue message body
        config: Notification configuration
        enrichment: Optional URL/log fetcher; without one, notifications
            carry dashboard links only
        registry: Notifier registry; defaults to all platforms

    Returns:
        The dispatch result, or None when the event was invalid, skipped,
        or failed unexpectedly.
    """
    _, dispatch = await _process(event, config, enrichment, registry)
    return dispatch


async def process_batch(
    events: Sequence[ModelBuildEvent | dict[str, Any]],
    config: ModelNotifyConfig,
    enrichment: Optional[ProtocolBuildEnrichment] = None,
    registry: Optional[Sequence[NotifierRegistryEntry]] = None,
) -> ModelBatchResult:
    """Process a batch of queue messages sequentially.

    Every message counts as acknowledged whatever happened to it. When no
    webhook is configured at all, the batch is acknowledged straight away
    without looking at the events.
    """
    if not config.has_any_webhook:
        logger.error(
            "No webhook URLs configured. "
            "Set SLACK_WEBHOOK_URL, LARK_WEBHOOK_URL, or DISCORD_WEBHOOK_URL."
        )
        return ModelBatchResult(acknowledged=len(events))

    counts = {outcome: 0 for outcome in _Outcome}
    dispatches: list[ModelDispatchResult] = []
    for raw_event in events:
        outcome, dispatch = await _process(raw_event, config, enrichment, registry)
        counts[outcome] += 1
        if dispatch is not None:
            dispatches.append(dispatch)

    return ModelBatchResult(
        acknowledged=len(events),
        dispatched=counts[_Outcome.DISPATCHED],
        skipped=counts[_Outcome.SKIPPED],
        invalid=counts[_Outcome.INVALID],
        errored=counts[_Outcome.ERRORED],
        dispatches=tuple(dispatches),
    )


__all__: list[str] = ["process_batch", "process_event"]
