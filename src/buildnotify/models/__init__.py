# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pydantic models for build notifications."""

from buildnotify.models.model_batch_result import ModelBatchResult
from buildnotify.models.model_build_event import (
    ModelBuildEvent,
    ModelBuildEventMetadata,
    ModelBuildEventPayload,
    ModelBuildEventSource,
    ModelBuildTriggerMetadata,
)
from buildnotify.models.model_build_status import ModelBuildStatus
from buildnotify.models.model_build_urls import ModelBuildUrls
from buildnotify.models.model_dispatch_result import ModelDispatchResult
from buildnotify.models.model_error_extraction_rules import ModelErrorExtractionRules
from buildnotify.models.model_notification_data import ModelNotificationData
from buildnotify.models.model_notifier_send_result import ModelNotifierSendResult
from buildnotify.models.model_notify_config import ModelNotifyConfig

__all__: list[str] = [
    "ModelBatchResult",
    "ModelBuildEvent",
    "ModelBuildEventMetadata",
    "ModelBuildEventPayload",
    "ModelBuildEventSource",
    "ModelBuildStatus",
    "ModelBuildTriggerMetadata",
    "ModelBuildUrls",
    "ModelDispatchResult",
    "ModelErrorExtractionRules",
    "ModelNotificationData",
    "ModelNotifierSendResult",
    "ModelNotifyConfig",
]
