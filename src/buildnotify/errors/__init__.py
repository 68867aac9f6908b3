# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Build Notification Errors Module.

Exports:
    ModelNotifyErrorContext: Bundled error context model
    BuildNotifyError: Base error class
    ProtocolConfigurationError: Configuration validation errors
    InvalidBuildEventError: Malformed queue message errors
    EnrichmentFetchError: Build API fetch errors

Error Sanitization Guidelines:
    NEVER include in error messages or context:
        - Webhook URLs (Slack, Lark and Discord embed the secret in the URL)
        - API tokens
        - Author email addresses beyond the display name

    SAFE to include:
        - Platform names, worker names, build UUIDs
        - HTTP status codes and error codes
        - Correlation IDs
"""

from buildnotify.errors.model_notify_error_context import ModelNotifyErrorContext
from buildnotify.errors.notify_errors import (
    BuildNotifyError,
    EnrichmentFetchError,
    InvalidBuildEventError,
    ProtocolConfigurationError,
)

__all__: list[str] = [
    "ModelNotifyErrorContext",
    "BuildNotifyError",
    "ProtocolConfigurationError",
    "InvalidBuildEventError",
    "EnrichmentFetchError",
]
