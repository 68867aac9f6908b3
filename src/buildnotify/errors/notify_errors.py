# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Build Notification Error Classes.

Error Hierarchy:
    BuildNotifyError (base error)
    ├── ProtocolConfigurationError
    ├── InvalidBuildEventError
    └── EnrichmentFetchError

All errors:
    - Carry a string ``error_code`` for programmatic handling
    - Support proper error chaining with ``raise ... from e``
    - Accept ModelNotifyErrorContext for bundled context parameters
    - Keep any extra keyword context in ``self.context``
"""

from typing import Optional
from uuid import UUID

from buildnotify.errors.model_notify_error_context import ModelNotifyErrorContext


class BuildNotifyError(Exception):
    """Base error class for build notification failures.

    Structured Fields (via ModelNotifyErrorContext):
        platform: Chat platform involved
        operation: Operation being performed
        target_name: Target resource/endpoint name
        correlation_id: Correlation ID of the event being processed

    Example:
        >>> context = ModelNotifyErrorContext(operation="dispatch")
        >>> raise BuildNotifyError("Dispatch failed", context=context, attempts=1)
    """

    default_error_code: str = "OPERATION_FAILED"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[ModelNotifyErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize BuildNotifyError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to the class default code)
            context: Bundled notification context (platform, operation, etc.)
            **extra_context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.correlation_id: Optional[UUID] = None

        structured_context: dict[str, object] = dict(extra_context)
        if context is not None:
            if context.platform is not None:
                structured_context["platform"] = context.platform
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            self.correlation_id = context.correlation_id
        self.context = structured_context

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ProtocolConfigurationError(BuildNotifyError):
    """Raised when configuration values are missing or invalid.

    Example:
        >>> raise ProtocolConfigurationError(
        ...     "BUILDNOTIFY_REQUEST_TIMEOUT must be a number",
        ...     variable="BUILDNOTIFY_REQUEST_TIMEOUT",
        ... )
    """

    default_error_code = "INVALID_CONFIGURATION"


class InvalidBuildEventError(BuildNotifyError):
    """Raised when a queue message does not have the build event shape.

    Malformed events are logged and skipped; no notification is attempted.
    """

    default_error_code = "INVALID_EVENT"


class EnrichmentFetchError(BuildNotifyError):
    """Raised when build URLs or logs cannot be fetched from the build API.

    The event processor degrades this to null URLs / empty logs.
    """

    default_error_code = "ENRICHMENT_FETCH_FAILED"


__all__ = [
    "BuildNotifyError",
    "EnrichmentFetchError",
    "InvalidBuildEventError",
    "ProtocolConfigurationError",
]
