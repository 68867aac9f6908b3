# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Build lifecycle event models.

These models mirror the Workers Builds event subscription wire format. The
queue delivers camelCase JSON; the models accept it through aliases and
expose snake_case attributes. Unknown fields are ignored so new fields in
the event schema never break parsing.

Example:
    >>> event = ModelBuildEvent.parse_raw_event(
    ...     {
    ...         "type": "cf.workersBuilds.worker.build.succeeded",
    ...         "source": {"workerName": "my-worker"},
    ...         "payload": {"buildUuid": "build-1", "buildOutcome": "success"},
    ...         "metadata": {"accountId": "acc-1"},
    ...     }
    ... )
    >>> event.payload.build_outcome
    'success'
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from buildnotify.errors import InvalidBuildEventError, ModelNotifyErrorContext

_WIRE_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    alias_generator=to_camel,
    populate_by_name=True,
)

# Top-level keys a queue message must carry to be treated as a build event
_REQUIRED_EVENT_KEYS: tuple[str, ...] = ("type", "payload", "metadata")


class ModelBuildEventSource(BaseModel):
    """Origin of the event (the Worker being built)."""

    model_config = _WIRE_CONFIG

    type: Optional[str] = None
    worker_name: Optional[str] = None


class ModelBuildTriggerMetadata(BaseModel):
    """Source-control details of the push that triggered the build."""

    model_config = _WIRE_CONFIG

    build_trigger_source: Optional[str] = None
    branch: Optional[str] = None
    commit_hash: Optional[str] = None
    commit_message: Optional[str] = None
    author: Optional[str] = None
    build_command: Optional[str] = None
    deploy_command: Optional[str] = None
    root_directory: Optional[str] = None
    repo_name: Optional[str] = None
    provider_account_name: Optional[str] = None
    provider_type: Optional[str] = None


class ModelBuildEventPayload(BaseModel):
    """Build-specific payload of the event."""

    model_config = _WIRE_CONFIG

    build_uuid: Optional[str] = None
    status: Optional[str] = None
    build_outcome: Optional[str] = None
    created_at: Optional[str] = None
    stopped_at: Optional[str] = None
    build_trigger_metadata: Optional[ModelBuildTriggerMetadata] = None


class ModelBuildEventMetadata(BaseModel):
    """Event envelope metadata."""

    model_config = _WIRE_CONFIG

    account_id: Optional[str] = None
    event_subscription_id: Optional[str] = None
    event_schema_version: Optional[int] = None
    event_timestamp: Optional[str] = None


class ModelBuildEvent(BaseModel):
    """A single build lifecycle event as received from the queue.

    Immutable once received; the notification core only reads it.

    Attributes:
        type: Event type, e.g. ``cf.workersBuilds.worker.build.failed``
        source: Origin of the event (worker name)
        payload: Build details (uuid, outcome, trigger metadata)
        metadata: Envelope metadata (account id, event timestamp)
    """

    model_config = _WIRE_CONFIG

    type: str = Field(..., min_length=1)
    source: ModelBuildEventSource = Field(default_factory=ModelBuildEventSource)
    payload: ModelBuildEventPayload
    metadata: ModelBuildEventMetadata

    @property
    def worker_name(self) -> Optional[str]:
        """Name of the Worker the build belongs to."""
        return self.source.worker_name

    @property
    def trigger(self) -> Optional[ModelBuildTriggerMetadata]:
        """Trigger metadata, when the build came from a push."""
        return self.payload.build_trigger_metadata

    @property
    def is_lifecycle_start(self) -> bool:
        """True for started/queued events, which never produce a notification."""
        return "started" in self.type or "queued" in self.type

    @classmethod
    def parse_raw_event(cls, raw: Any) -> ModelBuildEvent:
        """Validate a decoded queue message body into a build event.

        Args:
            raw: Decoded JSON body of the queue message.

        Returns:
            The parsed event.

        Raises:
            InvalidBuildEventError: If the body is not an object, lacks
                ``type``/``payload``/``metadata``, or fails validation.
        """
        context = ModelNotifyErrorContext(operation="parse_event")
        if not isinstance(raw, dict):
            raise InvalidBuildEventError(
                "Build event must be a JSON object",
                context=context,
                received_type=type(raw).__name__,
            )

        # Empty objects are present; only absent, null or empty-string keys count.
        missing = [
            key for key in _REQUIRED_EVENT_KEYS if raw.get(key) is None or raw.get(key) == ""
        ]
        if missing:
            raise InvalidBuildEventError(
                f"Build event is missing required fields: {', '.join(missing)}",
                context=context,
                missing_fields=missing,
            )

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise InvalidBuildEventError(
                f"Build event failed validation ({e.error_count()} errors)",
                context=context,
            ) from e


__all__ = [
    "ModelBuildEvent",
    "ModelBuildEventMetadata",
    "ModelBuildEventPayload",
    "ModelBuildEventSource",
    "ModelBuildTriggerMetadata",
]
