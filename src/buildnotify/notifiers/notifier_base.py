# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Webhook Notifier Base - shared payload routing and webhook transport.

Architecture:
    Every platform notifier splits its work in two phases:
    - build: ``build_payload`` classifies the event, collects the shared
      message facts (worker, branch, commit, author, links) and calls the
      platform's renderer for one of four message kinds. Pure, synchronous.
    - send: ``send`` POSTs the JSON payload to the webhook with aiohttp.
      This is the only point of suspension.

Content Parity:
    Subclasses only decide rendering syntax. Which facts are shown, which
    link is primary and which message kind applies are decided here, once,
    for every platform.

Error Handling:
    ``send`` never raises for delivery problems. Non-2xx responses,
    timeouts and client errors are returned as a failed
    ModelNotifierSendResult with a sanitized error and an error code of the
    form ``<PLATFORM>_HTTP_<status>``, ``<PLATFORM>_TIMEOUT``,
    ``<PLATFORM>_CONNECTION_ERROR`` or ``<PLATFORM>_CLIENT_ERROR``. There
    is no retry; a failed send is final for that platform and event.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, NamedTuple, Optional

import aiohttp

from buildnotify.enums import EnumMessageKind, EnumNotificationPlatform
from buildnotify.models.model_notifier_send_result import ModelNotifierSendResult
from buildnotify.utils.util_build_status import get_build_status
from buildnotify.utils.util_error_extraction import extract_build_error
from buildnotify.utils.util_error_sanitization import (
    sanitize_error_message,
    sanitize_error_string,
)
from buildnotify.utils.util_event_links import (
    PrimaryLink,
    extract_author_name,
    get_commit_url,
    get_dashboard_url,
    is_production_branch,
    resolve_primary_link,
    short_commit_hash,
)

if TYPE_CHECKING:
    from uuid import UUID

    from buildnotify.models.model_notification_data import ModelNotificationData

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS: float = 10.0
DEFAULT_WORKER_NAME: str = "Worker"
UNKNOWN_EVENT_TEXT: str = "Unknown event"


class MessageFacts(NamedTuple):
    """Platform-independent content of a notification."""

    kind: EnumMessageKind
    worker_name: str
    branch: Optional[str]
    commit_short: Optional[str]
    commit_url: Optional[str]
    author: Optional[str]
    is_production: bool
    dashboard_url: Optional[str]
    primary_link: PrimaryLink
    timestamp: Optional[str]
    event_timestamp: Optional[str]
    event_type: str

    @property
    def deploy_title(self) -> str:
        return "Production Deploy" if self.is_production else "Preview Deploy"


def collect_message_facts(data: ModelNotificationData) -> MessageFacts:
    """Derive the shared message content for one event."""
    event = data.event
    meta = event.trigger
    status = get_build_status(event)
    branch = meta.branch if meta else None
    is_production = is_production_branch(branch, data.production_branch)
    dashboard_url = get_dashboard_url(event, data.account_id)

    return MessageFacts(
        kind=status.kind,
        worker_name=event.worker_name or DEFAULT_WORKER_NAME,
        branch=branch,
        commit_short=short_commit_hash(meta.commit_hash if meta else None),
        commit_url=get_commit_url(event),
        author=extract_author_name(meta.author if meta else None),
        is_production=is_production,
        dashboard_url=dashboard_url,
        primary_link=resolve_primary_link(
            is_production, data.preview_url, data.live_url, dashboard_url
        ),
        timestamp=event.payload.stopped_at or event.metadata.event_timestamp,
        event_timestamp=event.metadata.event_timestamp,
        event_type=event.type or UNKNOWN_EVENT_TEXT,
    )


def truncate_text(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters, marking the cut."""
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def fence_safe(text: str) -> str:
    """Keep log text from closing the surrounding code fence."""
    return text.replace("```", "`\u200b`\u200b`")


class NotifierWebhookBase(ABC):
    """Base class for webhook notifiers.

    Subclasses set ``platform`` and implement the four ``_render_*``
    methods. Instances hold no per-event state and are shared across all
    events for the lifetime of the process.

    Attributes:
        _http_session: Optional shared aiohttp session
        _timeout: HTTP request timeout in seconds
    """

    platform: ClassVar[EnumNotificationPlatform]

    def __init__(
        self,
        http_session: Optional[aiohttp.ClientSession] = None,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the notifier.

        Args:
            http_session: Optional shared aiohttp ClientSession. If not
                provided, a new session is created per request.
            timeout: HTTP request timeout in seconds. Default is 10.0.
        """
        self._http_session = http_session
        self._timeout = timeout

    def __repr__(self) -> str:
        return f"<{type(self).__name__} platform={self.platform.value}>"

    @property
    def name(self) -> str:
        return self.platform.display_name

    @property
    def error_code_prefix(self) -> str:
        return self.platform.value.upper()

    # =========================================================================
    # Build phase
    # =========================================================================

    def build_payload(self, data: ModelNotificationData) -> dict[str, object]:
        """Build the platform payload for one event.

        Cancelled builds get the cancellation message even though their
        status is also failed; logs are only rendered for plain failures.
        """
        facts = collect_message_facts(data)
        if facts.kind is EnumMessageKind.SUCCEEDED:
            return self._render_succeeded(facts)
        if facts.kind is EnumMessageKind.CANCELLED:
            return self._render_cancelled(facts)
        if facts.kind is EnumMessageKind.FAILED:
            return self._render_failed(facts, extract_build_error(data.logs))
        return self._render_fallback(facts)

    @abstractmethod
    def _render_succeeded(self, facts: MessageFacts) -> dict[str, object]:
        """Production/preview deploy message with the primary link."""

    @abstractmethod
    def _render_failed(self, facts: MessageFacts, error: str) -> dict[str, object]:
        """Failure message with the error block and dashboard link."""

    @abstractmethod
    def _render_cancelled(self, facts: MessageFacts) -> dict[str, object]:
        """Cancellation message with the dashboard link."""

    @abstractmethod
    def _render_fallback(self, facts: MessageFacts) -> dict[str, object]:
        """Minimal message echoing the raw event type."""

    # =========================================================================
    # Send phase
    # =========================================================================

    async def send(
        self,
        webhook_url: str,
        payload: dict[str, object],
        correlation_id: Optional[UUID] = None,
    ) -> ModelNotifierSendResult:
        """POST ``payload`` as JSON to ``webhook_url``.

        Returns:
            ModelNotifierSendResult with:
                - success: True for a 2xx response the platform accepted
                - status_code: HTTP status, when a response was received
                - error / error_code: Sanitized failure details
                - duration_ms: Time taken for the operation
        """
        start_time = time.perf_counter()

        if not webhook_url:
            return self._failure(
                start_time,
                correlation_id,
                error=f"{self.name} webhook URL not configured",
                error_code=f"{self.error_code_prefix}_NOT_CONFIGURED",
            )

        session_created = False
        session = self._http_session
        if session is None:
            session = aiohttp.ClientSession()
            session_created = True

        try:
            return await self._post(session, webhook_url, payload, correlation_id, start_time)
        finally:
            if session_created and session is not None:
                await session.close()

    async def _post(
        self,
        session: aiohttp.ClientSession,
        webhook_url: str,
        payload: dict[str, object],
        correlation_id: Optional[UUID],
        start_time: float,
    ) -> ModelNotifierSendResult:
        log_extra = {
            "correlation_id": str(correlation_id) if correlation_id else None,
            "platform": self.platform.value,
        }
        try:
            async with session.post(
                webhook_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as response:
                if not 200 <= response.status < 300:
                    response_text = await response.text()
                    logger.warning(
                        "%s webhook returned non-2xx status",
                        self.name,
                        extra={**log_extra, "status_code": response.status},
                    )
                    return self._failure(
                        start_time,
                        correlation_id,
                        error=f"HTTP {response.status}: "
                        f"{sanitize_error_string(response_text, max_length=100)}",
                        error_code=f"{self.error_code_prefix}_HTTP_{response.status}",
                        status_code=response.status,
                    )

                body_error = await self._check_response_body(response)
                if body_error is not None:
                    error, error_code = body_error
                    logger.warning(
                        "%s webhook rejected payload",
                        self.name,
                        extra={**log_extra, "status_code": response.status},
                    )
                    return self._failure(
                        start_time,
                        correlation_id,
                        error=error,
                        error_code=error_code,
                        status_code=response.status,
                    )

                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.info(
                    "%s notification delivered",
                    self.name,
                    extra={**log_extra, "duration_ms": round(duration_ms, 2)},
                )
                return ModelNotifierSendResult(
                    platform=self.platform,
                    success=True,
                    duration_ms=duration_ms,
                    status_code=response.status,
                    correlation_id=correlation_id,
                )

        except TimeoutError:
            logger.warning(
                "%s webhook timeout",
                self.name,
                extra={**log_extra, "timeout_seconds": self._timeout},
            )
            return self._failure(
                start_time,
                correlation_id,
                error="Request timeout",
                error_code=f"{self.error_code_prefix}_TIMEOUT",
            )

        except aiohttp.ClientConnectorError as e:
            logger.warning("%s webhook connection error", self.name, extra=log_extra)
            return self._failure(
                start_time,
                correlation_id,
                error=sanitize_error_message(e),
                error_code=f"{self.error_code_prefix}_CONNECTION_ERROR",
            )

        except aiohttp.ClientError as e:
            logger.warning(
                "%s webhook client error",
                self.name,
                extra={**log_extra, "error_type": type(e).__name__},
            )
            return self._failure(
                start_time,
                correlation_id,
                error=sanitize_error_message(e),
                error_code=f"{self.error_code_prefix}_CLIENT_ERROR",
            )

    async def _check_response_body(
        self, response: aiohttp.ClientResponse
    ) -> Optional[tuple[str, str]]:
        """Inspect a 2xx response body.

        Returns:
            ``(error, error_code)`` if the platform reported a failure inside
            a 2xx response, otherwise None. The default accepts any 2xx.
        """
        return None

    def _failure(
        self,
        start_time: float,
        correlation_id: Optional[UUID],
        *,
        error: str,
        error_code: str,
        status_code: Optional[int] = None,
    ) -> ModelNotifierSendResult:
        return ModelNotifierSendResult(
            platform=self.platform,
            success=False,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            status_code=status_code,
            error=error,
            error_code=error_code,
            correlation_id=correlation_id,
        )


__all__: list[str] = [
    "DEFAULT_WORKER_NAME",
    "MessageFacts",
    "NotifierWebhookBase",
    "collect_message_facts",
    "fence_safe",
    "truncate_text",
]
