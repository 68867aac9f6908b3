# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Build enrichment protocol: fetches URLs and logs for a build event."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from buildnotify.models.model_build_event import ModelBuildEvent
    from buildnotify.models.model_build_urls import ModelBuildUrls


@runtime_checkable
class ProtocolBuildEnrichment(Protocol):
    """Collaborator that looks up data the event itself does not carry.

    The event processor calls each method at most once per event: URLs for
    succeeded builds, logs for failed (not cancelled) builds. Implementations
    may raise; the processor degrades failures to null URLs / empty logs.
    """

    async def fetch_build_urls(self, event: ModelBuildEvent) -> ModelBuildUrls:
        """Return preview and live URLs for the build."""
        ...

    async def fetch_build_logs(self, event: ModelBuildEvent) -> list[str]:
        """Return the build's log lines in order."""
        ...


__all__ = ["ProtocolBuildEnrichment"]
