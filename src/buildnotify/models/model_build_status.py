# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Derived build status model."""

from pydantic import BaseModel, ConfigDict

from buildnotify.enums import EnumMessageKind


class ModelBuildStatus(BaseModel):
    """Status flags derived from a build event.

    ``is_cancelled`` implies ``is_failed``: a cancelled build is a failed
    build that was stopped on purpose. All three flags false means "other"
    (started, queued, or unknown outcome).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_succeeded: bool = False
    is_failed: bool = False
    is_cancelled: bool = False

    @property
    def kind(self) -> EnumMessageKind:
        """Message kind to render for this status.

        Cancelled is checked before failed so cancelled builds get the
        cancellation copy rather than a failure alert.
        """
        if self.is_succeeded:
            return EnumMessageKind.SUCCEEDED
        if self.is_cancelled:
            return EnumMessageKind.CANCELLED
        if self.is_failed:
            return EnumMessageKind.FAILED
        return EnumMessageKind.FALLBACK

    @property
    def needs_logs(self) -> bool:
        """Whether build logs should be fetched for this status."""
        return self.is_failed and not self.is_cancelled


__all__ = ["ModelBuildStatus"]
