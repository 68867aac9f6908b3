# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Build status classification.

Maps a build event to ``ModelBuildStatus`` using only the event type and
``payload.buildOutcome``. The function is total: an absent outcome yields
the all-false "other" status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from buildnotify.models.model_build_status import ModelBuildStatus

if TYPE_CHECKING:
    from buildnotify.models.model_build_event import ModelBuildEvent

SUCCESS_OUTCOMES: frozenset[str] = frozenset({"success"})
CANCELLED_OUTCOMES: frozenset[str] = frozenset({"cancelled", "canceled"})
FAILURE_OUTCOMES: frozenset[str] = frozenset(
    {"failure", "failed", "fail", "error"} | CANCELLED_OUTCOMES
)


def get_build_status(event: ModelBuildEvent) -> ModelBuildStatus:
    """Classify a build event.

    Args:
        event: The build event to classify

    Returns:
        ModelBuildStatus where cancelled implies failed, and an absent
        outcome gives all flags false.
    """
    outcome = (event.payload.build_outcome or "").strip().lower()
    if not outcome:
        return ModelBuildStatus()

    event_type = event.type.lower()
    is_cancelled = outcome in CANCELLED_OUTCOMES
    is_succeeded = not is_cancelled and (
        outcome in SUCCESS_OUTCOMES or "succeeded" in event_type
    )
    is_failed = not is_succeeded and (
        outcome in FAILURE_OUTCOMES or "failed" in event_type
    )
    return ModelBuildStatus(
        is_succeeded=is_succeeded,
        is_failed=is_failed,
        is_cancelled=is_cancelled,
    )


__all__: list[str] = [
    "CANCELLED_OUTCOMES",
    "FAILURE_OUTCOMES",
    "SUCCESS_OUTCOMES",
    "get_build_status",
]
