# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Summary of processing one batch of queue messages."""

from pydantic import BaseModel, ConfigDict, Field

from buildnotify.models.model_dispatch_result import ModelDispatchResult


class ModelBatchResult(BaseModel):
    """Counters for a processed batch.

    Every message is acknowledged regardless of outcome, so
    ``acknowledged`` always equals the batch size.

    Attributes:
        acknowledged: Messages acknowledged back to the queue
        dispatched: Events that reached the dispatch coordinator
        skipped: Started/queued events that need no notification
        invalid: Messages that were not valid build events
        errored: Events whose processing failed unexpectedly
        dispatches: Dispatch results in batch order
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    acknowledged: int = Field(default=0, ge=0)
    dispatched: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)
    invalid: int = Field(default=0, ge=0)
    errored: int = Field(default=0, ge=0)
    dispatches: tuple[ModelDispatchResult, ...] = ()


__all__ = ["ModelBatchResult"]
