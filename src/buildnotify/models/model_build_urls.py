# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Deployment URLs fetched for a successful build."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ModelBuildUrls(BaseModel):
    """Preview and live URLs of a build. Either may be unknown."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    preview_url: Optional[str] = Field(
        default=None,
        description="Preview deployment URL (non-production branches)",
    )
    live_url: Optional[str] = Field(
        default=None,
        description="workers.dev URL of the live Worker (production branch)",
    )


__all__ = ["ModelBuildUrls"]
