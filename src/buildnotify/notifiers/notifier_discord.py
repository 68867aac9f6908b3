# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Discord notifier using webhook embeds.

See https://discord.com/developers/docs/resources/webhook and
https://discord.com/developers/docs/resources/channel#embed-object
"""

from __future__ import annotations

from typing import Optional

from buildnotify.enums import EnumNotificationPlatform
from buildnotify.notifiers.notifier_base import (
    MessageFacts,
    NotifierWebhookBase,
    fence_safe,
    truncate_text,
)

# Embed colors (decimal values)
COLOR_SUCCESS: int = 0x28A745
COLOR_FAILURE: int = 0xDC3545
COLOR_CANCELLED: int = 0xFFC107
COLOR_DEFAULT: int = 0x0366D6

# Field values are limited to 1024 characters; leave room for the fence.
DISCORD_ERROR_TEXT_LIMIT: int = 1000


def _field(name: str, value: str, inline: bool = False) -> dict[str, object]:
    return {"name": name, "value": value, "inline": inline}


def _metadata_fields(facts: MessageFacts) -> list[dict[str, object]]:
    fields: list[dict[str, object]] = []
    if facts.branch:
        fields.append(_field("Branch", f"`{facts.branch}`", inline=True))
    if facts.commit_short:
        value = (
            f"[`{facts.commit_short}`]({facts.commit_url})"
            if facts.commit_url
            else f"`{facts.commit_short}`"
        )
        fields.append(_field("Commit", value, inline=True))
    if facts.author:
        fields.append(_field("Author", facts.author, inline=True))
    return fields


def _embed(
    title: str,
    description: str,
    color: int,
    facts: MessageFacts,
    fields: Optional[list[dict[str, object]]] = None,
    url: Optional[str] = None,
) -> dict[str, object]:
    embed: dict[str, object] = {
        "title": title,
        "description": description,
        "color": color,
    }
    if fields:
        embed["fields"] = fields
    if facts.timestamp:
        embed["timestamp"] = facts.timestamp
    if url:
        embed["url"] = url
    return {"embeds": [embed]}


class NotifierDiscord(NotifierWebhookBase):
    """Discord webhook notifier."""

    platform = EnumNotificationPlatform.DISCORD

    def _render_succeeded(self, facts: MessageFacts) -> dict[str, object]:
        fields = _metadata_fields(facts)
        link = facts.primary_link
        if facts.is_production and link.label == "View Worker":
            fields.append(_field("Worker URL", f"[{link.label}]({link.url})"))
        elif not facts.is_production and link.label == "View Preview":
            fields.append(_field("Preview URL", f"[{link.label}]({link.url})"))

        return _embed(
            f"✅ {facts.deploy_title}",
            f"**{facts.worker_name}**",
            COLOR_SUCCESS,
            facts,
            fields,
            url=link.url,
        )

    def _render_failed(self, facts: MessageFacts, error: str) -> dict[str, object]:
        fields = _metadata_fields(facts)
        error_text = truncate_text(fence_safe(error), DISCORD_ERROR_TEXT_LIMIT)
        fields.append(_field("Error", f"```\n{error_text}\n```"))
        if facts.dashboard_url:
            fields.append(_field("Logs", f"[View Full Logs]({facts.dashboard_url})"))

        return _embed(
            "❌ Build Failed",
            f"**{facts.worker_name}**",
            COLOR_FAILURE,
            facts,
            fields,
        )

    def _render_cancelled(self, facts: MessageFacts) -> dict[str, object]:
        fields = _metadata_fields(facts)
        if facts.dashboard_url:
            fields.append(_field("Build Details", f"[View Build]({facts.dashboard_url})"))

        return _embed(
            "⚠️ Build Cancelled",
            f"**{facts.worker_name}**",
            COLOR_CANCELLED,
            facts,
            fields,
        )

    def _render_fallback(self, facts: MessageFacts) -> dict[str, object]:
        # Fallback embeds are stamped with the envelope time only.
        facts = facts._replace(timestamp=facts.event_timestamp)
        return _embed("📢 Build Event", facts.event_type, COLOR_DEFAULT, facts)


__all__: list[str] = ["NotifierDiscord"]
