# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Slack notifier using Block Kit message formatting.

Payload shape::

    {"blocks": [
        {"type": "section", "text": {...}, "accessory": {"type": "button", ...}},
        {"type": "context", "elements": [branch, commit, author]},
        {"type": "section", "text": {"type": "mrkdwn", "text": "```error```"}},
    ]}

See https://api.slack.com/block-kit
"""

from __future__ import annotations

from typing import Optional

from buildnotify.enums import EnumNotificationPlatform
from buildnotify.notifiers.notifier_base import (
    MessageFacts,
    NotifierWebhookBase,
    fence_safe,
)

# Section text is limited to 3000 characters; leave room for the fence.
SLACK_ERROR_TEXT_LIMIT: int = 2900


def escape_mrkdwn(text: str) -> str:
    """Escape the control characters Slack interprets in mrkdwn text."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def truncate_escaped(text: str, limit: int) -> str:
    """Truncate raw ``text`` and escape it so the result fits in ``limit``.

    The cut is made between source characters, so it never lands inside an
    entity.
    """
    escaped = escape_mrkdwn(text)
    if len(escaped) <= limit:
        return escaped
    pieces: list[str] = []
    size = 0
    for char in text:
        piece = escape_mrkdwn(char)
        if size + len(piece) > limit - 1:
            break
        pieces.append(piece)
        size += len(piece)
    return "".join(pieces) + "…"


def _section(
    text: str,
    button_text: Optional[str] = None,
    button_url: Optional[str] = None,
    button_style: Optional[str] = None,
) -> dict[str, object]:
    block: dict[str, object] = {
        "type": "section",
        "text": {"type": "mrkdwn", "text": text},
    }
    if button_text and button_url:
        button: dict[str, object] = {
            "type": "button",
            "text": {"type": "plain_text", "text": button_text},
            "url": button_url,
        }
        if button_style:
            button["style"] = button_style
        block["accessory"] = button
    return block


def _context_elements(facts: MessageFacts) -> list[dict[str, object]]:
    elements: list[dict[str, object]] = []
    if facts.branch:
        elements.append({"type": "mrkdwn", "text": f"*Branch:* `{facts.branch}`"})
    if facts.commit_short:
        commit = (
            f"<{facts.commit_url}|{facts.commit_short}>"
            if facts.commit_url
            else f"`{facts.commit_short}`"
        )
        elements.append({"type": "mrkdwn", "text": f"*Commit:* {commit}"})
    if facts.author:
        elements.append({"type": "mrkdwn", "text": f"*Author:* {facts.author}"})
    return elements


def _with_context(blocks: list[dict[str, object]], facts: MessageFacts) -> None:
    elements = _context_elements(facts)
    if elements:
        blocks.append({"type": "context", "elements": elements})


class NotifierSlack(NotifierWebhookBase):
    """Slack incoming-webhook notifier."""

    platform = EnumNotificationPlatform.SLACK

    def _render_succeeded(self, facts: MessageFacts) -> dict[str, object]:
        link = facts.primary_link
        blocks = [
            _section(
                f"✅  *{facts.deploy_title}*\n*{facts.worker_name}*",
                link.label,
                link.url,
            )
        ]
        _with_context(blocks, facts)
        return {"blocks": blocks}

    def _render_failed(self, facts: MessageFacts, error: str) -> dict[str, object]:
        blocks = [
            _section(
                f"❌  *Build Failed*\n*{facts.worker_name}*",
                "View Logs",
                facts.dashboard_url,
                "danger",
            )
        ]
        _with_context(blocks, facts)
        error_text = truncate_escaped(fence_safe(error), SLACK_ERROR_TEXT_LIMIT)
        blocks.append(
            {"type": "section", "text": {"type": "mrkdwn", "text": f"```{error_text}```"}}
        )
        return {"blocks": blocks}

    def _render_cancelled(self, facts: MessageFacts) -> dict[str, object]:
        blocks = [
            _section(
                f"⚠️  *Build Cancelled*\n*{facts.worker_name}*",
                "View Build",
                facts.dashboard_url,
            )
        ]
        _with_context(blocks, facts)
        return {"blocks": blocks}

    def _render_fallback(self, facts: MessageFacts) -> dict[str, object]:
        return {"blocks": [_section(f"📢 {facts.event_type}")]}


__all__: list[str] = ["NotifierSlack", "escape_mrkdwn", "truncate_escaped"]
