# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Lark (Feishu) notifier using interactive message cards.

Payload shape::

    {"msg_type": "interactive",
     "card": {"config": {...},
              "header": {"title": {...}, "template": "green"},
              "elements": [worker, fields, error, action]}}

Lark answers HTTP 200 even when it rejects a message; the JSON body carries
``code`` (or ``StatusCode`` on older endpoints) and a non-zero value is a
failed delivery.

See https://open.feishu.cn/document/client-docs/bot-v3/add-custom-bot
"""

from __future__ import annotations

import logging
from typing import Optional

import aiohttp

from buildnotify.enums import EnumNotificationPlatform
from buildnotify.notifiers.notifier_base import (
    MessageFacts,
    NotifierWebhookBase,
    fence_safe,
    truncate_text,
)
from buildnotify.utils.util_error_sanitization import sanitize_error_string

logger = logging.getLogger(__name__)

LARK_ERROR_TEXT_LIMIT: int = 2000

TEMPLATE_SUCCESS: str = "green"
TEMPLATE_FAILURE: str = "red"
TEMPLATE_CANCELLED: str = "orange"
TEMPLATE_DEFAULT: str = "blue"


def _md_div(content: str) -> dict[str, object]:
    return {"tag": "div", "text": {"tag": "lark_md", "content": content}}


def _metadata_fields(facts: MessageFacts) -> list[dict[str, object]]:
    fields: list[dict[str, object]] = []

    def add(label: str, value: str) -> None:
        fields.append(
            {
                "is_short": True,
                "text": {"tag": "lark_md", "content": f"**{label}:**\n{value}"},
            }
        )

    if facts.branch:
        add("Branch", f"`{facts.branch}`")
    if facts.commit_short:
        add(
            "Commit",
            f"[{facts.commit_short}]({facts.commit_url})"
            if facts.commit_url
            else f"`{facts.commit_short}`",
        )
    if facts.author:
        add("Author", facts.author)
    return fields


def _action(
    text: str, url: Optional[str], button_type: str = "default"
) -> Optional[dict[str, object]]:
    if not url:
        return None
    return {
        "tag": "action",
        "actions": [
            {
                "tag": "button",
                "text": {"tag": "plain_text", "content": text},
                "url": url,
                "type": button_type,
            }
        ],
    }


def _card(
    title: str,
    template: str,
    facts: MessageFacts,
    extra: Optional[list[dict[str, object]]] = None,
    action: Optional[dict[str, object]] = None,
) -> dict[str, object]:
    elements: list[dict[str, object]] = [_md_div(f"**{facts.worker_name}**")]
    fields = _metadata_fields(facts)
    if fields:
        elements.append({"tag": "div", "fields": fields})
    if extra:
        elements.extend(extra)
    if action:
        elements.append(action)

    return {
        "msg_type": "interactive",
        "card": {
            "config": {"wide_screen_mode": True},
            "header": {
                "title": {"tag": "plain_text", "content": title},
                "template": template,
            },
            "elements": elements,
        },
    }


class NotifierLark(NotifierWebhookBase):
    """Lark custom bot webhook notifier."""

    platform = EnumNotificationPlatform.LARK

    def _render_succeeded(self, facts: MessageFacts) -> dict[str, object]:
        link = facts.primary_link
        return _card(
            f"✅ {facts.deploy_title}",
            TEMPLATE_SUCCESS,
            facts,
            action=_action(link.label, link.url, "primary"),
        )

    def _render_failed(self, facts: MessageFacts, error: str) -> dict[str, object]:
        error_text = truncate_text(fence_safe(error), LARK_ERROR_TEXT_LIMIT)
        return _card(
            "❌ Build Failed",
            TEMPLATE_FAILURE,
            facts,
            extra=[{"tag": "markdown", "content": f"```\n{error_text}\n```"}],
            action=_action("View Logs", facts.dashboard_url, "danger"),
        )

    def _render_cancelled(self, facts: MessageFacts) -> dict[str, object]:
        return _card(
            "⚠️ Build Cancelled",
            TEMPLATE_CANCELLED,
            facts,
            action=_action("View Build", facts.dashboard_url),
        )

    def _render_fallback(self, facts: MessageFacts) -> dict[str, object]:
        return {
            "msg_type": "interactive",
            "card": {
                "config": {"wide_screen_mode": True},
                "header": {
                    "title": {"tag": "plain_text", "content": "📢 Build Event"},
                    "template": TEMPLATE_DEFAULT,
                },
                "elements": [_md_div(facts.event_type)],
            },
        }

    async def _check_response_body(
        self, response: aiohttp.ClientResponse
    ) -> Optional[tuple[str, str]]:
        try:
            body = await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            logger.debug("Lark webhook returned a non-JSON body on 2xx")
            return None

        if not isinstance(body, dict):
            return None
        code = body.get("code", body.get("StatusCode", 0))
        if code in (0, None):
            return None
        message = str(body.get("msg") or body.get("StatusMessage") or "")
        return (
            f"Lark API error {code}: {sanitize_error_string(message, max_length=100)}",
            "LARK_API_ERROR",
        )


__all__: list[str] = ["NotifierLark"]
