# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Notifier registry.

The set of platforms is closed and known at startup, so the registry is a
static list of descriptors rather than a plugin loader. Each entry pairs a
notifier with the ``ModelNotifyConfig`` field holding its webhook URL.

Example:
    >>> registry = build_default_registry()
    >>> [entry.platform.value for entry in registry]
    ['slack', 'lark', 'discord']
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Optional

from buildnotify.enums import EnumNotificationPlatform
from buildnotify.notifiers.notifier_discord import NotifierDiscord
from buildnotify.notifiers.notifier_lark import NotifierLark
from buildnotify.notifiers.notifier_slack import NotifierSlack

if TYPE_CHECKING:
    import aiohttp

    from buildnotify.models.model_notify_config import ModelNotifyConfig
    from buildnotify.protocols import ProtocolNotifier


class NotifierRegistryEntry(NamedTuple):
    """Registry entry: one notifier and the config key of its webhook URL."""

    notifier: ProtocolNotifier
    webhook_url_key: str

    @property
    def platform(self) -> EnumNotificationPlatform:
        return self.notifier.platform

    def resolve_webhook_url(self, config: ModelNotifyConfig) -> Optional[str]:
        """Webhook URL for this entry, or None when the platform is disabled."""
        value = getattr(config, self.webhook_url_key, None)
        if not value or not str(value).strip():
            return None
        return str(value)


def build_default_registry(
    http_session: Optional[aiohttp.ClientSession] = None,
    timeout: float = 10.0,
) -> tuple[NotifierRegistryEntry, ...]:
    """Create the registry of every supported platform, in dispatch order.

    Args:
        http_session: Optional aiohttp session shared by all notifiers
        timeout: Per-request timeout in seconds for webhook calls
    """
    return (
        NotifierRegistryEntry(
            NotifierSlack(http_session=http_session, timeout=timeout),
            "slack_webhook_url",
        ),
        NotifierRegistryEntry(
            NotifierLark(http_session=http_session, timeout=timeout),
            "lark_webhook_url",
        ),
        NotifierRegistryEntry(
            NotifierDiscord(http_session=http_session, timeout=timeout),
            "discord_webhook_url",
        ),
    )


NOTIFIERS: tuple[NotifierRegistryEntry, ...] = build_default_registry()


__all__: list[str] = ["NOTIFIERS", "NotifierRegistryEntry", "build_default_registry"]
