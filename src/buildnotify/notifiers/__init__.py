# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Platform notifiers and the notifier registry.

Exports:
    NotifierWebhookBase: Shared payload routing and aiohttp webhook transport
    NotifierSlack: Block Kit messages
    NotifierLark: Interactive cards
    NotifierDiscord: Embeds
    NOTIFIERS: Default registry of all platforms
"""

from buildnotify.notifiers.notifier_base import (
    MessageFacts,
    NotifierWebhookBase,
    collect_message_facts,
)
from buildnotify.notifiers.notifier_discord import NotifierDiscord
from buildnotify.notifiers.notifier_lark import NotifierLark
from buildnotify.notifiers.notifier_slack import NotifierSlack
from buildnotify.notifiers.registry_notifier import (
    NOTIFIERS,
    NotifierRegistryEntry,
    build_default_registry,
)

__all__: list[str] = [
    "MessageFacts",
    "NotifierWebhookBase",
    "collect_message_facts",
    "NotifierDiscord",
    "NotifierLark",
    "NotifierSlack",
    "NOTIFIERS",
    "NotifierRegistryEntry",
    "build_default_registry",
]
