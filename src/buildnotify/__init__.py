# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Build notifications - Workers Builds events to Slack, Lark and Discord.

This package consumes build lifecycle events and fans out formatted
notifications to every configured chat platform:

- Status classification of build events
- Root-cause error extraction from build logs
- Per-platform payload builders (Block Kit, interactive cards, embeds)
- Concurrent dispatch with per-platform failure isolation

Key Components:
    - process_event / process_batch: Event processing entry points
    - send_notifications: Fan-out dispatch coordinator
    - NotifierSlack, NotifierLark, NotifierDiscord: Platform notifiers
    - ClientBuildApi: Build URL and log enrichment via the Cloudflare API
"""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
