# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocols for the collaborators of the notification core."""

from buildnotify.protocols.protocol_build_enrichment import ProtocolBuildEnrichment
from buildnotify.protocols.protocol_notifier import ProtocolNotifier

__all__: list[str] = [
    "ProtocolBuildEnrichment",
    "ProtocolNotifier",
]
