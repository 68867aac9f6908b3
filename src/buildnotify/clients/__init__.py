# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Clients for the external services the notifier reads from."""

from buildnotify.clients.client_build_api import ClientBuildApi

__all__: list[str] = ["ClientBuildApi"]
