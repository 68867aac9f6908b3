# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Command line interface for build notifications."""

from buildnotify.cli.commands import cli, main

__all__: list[str] = ["cli", "main"]
