# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Utility modules for build notifications.

This package provides:
    - util_build_status: Build event status classification
    - util_error_extraction: Root-cause error extraction from build logs
    - util_event_links: Branch, commit, author and dashboard link helpers
    - util_env_parsing: Type-safe environment variable parsing
    - util_error_sanitization: Error message sanitization for secure logging
"""

from buildnotify.utils.util_build_status import get_build_status
from buildnotify.utils.util_env_parsing import parse_env_float, parse_env_str
from buildnotify.utils.util_error_extraction import (
    NO_LOGS_MESSAGE,
    extract_build_error,
    is_error_marker,
)
from buildnotify.utils.util_error_sanitization import (
    SENSITIVE_PATTERNS,
    sanitize_error_message,
    sanitize_error_string,
)
from buildnotify.utils.util_event_links import (
    PrimaryLink,
    extract_author_name,
    get_commit_url,
    get_dashboard_url,
    is_production_branch,
    resolve_primary_link,
    short_commit_hash,
)

__all__: list[str] = [
    "get_build_status",
    "NO_LOGS_MESSAGE",
    "extract_build_error",
    "is_error_marker",
    "PrimaryLink",
    "extract_author_name",
    "get_commit_url",
    "get_dashboard_url",
    "is_production_branch",
    "resolve_primary_link",
    "short_commit_hash",
    "parse_env_float",
    "parse_env_str",
    "SENSITIVE_PATTERNS",
    "sanitize_error_message",
    "sanitize_error_string",
]
