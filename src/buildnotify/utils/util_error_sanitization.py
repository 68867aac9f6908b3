# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error message sanitization utilities.

Webhook URLs for Slack, Lark and Discord embed their secret in the URL
path, and transport exceptions (aiohttp, httpx) routinely echo the request
URL. Every error message is passed through these functions before it is
logged or stored in a result model.

Sanitization rules:
    1. Replace every URL with ``[REDACTED_URL]``
    2. If a credential-like pattern remains, redact the whole message
    3. Truncate long messages

Example:
    >>> sanitize_error_string(
    ...     "Cannot connect to https://hooks.slack.com/services/T0/B0/secret"
    ... )
    'Cannot connect to [REDACTED_URL]'
"""

from __future__ import annotations

import re

_URL_PATTERN = re.compile(r"https?://[^\s'\"<>]+")
_REDACTED_URL = "[REDACTED_URL]"
_REDACTED_MESSAGE = "[REDACTED - potentially sensitive data]"

# Checked case-insensitively after URLs have been replaced.
SENSITIVE_PATTERNS: tuple[str, ...] = (
    # Secrets and keys
    "secret",
    "token",
    "api_key",
    "apikey",
    "api-key",
    "password",
    # Authentication
    "bearer",
    "authorization",
    "credential",
    # Webhook paths without a scheme
    "hooks.slack.com",
    "/api/webhooks/",
    "/bot/v2/hook/",
)


def sanitize_error_string(error_str: str, max_length: int = 500) -> str:
    """Sanitize a raw error string for safe inclusion in logs and results.

    Args:
        error_str: The error string to sanitize
        max_length: Maximum length of the sanitized message (default 500)

    Returns:
        Sanitized error message.
    """
    if not error_str:
        return ""

    cleaned = _URL_PATTERN.sub(_REDACTED_URL, error_str)

    cleaned_lower = cleaned.lower()
    for pattern in SENSITIVE_PATTERNS:
        if pattern in cleaned_lower:
            return _REDACTED_MESSAGE

    if len(cleaned) > max_length:
        return cleaned[:max_length] + "... [truncated]"

    return cleaned


def sanitize_error_message(exception: BaseException, max_length: int = 500) -> str:
    """Sanitize an exception for safe inclusion in logs and results.

    Returns:
        ``"{ExceptionType}: {sanitized_message}"``, or just the type name
        when the exception has no message.

    Example:
        >>> sanitize_error_message(ValueError("bad token=abc"))
        'ValueError: [REDACTED - potentially sensitive data]'
    """
    exception_type = type(exception).__name__
    message = sanitize_error_string(str(exception), max_length=max_length)
    if not message:
        return exception_type
    return f"{exception_type}: {message}"


__all__: list[str] = [
    "SENSITIVE_PATTERNS",
    "sanitize_error_message",
    "sanitize_error_string",
]
