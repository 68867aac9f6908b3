# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Type-safe environment variable parsing.

Example:
    >>> import os
    >>> os.environ["BUILDNOTIFY_REQUEST_TIMEOUT"] = "5"
    >>> parse_env_float("BUILDNOTIFY_REQUEST_TIMEOUT", 10.0, min_value=0.1)
    5.0
"""

from __future__ import annotations

import os
from typing import Optional

from buildnotify.errors import ModelNotifyErrorContext, ProtocolConfigurationError


def parse_env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read a string variable, treating empty or whitespace-only values as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def parse_env_float(
    name: str,
    default: float,
    *,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    """Read a float variable with range validation.

    Args:
        name: Environment variable name
        default: Value used when the variable is unset or empty
        min_value: Inclusive lower bound
        max_value: Inclusive upper bound

    Returns:
        Parsed value, or ``default`` if unset.

    Raises:
        ProtocolConfigurationError: If the value is not a number or is out
            of range.
    """
    raw = parse_env_str(name)
    if raw is None:
        return default

    context = ModelNotifyErrorContext(operation="parse_env", target_name=name)
    try:
        value = float(raw)
    except ValueError as e:
        raise ProtocolConfigurationError(
            f"{name} must be a number, got {raw!r}",
            context=context,
        ) from e

    if min_value is not None and value < min_value:
        raise ProtocolConfigurationError(
            f"{name} must be >= {min_value}, got {value}",
            context=context,
        )
    if max_value is not None and value > max_value:
        raise ProtocolConfigurationError(
            f"{name} must be <= {max_value}, got {value}",
            context=context,
        )
    return value


__all__: list[str] = ["parse_env_float", "parse_env_str"]
