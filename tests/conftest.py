# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pytest configuration and shared fixtures for buildnotify tests."""

from __future__ import annotations

import inspect

import pytest

from buildnotify.models import ModelBuildEvent, ModelNotifyConfig
from tests.helpers.build_events import make_event

# =============================================================================
# Duck Typing Conformance Helpers
# =============================================================================


def assert_has_methods(
    obj: object,
    required_methods: list[str],
    *,
    protocol_name: str | None = None,
) -> None:
    """Assert that an object has all required methods (duck typing conformance).

    Protocol conformance is verified by checking method presence and
    callability rather than relying only on runtime_checkable isinstance
    checks, which ignore signatures.

    Example:
        >>> assert_has_methods(
        ...     notifier,
        ...     ["build_payload", "send"],
        ...     protocol_name="ProtocolNotifier",
        ... )
    """
    name = protocol_name or obj.__class__.__name__
    for method_name in required_methods:
        assert hasattr(obj, method_name), f"{name} must have '{method_name}' method"
        assert callable(
            getattr(obj, method_name)
        ), f"{name}.{method_name} must be callable"


def assert_has_async_methods(
    obj: object,
    required_methods: list[str],
    *,
    protocol_name: str | None = None,
) -> None:
    """Assert that an object has all required methods and that they are async."""
    name = protocol_name or obj.__class__.__name__
    assert_has_methods(obj, required_methods, protocol_name=name)
    for method_name in required_methods:
        assert inspect.iscoroutinefunction(
            getattr(obj, method_name)
        ), f"{name}.{method_name} must be async (coroutine function)"


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def succeeded_event() -> ModelBuildEvent:
    """Successful production build of my-worker on main."""
    return make_event("succeeded")


@pytest.fixture
def failed_event() -> ModelBuildEvent:
    """Failed build of my-worker on main."""
    return make_event("failed")


@pytest.fixture
def cancelled_event() -> ModelBuildEvent:
    """Failed event whose outcome is cancelled."""
    return make_event("cancelled")


@pytest.fixture
def all_platforms_config() -> ModelNotifyConfig:
    """Configuration with every platform enabled and an account id."""
    return ModelNotifyConfig(
        slack_webhook_url="https://hooks.slack.com/services/T000/B000/XXXX",
        lark_webhook_url="https://open.larksuite.com/open-apis/bot/v2/hook/abc",
        discord_webhook_url="https://discord.com/api/webhooks/123/abc",
        account_id="acc-123",
    )
