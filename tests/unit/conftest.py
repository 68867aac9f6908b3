# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit test configuration.

Every test under tests/unit/ gets the ``unit`` marker from the collection
hook below, so individual modules do not need a ``pytestmark``:

    pytest -m unit
    pytest -m "not unit"

Unit tests never touch the network: notifier sends use a mocked aiohttp
session and the build API client uses ``httpx.MockTransport``. The
autouse fixture removes notifier environment variables from the developer's
shell so ``ModelNotifyConfig.from_env`` only sees what a test sets.
"""

import pytest

_NOTIFY_ENV_VARS: tuple[str, ...] = (
    "SLACK_WEBHOOK_URL",
    "LARK_WEBHOOK_URL",
    "DISCORD_WEBHOOK_URL",
    "PRODUCTION_BRANCH",
    "CLOUDFLARE_ACCOUNT_ID",
    "CLOUDFLARE_API_TOKEN",
    "CLOUDFLARE_API_BASE_URL",
    "BUILDNOTIFY_REQUEST_TIMEOUT",
    "BUILDNOTIFY_LOG_LEVEL",
)


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Add the unit marker to all tests collected from tests/unit."""
    unit_marker = pytest.mark.unit

    for item in items:
        if "tests/unit" not in item.path.as_posix():
            continue
        if not any(marker.name == "unit" for marker in item.iter_markers()):
            item.add_marker(unit_marker)


@pytest.fixture(autouse=True)
def _clear_notify_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove ambient webhook URLs and API credentials for test isolation."""
    for name in _NOTIFY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
