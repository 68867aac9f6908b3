# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Notification configuration model.

Configuration is read once at startup (usually from the environment via
``ModelNotifyConfig.from_env``) and never mutated afterwards.

Environment Variables:
    SLACK_WEBHOOK_URL: Slack incoming webhook URL
    LARK_WEBHOOK_URL: Lark (Feishu) custom bot webhook URL
    DISCORD_WEBHOOK_URL: Discord webhook URL
    PRODUCTION_BRANCH: Production branch name (default ``main``)
    CLOUDFLARE_ACCOUNT_ID: Fallback account id for dashboard links
    CLOUDFLARE_API_TOKEN: Token for fetching build URLs and logs
    CLOUDFLARE_API_BASE_URL: Override for the Cloudflare API base URL
    BUILDNOTIFY_REQUEST_TIMEOUT: Outbound HTTP timeout in seconds (default 10)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from buildnotify.enums import EnumNotificationPlatform
from buildnotify.utils.util_env_parsing import parse_env_float, parse_env_str

DEFAULT_PRODUCTION_BRANCH: str = "main"
DEFAULT_API_BASE_URL: str = "https://api.cloudflare.com/client/v4"
DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 10.0

_WEBHOOK_FIELDS: dict[EnumNotificationPlatform, str] = {
    EnumNotificationPlatform.SLACK: "slack_webhook_url",
    EnumNotificationPlatform.LARK: "lark_webhook_url",
    EnumNotificationPlatform.DISCORD: "discord_webhook_url",
}


class ModelNotifyConfig(BaseModel):
    """Static configuration for the notification worker.

    A platform is enabled exactly when its webhook URL is present and
    non-empty.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    slack_webhook_url: Optional[str] = None
    lark_webhook_url: Optional[str] = None
    discord_webhook_url: Optional[str] = None
    production_branch: str = Field(default=DEFAULT_PRODUCTION_BRANCH, min_length=1)
    account_id: Optional[str] = None
    cloudflare_api_token: Optional[str] = None
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS, gt=0.0, le=300.0
    )

    @field_validator(
        "slack_webhook_url",
        "lark_webhook_url",
        "discord_webhook_url",
        "account_id",
        "cloudflare_api_token",
    )
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    def __repr__(self) -> str:
        """Mask webhook URLs and tokens to prevent exposure in logs/tracebacks."""
        enabled = ",".join(p.value for p in self.enabled_platforms) or "none"
        return (
            f"<{type(self).__name__} platforms={enabled} "
            f"production_branch={self.production_branch!r}>"
        )

    __str__ = __repr__

    def webhook_url_for(self, platform: EnumNotificationPlatform) -> Optional[str]:
        """Return the webhook URL configured for ``platform``, or None."""
        return getattr(self, _WEBHOOK_FIELDS[platform])

    @property
    def enabled_platforms(self) -> list[EnumNotificationPlatform]:
        return [p for p in EnumNotificationPlatform if self.webhook_url_for(p)]

    @property
    def has_any_webhook(self) -> bool:
        return bool(self.enabled_platforms)

    @classmethod
    def from_env(cls) -> ModelNotifyConfig:
        """Build configuration from environment variables.

        Raises:
            ProtocolConfigurationError: If a numeric variable is invalid.
        """
        return cls(
            slack_webhook_url=parse_env_str("SLACK_WEBHOOK_URL"),
            lark_webhook_url=parse_env_str("LARK_WEBHOOK_URL"),
            discord_webhook_url=parse_env_str("DISCORD_WEBHOOK_URL"),
            production_branch=parse_env_str(
                "PRODUCTION_BRANCH", DEFAULT_PRODUCTION_BRANCH
            ),
            account_id=parse_env_str("CLOUDFLARE_ACCOUNT_ID"),
            cloudflare_api_token=parse_env_str("CLOUDFLARE_API_TOKEN"),
            api_base_url=parse_env_str("CLOUDFLARE_API_BASE_URL", DEFAULT_API_BASE_URL),
            request_timeout_seconds=parse_env_float(
                "BUILDNOTIFY_REQUEST_TIMEOUT",
                DEFAULT_REQUEST_TIMEOUT_SECONDS,
                min_value=0.1,
                max_value=300.0,
            ),
        )


__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_PRODUCTION_BRANCH",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "ModelNotifyConfig",
]
