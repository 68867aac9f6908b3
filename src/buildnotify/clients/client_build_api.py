# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Build API Client - fetches build URLs and logs from the Cloudflare API.

Implements ProtocolBuildEnrichment with an httpx async client.

Endpoints:
    - ``GET /accounts/{account}/builds/builds/{build_uuid}``: build details,
      ``result.preview_url`` for preview deployments
    - ``GET /accounts/{account}/workers/subdomain``: the account's
      workers.dev subdomain, used to build the live URL of production deploys
    - ``GET /accounts/{account}/builds/builds/{build_uuid}/logs``: log lines
      as ``[timestamp, text]`` pairs, paginated with ``cursor`` while
      ``truncated`` is true

Without an API token no request is made: URLs are null and logs empty, so
notifications still go out with dashboard links only.

Error Handling:
    Request failures raise EnrichmentFetchError with a sanitized message.
    The event processor catches it and degrades to null URLs / empty logs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import httpx

from buildnotify.errors import EnrichmentFetchError, ModelNotifyErrorContext
from buildnotify.models.model_build_urls import ModelBuildUrls
from buildnotify.models.model_notify_config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_PRODUCTION_BRANCH,
)
from buildnotify.utils.util_error_sanitization import sanitize_error_message
from buildnotify.utils.util_event_links import is_production_branch

if TYPE_CHECKING:
    from buildnotify.models.model_build_event import ModelBuildEvent
    from buildnotify.models.model_notify_config import ModelNotifyConfig

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS: float = 10.0
_DEFAULT_MAX_LOG_PAGES: int = 10


class ClientBuildApi:
    """Cloudflare Workers Builds REST client.

    Attributes:
        _api_token: API token sent as a bearer token
        _account_id: Fallback account id when the event has none
        _base_url: API base URL
        _production_branch: Branch whose builds get a live URL
        _timeout: Request timeout in seconds
        _http_client: Optional shared httpx client
        _max_log_pages: Upper bound on log pages followed per build
    """

    def __init__(
        self,
        api_token: Optional[str],
        account_id: Optional[str] = None,
        base_url: str = DEFAULT_API_BASE_URL,
        production_branch: str = DEFAULT_PRODUCTION_BRANCH,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
        max_log_pages: int = _DEFAULT_MAX_LOG_PAGES,
    ) -> None:
        self._api_token = api_token or ""
        self._account_id = account_id
        self._base_url = base_url.rstrip("/")
        self._production_branch = production_branch
        self._timeout = timeout
        self._http_client = http_client
        self._max_log_pages = max_log_pages

    @classmethod
    def from_config(
        cls,
        config: ModelNotifyConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> ClientBuildApi:
        return cls(
            api_token=config.cloudflare_api_token,
            account_id=config.account_id,
            base_url=config.api_base_url,
            production_branch=config.production_branch,
            timeout=config.request_timeout_seconds,
            http_client=http_client,
        )

    def __repr__(self) -> str:
        """Mask the API token to prevent accidental exposure in logs/tracebacks."""
        return f"<{type(self).__name__} configured={self.is_configured}>"

    @property
    def is_configured(self) -> bool:
        return bool(self._api_token)

    def _account_for(self, event: ModelBuildEvent) -> Optional[str]:
        return event.metadata.account_id or self._account_id

    async def fetch_build_urls(self, event: ModelBuildEvent) -> ModelBuildUrls:
        """Fetch the preview URL and, for production builds, the live URL."""
        account = self._account_for(event)
        build_uuid = event.payload.build_uuid
        if not self.is_configured or not account or not build_uuid:
            logger.debug(
                "Skipping build URL lookup",
                extra={"configured": self.is_configured, "build_uuid": build_uuid},
            )
            return ModelBuildUrls()

        build = await self._get_result(f"/accounts/{account}/builds/builds/{build_uuid}")
        preview_url = build.get("preview_url") or None

        live_url = None
        branch = event.trigger.branch if event.trigger else None
        worker_name = event.worker_name
        if worker_name and is_production_branch(branch, self._production_branch):
            subdomain_result = await self._get_result(
                f"/accounts/{account}/workers/subdomain"
            )
            subdomain = subdomain_result.get("subdomain")
            if subdomain:
                live_url = f"https://{worker_name}.{subdomain}.workers.dev"

        return ModelBuildUrls(
            preview_url=str(preview_url) if preview_url else None,
            live_url=live_url,
        )

    async def fetch_build_logs(self, event: ModelBuildEvent) -> list[str]:
        """Fetch all log lines of the build, oldest first."""
        account = self._account_for(event)
        build_uuid = event.payload.build_uuid
        if not self.is_configured or not account or not build_uuid:
            return []

        path = f"/accounts/{account}/builds/builds/{build_uuid}/logs"
        lines: list[str] = []
        cursor: Optional[str] = None
        for _ in range(self._max_log_pages):
            params = {"cursor": cursor} if cursor else None
            result = await self._get_result(path, params=params)
            for entry in result.get("lines") or []:
                if isinstance(entry, (list, tuple)) and len(entry) >= 2:
                    lines.append(str(entry[1]))
                elif isinstance(entry, str):
                    lines.append(entry)

            cursor = result.get("cursor")
            if not result.get("truncated") or not cursor:
                break
        else:
            logger.warning(
                "Build log pagination limit reached",
                extra={"build_uuid": build_uuid, "max_pages": self._max_log_pages},
            )

        return lines

    async def _get_result(
        self,
        path: str,
        params: Optional[dict[str, str]] = None,
    ) -> dict[str, object]:
        """GET ``path`` and return the ``result`` object of the API envelope.

        Raises:
            EnrichmentFetchError: On transport errors, non-2xx responses,
                invalid JSON or an unsuccessful API envelope.
        """
        context = ModelNotifyErrorContext(operation="fetch_build_data", target_name=path)
        headers = {"Authorization": f"Bearer {self._api_token}"}

        client_created = False
        client = self._http_client
        if client is None:
            client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
            )
            client_created = True

        url = path if client_created else f"{self._base_url}{path}"
        try:
            response = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as e:
            raise EnrichmentFetchError(
                "Build API request timed out",
                error_code="ENRICHMENT_TIMEOUT",
                context=context,
            ) from e
        except httpx.HTTPError as e:
            raise EnrichmentFetchError(
                f"Build API request failed: {sanitize_error_message(e)}",
                error_code="ENRICHMENT_CONNECTION_ERROR",
                context=context,
            ) from e
        finally:
            if client_created:
                await client.aclose()

        if not response.is_success:
            raise EnrichmentFetchError(
                f"Build API returned HTTP {response.status_code}",
                error_code=f"ENRICHMENT_HTTP_{response.status_code}",
                context=context,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise EnrichmentFetchError(
                "Build API returned invalid JSON",
                error_code="ENRICHMENT_INVALID_RESPONSE",
                context=context,
            ) from e

        if not isinstance(body, dict) or body.get("success") is False:
            raise EnrichmentFetchError(
                "Build API reported an unsuccessful request",
                error_code="ENRICHMENT_API_ERROR",
                context=context,
            )

        result = body.get("result")
        return result if isinstance(result, dict) else {}


__all__: list[str] = ["ClientBuildApi"]
