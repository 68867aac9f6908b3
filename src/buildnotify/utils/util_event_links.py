# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Link and metadata helpers shared by every platform builder.

Keeping these in one place is what guarantees content parity across Slack,
Lark and Discord: every builder derives branch, commit, author and the
primary action link from the same functions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Optional

if TYPE_CHECKING:
    from buildnotify.models.model_build_event import ModelBuildEvent

DASHBOARD_BASE_URL: str = "https://dash.cloudflare.com"
SHORT_COMMIT_LENGTH: int = 7

_COMMIT_URL_TEMPLATES: dict[str, str] = {
    "github": "https://github.com/{owner}/{repo}/commit/{commit}",
    "gitlab": "https://gitlab.com/{owner}/{repo}/-/commit/{commit}",
}


class PrimaryLink(NamedTuple):
    """Primary action of a success message."""

    label: str
    url: Optional[str]


def is_production_branch(branch: Optional[str], production_branch: str = "main") -> bool:
    """Return True if ``branch`` is exactly the production branch."""
    return bool(branch) and branch == production_branch


def extract_author_name(author: Optional[str]) -> Optional[str]:
    """Derive a display name from an author string.

    ``"dev@example.com"`` gives ``"dev"``; strings that are not email-shaped
    are returned unchanged. Empty input gives None.
    """
    if not author or not author.strip():
        return None
    author = author.strip()
    local, sep, domain = author.partition("@")
    if sep and local and domain:
        return local
    return author


def short_commit_hash(commit_hash: Optional[str]) -> Optional[str]:
    """First seven characters of a commit hash."""
    if not commit_hash:
        return None
    return commit_hash[:SHORT_COMMIT_LENGTH]


def get_commit_url(event: ModelBuildEvent) -> Optional[str]:
    """Link to the commit on the source host, when the provider is known."""
    meta = event.trigger
    if meta is None or not meta.commit_hash:
        return None
    template = _COMMIT_URL_TEMPLATES.get((meta.provider_type or "").lower())
    if template is None or not meta.provider_account_name or not meta.repo_name:
        return None
    return template.format(
        owner=meta.provider_account_name,
        repo=meta.repo_name,
        commit=meta.commit_hash,
    )


def get_dashboard_url(
    event: ModelBuildEvent, account_id: Optional[str] = None
) -> Optional[str]:
    """Link to the build in the Cloudflare dashboard.

    Args:
        event: The build event
        account_id: Fallback account id when the event metadata has none

    Returns:
        The build page when the worker name and build uuid are known, the
        account's Workers overview otherwise, or None without an account id.
    """
    account = event.metadata.account_id or account_id
    if not account:
        return None
    worker_name = event.worker_name
    build_uuid = event.payload.build_uuid
    if worker_name and build_uuid:
        return (
            f"{DASHBOARD_BASE_URL}/{account}/workers/services/view/"
            f"{worker_name}/production/builds/{build_uuid}"
        )
    return f"{DASHBOARD_BASE_URL}/{account}/workers-and-pages"


def resolve_primary_link(
    is_production: bool,
    preview_url: Optional[str],
    live_url: Optional[str],
    dashboard_url: Optional[str],
) -> PrimaryLink:
    """Pick the action link of a success message.

    Production deploys link the live Worker, preview deploys the preview
    URL; both fall back to the dashboard build page.
    """
    if is_production and live_url:
        return PrimaryLink("View Worker", live_url)
    if not is_production and preview_url:
        return PrimaryLink("View Preview", preview_url)
    return PrimaryLink("View Build", dashboard_url)


__all__: list[str] = [
    "DASHBOARD_BASE_URL",
    "PrimaryLink",
    "extract_author_name",
    "get_commit_url",
    "get_dashboard_url",
    "is_production_branch",
    "resolve_primary_link",
    "short_commit_hash",
]
