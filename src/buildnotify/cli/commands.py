# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""
Build Notification CLI Commands.

Provides a CLI interface for processing build event batches and previewing
the chat payload each platform would receive.

Environment Variables:
    BUILDNOTIFY_LOG_LEVEL: Logging level (default: INFO)
    SLACK_WEBHOOK_URL, LARK_WEBHOOK_URL, DISCORD_WEBHOOK_URL: Webhook targets
    PRODUCTION_BRANCH: Branch treated as production (default: main)
    CLOUDFLARE_ACCOUNT_ID, CLOUDFLARE_API_TOKEN: Build API enrichment
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.json import JSON
from rich.table import Table

from buildnotify.clients import ClientBuildApi
from buildnotify.enums import EnumNotificationPlatform
from buildnotify.errors import BuildNotifyError
from buildnotify.models import (
    ModelBatchResult,
    ModelBuildEvent,
    ModelNotificationData,
    ModelNotifyConfig,
)
from buildnotify.notifiers import NOTIFIERS, build_default_registry
from buildnotify.services import process_batch

console = Console()

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def configure_logging() -> None:
    """Configure stdlib logging from BUILDNOTIFY_LOG_LEVEL."""
    log_level = os.getenv("BUILDNOTIFY_LOG_LEVEL", "INFO").upper()
    if log_level not in _VALID_LOG_LEVELS:
        print(
            f"Warning: Invalid BUILDNOTIFY_LOG_LEVEL '{log_level}', using INFO. "
            f"Valid levels: {', '.join(sorted(_VALID_LOG_LEVELS))}",
            file=sys.stderr,
        )
        log_level = "INFO"

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e.msg}") from e


@click.group()
def cli() -> None:
    """Build notification tools."""


@cli.command("process")
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False))
def process_cmd(events_file: str) -> None:
    """Process a JSON file holding one build event or a list of them."""
    raw = _load_json(events_file)
    events = raw if isinstance(raw, list) else [raw]

    try:
        config = ModelNotifyConfig.from_env()
    except BuildNotifyError as e:
        raise click.ClickException(str(e)) from e

    client = ClientBuildApi.from_config(config)
    enrichment = client if client.is_configured else None
    if enrichment is None:
        console.print(
            "[yellow]Build API credentials not set; "
            "notifications will carry dashboard links only[/yellow]"
        )

    registry = build_default_registry(timeout=config.request_timeout_seconds)
    result = asyncio.run(
        process_batch(events, config, enrichment=enrichment, registry=registry)
    )
    _print_batch(result)
    raise SystemExit(0 if result.errored == 0 else 1)


@cli.command("preview")
@click.argument("event_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--platform",
    "platform_name",
    type=click.Choice([p.value for p in EnumNotificationPlatform]),
    default=EnumNotificationPlatform.SLACK.value,
    show_default=True,
    help="Platform whose payload is rendered",
)
@click.option(
    "--log-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Plain text build log used for failed builds",
)
@click.option(
    "--production-branch",
    default=None,
    help="Production branch (default: PRODUCTION_BRANCH or main)",
)
def preview_cmd(
    event_file: str,
    platform_name: str,
    log_file: Optional[str],
    production_branch: Optional[str],
) -> None:
    """Print the payload a platform would receive for an event, without sending."""
    try:
        event = ModelBuildEvent.parse_raw_event(_load_json(event_file))
        config = ModelNotifyConfig.from_env()
    except BuildNotifyError as e:
        raise click.ClickException(str(e)) from e

    logs: tuple[str, ...] = ()
    if log_file is not None:
        logs = tuple(Path(log_file).read_text(encoding="utf-8").splitlines())

    data = ModelNotificationData(
        event=event,
        logs=logs,
        production_branch=production_branch or config.production_branch,
        account_id=config.account_id,
    )
    platform = EnumNotificationPlatform(platform_name)
    entry = next(e for e in NOTIFIERS if e.platform is platform)
    payload = entry.notifier.build_payload(data)
    console.print(f"[bold blue]{platform.display_name} payload[/bold blue]")
    console.print(JSON.from_data(payload))


def _print_batch(result: ModelBatchResult) -> None:
    """Print batch counters and per-platform failures."""
    table = Table(title="Build events")
    table.add_column("Outcome")
    table.add_column("Count", justify="right")
    table.add_row("acknowledged", str(result.acknowledged))
    table.add_row("dispatched", str(result.dispatched))
    table.add_row("skipped", str(result.skipped))
    table.add_row("invalid", str(result.invalid))
    table.add_row("errored", str(result.errored))
    console.print(table)

    for dispatch in result.dispatches:
        for send in dispatch.results:
            if send.success:
                continue
            console.print(
                f"  [red]{send.platform.display_name}: "
                f"{send.error_code} {send.error or ''}[/red]"
            )


def main() -> None:
    """Console script entry point."""
    configure_logging()
    cli()


if __name__ == "__main__":
    main()
