# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the buildnotify CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from buildnotify.cli.commands import cli, configure_logging
from buildnotify.models import ModelBatchResult
from tests.helpers import make_raw_event


def _write_json(path: Path, data: Any) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestProcessCommand:
    """Tests for ``buildnotify process``."""

    def test_process_batch_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/T/B/X")
        events_file = _write_json(
            tmp_path / "events.json",
            [make_raw_event("succeeded"), make_raw_event("failed")],
        )
        batch = AsyncMock(return_value=ModelBatchResult(acknowledged=2, dispatched=2))

        with patch("buildnotify.cli.commands.process_batch", new=batch):
            result = CliRunner().invoke(cli, ["process", events_file])

        assert result.exit_code == 0, result.output
        assert "dispatched" in result.output
        args, kwargs = batch.call_args
        assert len(args[0]) == 2
        assert args[1].slack_webhook_url == "https://hooks.slack.com/services/T/B/X"
        assert kwargs["enrichment"] is None

    def test_single_event_object(self, tmp_path: Path) -> None:
        events_file = _write_json(tmp_path / "event.json", make_raw_event("failed"))
        batch = AsyncMock(return_value=ModelBatchResult(acknowledged=1))

        with patch("buildnotify.cli.commands.process_batch", new=batch):
            result = CliRunner().invoke(cli, ["process", events_file])

        assert result.exit_code == 0, result.output
        assert len(batch.call_args.args[0]) == 1

    def test_enrichment_used_when_token_set(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CLOUDFLARE_API_TOKEN", "cf-token")
        events_file = _write_json(tmp_path / "event.json", make_raw_event())
        batch = AsyncMock(return_value=ModelBatchResult(acknowledged=1))

        with patch("buildnotify.cli.commands.process_batch", new=batch):
            CliRunner().invoke(cli, ["process", events_file])

        assert batch.call_args.kwargs["enrichment"] is not None

    def test_request_timeout_applies_to_webhooks(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/T/B/X")
        monkeypatch.setenv("BUILDNOTIFY_REQUEST_TIMEOUT", "2.5")
        events_file = _write_json(tmp_path / "event.json", make_raw_event())
        batch = AsyncMock(return_value=ModelBatchResult(acknowledged=1, dispatched=1))

        with patch("buildnotify.cli.commands.process_batch", new=batch):
            result = CliRunner().invoke(cli, ["process", events_file])

        assert result.exit_code == 0, result.output
        registry = batch.call_args.kwargs["registry"]
        assert [entry.platform.value for entry in registry] == ["slack", "lark", "discord"]
        assert [entry.notifier._timeout for entry in registry] == [2.5, 2.5, 2.5]

    def test_errored_events_exit_non_zero(self, tmp_path: Path) -> None:
        events_file = _write_json(tmp_path / "event.json", make_raw_event())
        batch = AsyncMock(return_value=ModelBatchResult(acknowledged=1, errored=1))

        with patch("buildnotify.cli.commands.process_batch", new=batch):
            result = CliRunner().invoke(cli, ["process", events_file])

        assert result.exit_code == 1

    def test_invalid_json(self, tmp_path: Path) -> None:
        bad_file = tmp_path / "bad.json"
        bad_file.write_text("{not json", encoding="utf-8")

        result = CliRunner().invoke(cli, ["process", str(bad_file)])

        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_invalid_timeout_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BUILDNOTIFY_REQUEST_TIMEOUT", "never")
        events_file = _write_json(tmp_path / "event.json", make_raw_event())

        result = CliRunner().invoke(cli, ["process", events_file])

        assert result.exit_code == 1
        assert "INVALID_CONFIGURATION" in result.output


class TestPreviewCommand:
    """Tests for ``buildnotify preview``."""

    def test_preview_lark(self, tmp_path: Path) -> None:
        event_file = _write_json(tmp_path / "event.json", make_raw_event("cancelled"))

        result = CliRunner().invoke(
            cli, ["preview", event_file, "--platform", "lark"], catch_exceptions=False
        )

        assert result.exit_code == 0
        assert "Lark payload" in result.output
        assert '"msg_type": "interactive"' in result.output
        assert "Build Cancelled" in result.output

    def test_preview_with_log_file(self, tmp_path: Path) -> None:
        event_file = _write_json(tmp_path / "event.json", make_raw_event("failed"))
        log_file = tmp_path / "build.log"
        log_file.write_text("Installing\nError: missing module\n", encoding="utf-8")

        result = CliRunner().invoke(
            cli,
            ["preview", event_file, "--platform", "discord", "--log-file", str(log_file)],
            catch_exceptions=False,
        )

        assert result.exit_code == 0
        assert "missing module" in result.output

    def test_preview_invalid_event(self, tmp_path: Path) -> None:
        event_file = _write_json(tmp_path / "event.json", {"type": "x"})

        result = CliRunner().invoke(cli, ["preview", event_file])

        assert result.exit_code == 1
        assert "INVALID_EVENT" in result.output

    def test_unknown_platform_rejected(self, tmp_path: Path) -> None:
        event_file = _write_json(tmp_path / "event.json", make_raw_event())

        result = CliRunner().invoke(cli, ["preview", event_file, "--platform", "teams"])

        assert result.exit_code == 2


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_invalid_level_falls_back_to_info(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("BUILDNOTIFY_LOG_LEVEL", "LOUD")

        with patch("logging.basicConfig") as basic_config:
            configure_logging()

        assert basic_config.call_args.kwargs["level"] == logging.INFO
        assert "Invalid BUILDNOTIFY_LOG_LEVEL" in capsys.readouterr().err

    def test_level_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUILDNOTIFY_LOG_LEVEL", "debug")

        with patch("logging.basicConfig") as basic_config:
            configure_logging()

        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
