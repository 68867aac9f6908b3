# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Build log error extraction.

Finds the root-cause error in a failed build's log. Build tools usually
report the first real error followed by cascading errors caused by it, so
only the first error block is kept.

Algorithm:
    1. Strip the log prefix (timestamp) from each line
    2. Find the first line matching a marker pattern that is not a
       metadata line
    3. Append the indented continuation lines that follow it, dropping
       stack frames, until a non-continuation line or the next marker
    4. Without any marker, use the last non-empty line
    5. Without any non-empty line, return ``NO_LOGS_MESSAGE``

Truncation to platform limits is left to the payload builders.

Example:
    >>> extract_build_error([
    ...     "Installing dependencies...",
    ...     '✘ [ERROR] Could not resolve "missing-module"',
    ...     "    at file.ts:10:5",
    ...     "✘ [ERROR] Second error",
    ... ])
    '✘ [ERROR] Could not resolve "missing-module"'
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache
from typing import NamedTuple, Optional

from buildnotify.models.model_error_extraction_rules import ModelErrorExtractionRules

NO_LOGS_MESSAGE: str = "No logs available"

_DEFAULT_RULES = ModelErrorExtractionRules()


class _CompiledRules(NamedTuple):
    markers: tuple[re.Pattern[str], ...]
    metadata: tuple[re.Pattern[str], ...]
    stack_frames: tuple[re.Pattern[str], ...]
    log_prefix: re.Pattern[str]
    max_block_lines: int


@lru_cache(maxsize=32)
def _compile(rules: ModelErrorExtractionRules) -> _CompiledRules:
    return _CompiledRules(
        markers=tuple(re.compile(p) for p in rules.marker_patterns),
        metadata=tuple(re.compile(p) for p in rules.metadata_patterns),
        stack_frames=tuple(re.compile(p) for p in rules.stack_frame_patterns),
        log_prefix=re.compile(rules.log_prefix_pattern),
        max_block_lines=rules.max_block_lines,
    )


def _matches_any(patterns: tuple[re.Pattern[str], ...], line: str) -> bool:
    return any(p.search(line) for p in patterns)


def is_error_marker(line: str, rules: Optional[ModelErrorExtractionRules] = None) -> bool:
    """Return True if ``line`` starts an error block.

    Metadata lines never qualify, even when they contain marker text.
    """
    compiled = _compile(rules or _DEFAULT_RULES)
    line = compiled.log_prefix.sub("", line, count=1)
    if _matches_any(compiled.metadata, line):
        return False
    return _matches_any(compiled.markers, line)


def _is_continuation(line: str) -> bool:
    return bool(line.strip()) and line[:1].isspace()


def extract_build_error(
    logs: Sequence[str],
    rules: Optional[ModelErrorExtractionRules] = None,
) -> str:
    """Extract the representative error message from build log lines.

    Args:
        logs: Raw log lines in order
        rules: Pattern rules; defaults to ``ModelErrorExtractionRules()``

    Returns:
        The first error block joined with newlines, the last non-empty line
        when no marker matched, or ``NO_LOGS_MESSAGE`` when there is nothing
        to report.
    """
    compiled = _compile(rules or _DEFAULT_RULES)
    lines = [compiled.log_prefix.sub("", raw.rstrip("\r\n"), count=1) for raw in logs]

    start = None
    for index, line in enumerate(lines):
        if _matches_any(compiled.metadata, line):
            continue
        if _matches_any(compiled.markers, line):
            start = index
            break

    if start is None:
        for line in reversed(lines):
            if line.strip():
                return line.strip()
        return NO_LOGS_MESSAGE

    block = [lines[start].strip()]
    for line in lines[start + 1 :]:
        if len(block) >= compiled.max_block_lines:
            break
        if not line.strip():
            continue
        if not _is_continuation(line) or _matches_any(compiled.markers, line):
            break
        if _matches_any(compiled.stack_frames, line):
            continue
        block.append(line.rstrip())

    return "\n".join(block)


__all__: list[str] = ["NO_LOGS_MESSAGE", "extract_build_error", "is_error_marker"]
