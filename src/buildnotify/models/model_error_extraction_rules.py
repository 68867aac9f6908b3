# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Rule set driving build log error extraction.

The extractor walks log lines with these ordered rules instead of
hard-coded branches, so new build tools can be supported by extending the
pattern tuples.

Example:
    >>> rules = ModelErrorExtractionRules(
    ...     marker_patterns=DEFAULT_MARKER_PATTERNS + (r"^FATAL\\b",),
    ... )
    >>> extract_build_error(["FATAL out of memory"], rules=rules)
    'FATAL out of memory'
"""

from pydantic import BaseModel, ConfigDict, Field

# Lines that start an error block. Matching is case-sensitive so that the
# word "error" inside ordinary log text does not qualify.
DEFAULT_MARKER_PATTERNS: tuple[str, ...] = (
    r"\[ERROR\]",  # esbuild / wrangler
    r"✘",  # wrangler error glyph
    r"^(?:[A-Z][A-Za-z]*)?Error: ",  # Error:, TypeError:, SyntaxError:
    r"^ERROR\b",
    r"^error(?:\[[A-Z0-9]+\])?: ",  # rustc / generic CLI tools
    r"\berror TS\d+: ",  # tsc
    r"^npm ERR! ",
    r"^ERR_PNPM_",
    r"^\s*ERR! ",
)

# Metadata lines that may contain marker text but never describe the failure.
DEFAULT_METADATA_PATTERNS: tuple[str, ...] = (
    r"^Total Upload:",
    r"^Worker Startup Time:",
    r"^Uploaded \S+",
    r"^Deployed \S+",
    r"^Current Version ID:",
    r"^Your (?:Worker|worker) has access to",
    r"^\s*gzip:",
    r"\b0 errors?\b",
    r"^No errors? found",
)

# Stack frames are dropped from the error block.
DEFAULT_STACK_FRAME_PATTERNS: tuple[str, ...] = (
    r"^\s+at\s",
    r"^\s+File \".*\", line \d+",
)

# Timestamp prefix added by the build log pipeline. Only the single separator
# after the timestamp is consumed so indentation survives.
DEFAULT_LOG_PREFIX_PATTERN: str = (
    r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:?\d{2})?[ \t]"
)

DEFAULT_MAX_BLOCK_LINES: int = 10


class ModelErrorExtractionRules(BaseModel):
    """Ordered pattern lists used by ``extract_build_error``.

    Attributes:
        marker_patterns: Regexes identifying an error marker line
        metadata_patterns: Regexes for metadata lines never treated as errors
        stack_frame_patterns: Regexes for stack frames dropped from the block
        log_prefix_pattern: Regex stripped from the start of each line
        max_block_lines: Maximum number of lines kept in the error block
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    marker_patterns: tuple[str, ...] = DEFAULT_MARKER_PATTERNS
    metadata_patterns: tuple[str, ...] = DEFAULT_METADATA_PATTERNS
    stack_frame_patterns: tuple[str, ...] = DEFAULT_STACK_FRAME_PATTERNS
    log_prefix_pattern: str = DEFAULT_LOG_PREFIX_PATTERN
    max_block_lines: int = Field(default=DEFAULT_MAX_BLOCK_LINES, ge=1)


__all__ = [
    "DEFAULT_LOG_PREFIX_PATTERN",
    "DEFAULT_MARKER_PATTERNS",
    "DEFAULT_MAX_BLOCK_LINES",
    "DEFAULT_METADATA_PATTERNS",
    "DEFAULT_STACK_FRAME_PATTERNS",
    "ModelErrorExtractionRules",
]
