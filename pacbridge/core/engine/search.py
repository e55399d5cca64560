"""
Search filtering — keep output records that match ALL patterns.

pacman's ``-Qs a b`` returns only packages matching every term, so the
filter is an AND across patterns, not an OR.  Patterns are
case-sensitive regular expressions.

A record is ``record_lines`` consecutive lines (1 = each line alone).
Tools that print a package over several lines (name, then an indented
description) use a larger record so both lines are tested together and
kept together.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from pacbridge.core.errors import ArgParseError


def compile_patterns(patterns: Sequence[str | re.Pattern[str]]) -> list[re.Pattern[str]]:
    """Compile user search terms, rejecting invalid expressions."""
    compiled = []
    for pat in patterns:
        if isinstance(pat, re.Pattern):
            compiled.append(pat)
            continue
        try:
            compiled.append(re.compile(pat))
        except re.error as e:
            raise ArgParseError(f"invalid search pattern {pat!r}: {e}") from e
    return compiled


def grep(
    text: str,
    patterns: Sequence[str | re.Pattern[str]],
    record_lines: int = 1,
) -> list[str]:
    """Return the lines of every record matching all ``patterns``.

    With no patterns every line is kept.  Already compiled patterns are
    used as they are.
    """
    if record_lines < 1:
        raise ValueError("record_lines must be >= 1")
    compiled = compile_patterns(patterns)
    lines = text.splitlines()

    kept: list[str] = []
    for i in range(0, len(lines), record_lines):
        record = lines[i:i + record_lines]
        joined = "\n".join(record)
        if all(p.search(joined) for p in compiled):
            kept.extend(record)
    return kept


def grep_with_header(
    text: str,
    patterns: Sequence[str | re.Pattern[str]],
    header_lines: int = 0,
    record_lines: int = 1,
) -> list[str]:
    """Like ``grep`` but the first ``header_lines`` lines are always kept."""
    lines = text.splitlines()
    header, rest = lines[:header_lines], lines[header_lines:]
    return header + grep("\n".join(rest), patterns, record_lines)
