"""
Pattern discovery.

Finds pattern files by glob, reads them and splits off an inline flag marker
such as `(?i)` at the very start of the text.
"""
from __future__ import annotations

import glob
import re
from pathlib import Path
from typing import Iterator

from .config import logger
from .models import PatternInput


_INLINE_FLAGS = re.compile(r"^\(\?([dgimsuvy]+)\)")


def extract_flags(text: str) -> tuple[str, str]:
    """
    Split a leading inline flag marker off a pattern.

    Returns:
        (flags, source) where flags is "" when there is no marker
    """
    match = _INLINE_FLAGS.match(text)
    if not match:
        return "", text
    return match.group(1), text[match.end():]


def read_pattern(path: Path) -> PatternInput:
    """Read one pattern file. A single trailing newline is not part of the pattern."""
    text = path.read_text(encoding="utf-8")
    if text.endswith("\r\n"):
        text = text[:-2]
    elif text.endswith("\n"):
        text = text[:-1]
    flags, source = extract_flags(text)
    return PatternInput(label=path.name, source=source, flags=flags)


def discover_patterns(pattern: str, root: str | Path | None = None) -> Iterator[PatternInput]:
    """
    Yield the pattern files matching a glob, in sorted path order.

    Args:
        pattern: Glob such as "**/*.regex"; recursive wildcards are allowed
        root: Directory the glob is relative to (current directory by default)
    """
    matches = sorted(glob.glob(pattern, root_dir=root, recursive=True))
    logger.debug("Glob %r matched %d paths", pattern, len(matches))
    base = Path(root) if root is not None else Path()
    for match in matches:
        path = base / match
        if path.is_file():
            yield read_pattern(path)
