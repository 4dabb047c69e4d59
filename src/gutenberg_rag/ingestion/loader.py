"""Source loader — reads the book once, line by line."""

from __future__ import annotations

import logging
from pathlib import Path

from gutenberg_rag.exceptions import IngestionIOError

logger = logging.getLogger(__name__)


def load_lines(path: str | Path) -> list[str]:
    """Read *path* in full and return its lines, terminators included.

    Archive texts are only "mostly" UTF-8, so undecodable bytes are
    replaced rather than rejected.  Lines are split on ``\\n`` only, the
    same way :meth:`GutenbergParser.parse_text` splits a string.

    Raises
    ------
    IngestionIOError
        When the file is missing or cannot be read.
    """
    try:
        with open(path, encoding="utf-8", errors="replace", newline="\n") as fh:
            lines = fh.readlines()
    except OSError as exc:
        raise IngestionIOError(str(path), details={"error": str(exc)}) from exc

    logger.info("Read %d lines from %s", len(lines), path)
    return lines
