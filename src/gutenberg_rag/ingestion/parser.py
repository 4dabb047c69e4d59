"""Section parser for Project Gutenberg style plain-text books.

The archive wraps the actual book between a fixed start banner and a
fixed end banner, and marks section headings with a delimiter character
on both ends of an otherwise plain line::

    *** START OF THIS PROJECT GUTENBERG EBOOK COMPUTERS ON THE FARM ***
    =ADDRESS=
    AgriData Resources, 123 Main St
    *** END OF THIS PROJECT GUTENBERG EBOOK COMPUTERS ON THE FARM ***

Every heading plus its body becomes exactly one :class:`Chunk`.  The
scanner is a small state machine:

* ``BEFORE_START`` — skip lines until a start marker.
* ``COLLECTING``   — accumulate the current section; a heading flushes
  it and opens the next one, an end marker flushes it and re-arms
  ``BEFORE_START``.

A start marker seen while already collecting is discarded and does not
reset the section being collected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from gutenberg_rag.config import settings
from gutenberg_rag.ingestion.loader import load_lines
from gutenberg_rag.retrieval.models import Chunk

logger = logging.getLogger(__name__)


class ParserState(Enum):
    BEFORE_START = "before_start"
    COLLECTING = "collecting"


@dataclass
class _Section:
    """Accumulator for the section currently being collected."""

    heading: str | None = None
    lines: list[str] = field(default_factory=list)

    def render(self) -> str:
        body = "\n".join(self.lines)
        if self.heading is None:
            return body.strip()
        return f"{self.heading}\n\n{body}".strip()


class GutenbergParser:
    """Split marked-up book text into one chunk per titled section.

    Parameters
    ----------
    start_markers:
        Prefixes that open the book content.
    end_markers:
        Prefixes that close the book content.
    heading_delimiter:
        Character that wraps a heading line, e.g. ``=`` in ``=ADDRESS=``.
    """

    def __init__(
        self,
        start_markers: Sequence[str] | None = None,
        end_markers: Sequence[str] | None = None,
        heading_delimiter: str | None = None,
    ) -> None:
        self.start_markers = tuple(start_markers or settings.start_markers)
        self.end_markers = tuple(end_markers or settings.end_markers)
        self.heading_delimiter = heading_delimiter or settings.heading_delimiter
        if len(self.heading_delimiter) != 1:
            raise ValueError(
                f"Heading delimiter must be a single character, got {self.heading_delimiter!r}"
            )

    # -- public API -----------------------------------------------------------

    def parse(self, lines: Iterable[str]) -> list[Chunk]:
        """Parse *lines* into an ordered list of chunks.

        Lines may carry their terminators (as returned by ``readlines``)
        or not.  Returns ``[]`` when no start marker is found.
        """
        chunks: list[Chunk] = []
        state = ParserState.BEFORE_START
        section = _Section()

        for line in lines:
            stripped = line.strip()

            if state is ParserState.BEFORE_START:
                if self._is_start(stripped):
                    state = ParserState.COLLECTING
                continue

            if self._is_end(stripped):
                self._flush(section, chunks)
                section = _Section()
                state = ParserState.BEFORE_START
            elif self._is_start(stripped) or not stripped:
                continue
            elif self._is_heading(stripped):
                self._flush(section, chunks)
                section = _Section(heading=stripped[1:-1])
            else:
                section.lines.append(line.replace("\r", "").rstrip("\n"))

        if state is ParserState.COLLECTING:
            self._flush(section, chunks)

        logger.info("Parsed %d chunk(s)", len(chunks))
        return chunks

    def parse_text(self, text: str) -> list[Chunk]:
        """Parse an in-memory string, splitting on ``\\n`` like the file loader."""
        return self.parse(text.split("\n"))

    def parse_file(self, path: str | Path) -> list[Chunk]:
        """Read *path* and parse it.  Raises ``IngestionIOError`` on I/O failure."""
        return self.parse(load_lines(path))

    # -- internals ------------------------------------------------------------

    def _is_start(self, stripped: str) -> bool:
        return stripped.startswith(self.start_markers)

    def _is_end(self, stripped: str) -> bool:
        return stripped.startswith(self.end_markers)

    def _is_heading(self, stripped: str) -> bool:
        d = self.heading_delimiter
        return len(stripped) >= 2 and stripped.startswith(d) and stripped.endswith(d)

    @staticmethod
    def _flush(section: _Section, chunks: list[Chunk]) -> None:
        # A heading with no body (two headings in a row) is dropped.
        if not section.lines:
            if section.heading is not None:
                logger.debug("Dropping empty section %r", section.heading)
            return
        content = section.render()
        if not content:
            return
        chunks.append(Chunk(content=content, index=len(chunks), heading=section.heading))


def parse(lines: Iterable[str]) -> list[Chunk]:
    """Parse *lines* with the default markers (convenience function)."""
    return GutenbergParser().parse(lines)
