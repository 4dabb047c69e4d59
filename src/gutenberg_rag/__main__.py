"""One-shot entry point: ingest the configured book, answer the configured query.

Run with ``python -m gutenberg_rag`` (or the ``gutenberg-rag`` script).
All inputs come from environment variables / ``.env``; see
:class:`gutenberg_rag.config.Settings`.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from pydantic import ValidationError

from gutenberg_rag.exceptions import GutenbergRAGError
from gutenberg_rag.logging_setup import configure_logging

if TYPE_CHECKING:
    from gutenberg_rag.config import Settings
    from gutenberg_rag.pipeline import RAGPipeline

logger = logging.getLogger("gutenberg_rag")


def main(config: Settings | None = None, pipeline: RAGPipeline | None = None) -> int:
    """Run ingest then query; return the process exit status."""
    if config is None:
        # Settings are read from the environment when the module is first imported.
        try:
            from gutenberg_rag.config import settings as config
        except ValidationError as exc:
            configure_logging()
            logger.error("Invalid configuration: %s", exc)
            return 1
    configure_logging(config.log_level)

    try:
        from gutenberg_rag.pipeline import build_pipeline

        pipeline = pipeline or build_pipeline(config)
        result = pipeline.run(config.source_path, config.query)
    except (GutenbergRAGError, ValueError) as exc:
        logger.error("Fatal: %s", exc, exc_info=exc.__cause__ is not None)
        return 1

    print(result.answer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
