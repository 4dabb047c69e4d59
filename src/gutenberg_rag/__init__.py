"""Retrieval-augmented question answering over a single plain-text book.

Public API
----------
- :class:`RAGPipeline` / :func:`build_pipeline` — ingest then query.
- :class:`GutenbergParser` — section-per-chunk text parser.
- :class:`Retriever` — top-k search with a similarity floor.
- :func:`assemble` — render the grounded-answer prompt.

Names are imported on first access, so importing the package does not
load settings from the environment.
"""

from importlib import import_module

_EXPORTS = {
    "NO_INFORMATION": "gutenberg_rag.generation.prompts",
    "RAG_PROMPT": "gutenberg_rag.generation.prompts",
    "assemble": "gutenberg_rag.generation.prompts",
    "GutenbergParser": "gutenberg_rag.ingestion.parser",
    "IngestReport": "gutenberg_rag.pipeline",
    "QueryResult": "gutenberg_rag.pipeline",
    "RAGPipeline": "gutenberg_rag.pipeline",
    "build_pipeline": "gutenberg_rag.pipeline",
    "Chunk": "gutenberg_rag.retrieval.models",
    "RetrievedResult": "gutenberg_rag.retrieval.models",
    "Retriever": "gutenberg_rag.retrieval.retriever",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str):  # noqa: ANN001
    if name in _EXPORTS:
        return getattr(import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
