"""Pipeline orchestrator — ingest a book once, then answer one query.

Both phases are strictly sequential and fail fast: any collaborator
error propagates to the caller and ends the phase.  There is no retry
and no partial-result salvage.

Usage::

    pipeline = build_pipeline()
    pipeline.ingest("computers on the farm.txt")
    result = pipeline.query("What is the address of AgriData Resources?")
    print(result.answer)
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from gutenberg_rag.config import Settings, settings as default_settings
from gutenberg_rag.exceptions import VectorStoreError
from gutenberg_rag.generation.llm import Generator
from gutenberg_rag.generation.prompts import RAG_PROMPT, assemble
from gutenberg_rag.ingestion.embedder import Embedder
from gutenberg_rag.ingestion.parser import GutenbergParser
from gutenberg_rag.retrieval.base import VectorStoreBase
from gutenberg_rag.retrieval.models import RetrievedResult
from gutenberg_rag.retrieval.retriever import Retriever

logger = logging.getLogger(__name__)


class IngestReport(BaseModel):
    """Outcome of the ingest phase."""

    source: str
    chunk_ids: list[str] = Field(default_factory=list)

    @property
    def chunk_count(self) -> int:
        return len(self.chunk_ids)


class QueryResult(BaseModel):
    """Everything produced by one query round trip."""

    query: str
    results: list[RetrievedResult] = Field(default_factory=list)
    prompt: str
    answer: str

    @property
    def context(self) -> list[str]:
        return [r.content for r in self.results]


class RAGPipeline:
    """Wire parser, embedder, store, retriever and generator together.

    Parameters
    ----------
    embedder:
        Embedding client shared by ingestion and retrieval.
    store:
        Vector-store backend.
    generator:
        Generation client.
    parser:
        Chunk parser; defaults to one configured from settings.
    k / min_score:
        Retrieval defaults.
    temperature:
        Sampling temperature passed to the generator.
    """

    def __init__(
        self,
        embedder: Embedder,
        store: VectorStoreBase,
        generator: Generator,
        *,
        parser: GutenbergParser | None = None,
        k: int = default_settings.retrieval_k,
        min_score: float = default_settings.min_score,
        temperature: float = default_settings.temperature,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.generator = generator
        self.parser = parser or GutenbergParser()
        self.retriever = Retriever(embedder, store, k=k, min_score=min_score)
        self.temperature = temperature

    # -- phase 1 --------------------------------------------------------------

    def ingest(self, path: str | Path) -> IngestReport:
        """Parse *path* and store every chunk, one at a time.

        Returns an empty report without touching the store when the
        document yields no chunks.  Otherwise the store's health check
        must pass before the first chunk is embedded.
        """
        source = str(path)
        chunks = self.parser.parse_file(path)
        report = IngestReport(source=source)
        if not chunks:
            logger.warning("No chunks parsed from %s; nothing stored", source)
            return report

        if not self.store.health_check():
            raise VectorStoreError(
                "Vector store is unreachable",
                operation="health_check",
                details={"collection": self.store.collection_name},
            )

        for chunk in chunks:
            embedding = self.embedder.embed(chunk.content)
            ids = self.store.add_documents([chunk], [embedding], source=Path(source).name)
            report.chunk_ids.extend(ids)
            logger.debug("Stored chunk %d (%s)", chunk.index, chunk.heading or "untitled")

        logger.info(
            "Ingested %d chunk(s) from %s into %r",
            report.chunk_count,
            source,
            self.store.collection_name,
        )
        return report

    # -- phase 2 --------------------------------------------------------------

    def query(self, text: str) -> QueryResult:
        """Retrieve context for *text*, assemble the prompt, and generate.

        Generation runs even when no chunk clears the similarity floor.
        """
        results = self.retriever.retrieve(text)
        if not results:
            logger.info("No stored context above the similarity floor")
        prompt = assemble([r.content for r in results], text, RAG_PROMPT)
        logger.debug("Prompt:\n%s", prompt)
        answer = self.generator.complete(prompt, temperature=self.temperature)
        return QueryResult(query=text, results=results, prompt=prompt, answer=answer)

    def run(self, path: str | Path, query: str) -> QueryResult:
        """Ingest *path*, then answer *query*."""
        self.ingest(path)
        return self.query(query)


def build_pipeline(config: Settings | None = None) -> RAGPipeline:
    """Build a pipeline with the concrete HuggingFace / Chroma / chat backends."""
    from gutenberg_rag.generation.llm import ChatGenerator, get_llm
    from gutenberg_rag.ingestion.embedder import HuggingFaceEmbedder
    from gutenberg_rag.retrieval.chroma_store import ChromaVectorStore

    config = config or default_settings
    return RAGPipeline(
        embedder=HuggingFaceEmbedder(config.embedding_model),
        store=ChromaVectorStore(
            config.chroma_collection,
            host=config.chroma_host,
            port=config.chroma_port,
            distance_metric=config.distance_metric,
        ),
        generator=ChatGenerator(
            get_llm(config.temperature, config), temperature=config.temperature
        ),
        parser=GutenbergParser(
            config.start_markers, config.end_markers, config.heading_delimiter
        ),
        k=config.retrieval_k,
        min_score=config.min_score,
        temperature=config.temperature,
    )
