"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Source document
    source_path: str = Field(
        default="./computers on the farm.txt",
        description="Plain-text book to ingest",
    )
    query: str = Field(
        default="What is the address of AgriData Resources?",
        description="Question answered after ingestion",
    )

    # Parser
    start_markers: list[str] = [
        "*** START OF THIS PROJECT GUTENBERG EBOOK",
        "*** START OF THE PROJECT GUTENBERG EBOOK",
    ]
    end_markers: list[str] = [
        "*** END OF THIS PROJECT GUTENBERG EBOOK",
        "*** END OF THE PROJECT GUTENBERG EBOOK",
    ]
    heading_delimiter: str = Field(default="=", min_length=1, max_length=1)

    # Embedding
    embedding_model: str = "BAAI/bge-large-en-v1.5"

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8001
    chroma_collection: str = "linky"
    distance_metric: Literal["cosine", "l2", "ip"] = Field(
        default="cosine", description="Chroma hnsw:space of the collection"
    )

    # Retrieval
    retrieval_k: int = Field(default=2, ge=1)
    min_score: float = Field(default=0.50, description="Similarity floor for retrieved chunks")

    # LLM
    openai_api_key: str = Field(default="", description="API key (dummy value for a local Ollama server)")
    llm_model_name: str = Field(default="gemma:2b", description="LLM model identifier")
    llm_base_url: str = Field(
        default="http://localhost:11434/v1",
        description=(
            "Base URL of an OpenAI-compatible chat endpoint. Leave empty to "
            "use OpenAI cloud. The default points at a local Ollama server."
        ),
    )
    temperature: float = 0.8

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
