"""Prompt template for grounded answers.

The template is a static asset: callers supply context and query, never
the template text itself.
"""

from __future__ import annotations

from collections.abc import Sequence

from langchain_core.prompts import PromptTemplate

NO_INFORMATION = "No information"

RAG_TEMPLATE = """\
Human: Context information is below.
---------------------
{context}
---------------------
Given the context information and not prior knowledge, answer the query. \
Please be brief, concise, and complete.
If the context information does not contain an answer to the query, \
respond with "%s".
Query: {query}
Assistant: """ % NO_INFORMATION

RAG_PROMPT = PromptTemplate.from_template(RAG_TEMPLATE)


def join_context(context: Sequence[str]) -> str:
    """Join context passages with a single newline, in order."""
    return "\n".join(context)


def assemble(
    context: Sequence[str],
    query: str,
    template: PromptTemplate = RAG_PROMPT,
) -> str:
    """Render *template* with the joined *context* and the raw *query*.

    No de-duplication, re-ranking or truncation is applied.  An empty
    *context* leaves the context region empty.
    """
    return template.format(context=join_context(context), query=query)
