# Knowledge index: scores the static snippet catalog plus live courses/gurukuls
# against a message, boosts categories that fit the classified intent, returns the top hits.
#
# Catalog failures never abort a search: they are logged and the static hits are returned.

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import List, Optional, Tuple

from eyogi_bot.classify.intent import IntentCatalog, default_catalog
from eyogi_bot.classify.types import Intent, Persona
from eyogi_bot.data import load_data
from .rank import (
    course_content,
    query_words,
    rank,
    score_course,
    score_gurukul,
    score_snippet,
)
from .types import KnowledgeSnippet, SearchResult

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def default_snippets() -> Tuple[KnowledgeSnippet, ...]:
    data = load_data("knowledge")
    return tuple(
        KnowledgeSnippet(
            id=s["id"],
            type=s["type"],
            title=s["title"],
            content=s["content"],
            keywords=tuple(s.get("keywords") or ()),
            category=s["category"],
        )
        for s in data.get("snippets", [])
    )


class KnowledgeIndex:
    def __init__(
        self,
        catalog_client=None,
        snippets: Optional[Tuple[KnowledgeSnippet, ...]] = None,
        intents: Optional[IntentCatalog] = None,
        latency: float = 0.2,
        top_k: int = 5,
    ):
        self.catalog_client = catalog_client
        self.snippets = snippets if snippets is not None else default_snippets()
        self.intents = intents or default_catalog()
        self.latency = latency
        self.top_k = top_k

    # -------------------------
    # Static knowledge
    # -------------------------
    def search_static(self, query: str, intent: Intent) -> List[SearchResult]:
        relevant = self.intents.relevant_categories(Intent(intent))
        results: List[SearchResult] = []
        for snippet in self.snippets:
            score = score_snippet(snippet, query, snippet.category in relevant)
            if score > 0:
                results.append(
                    SearchResult(
                        type=snippet.type,
                        title=snippet.title,
                        content=snippet.content,
                        relevance_score=score,
                        metadata={"category": snippet.category, "id": snippet.id},
                    )
                )
        return results

    # -------------------------
    # Live catalog
    # -------------------------
    async def search_live(self, query: str) -> List[SearchResult]:
        if self.catalog_client is None:
            return []

        # the catalog clients are blocking (requests); keep them off the event loop
        courses = await asyncio.to_thread(self.catalog_client.fetch_courses)
        gurukuls = await asyncio.to_thread(self.catalog_client.fetch_gurukuls)

        words = query_words(query)
        results: List[SearchResult] = []
        for course in courses:
            score = score_course(course, words)
            if score > 0:
                results.append(
                    SearchResult(
                        type="course",
                        title=course.title,
                        content=course_content(course),
                        relevance_score=score,
                        metadata={"category": "courses", "course": course},
                    )
                )
        for gurukul in gurukuls:
            score = score_gurukul(gurukul, words)
            if score > 0:
                results.append(
                    SearchResult(
                        type="gurukul",
                        title=gurukul.name,
                        content=gurukul.description,
                        relevance_score=score,
                        metadata={"category": "gurukuls", "gurukul": gurukul},
                    )
                )
        return results

    # -------------------------
    # Public API
    # -------------------------
    async def search(
        self,
        query: str,
        intent: Intent,
        persona: Persona = Persona.GENERAL_VISITOR,
    ) -> List[SearchResult]:
        """Top hits for `query`, at most top_k, sorted by descending relevance.

        `persona` is accepted alongside the intent but does not affect scoring.
        """
        # simulated network round trip
        if self.latency > 0:
            await asyncio.sleep(self.latency)

        results = self.search_static(query, intent)

        try:
            results.extend(await self.search_live(query))
        except Exception:
            logger.warning("Catalog lookup failed; returning static results only", exc_info=True)

        ranked = rank(results, top_k=self.top_k)
        logger.debug(
            "search intent=%s persona=%s hits=%d returned=%d",
            Intent(intent).value, Persona(persona).value, len(results), len(ranked),
        )
        return ranked
