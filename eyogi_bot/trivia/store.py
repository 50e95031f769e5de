# "Did you know" fact pool.
#
# The pool is the hand-authored facts from facts.yaml followed by filler entries
# generated from per-category templates until it reaches `pool_size`. Filler entry i
# takes category categories[i % len(categories)] and template templates[i % len(templates)],
# so the pool is identical on every start.

from __future__ import annotations

import random
from functools import lru_cache
from typing import List, Optional, Tuple

from eyogi_bot.data import load_data
from .types import Fact, FactMatch

FALLBACK_INTENT = "general_question"
FALLBACK_PERSONA = "general_visitor"
MIN_POOL_SIZE = 1000


def build_facts(data: dict, pool_size: int = MIN_POOL_SIZE) -> Tuple[Fact, ...]:
    facts: List[Fact] = [
        Fact(
            id=f["id"],
            content=f["content"],
            category=f["category"],
            intents=frozenset(f.get("intent") or ()),
            personas=frozenset(f.get("persona") or ()),
        )
        for f in data.get("facts", [])
    ]

    filler = data.get("filler") or {}
    categories = filler.get("categories") or []
    templates = filler.get("templates") or {}
    intents = frozenset(filler.get("intent") or ())
    personas = frozenset(filler.get("persona") or ())
    if categories:
        default_templates = templates[categories[0]]
        for i in range(len(facts), pool_size):
            category = categories[i % len(categories)]
            options = templates.get(category) or default_templates
            facts.append(
                Fact(
                    id=f"fact-{i + 1}",
                    content=options[i % len(options)],
                    category=category,
                    intents=intents,
                    personas=personas,
                )
            )
    return tuple(facts)


@lru_cache(maxsize=4)
def default_facts(pool_size: int = MIN_POOL_SIZE) -> Tuple[Fact, ...]:
    return build_facts(load_data("facts"), pool_size)


class TriviaStore:
    def __init__(
        self,
        facts: Optional[Tuple[Fact, ...]] = None,
        rng: Optional[random.Random] = None,
        pool_size: int = MIN_POOL_SIZE,
    ):
        self.facts = facts if facts is not None else default_facts(pool_size)
        if not self.facts:
            raise ValueError("TriviaStore needs at least one fact")
        self.rng = rng or random.Random()

    # -------------------------
    # Random selection
    # -------------------------
    def random_fact(self, intent: Optional[str] = None, persona: Optional[str] = None) -> str:
        """One fact suited to the intent and persona; any stage that filters out
        everything falls back to the whole pool."""
        candidates = self.facts
        if intent:
            intent = getattr(intent, "value", intent)
            candidates = [
                f for f in candidates
                if intent in f.intents or FALLBACK_INTENT in f.intents
            ] or self.facts
        if persona:
            persona = getattr(persona, "value", persona)
            candidates = [
                f for f in candidates
                if persona in f.personas or FALLBACK_PERSONA in f.personas
            ] or self.facts
        return self.rng.choice(candidates).content

    def random_facts_by_category(self, category: str, count: int = 3) -> List[str]:
        pool = [f for f in self.facts if f.category == category]
        picked = self.rng.sample(pool, min(count, len(pool)))
        return [f.content for f in picked]

    # -------------------------
    # Lookup
    # -------------------------
    def facts_by_category(self, category: str) -> List[str]:
        return [f.content for f in self.facts if f.category == category]

    def categories(self) -> List[str]:
        return list(dict.fromkeys(f.category for f in self.facts))

    def count(self) -> int:
        return len(self.facts)

    # -------------------------
    # Search
    # -------------------------
    def search_facts(self, query: str, max_results: int = 5) -> List[FactMatch]:
        lower = query.lower()
        all_words = lower.split()
        words = [w for w in all_words if len(w) > 2]
        results: List[FactMatch] = []

        for fact in self.facts:
            score = 0
            content = fact.content.lower()
            category = fact.category.lower()

            for word in words:
                if word in content:
                    score += 3 if len(word) > 5 else 2
                if word in category:
                    score += 4

            # naming the category outright beats any keyword hit
            if category in lower:
                score += 5

            # tag matching looks at every query word, short ones included
            for word in all_words:
                score += 2 * sum(1 for tag in fact.intents if word in tag)
                score += sum(1 for tag in fact.personas if word in tag)

            if score > 0:
                results.append(FactMatch(content=fact.content, category=fact.category, relevance_score=score))

        results.sort(key=lambda r: r.relevance_score, reverse=True)
        return results[:max_results]

    def facts_by_query(self, query: str) -> List[str]:
        return [m.content for m in self.search_facts(query, 3)]
