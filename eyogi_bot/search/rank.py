# Scoring and ranking helpers for the knowledge index.
# Stateless; every function takes the lower-cased query words it scores against.

from __future__ import annotations
from typing import List, Sequence

from .types import Course, Gurukul, KnowledgeSnippet, SearchResult

MIN_WORD_LENGTH = 3
INTENT_BOOST = 1.5


def query_words(query: str) -> List[str]:
    return query.lower().split()


def _significant(words: Sequence[str]) -> List[str]:
    return [w for w in words if len(w) >= MIN_WORD_LENGTH]


def score_snippet(snippet: KnowledgeSnippet, query: str, intent_relevant: bool) -> float:
    lower = query.lower()
    words = _significant(query_words(query))
    content = snippet.content.lower()
    title = snippet.title.lower()

    score: float = 0
    for keyword in snippet.keywords:
        if keyword in lower:
            score += 3 if len(keyword) > 5 else 2
    for word in words:
        if word in content:
            score += 1
    for word in words:
        if word in title:
            score += 3

    if intent_relevant:
        score *= INTENT_BOOST
    return score


def score_course(course: Course, words: Sequence[str]) -> float:
    score = 0
    for word in _significant(words):
        if word in course.title.lower():
            score += 3
        if word in course.description.lower():
            score += 2
        if word in course.course_number.lower():
            score += 4
        if word in course.level.lower():
            score += 2
    return score


def score_gurukul(gurukul: Gurukul, words: Sequence[str]) -> float:
    score = 0
    for word in _significant(words):
        if word in gurukul.name.lower():
            score += 3
        if word in gurukul.description.lower():
            score += 2
        if word in gurukul.slug.lower():
            score += 2
    return score


def course_content(course: Course) -> str:
    details = [f"Course: {course.course_number}", f"Level: {course.level}"]
    if course.duration_weeks is not None:
        details.append(f"Duration: {course.duration_weeks} weeks")
    price = course.display_price
    if price is not None:
        if isinstance(price, float) and price.is_integer():
            price = int(price)
        details.append(f"Fee: €{price}")
    return f"{course.description} ({', '.join(details)})"


def rank(results: List[SearchResult], top_k: int = 5) -> List[SearchResult]:
    """Drop zero scores, sort descending (stable) and clip."""
    kept = [r for r in results if r.relevance_score > 0]
    ranked = sorted(kept, key=lambda r: r.relevance_score, reverse=True)
    return ranked[:top_k]
