# Keyword/phrase intent scoring with persona weighting and simple entity extraction.

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from eyogi_bot.data import load_data
from .types import ClassificationResult, Intent, Persona

COURSE_NUMBER_RE = re.compile(r"[CM]\d{4}")
AGE_RE = re.compile(r"(\d+)\s*(?:years?\s*old|age)", re.IGNORECASE)

FALLBACK_CONFIDENCE = 0.5


@dataclass(frozen=True)
class IntentDefinition:
    intent: Intent
    phrases: Tuple[str, ...]
    categories: Tuple[str, ...]


@dataclass(frozen=True)
class IntentCatalog:
    """Read-only view of intents.yaml, with every ordering kept as a tuple."""
    definitions: Tuple[IntentDefinition, ...]
    persona_weights: Tuple[Tuple[Persona, Tuple[Tuple[Intent, float], ...]], ...]
    gurukuls: Tuple[str, ...]
    levels: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: dict) -> "IntentCatalog":
        definitions = tuple(
            IntentDefinition(
                intent=Intent(item["name"]),
                phrases=tuple(item.get("phrases") or ()),
                categories=tuple(item.get("categories") or ()),
            )
            for item in data.get("intents", [])
        )
        weights = tuple(
            (
                Persona(entry["persona"]),
                tuple((Intent(b["intent"]), float(b["factor"])) for b in entry.get("boosts", [])),
            )
            for entry in data.get("persona_weights", [])
        )
        entities = data.get("entities", {})
        return cls(
            definitions=definitions,
            persona_weights=weights,
            gurukuls=tuple(entities.get("gurukuls", ())),
            levels=tuple(entities.get("levels", ())),
        )

    def relevant_categories(self, intent: Intent) -> Tuple[str, ...]:
        for d in self.definitions:
            if d.intent == intent:
                return d.categories
        return ()


@lru_cache(maxsize=1)
def default_catalog() -> IntentCatalog:
    return IntentCatalog.from_dict(load_data("intents"))


def phrase_score(phrase: str, message: str) -> int:
    """+2 per long word (>3 chars) and +1 per short word of the phrase found in the message,
    plus 3 when the whole phrase is present."""
    score = 0
    for word in phrase.split(" "):
        if word in message:
            score += 2 if len(word) > 3 else 1
    if phrase in message:
        score += 3
    return score


class IntentClassifier:
    def __init__(self, catalog: Optional[IntentCatalog] = None):
        self.catalog = catalog or default_catalog()

    def raw_scores(self, message: str) -> Dict[Intent, float]:
        lower = message.lower()
        scores: Dict[Intent, float] = {}
        for d in self.catalog.definitions:
            score = 0
            for phrase in d.phrases:
                if phrase in lower:
                    score += phrase_score(phrase, lower)
            scores[d.intent] = score
        return scores

    def apply_persona_weighting(self, scores: Dict[Intent, float], persona: Persona) -> None:
        for weighted_persona, boosts in self.catalog.persona_weights:
            if weighted_persona != persona:
                continue
            for intent, factor in boosts:
                if intent in scores:
                    scores[intent] *= factor

    def classify(self, message: str, persona: Persona) -> ClassificationResult:
        scores = self.raw_scores(message)
        self.apply_persona_weighting(scores, Persona(persona))

        # sorted() is stable, so equal scores keep catalog declaration order
        ranked: List[Tuple[Intent, float]] = sorted(
            (
                (d.intent, scores[d.intent])
                for d in self.catalog.definitions
                if scores[d.intent] > 0
            ),
            key=lambda pair: pair[1],
            reverse=True,
        )
        if not ranked:
            return ClassificationResult(
                intent=Intent.GENERAL_QUESTION,
                confidence=FALLBACK_CONFIDENCE,
                entities={},
            )

        top_intent, top_score = ranked[0]
        return ClassificationResult(
            intent=top_intent,
            confidence=min(top_score / 10.0, 1.0),
            entities=self.extract_entities(message),
        )

    def extract_entities(self, message: str) -> Dict[str, str]:
        """Pull course codes, gurukul topics, ages and levels out of the raw message.

        Course number and age keep the first regex match; gurukul and level are
        overwritten by each later vocabulary hit.
        """
        entities: Dict[str, str] = {}
        lower = message.lower()

        m = COURSE_NUMBER_RE.search(message)
        if m:
            entities["course_number"] = m.group(0)

        for gurukul in self.catalog.gurukuls:
            if gurukul in lower:
                entities["gurukul"] = gurukul

        m = AGE_RE.search(message)
        if m:
            entities["age"] = m.group(1)

        for level in self.catalog.levels:
            if level in lower:
                entities["level"] = level

        return entities
