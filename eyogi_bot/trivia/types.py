from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class Fact:
    id: str
    content: str
    category: str
    intents: FrozenSet[str]
    personas: FrozenSet[str]


@dataclass
class FactMatch:
    content: str
    category: str
    relevance_score: float
