# Data models for the search layer.
# Snippets are the static knowledge base; Course/Gurukul come from the live catalog.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class Course(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    title: str
    description: str = ""
    course_number: str = ""
    level: str = ""
    duration_weeks: Optional[int] = None
    fee: Optional[float] = None
    price: Optional[float] = None
    slug: Optional[str] = None
    is_active: bool = True

    @property
    def display_price(self) -> Optional[float]:
        return self.price if self.price is not None else self.fee


class Gurukul(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    name: str
    slug: str
    description: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class KnowledgeSnippet:
    """A pre-authored short answer document."""
    id: str
    type: str
    title: str
    content: str
    keywords: Tuple[str, ...]
    category: str


@dataclass
class SearchResult:
    """One scored hit, static or live. metadata holds category and the source record."""
    type: str
    title: str
    content: str
    relevance_score: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def course(self) -> Optional[Course]:
        return self.metadata.get("course")

    @property
    def gurukul(self) -> Optional[Gurukul]:
        return self.metadata.get("gurukul")
