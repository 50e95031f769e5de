# In-memory catalog for local dev and tests; optionally seeded from a YAML file
# with top-level `courses:` and `gurukuls:` lists.

from __future__ import annotations

import os
from typing import Iterable, List, Optional

import yaml

from ..types import Course, Gurukul


class StaticCatalogClient:
    def __init__(
        self,
        courses: Optional[Iterable[Course]] = None,
        gurukuls: Optional[Iterable[Gurukul]] = None,
        path: Optional[str] = None,
    ):
        self._courses: List[Course] = list(courses or [])
        self._gurukuls: List[Gurukul] = list(gurukuls or [])
        if path:
            self._load(path)

    def _load(self, path: str) -> None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Catalog file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        self._courses.extend(Course(**c) for c in data.get("courses", []))
        self._gurukuls.extend(Gurukul(**g) for g in data.get("gurukuls", []))

    def fetch_courses(self) -> List[Course]:
        return [c for c in self._courses if c.is_active]

    def fetch_gurukuls(self) -> List[Gurukul]:
        return [g for g in self._gurukuls if g.is_active]
