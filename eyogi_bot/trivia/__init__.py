# Trivia package: the "did you know" fact pool.

from .store import TriviaStore, build_facts
from .types import Fact, FactMatch

__all__ = ["Fact", "FactMatch", "TriviaStore", "build_facts"]
