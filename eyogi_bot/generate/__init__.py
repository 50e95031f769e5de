# Reply generation package

# Makes generate/ importable and exposes key interfaces.

from .responder import ResponseSynthesizer, age_band
from .types import ConversationTurn, TurnResult

__all__ = ["ResponseSynthesizer", "ConversationTurn", "TurnResult", "age_band"]
