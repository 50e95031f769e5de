# Simple, typed dataclasses shared by the reply and dialogue modules.

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class ConversationTurn:
    """One exchange kept in the rolling transcript."""
    user_text: str
    bot_text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class TurnResult:
    """Final reply for one processed message."""
    message: str
    persona: str
    intent: str
    confidence: float
    did_you_know: Optional[str] = None
