# Classification layer: persona detection and intent scoring.

from .intent import IntentCatalog, IntentClassifier
from .persona import PersonaDetector
from .types import ClassificationResult, Intent, Persona, PersonaProfile, User

__all__ = [
    "ClassificationResult",
    "Intent",
    "IntentCatalog",
    "IntentClassifier",
    "Persona",
    "PersonaDetector",
    "PersonaProfile",
    "User",
]
