# Decide who is asking: a persona from the signed-in role, else from message keywords.

from __future__ import annotations
from typing import Dict, Optional, Sequence, Tuple

from eyogi_bot.data import load_data
from .types import Persona, PersonaProfile, User

# Keyword lists are checked in this order for anonymous visitors.
DETECTION_ORDER = (
    Persona.PARENT,
    Persona.TEACHER,
    Persona.PROSPECTIVE_STUDENT,
    Persona.STUDENT,
)

TEACHER_ROLES = ("teacher", "admin")


def _contains_keywords(message: str, keywords: Sequence[str]) -> bool:
    return any(keyword in message for keyword in keywords)


class PersonaDetector:
    def __init__(self, profiles: Optional[dict] = None):
        data = profiles if profiles is not None else load_data("personas")
        self._keywords: Dict[Persona, Tuple[str, ...]] = {}
        self._profiles: Dict[Persona, PersonaProfile] = {}
        for persona in Persona:
            if persona.value not in data:
                raise KeyError(f"Persona '{persona.value}' not found in personas.yaml")
            p = data[persona.value]
            self._keywords[persona] = tuple(p.get("keywords") or ())
            self._profiles[persona] = PersonaProfile(
                key=persona,
                name=p.get("name", persona.value),
                context=p.get("context", ""),
            )

    def detect(self, message: str, user: Optional[User] = None) -> Persona:
        lower = message.lower()

        if user is not None:
            if user.role == "student":
                # Own-account questions and general ones are both answered as a student.
                if _contains_keywords(lower, self._keywords[Persona.STUDENT]):
                    return Persona.STUDENT
                return Persona.STUDENT
            if user.role in TEACHER_ROLES:
                return Persona.TEACHER

        for persona in DETECTION_ORDER:
            if _contains_keywords(lower, self._keywords[persona]):
                return persona

        return Persona.GENERAL_VISITOR

    def profile(self, persona: Persona) -> PersonaProfile:
        return self._profiles[Persona(persona)]

    def persona_context(self, persona: Persona) -> str:
        return self.profile(persona).context
