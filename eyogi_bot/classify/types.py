# Data models for the classification layer: who is asking and what they want.

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class Persona(str, Enum):
    STUDENT = "student"
    PARENT = "parent"
    TEACHER = "teacher"
    PROSPECTIVE_STUDENT = "prospective_student"
    GENERAL_VISITOR = "general_visitor"


class Intent(str, Enum):
    """Closed intent catalog, in declaration order (the tie-break order)."""
    COURSE_INQUIRY = "course_inquiry"
    ENROLLMENT_PROCESS = "enrollment_process"
    GURUKUL_INFORMATION = "gurukul_information"
    PRICING_FEES = "pricing_fees"
    CERTIFICATE_INFO = "certificate_info"
    TECHNICAL_SUPPORT = "technical_support"
    CONTACT_INFO = "contact_info"
    ABOUT_EYOGI = "about_eyogi"
    STUDENT_PROGRESS = "student_progress"
    SCHEDULE_CLASSES = "schedule_classes"
    PAYMENT_ISSUES = "payment_issues"
    AGE_APPROPRIATE = "age_appropriate"
    TEACHER_INFO = "teacher_info"
    PLATFORM_FEATURES = "platform_features"
    GREETING = "greeting"
    GOODBYE = "goodbye"
    DID_YOU_KNOW = "did_you_know"
    GENERAL_QUESTION = "general_question"


class User(BaseModel):
    """Authenticated user as handed over by the auth provider; unknown fields are kept."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    role: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None

    @property
    def first_name(self) -> str:
        return (self.full_name or "").split(" ")[0] or "friend"


@dataclass(frozen=True)
class PersonaProfile:
    """Human-readable description of a persona."""
    key: Persona
    name: str
    context: str


@dataclass
class ClassificationResult:
    intent: Intent
    confidence: float
    entities: Dict[str, str] = field(default_factory=dict)
