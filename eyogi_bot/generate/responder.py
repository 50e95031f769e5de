# ResponseSynthesizer: turns a classified message plus search hits into the reply text.
# - opening line picked from templates[intent][persona]
# - top search hits rendered with deep links, or an intent fallback paragraph
# - personal touches for signed-in users and parents
# - one follow-up suggestion
# did_you_know messages get their own composer built on the TriviaStore.

from __future__ import annotations

import random
import re
from typing import List, Optional, Sequence

from eyogi_bot.classify.types import Intent, Persona, User
from eyogi_bot.data import load_data
from eyogi_bot.search.types import SearchResult
from eyogi_bot.trivia import TriviaStore

TOP_RESULTS = 3
SNIPPET_LENGTH = 100
FACTS_PER_REPLY = 3

ABOUT_RE = re.compile(r"about\s+(\w+)", re.IGNORECASE)
FACTS_RE = re.compile(r"(\w+)\s+facts?", re.IGNORECASE)

AGE_BANDS = (
    (4, 7, "Elementary"),
    (8, 11, "Basic"),
    (12, 15, "Intermediate"),
    (16, 19, "Advanced"),
)


def age_band(age: int) -> str:
    for low, high, band in AGE_BANDS:
        if low <= age <= high:
            return band
    return "Adult Learning"


def truncate(content: str, max_length: int = SNIPPET_LENGTH) -> str:
    if len(content) <= max_length:
        return content
    return content[:max_length] + "..."


def _numbered(facts: Sequence[str]) -> str:
    return "".join(f"{i}. {fact}\n\n" for i, fact in enumerate(facts, start=1))


class ResponseSynthesizer:
    def __init__(
        self,
        trivia: Optional[TriviaStore] = None,
        rng: Optional[random.Random] = None,
        replies: Optional[dict] = None,
    ):
        self.rng = rng or random.Random()
        self.trivia = trivia or TriviaStore(rng=self.rng)
        self.cfg = replies if replies is not None else load_data("responses")
        self._dyk = self.cfg.get("did_you_know", {})

    # -------------------------
    # Template helpers
    # -------------------------
    def _pick_template(self, intent: str, persona: str) -> str:
        by_persona = self.cfg.get("templates", {}).get(intent, {})
        templates = by_persona.get(persona) or by_persona.get(Persona.GENERAL_VISITOR.value)
        if not templates:
            return self.cfg["generic_template"]
        return self.rng.choice(templates)

    def _compose_results(self, intent: str, results: Sequence[SearchResult]) -> str:
        text = "\n\n"
        for index, result in enumerate(results[:TOP_RESULTS]):
            if index == 0:
                text += f"📚 **{result.title}**\n{result.content}\n\n"
                if result.type == "course" and result.course is not None:
                    text += f"🔗 [View Course Details](/courses/{result.course.id})\n\n"
                elif result.type == "gurukul" and result.gurukul is not None:
                    g = result.gurukul
                    text += f"🔗 [Explore {g.name}](/gurukuls/{g.slug})\n\n"
            else:
                text += f"• **{result.title}**: {truncate(result.content)}\n\n"
        return text + self.cfg.get("links", {}).get(intent, "")

    def _compose_fallback(self, intent: str) -> str:
        return self.cfg.get("fallbacks", {}).get(intent) or self.cfg["generic_fallback"]

    def _personalize(self, user: Optional[User], persona: str, intent: str) -> str:
        touches = self.cfg.get("personalization", {})
        text = ""
        if user is not None:
            if intent == Intent.STUDENT_PROGRESS.value and user.role == "student":
                text += "\n\n" + touches["progress_nudge"].format(first_name=user.first_name)
            if intent == Intent.COURSE_INQUIRY.value and user.age:
                text += "\n\n" + touches["age_recommendation"].format(
                    age=user.age, band=age_band(user.age)
                )
        if persona == Persona.PARENT.value:
            text += "\n\n" + touches["parent_reassurance"]
        return text

    def _suggestion(self, intent: str) -> str:
        options = self.cfg.get("suggestions", {}).get(intent)
        if options:
            return f"\n\n❓ {self.rng.choice(options)}"
        return f"\n\n💬 {self.cfg['generic_suggestion']}"

    # -------------------------
    # Did you know
    # -------------------------
    def extract_topic(self, message: str) -> str:
        """Topic the user asked facts about: vocabulary hit, else 'about X', else 'X facts'."""
        lower = message.lower()
        for topic in self._dyk.get("topics", []):
            if topic in lower:
                return topic

        m = ABOUT_RE.search(lower)
        if m:
            return m.group(1)
        m = FACTS_RE.search(lower)
        if m:
            return m.group(1)
        return ""

    def category_for_topic(self, topic: str) -> str:
        return self._dyk.get("categories", {}).get(topic.lower(), self._dyk.get("default_category", "hinduism"))

    def compose_did_you_know(self, message: str, persona: str) -> str:
        response = self._pick_template(Intent.DID_YOU_KNOW.value, persona) + "\n\n"

        topic = self.extract_topic(message)
        if topic:
            matches = self.trivia.search_facts(topic, FACTS_PER_REPLY)
            if matches:
                response += self._dyk["topic_header"].format(topic=topic) + "\n\n"
                response += _numbered([m.content for m in matches])
            else:
                facts = self.trivia.random_facts_by_category(self.category_for_topic(topic), FACTS_PER_REPLY)
                response += self._dyk["category_header"] + "\n\n"
                response += _numbered(facts)
        else:
            facts = [self.trivia.random_fact() for _ in range(FACTS_PER_REPLY)]
            response += self._dyk["random_header"] + "\n\n"
            response += _numbered(facts)

        response += self._dyk["explore"]
        response += self._dyk["more"]
        return response

    # -------------------------
    # Public API
    # -------------------------
    def compose(
        self,
        message: str,
        persona: Persona,
        intent: Intent,
        confidence: float,
        search_results: List[SearchResult],
        user: Optional[User] = None,
    ) -> str:
        """Main entry point: build the reply text for one classified message."""
        persona = getattr(persona, "value", persona)
        intent = getattr(intent, "value", intent)

        if intent == Intent.DID_YOU_KNOW.value:
            return self.compose_did_you_know(message, persona)

        response = self._pick_template(intent, persona)
        if search_results:
            response += self._compose_results(intent, search_results)
        else:
            response += self._compose_fallback(intent)

        response += self._personalize(user, persona, intent)
        response += self._suggestion(intent)
        return response.strip()
