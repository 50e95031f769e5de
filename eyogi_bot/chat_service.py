# ChatService: one conversation's dialogue turn processor.
#
#   message (+ user) -> persona -> intent -> knowledge search -> reply text
#                    -> optional "did you know" aside -> transcript
#
# Errors from any stage propagate to the caller unchanged; the caller shows the apology.

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Deque, List, Optional

from eyogi_bot.classify import IntentClassifier, PersonaDetector, User
from eyogi_bot.generate import ConversationTurn, ResponseSynthesizer, TurnResult
from eyogi_bot.search import KnowledgeIndex, build_catalog_client
from eyogi_bot.settings import settings
from eyogi_bot.trivia import TriviaStore

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(
        self,
        persona_detector: Optional[PersonaDetector] = None,
        intent_classifier: Optional[IntentClassifier] = None,
        knowledge_index: Optional[KnowledgeIndex] = None,
        trivia: Optional[TriviaStore] = None,
        responder: Optional[ResponseSynthesizer] = None,
        rng: Optional[random.Random] = None,
        did_you_know_probability: Optional[float] = None,
        history_limit: Optional[int] = None,
    ):
        self.rng = rng or random.Random()
        self.persona_detector = persona_detector or PersonaDetector()
        self.intent_classifier = intent_classifier or IntentClassifier()
        self.knowledge_index = knowledge_index or KnowledgeIndex(
            catalog_client=build_catalog_client(settings),
            latency=settings.SEARCH_LATENCY_SECONDS,
            top_k=settings.MAX_SEARCH_RESULTS,
        )
        self.trivia = trivia or TriviaStore(rng=self.rng, pool_size=settings.FACT_POOL_SIZE)
        self.responder = responder or ResponseSynthesizer(trivia=self.trivia, rng=self.rng)
        self.did_you_know_probability = (
            settings.DID_YOU_KNOW_PROBABILITY
            if did_you_know_probability is None
            else did_you_know_probability
        )
        self._history: Deque[ConversationTurn] = deque(
            maxlen=history_limit or settings.HISTORY_LIMIT
        )

    async def process(self, message: str, user: Optional[User] = None) -> TurnResult:
        persona = self.persona_detector.detect(message, user)
        classification = self.intent_classifier.classify(message, persona)
        intent = classification.intent

        results = await self.knowledge_index.search(message, intent, persona)

        reply = self.responder.compose(
            message=message,
            persona=persona,
            intent=intent,
            confidence=classification.confidence,
            search_results=results,
            user=user,
        )

        did_you_know = None
        if self.rng.random() < self.did_you_know_probability:
            did_you_know = self.trivia.random_fact(intent, persona)

        self._history.append(ConversationTurn(user_text=message, bot_text=reply))
        logger.info(
            "turn persona=%s intent=%s confidence=%.2f results=%d",
            persona.value, intent.value, classification.confidence, len(results),
        )

        return TurnResult(
            message=reply,
            persona=persona.value,
            intent=intent.value,
            confidence=classification.confidence,
            did_you_know=did_you_know,
        )

    def history(self) -> List[ConversationTurn]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
