# ===============================================
# tests/test_chat_service.py
# End-to-end dialogue turns through ChatService
# (no artificial latency, seeded randomness)
# ===============================================

import asyncio
import random

import pytest

from eyogi_bot.chat_service import ChatService
from eyogi_bot.classify import User
from eyogi_bot.search import KnowledgeIndex


def make_service(probability=0.0, seed=7):
    return ChatService(
        knowledge_index=KnowledgeIndex(latency=0),
        rng=random.Random(seed),
        did_you_know_probability=probability,
        history_limit=10,
    )


def turn(service, message, user=None):
    return asyncio.run(service.process(message, user))


class ExplodingIndex:
    async def search(self, query, intent, persona):
        raise RuntimeError("search backend exploded")


def test_single_turn_shape():
    service = make_service()
    out = turn(service, "What is the fee for sanskrit?")
    assert out.intent == "pricing_fees"
    assert out.persona == "general_visitor"
    assert out.confidence == 1.0
    assert out.message
    assert out.did_you_know is None

    history = service.history()
    assert len(history) == 1
    assert history[0].user_text == "What is the fee for sanskrit?"
    assert history[0].bot_text == out.message


def test_history_is_bounded():
    service = make_service()
    for i in range(15):
        turn(service, f"hello {i}")
    history = service.history()
    assert len(history) == 10
    assert history[0].user_text == "hello 5"
    assert history[-1].user_text == "hello 14"


def test_clear_history():
    service = make_service()
    turn(service, "hello")
    service.clear_history()
    assert service.history() == []


def test_did_you_know_always_attached_at_probability_one():
    service = make_service(probability=1.0)
    for message in ("hello", "how do i enroll", "zzqx"):
        assert turn(service, message).did_you_know


def test_did_you_know_never_attached_at_probability_zero():
    service = make_service(probability=0.0)
    assert all(turn(service, m).did_you_know is None for m in ("hello", "fun fact", "course fees"))


def test_signed_in_student_is_answered_as_student():
    service = make_service()
    user = User(id=42, role="student", full_name="Asha Devi")
    out = turn(service, "Show me my progress", user)
    assert out.persona == "student"
    assert out.intent == "student_progress"
    assert "Asha" in out.message


def test_blank_message_is_a_general_question():
    out = turn(make_service(), "   ")
    assert out.intent == "general_question"
    assert out.confidence == 0.5


def test_stage_failure_propagates_and_leaves_history_alone():
    service = ChatService(knowledge_index=ExplodingIndex(), rng=random.Random(0), did_you_know_probability=0)
    with pytest.raises(RuntimeError):
        turn(service, "hello")
    assert service.history() == []
