# ===============================================
# tests/test_endpoints.py
# HTTP boundary: chat sessions, apology on failure,
# reset, history, quick questions, trivia and health
# ===============================================

import random

from fastapi.testclient import TestClient

import eyogi_bot.app as app_module
from eyogi_bot.app import app
from eyogi_bot.chat_service import ChatService
from eyogi_bot.search import KnowledgeIndex
from eyogi_bot.trivia import TriviaStore

client = TestClient(app)


class ExplodingIndex:
    async def search(self, query, intent, persona):
        raise RuntimeError("search backend exploded")


def fast_service(**kw):
    kw.setdefault("knowledge_index", KnowledgeIndex(latency=0))
    return ChatService(rng=random.Random(0), did_you_know_probability=0, **kw)


def test_root_ok():
    r = client.get("/")
    assert r.status_code == 200
    assert "message" in r.json()


def test_health_ok():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_healthz_ok():
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_chat_turn_and_history():
    app_module._sessions["t1"] = fast_service()
    r = client.post("/chat", json={"session_id": "t1", "message": "How much is the fee for yoga?"})
    assert r.status_code == 200
    data = r.json()
    assert data["session_id"] == "t1"
    assert data["intent"] == "pricing_fees"
    assert data["error"] is False
    assert data["message"]

    r = client.get("/chat/history", params={"session_id": "t1"})
    assert r.status_code == 200
    turns = r.json()
    assert len(turns) == 1
    assert turns[0]["user"] == "How much is the fee for yoga?"
    assert turns[0]["bot"] == data["message"]


def test_chat_with_signed_in_user():
    app_module._sessions["t2"] = fast_service()
    r = client.post(
        "/chat",
        json={
            "session_id": "t2",
            "message": "my progress",
            "user": {"id": 7, "role": "student", "full_name": "Asha Devi", "avatar_url": None},
        },
    )
    assert r.status_code == 200
    assert r.json()["persona"] == "student"


def test_failed_turn_returns_apology():
    app_module._sessions["boom"] = fast_service(knowledge_index=ExplodingIndex())
    r = client.post("/chat", json={"session_id": "boom", "message": "hello"})
    assert r.status_code == 200
    data = r.json()
    assert data["error"] is True
    assert data["message"] == app_module.WIDGET["apology"]
    assert data["intent"] is None


def test_reset_clears_history():
    app_module._sessions["t3"] = fast_service()
    client.post("/chat", json={"session_id": "t3", "message": "hello"})
    r = client.post("/chat/reset", json={"session_id": "t3"})
    assert r.status_code == 200
    assert r.json()["message"] == app_module.WIDGET["cleared"]
    assert client.get("/chat/history", params={"session_id": "t3"}).json() == []


def test_history_for_unknown_session_is_404():
    r = client.get("/chat/history", params={"session_id": "nope"})
    assert r.status_code == 404


def test_quick_questions():
    r = client.get("/chat/quick-questions")
    assert r.status_code == 200
    questions = r.json()["questions"]
    assert len(questions) == 8
    assert "How do I enroll in a course?" in questions


def test_random_fact():
    r = client.get("/facts/random", params={"intent": "course_inquiry", "persona": "parent"})
    assert r.status_code == 200
    assert r.json()["fact"]


def test_fact_search():
    r = client.get("/facts/search", params={"q": "sanskrit", "limit": 3})
    assert r.status_code == 200
    hits = r.json()
    assert 0 < len(hits) <= 3
    assert hits[0]["relevance_score"] >= hits[-1]["relevance_score"]


def test_fact_routes_share_one_store_built_at_import():
    assert isinstance(app_module.TRIVIA, TriviaStore)
    assert app_module.TRIVIA.count() >= 1000
    assert not hasattr(app_module, "get_trivia")
    fact = client.get("/facts/random").json()["fact"]
    assert fact in {f.content for f in app_module.TRIVIA.facts}
