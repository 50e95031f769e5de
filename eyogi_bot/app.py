# ============================================================
# eYogi Bot FastAPI App
# ------------------------------------------------------------
# Thin HTTP boundary around the dialogue pipeline:
#   - One ChatService (one transcript) per chat session
#   - Failed turns are answered with the widget's apology text
#   - Reset, history, quick questions and trivia helpers
# ============================================================

import logging
import uuid
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

# --- Local imports ---
from eyogi_bot import __version__
from eyogi_bot.chat_service import ChatService
from eyogi_bot.classify import User
from eyogi_bot.data import load_data
from eyogi_bot.settings import settings
from eyogi_bot.trivia import TriviaStore

# ------------------------------------------------------------
# 📝 Logging
# ------------------------------------------------------------
logger = logging.getLogger("eyogi_bot")
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
    logger.addHandler(h)
logger.setLevel(settings.LOG_LEVEL.upper())

WIDGET = load_data("responses").get("widget", {})
TRIVIA = TriviaStore(pool_size=settings.FACT_POOL_SIZE)

# ------------------------------------------------------------
# 💾 Sessions: one ChatService per conversation, least recently used evicted
# ------------------------------------------------------------
_sessions: "OrderedDict[str, ChatService]" = OrderedDict()


def get_session(session_id: Optional[str]) -> tuple:
    sid = session_id or uuid.uuid4().hex
    service = _sessions.get(sid)
    if service is None:
        service = ChatService()
        _sessions[sid] = service
        while len(_sessions) > settings.MAX_SESSIONS:
            evicted, _ = _sessions.popitem(last=False)
            logger.debug("Evicted chat session %s", evicted)
    else:
        _sessions.move_to_end(sid)
    return sid, service


# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="eYogi Bot API", version=__version__)

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class ChatRequest(BaseModel):
    session_id: Optional[str] = None
    message: str
    user: Optional[User] = None

class ChatPayload(BaseModel):
    session_id: str
    message: str
    persona: Optional[str] = None
    intent: Optional[str] = None
    confidence: Optional[float] = None
    did_you_know: Optional[str] = None
    error: bool = False

class ResetRequest(BaseModel):
    session_id: str

class HistoryTurn(BaseModel):
    user: str
    bot: str
    timestamp: str

class FactHit(BaseModel):
    content: str
    category: str
    relevance_score: float

# ------------------------------------------------------------
# 💬 Main chat route
# ------------------------------------------------------------
@app.post("/chat", response_model=ChatPayload)
async def chat(req: ChatRequest):
    sid, service = get_session(req.session_id)
    try:
        out = await service.process(req.message, req.user)
    except Exception:
        logger.exception("Chat turn failed (session=%s)", sid)
        return ChatPayload(session_id=sid, message=WIDGET["apology"], error=True)

    return ChatPayload(
        session_id=sid,
        message=out.message,
        persona=out.persona,
        intent=out.intent,
        confidence=out.confidence,
        did_you_know=out.did_you_know,
    )

@app.post("/chat/reset", response_model=ChatPayload)
def reset(req: ResetRequest):
    sid, service = get_session(req.session_id)
    service.clear_history()
    return ChatPayload(session_id=sid, message=WIDGET["cleared"])

@app.get("/chat/history", response_model=List[HistoryTurn])
def history(session_id: str = Query(..., description="Chat session id")):
    service = _sessions.get(session_id)
    if service is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return [
        HistoryTurn(user=t.user_text, bot=t.bot_text, timestamp=t.timestamp.isoformat())
        for t in service.history()
    ]

@app.get("/chat/quick-questions")
def quick_questions():
    return {"questions": WIDGET.get("quick_questions", [])}

# ------------------------------------------------------------
# 🪔 Trivia routes
# ------------------------------------------------------------
@app.get("/facts/random")
def random_fact(intent: Optional[str] = None, persona: Optional[str] = None):
    return {"fact": TRIVIA.random_fact(intent, persona)}

@app.get("/facts/search", response_model=List[FactHit])
def search_facts(q: str = Query(..., description="Search query"), limit: int = 5):
    return [
        FactHit(content=m.content, category=m.category, relevance_score=m.relevance_score)
        for m in TRIVIA.search_facts(q, limit)
    ]

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/healthz")
def healthz() -> Dict[str, Any]:
    return {
        "ok": True,
        "env": settings.ENV,
        "debug": settings.DEBUG,
        "app": settings.app_name,
        "sessions": len(_sessions),
    }

@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}

@app.get("/")
def hello():
    return {"message": "eYogi Bot service running."}
