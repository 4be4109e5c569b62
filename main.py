from fastapi import FastAPI, HTTPException, Form, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel
from collections import OrderedDict
from typing import Dict
from pathlib import Path
from urllib.parse import quote
import threading
import logging
import time
import os
from dotenv import load_dotenv

from services.errors import WorkshopError
from services.export import EXPORT_FILENAME, EXPORT_MEDIA_TYPE
from services.insights import NO_PITFALLS_TEXT, NO_PRIORITIES_TEXT
from services.prompts import SPECULATIVE_PROMPTS, prompts_as_dicts
from services.word_cloud import font_size
from services.workshop import SUMMARY, WorkshopSession

# Load environment variables
load_dotenv()

# Basic logging setup; override with LOG_LEVEL env var (e.g., DEBUG, INFO)
_LOG_LEVEL = getattr(logging, os.getenv(
    'LOG_LEVEL', 'INFO').upper(), logging.INFO)
logging.basicConfig(
    level=_LOG_LEVEL, format='[%(asctime)s] %(levelname)s - %(message)s')
logger = logging.getLogger("Workshop")

WORD_CLOUD_LIMIT = int(os.getenv("WORD_CLOUD_LIMIT", "20"))
EXPORT_THEME_LIMIT = int(os.getenv("EXPORT_THEME_LIMIT", "10"))
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "1000"))
SESSION_TTL_SECONDS = float(os.getenv("SESSION_TTL_SECONDS", "3600"))

cors_raw = (os.getenv("CORS_ORIGINS") or "").strip()
allow_origins = [o.strip().rstrip("/")
                 for o in cors_raw.split(",") if o.strip()] or ["*"]

app = FastAPI(
    title="Speculative Strategy Workshop",
    description="Speculative strategy prompts with keyword-driven insights and a text export",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Templates ship inside the services package
templates = Jinja2Templates(
    directory=str(Path(__file__).resolve().parent / "services" / "templates"))
templates.env.globals["font_size"] = font_size

# In-memory workshop sessions keyed by sid, least recently used first.
# Nothing survives a restart.
_sessions: "OrderedDict[str, WorkshopSession]" = OrderedDict()
_last_seen: Dict[str, float] = {}
_sessions_lock = threading.Lock()
_clock = time.monotonic


class AnswerPayload(BaseModel):
    text: str


class SuggestionPayload(BaseModel):
    suggestion: str


def _prune_sessions(now: float) -> None:
    expired = [sid for sid, seen in _last_seen.items()
               if now - seen > SESSION_TTL_SECONDS]
    for sid in expired:
        _sessions.pop(sid, None)
        _last_seen.pop(sid, None)
    while len(_sessions) > MAX_SESSIONS:
        sid, _ = _sessions.popitem(last=False)
        _last_seen.pop(sid, None)
    if expired:
        logger.info(f"Expired {len(expired)} idle workshop sessions")


def peek_session(sid: str) -> WorkshopSession:
    """Registered session for sid, or a fresh one that is not stored"""
    with _sessions_lock:
        now = _clock()
        _prune_sessions(now)
        session = _sessions.get(sid)
        if session is not None:
            _sessions.move_to_end(sid)
            _last_seen[sid] = now
            return session
    return WorkshopSession(word_limit=WORD_CLOUD_LIMIT,
                           theme_limit=EXPORT_THEME_LIMIT, sid=sid)


def remember_session(session: WorkshopSession) -> None:
    """Store a session once it holds state worth keeping"""
    with _sessions_lock:
        now = _clock()
        if session.sid not in _sessions:
            logger.info(f"Created workshop session {session.sid}")
        _sessions[session.sid] = session
        _sessions.move_to_end(session.sid)
        _last_seen[session.sid] = now
        _prune_sessions(now)


def session_count() -> int:
    with _sessions_lock:
        return len(_sessions)


def reset_sessions() -> None:
    with _sessions_lock:
        _sessions.clear()
        _last_seen.clear()


def _http_error(e: WorkshopError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=str(e))


def _back_to_page(sid: str) -> RedirectResponse:
    return RedirectResponse(url=app.url_path_for("index") + f"?sid={quote(sid, safe='')}", status_code=303)


@app.get("/", response_class=HTMLResponse, name="index")
async def index(request: Request, sid: str = Query("default")):
    session = peek_session(sid)
    context = {
        "session": session,
        "sid": sid,
        "show_summary": session.view == SUMMARY,
        "no_priorities_text": NO_PRIORITIES_TEXT,
        "no_pitfalls_text": NO_PITFALLS_TEXT,
    }
    if session.view == SUMMARY:
        context["insights"] = session.insights()
    return templates.TemplateResponse(request, "index.html", context)


@app.get("/health")
async def health():
    return {"status": "ok"}


# ---------------- JSON API ----------------

@app.get("/api/prompts")
async def list_prompts():
    return {"prompts": prompts_as_dicts(SPECULATIVE_PROMPTS)}


@app.get("/api/session")
async def session_state(sid: str = Query("default")):
    return peek_session(sid).to_dict()


@app.post("/api/cards/{prompt_id}/toggle")
async def toggle_card(prompt_id: str, sid: str = Query("default")):
    session = peek_session(sid)
    try:
        card = session.card(prompt_id)
    except WorkshopError as e:
        raise _http_error(e)
    card.toggle()
    remember_session(session)
    return card.to_dict()


@app.post("/api/cards/{prompt_id}/answer")
async def set_answer(prompt_id: str, payload: AnswerPayload, sid: str = Query("default")):
    session = peek_session(sid)
    try:
        card = session.card(prompt_id)
    except WorkshopError as e:
        raise _http_error(e)
    card.set_answer(payload.text)
    remember_session(session)
    return {"card": card.to_dict(), "progress": session.to_dict()["progress"]}


@app.post("/api/cards/{prompt_id}/suggestions")
async def toggle_suggestion(prompt_id: str, payload: SuggestionPayload, sid: str = Query("default")):
    session = peek_session(sid)
    try:
        card = session.card(prompt_id)
        card.toggle_suggestion(payload.suggestion)
    except WorkshopError as e:
        raise _http_error(e)
    remember_session(session)
    return {"card": card.to_dict(), "progress": session.to_dict()["progress"]}


@app.post("/api/summary")
async def show_summary(sid: str = Query("default")):
    session = peek_session(sid)
    try:
        session.show_summary()
    except WorkshopError as e:
        raise _http_error(e)
    return {"view": session.view, "insights": session.insights().to_dict()}


@app.post("/api/back")
async def back_to_prompts(sid: str = Query("default")):
    # an unstored session has nothing to discard, so it stays unstored
    session = peek_session(sid)
    session.back()
    return session.to_dict()


@app.get("/api/insights")
async def get_insights(sid: str = Query("default")):
    return peek_session(sid).insights().to_dict()


@app.get("/export")
async def export_insights(sid: str = Query("default")):
    content = peek_session(sid).export_text()
    return PlainTextResponse(
        content,
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


# ---------------- HTML form fallbacks ----------------

@app.post("/cards/{prompt_id}/toggle")
async def toggle_card_form(prompt_id: str, sid: str = Query("default")):
    await toggle_card(prompt_id, sid=sid)
    return _back_to_page(sid)


@app.post("/cards/{prompt_id}/answer")
async def set_answer_form(prompt_id: str, sid: str = Query("default"), text: str = Form("")):
    await set_answer(prompt_id, AnswerPayload(text=text), sid=sid)
    return _back_to_page(sid)


@app.post("/cards/{prompt_id}/suggestions")
async def toggle_suggestion_form(prompt_id: str, sid: str = Query("default"), suggestion: str = Form(...)):
    await toggle_suggestion(prompt_id, SuggestionPayload(suggestion=suggestion), sid=sid)
    return _back_to_page(sid)


@app.post("/summary")
async def show_summary_form(sid: str = Query("default")):
    await show_summary(sid=sid)
    return _back_to_page(sid)


@app.post("/back")
async def back_form(sid: str = Query("default")):
    await back_to_prompts(sid=sid)
    return _back_to_page(sid)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"),
                port=int(os.getenv("PORT", "8000")))
