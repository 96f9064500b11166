from __future__ import annotations

import time
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from utility.dto import (
    OptionsResponse,
    SessionUpdate,
    SessionView,
    SubmitResponse,
    TranslationRequest,
    TranslationResponse,
)
from utility.gemini_client import AsyncGeminiClient
from utility.insult_prompts import InsultPromptBuilder
from utility.insult_translator import InsultTranslator
from utility.session_manager import SessionManager
from utility.settings import Settings
from utility.translation_state import (
    INTENSITY_OPTIONS,
    LANGUAGE_OPTIONS,
    dismiss_error,
    render_view,
    update_fields,
)

settings = Settings.from_env()


# -----------------------------
# Startup
# -----------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.settings = settings
    app.state.translator = InsultTranslator(AsyncGeminiClient.from_settings(settings))
    app.state.session_manager = SessionManager(
        ttl_hours=settings.session_ttl_hours,
        cleanup_interval=settings.session_cleanup_interval,
    )
    if not settings.gemini_api_key:
        print("⚠️ GEMINI_API_KEY is not set; completion calls will be rejected upstream")
    print(f"✅ Server started (model: {settings.gemini_model})")
    yield
    app.state.session_manager.close()


# -----------------------------
# FastAPI app
# -----------------------------
app = FastAPI(
    title="The Insulting Translator",
    description="Translate text, then have it insulted at the intensity of your choice",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Absolute path relative to this file
static_path = Path(__file__).parent.parent / "static"
static_path.mkdir(parents=True, exist_ok=True)

app.mount("/static", StaticFiles(directory=static_path), name="static")


# -----------------------------
# Helpers
# -----------------------------
def check_languages(*codes: str | None):
    for code in codes:
        if code is not None and not InsultPromptBuilder.is_supported(code):
            raise HTTPException(
                status_code=422,
                detail=f"Unsupported language: {code}",
            )


# -----------------------------
# HTTP Endpoints
# -----------------------------
@app.get("/", response_class=HTMLResponse)
async def serve_ui():
    html_path = static_path / "index.html"
    if not html_path.exists():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="index.html not found")
    with html_path.open("r", encoding="utf-8") as f:
        return f.read()


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "The Insulting Translator",
        "sessions": app.state.session_manager.get_session_count(),
    }


@app.get("/api/options", response_model=OptionsResponse)
async def get_options():
    return OptionsResponse(languages=LANGUAGE_OPTIONS, intensities=INTENSITY_OPTIONS)


# -----------------------------
# Session-backed form
# -----------------------------
@app.get("/api/session/{session_id}", response_model=SessionView)
async def get_session(session_id: str):
    session = app.state.session_manager.get_or_create_session(session_id)
    return render_view(session.state)


@app.patch("/api/session/{session_id}", response_model=SessionView)
async def update_session(session_id: str, update: SessionUpdate):
    check_languages(update.source_language, update.target_language)
    state = app.state.session_manager.apply(session_id, lambda s: update_fields(s, update))
    return render_view(state)


@app.delete("/api/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def reset_session(session_id: str):
    if not app.state.session_manager.reset_session(session_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot reset while a translation is in progress",
        )


@app.post("/api/session/{session_id}/submit", response_model=SubmitResponse)
async def submit_session(session_id: str):
    session = app.state.session_manager.get_or_create_session(session_id)

    # Same guard as the disabled button in the page
    if session.state.is_loading:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A translation is already in progress for this session",
        )

    outcome = await app.state.translator.submit(session)
    return SubmitResponse(
        outcome=outcome.kind.value,
        error=outcome.error.value if outcome.error else None,
        view=render_view(session.state),
    )


@app.post("/api/session/{session_id}/dismiss-error", response_model=SessionView)
async def dismiss_session_error(session_id: str):
    state = app.state.session_manager.apply(session_id, dismiss_error)
    return render_view(state)


# -----------------------------
# Stateless endpoint
# -----------------------------
@app.post("/translate/insult", response_model=TranslationResponse)
async def translate_insult(req: TranslationRequest):
    check_languages(req.source_language, req.target_language)
    start = time.perf_counter()

    outcome = await app.state.translator.run(req)

    latency_ms = (time.perf_counter() - start) * 1000
    return TranslationResponse(
        text=outcome.text,
        outcome=outcome.kind.value,
        error=outcome.error.value if outcome.error else None,
        error_message=outcome.error_message,
        latency_ms=round(latency_ms, 2),
    )


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
