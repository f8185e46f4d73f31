"""
FastAPI wrapper for Code Diff Highlighter.

This module exposes the comparison pipeline and the saved session as a
REST API.
"""

from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from code_diff_highlighter import __version__
from code_diff_highlighter.comparison import compare_texts
from code_diff_highlighter.config import DiffConfig
from code_diff_highlighter.errors import DiffInputError, InputTooLargeError, StorageError
from code_diff_highlighter.html_renderer import render_lines_html, render_stats_html
from code_diff_highlighter.models import ComparisonResult
from code_diff_highlighter.storage import DebouncedSaver, SessionStore, restore_session
from code_diff_highlighter.text_input import prepare_text

app = FastAPI(
    title="Code Diff Highlighter API",
    description="Line-level code comparison with added/changed/removed classification",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

settings = DiffConfig()
session_store = SessionStore.from_config(settings)
autosaver = DebouncedSaver(session_store, delay=settings.autosave_delay_seconds)


class CompareRequest(BaseModel):
    """Request model for a comparison."""
    old_text: str = Field(..., description="Old version of the code")
    new_text: str = Field(..., description="New version of the code")
    threshold: Optional[float] = Field(
        None,
        ge=0.0,
        le=1.0,
        description="Similarity above which an added line counts as changed. Defaults to 0.7.",
    )
    consume_on_match: bool = Field(
        False,
        description="Pair each removed line with at most one changed line",
    )
    save: bool = Field(False, description="Store the texts as the current session")


class StatsModel(BaseModel):
    """Added / changed / removed counts."""
    added: int
    changed: int
    removed: int


class RenderedLineModel(BaseModel):
    """One line of the new text with its category."""
    line: str
    category: str


class CompareResponse(BaseModel):
    """Response model for comparison results."""
    stats: StatsModel
    lines: list[RenderedLineModel]
    html: str
    stats_html: str


class SessionModel(BaseModel):
    """Saved old/new text pair."""
    old_text: Optional[str] = None
    new_text: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


@app.get("/", response_class=HTMLResponse)
async def root():
    """Landing page."""
    return HTMLResponse(content="<h1>Code Diff Highlighter API</h1><p>Visit <a href='/docs'>/docs</a> for API documentation.</p>")


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


def _build_response(result: ComparisonResult) -> CompareResponse:
    return CompareResponse(
        stats=StatsModel(**result.stats.to_dict()),
        lines=[RenderedLineModel(**line.to_dict()) for line in result.rendered],
        html=render_lines_html(result.rendered),
        stats_html=render_stats_html(result.stats),
    )


@app.post("/api/compare", response_model=CompareResponse)
async def compare(request: CompareRequest):
    """
    Compare two versions of some code.

    Returns the stats, the new text tagged line by line, and the
    highlighted HTML view.
    """
    overrides = {"consume_on_match": request.consume_on_match}
    if request.threshold is not None:
        overrides["similarity_threshold"] = request.threshold
    config = DiffConfig(**overrides)

    try:
        result = compare_texts(request.old_text, request.new_text, config)
    except InputTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except DiffInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if request.save:
        # An explicit save supersedes any auto-save still waiting
        autosaver.cancel()
        try:
            session_store.save_pair(prepare_text(request.old_text), prepare_text(request.new_text))
        except StorageError as e:
            raise HTTPException(status_code=500, detail=str(e))

    return _build_response(result)


@app.get("/api/session", response_model=SessionModel)
async def get_session():
    """Return the saved old/new texts, including any pending auto-save."""
    try:
        autosaver.flush()
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    old_text, new_text = session_store.get_pair()
    return SessionModel(old_text=old_text, new_text=new_text)


@app.put("/api/session", response_model=SessionModel, status_code=202)
async def save_session(session: SessionModel):
    """
    Auto-save the texts being edited.

    Writes are debounced; fields left out keep their stored value.
    """
    old_text = prepare_text(session.old_text) if session.old_text is not None else None
    new_text = prepare_text(session.new_text) if session.new_text is not None else None
    autosaver.submit(old_text, new_text)
    return SessionModel(old_text=old_text, new_text=new_text)


@app.delete("/api/session")
async def clear_session():
    """Forget the saved texts."""
    autosaver.cancel()
    try:
        session_store.clear()
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "cleared"}


@app.get("/api/session/compare", response_model=CompareResponse)
async def compare_session():
    """Re-run the comparison for the saved texts."""
    try:
        autosaver.flush()
        result = restore_session(session_store, settings)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except InputTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except DiffInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result is None:
        raise HTTPException(status_code=404, detail="No saved session to compare")
    return _build_response(result)
