"""FastAPI application serving the writing studio page and its JSON API."""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from banglamuse.api.models import (
    CategoryResponse,
    ErrorResponse,
    GenerateRequest,
    HistoryDeleteResponse,
    RefineRequest,
    SpeechEndedRequest,
)
from banglamuse.categories import CATEGORIES, LENGTH_LABELS
from banglamuse.chains.refiner import ACTION_LABELS, RefineAction
from banglamuse.config import get_settings
from banglamuse.history import HistoryItem, HistoryItemNotFoundError, HistoryStore
from banglamuse.state import StudioState
from banglamuse.studio import OperationInProgressError, Studio
from banglamuse.ui.utils import format_category_bn, format_timestamp, word_count

# Configure logging
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Global instance (initialized on startup or first use)
studio: Studio | None = None


def get_studio() -> Studio:
    """Return the process-wide studio, creating it on first use."""
    global studio
    if studio is None:
        settings = get_settings()
        history = HistoryStore(settings.history_file, key=settings.history_key)
        history.load()
        studio = Studio(history=history)
        if not settings.has_credentials:
            logger.warning("GOOGLE_PROJECT_ID not set; generation will use offline fallback text")
    return studio


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize and cleanup resources."""
    logger.info("Initializing writing studio...")
    get_studio()

    yield

    logger.info("Shutting down writing studio...")
    if studio is not None:
        studio.stop_audio()


app = FastAPI(
    title="BanglaMuse Writing Studio",
    description="Bengali creative writing with Gemini: generate, refine and read aloud",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Configure templates and static files
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
templates.env.filters["word_count"] = word_count
templates.env.filters["category_bn"] = format_category_bn
templates.env.filters["date"] = format_timestamp
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")
app.state.templates = templates


def _page_context(current: Studio) -> dict:
    return {
        "state": current.state,
        "categories": list(CATEGORIES.values()),
        "lengths": LENGTH_LABELS,
        "actions": ACTION_LABELS,
        "history": current.history_items,
    }


def _render_partial(
    request: Request, current: Studio, template: str, history_changed: bool = False
):
    response = templates.TemplateResponse(request, template, _page_context(current))
    if history_changed:
        response.headers["HX-Trigger"] = "historyChanged"
    return response


def _render_workspace(request: Request, current: Studio, history_changed: bool = False):
    return _render_partial(request, current, "partials/workspace.html", history_changed)


def _render_output(request: Request, current: Studio, history_changed: bool = False):
    """Render only the output section, leaving the compose form untouched."""
    return _render_partial(request, current, "partials/output.html", history_changed)


def _history_head(current: Studio) -> str | None:
    items = current.history_items
    return items[0].id if items else None


def _optional_float(value) -> float | None:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise HTTPException(status_code=422, detail=f"Invalid creativity value: {value}")


# ============== HTML views ==============


@app.get("/")
async def index(request: Request):
    """Render the studio page."""
    return templates.TemplateResponse(request, "index.html", _page_context(get_studio()))


@app.post("/ui/generate")
async def ui_generate(request: Request):
    """Generate content from the compose form and return the workspace partial."""
    current = get_studio()
    form_data = await request.form()
    creativity = _optional_float(form_data.get("creativity"))
    head = _history_head(current)

    try:
        await current.generate(
            category=form_data.get("category") or None,
            topic=str(form_data.get("topic", "")),
            style_sample=str(form_data.get("style_sample", "")),
            length=form_data.get("length") or None,
            creativity=creativity,
        )
    except OperationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except Exception as e:
        logger.exception("Error generating content via UI")
        raise HTTPException(status_code=500, detail=str(e)) from e

    return _render_workspace(request, current, history_changed=_history_head(current) != head)


@app.post("/ui/refine/{action}")
async def ui_refine(request: Request, action: RefineAction):
    """Refine the current content and return the output partial."""
    current = get_studio()
    form_data = await request.form()
    current.update_inputs(
        category=form_data.get("category") or None,
        topic=form_data.get("topic"),
    )
    head = _history_head(current)

    try:
        await current.refine(action)
    except OperationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    return _render_output(request, current, history_changed=_history_head(current) != head)


@app.post("/ui/speech")
async def ui_speech(request: Request):
    """Start reading the content aloud, or stop if already playing."""
    current = get_studio()
    try:
        await current.toggle_speech()
    except OperationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return _render_output(request, current)


@app.post("/ui/speech/stop")
async def ui_speech_stop(request: Request):
    """Stop playback."""
    current = get_studio()
    current.stop_audio()
    return _render_output(request, current)


@app.post("/ui/speech/ended")
async def ui_speech_ended(request: Request):
    """Clear the playing state after the browser finished a clip."""
    current = get_studio()
    form_data = await request.form()
    current.finish_audio(str(form_data.get("clip_id", "")))
    return _render_output(request, current)


@app.get("/ui/speech/{clip_id}")
async def ui_speech_audio(clip_id: str) -> Response:
    """Serve the active audio clip."""
    return await speech_audio(clip_id)


@app.get("/ui/history")
async def history_list(request: Request):
    """Render the history panel partial."""
    context = {"history": get_studio().history_items}
    return templates.TemplateResponse(request, "partials/history.html", context)


@app.post("/ui/history/{item_id}/load")
async def ui_history_load(request: Request, item_id: str):
    """Load a history entry into the editor."""
    current = get_studio()
    try:
        current.load_history_item(item_id)
    except HistoryItemNotFoundError as e:
        raise HTTPException(status_code=404, detail="History item not found") from e
    return _render_workspace(request, current)


@app.delete("/ui/history/{item_id}")
async def ui_history_delete(request: Request, item_id: str):
    """Delete a history entry and return the refreshed panel."""
    current = get_studio()
    if not current.delete_history_item(item_id):
        raise HTTPException(status_code=404, detail="History item not found")
    context = {"history": current.history_items}
    return templates.TemplateResponse(request, "partials/history.html", context)


@app.get("/ui/export")
async def ui_export() -> PlainTextResponse:
    """Download the current content as a text file."""
    return await export_content()


# ============== JSON API ==============


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    settings = get_settings()
    return {"status": "ok", "mode": "online" if settings.has_credentials else "offline"}


@app.get("/categories", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    """List the available content categories."""
    return [CategoryResponse(**category.model_dump()) for category in CATEGORIES.values()]


@app.get("/state", response_model=StudioState)
async def get_state() -> StudioState:
    """Return the current studio state."""
    return get_studio().state


@app.post(
    "/generate",
    response_model=StudioState,
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_content(body: GenerateRequest) -> StudioState:
    """Generate content. Failures are answered with offline fallback text."""
    current = get_studio()
    try:
        return await current.generate(
            category=body.category,
            topic=body.topic,
            style_sample=body.style_sample,
            length=body.length,
            creativity=body.creativity,
        )
    except OperationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except Exception as e:
        logger.exception("Error generating content")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post(
    "/refine",
    response_model=StudioState,
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def refine_content(body: RefineRequest) -> StudioState:
    """Refine the current content."""
    current = get_studio()
    current.update_inputs(category=body.category, topic=body.topic)
    try:
        return await current.refine(body.action)
    except OperationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except Exception as e:
        logger.exception("Error refining content")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post(
    "/speech",
    response_model=StudioState,
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def toggle_speech() -> StudioState:
    """Start speech synthesis, or stop playback if audio is playing."""
    current = get_studio()
    try:
        return await current.toggle_speech()
    except OperationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except Exception as e:
        logger.exception("Error synthesizing speech")
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.post("/speech/stop", response_model=StudioState)
async def stop_speech() -> StudioState:
    """Stop playback."""
    return get_studio().stop_audio()


@app.post("/speech/ended", response_model=StudioState)
async def speech_ended(body: SpeechEndedRequest) -> StudioState:
    """Clear the playing state after the client finished a clip."""
    return get_studio().finish_audio(body.clip_id)


@app.get("/speech/{clip_id}")
async def speech_audio(clip_id: str) -> Response:
    """Serve the active audio clip as WAV."""
    clip = get_studio().get_audio_clip(clip_id)
    if clip is None:
        raise HTTPException(status_code=404, detail="Audio clip not found")
    return Response(content=clip.audio, media_type=clip.mime_type)


@app.get("/history", response_model=list[HistoryItem])
async def list_history() -> list[HistoryItem]:
    """List history entries, most recent first."""
    return get_studio().history_items


@app.delete(
    "/history/{item_id}",
    response_model=HistoryDeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_history(item_id: str) -> HistoryDeleteResponse:
    """Delete a history entry."""
    if not get_studio().delete_history_item(item_id):
        raise HTTPException(status_code=404, detail="History item not found")
    return HistoryDeleteResponse(id=item_id)


@app.post(
    "/history/{item_id}/load",
    response_model=StudioState,
    responses={404: {"model": ErrorResponse}},
)
async def load_history(item_id: str) -> StudioState:
    """Load a history entry into the editor."""
    try:
        return get_studio().load_history_item(item_id)
    except HistoryItemNotFoundError as e:
        raise HTTPException(status_code=404, detail="History item not found") from e


@app.get("/export")
async def export_content() -> PlainTextResponse:
    """Download the current content as a plain-text file."""
    exported = get_studio().export_content()
    if exported is None:
        raise HTTPException(status_code=404, detail="No content to export")
    filename, text = exported
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
