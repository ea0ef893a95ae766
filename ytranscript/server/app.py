"""FastAPI application serving transcript panels and markdown exports.

WHY: The interactive view needs a host-independent backend: something a
browser page, an editor plugin, or curl can ask for "the blocks of this
video" and "the markdown for this video at this cursor". FastAPI gives
request validation and OpenAPI docs for free.

HOW: A module-level PanelStore remembers which URL each open panel shows.
Panel endpoints recompute the PanelView from scratch on every request.
Settings are read from the JSON settings file at the start of each
request. The caption client factory and settings path are dependencies
so tests can override them.

RULES:
- Title and transcript failures are reported in the PanelView, not as
  HTTP errors; only invalid input (400) and unknown panels (404) are errors
- Markdown export maps InvalidInputError → 400, NoCaptionsError → 404,
  SourceUnavailableError → 502
- Closing a panel removes exactly that panel's URL
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import Response

from ytranscript import __version__
from ytranscript.config import SETTINGS_PATH, load_settings, parse_cadence, save_settings
from ytranscript.core.insertion import plan_insertion
from ytranscript.errors import InvalidInputError, NoCaptionsError, SourceUnavailableError
from ytranscript.pipeline import (
    ClientFactory,
    PanelView,
    build_panel_view,
    default_client_factory,
    export_markdown,
)
from ytranscript.server.models import (
    BlockViewResponse,
    ErrorResponse,
    HealthResponse,
    MarkdownRequest,
    MarkdownResponse,
    PanelOpenRequest,
    PanelResponse,
    PanelSummary,
    SettingsResponse,
    SettingsUpdate,
)
from ytranscript.server.panels import PanelStore
from ytranscript.source.urls import extract_video_id

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and store setup
# ---------------------------------------------------------------------------

panel_store = PanelStore()

app = FastAPI(
    title="YTranscript Panel API",
    description=(
        "Fetch YouTube caption tracks and serve them as timestamped blocks "
        "for interactive panels, or as markdown ready to insert into a note."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


def get_settings_path() -> Path:
    return SETTINGS_PATH


def get_client_factory() -> ClientFactory:
    return default_client_factory


SettingsPathDep = Annotated[Path, Depends(get_settings_path)]
ClientFactoryDep = Annotated[ClientFactory, Depends(get_client_factory)]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _view_to_response(view: PanelView) -> PanelResponse:
    return PanelResponse(
        panel_id=view.panel_id or "",
        url=view.url,
        title=view.title,
        title_error=view.title_error,
        blocks=[
            BlockViewResponse(
                timestamp_label=b.timestamp_label,
                timestamp_seconds=b.timestamp_seconds,
                jump_url=b.jump_url,
                quote_text=b.quote_text,
            )
            for b in view.blocks
        ],
        copy_all_text=view.copy_all_text,
        transcript_error=view.transcript_error,
    )


def _validate_url(url: str) -> str:
    """Raise 400 unless url names a video."""
    try:
        extract_video_id(url)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return url.strip()


async def _render_panel(
    panel_id: str,
    url: str,
    settings_path: Path,
    client_factory: ClientFactory,
) -> PanelResponse:
    settings = load_settings(settings_path)
    try:
        view = await build_panel_view(
            url, settings, client_factory=client_factory, panel_id=panel_id
        )
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _view_to_response(view)


# ---------------------------------------------------------------------------
# Endpoints: Panels
# ---------------------------------------------------------------------------


@app.post(
    "/panels",
    response_model=PanelResponse,
    status_code=201,
    tags=["panels"],
    summary="Open a transcript panel",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or settings"},
        429: {"model": ErrorResponse, "description": "Too many open panels"},
    },
)
async def open_panel(
    body: PanelOpenRequest,
    settings_path: SettingsPathDep,
    client_factory: ClientFactoryDep,
) -> PanelResponse:
    url = _validate_url(body.url)
    try:
        panel = panel_store.open_panel(url)
    except ValueError as exc:
        raise HTTPException(status_code=429, detail=str(exc))
    return await _render_panel(panel.id, panel.url, settings_path, client_factory)


@app.get(
    "/panels",
    response_model=List[PanelSummary],
    tags=["panels"],
    summary="List open panels",
)
async def list_panels() -> List[PanelSummary]:
    return [PanelSummary(panel_id=p.id, url=p.url) for p in panel_store.list_panels()]


@app.get(
    "/panels/{panel_id}",
    response_model=PanelResponse,
    tags=["panels"],
    summary="Render an open panel",
    responses={404: {"model": ErrorResponse, "description": "Panel not found"}},
)
async def get_panel(
    panel_id: str,
    settings_path: SettingsPathDep,
    client_factory: ClientFactoryDep,
) -> PanelResponse:
    panel = panel_store.get_panel(panel_id)
    if panel is None:
        raise HTTPException(status_code=404, detail="Panel not found: {}".format(panel_id))
    return await _render_panel(panel.id, panel.url, settings_path, client_factory)


@app.put(
    "/panels/{panel_id}",
    response_model=PanelResponse,
    tags=["panels"],
    summary="Point an open panel at another video",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        404: {"model": ErrorResponse, "description": "Panel not found"},
    },
)
async def update_panel(
    panel_id: str,
    body: PanelOpenRequest,
    settings_path: SettingsPathDep,
    client_factory: ClientFactoryDep,
) -> PanelResponse:
    url = _validate_url(body.url)
    panel = panel_store.set_url(panel_id, url)
    if panel is None:
        raise HTTPException(status_code=404, detail="Panel not found: {}".format(panel_id))
    return await _render_panel(panel.id, panel.url, settings_path, client_factory)


@app.delete(
    "/panels/{panel_id}",
    status_code=204,
    tags=["panels"],
    summary="Close a panel",
    responses={404: {"model": ErrorResponse, "description": "Panel not found"}},
)
async def close_panel(panel_id: str) -> Response:
    if not panel_store.close_panel(panel_id):
        raise HTTPException(status_code=404, detail="Panel not found: {}".format(panel_id))
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Endpoints: Markdown
# ---------------------------------------------------------------------------


@app.post(
    "/markdown",
    response_model=MarkdownResponse,
    tags=["markdown"],
    summary="Render a transcript as markdown",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or settings"},
        404: {"model": ErrorResponse, "description": "No transcript for this video"},
        502: {"model": ErrorResponse, "description": "Caption source unavailable"},
    },
)
async def render_markdown_export(
    body: MarkdownRequest,
    settings_path: SettingsPathDep,
    client_factory: ClientFactoryDep,
) -> MarkdownResponse:
    settings = load_settings(settings_path)
    try:
        markdown = await export_markdown(body.url, settings, client_factory=client_factory)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except NoCaptionsError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except SourceUnavailableError as exc:
        logger.warning("Caption source failed for %s: %s", body.url, exc)
        raise HTTPException(status_code=502, detail=str(exc))

    if body.document is None:
        return MarkdownResponse(markdown=markdown, insert_text=markdown)

    cursor = body.cursor if body.cursor is not None else len(body.document)
    plan = plan_insertion(body.document, min(cursor, len(body.document)))
    return MarkdownResponse(
        markdown=markdown,
        insert_text=plan.apply(markdown),
        insertion_offset=plan.offset,
        needs_leading_newline=plan.needs_leading_newline,
    )


# ---------------------------------------------------------------------------
# Endpoints: Settings
# ---------------------------------------------------------------------------


@app.get(
    "/settings",
    response_model=SettingsResponse,
    tags=["settings"],
    summary="Read settings",
)
async def get_settings(settings_path: SettingsPathDep) -> SettingsResponse:
    settings = load_settings(settings_path)
    return SettingsResponse(**settings.to_dict())


@app.put(
    "/settings",
    response_model=SettingsResponse,
    tags=["settings"],
    summary="Update settings",
)
async def update_settings(
    body: SettingsUpdate,
    settings_path: SettingsPathDep,
) -> SettingsResponse:
    settings = load_settings(settings_path)
    if body.timestamp_mod is not None:
        settings.timestamp_mod = parse_cadence(body.timestamp_mod)
    if body.lang is not None:
        settings.lang = body.lang
    if body.country is not None:
        settings.country = body.country
    save_settings(settings, settings_path)
    return SettingsResponse(**settings.to_dict())


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api() -> None:
    """Entry point for the ytranscript-api console script."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    uvicorn.run(app, host="127.0.0.1", port=8000)
