"""Earthquake Viewer API - FastAPI service.

Serves the filtered, magnitude-ordered earthquake list and a rendered map
for the USGS past-day feed. The feed is fetched once at startup; the
threshold set through /api/threshold plays the role of the magnitude slider.
"""

import asyncio
import logging
import math
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from src.core.earthquake import (
    MAX_THRESHOLD,
    MIN_THRESHOLD,
    NormalizedQuake,
    as_number,
    clamp_threshold,
)
from src.core.formatter import format_depth, format_magnitude, format_popup, format_time
from src.core.state import FetchStatus
from src.core.static_map import magnitude_to_color, magnitude_to_radius
from src.core.view import QuakeView
from src.orchestrator import Orchestrator
from src.shell.config_loader import load_config, load_config_from_env


logging.basicConfig(
    level=getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ===== Response Models =====

class BoundsResponse(BaseModel):
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float


class FrameResponse(BaseModel):
    bounds: BoundsResponse
    padding: tuple[int, int]


class EarthquakeResponse(BaseModel):
    id: str | None
    magnitude: float | None
    place: str | None
    time: int | None
    url: str | None
    latitude: float | None
    longitude: float | None
    depth: float | None
    radius: float | None
    color: str
    magnitude_label: str
    depth_label: str
    time_label: str
    popup: str


class EarthquakesResponse(BaseModel):
    status: FetchStatus
    message: str | None
    min_magnitude: float
    total: int
    showing: int
    earthquakes: list[EarthquakeResponse]
    frame: FrameResponse | None


class StatusResponse(BaseModel):
    status: FetchStatus
    error: str | None
    min_magnitude: float
    total: int
    showing: int


class ThresholdUpdate(BaseModel):
    min_magnitude: float = Field(ge=MIN_THRESHOLD, le=MAX_THRESHOLD)


# ===== Helpers =====

def _get_config():
    """Load configuration from file or environment."""
    if os.environ.get("CONFIG_PATH"):
        return load_config()
    elif os.environ.get("FEED_URL"):
        return load_config_from_env()
    return load_config()


def _text(value) -> str | None:
    return None if value is None else str(value)


def _finite(value) -> float | None:
    number = as_number(value)
    if number is None or not math.isfinite(number):
        return None
    return number


def _earthquake_to_response(quake: NormalizedQuake) -> EarthquakeResponse:
    # Raw fields that are not numbers are reported as null; labels keep the raw text
    time = _finite(quake.time)
    return EarthquakeResponse(
        id=_text(quake.id),
        magnitude=_finite(quake.magnitude),
        place=_text(quake.place),
        time=int(time) if time is not None else None,
        url=_text(quake.url),
        latitude=_finite(quake.latitude),
        longitude=_finite(quake.longitude),
        depth=_finite(quake.depth),
        radius=_finite(magnitude_to_radius(quake.magnitude)),
        color=magnitude_to_color(quake.magnitude),
        magnitude_label=format_magnitude(quake.magnitude),
        depth_label=format_depth(quake.depth),
        time_label=format_time(quake),
        popup=format_popup(quake),
    )


def _frame_to_response(view: QuakeView) -> FrameResponse | None:
    if view.frame is None:
        return None
    bounds = view.frame.bounds
    return FrameResponse(
        bounds=BoundsResponse(
            min_latitude=bounds.min_latitude,
            max_latitude=bounds.max_latitude,
            min_longitude=bounds.min_longitude,
            max_longitude=bounds.max_longitude,
        ),
        padding=view.frame.padding,
    )


def _status_response(orchestrator: Orchestrator) -> StatusResponse:
    view = orchestrator.view()
    return StatusResponse(
        status=view.status,
        error=orchestrator.state.error,
        min_magnitude=view.threshold,
        total=view.total,
        showing=view.showing,
    )


def _get_orchestrator(request: Request) -> Orchestrator:
    return request.app.state.orchestrator


def _raise_if_failed(orchestrator: Orchestrator) -> None:
    if orchestrator.state.status is FetchStatus.FAILED:
        raise HTTPException(
            status_code=502,
            detail=f"Failed to fetch earthquake data: {orchestrator.state.error}",
        )


# ===== App Factory =====

def create_app(
    orchestrator: Orchestrator | None = None,
    load_on_startup: bool = True,
) -> FastAPI:
    """Create the API application.

    Args:
        orchestrator: Orchestrator to serve (created from config if not provided)
        load_on_startup: Start fetching the feed when the app starts

    Returns:
        Configured FastAPI app
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        nonlocal orchestrator
        if orchestrator is None:
            orchestrator = Orchestrator(_get_config())
        app.state.orchestrator = orchestrator

        load_task = None
        if load_on_startup:
            load_task = asyncio.create_task(orchestrator.load_async())

        yield

        # Results of a fetch still in flight must not land after shutdown
        orchestrator.close()
        if load_task is not None and not load_task.done():
            load_task.cancel()

    app = FastAPI(
        title="Earthquake Viewer API",
        description="Recent earthquakes from the USGS past-day feed",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "PUT", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/api/status", response_model=StatusResponse)
    async def get_status(request: Request):
        """Get the fetch status and counts."""
        return _status_response(_get_orchestrator(request))

    @app.get("/api/earthquakes", response_model=EarthquakesResponse)
    async def get_earthquakes(
        request: Request,
        min_magnitude: float | None = Query(default=None, ge=MIN_THRESHOLD, le=MAX_THRESHOLD),
    ):
        """Get the filtered earthquakes, largest magnitude first.

        min_magnitude applies to this request only; it does not change the
        session threshold.
        """
        orchestrator = _get_orchestrator(request)
        _raise_if_failed(orchestrator)

        threshold = None
        if min_magnitude is not None:
            threshold = clamp_threshold(min_magnitude)
        view = orchestrator.view(threshold=threshold)

        return EarthquakesResponse(
            status=view.status,
            message=view.message,
            min_magnitude=view.threshold,
            total=view.total,
            showing=view.showing,
            earthquakes=[_earthquake_to_response(q) for q in view.sorted],
            frame=_frame_to_response(view),
        )

    @app.put("/api/threshold", response_model=StatusResponse)
    async def update_threshold(request: Request, update: ThresholdUpdate):
        """Set the session's minimum magnitude."""
        orchestrator = _get_orchestrator(request)
        orchestrator.set_threshold(update.min_magnitude)
        return _status_response(orchestrator)

    @app.post("/api/refresh", response_model=StatusResponse)
    async def refresh(request: Request):
        """Fetch the feed again, replacing the loaded earthquakes."""
        orchestrator = _get_orchestrator(request)
        await orchestrator.load_async()
        return _status_response(orchestrator)

    @app.get("/api/map.png")
    async def get_map(request: Request):
        """Render the current view as a PNG map."""
        orchestrator = _get_orchestrator(request)
        _raise_if_failed(orchestrator)

        result = await asyncio.to_thread(orchestrator.render_map, orchestrator.view())
        if not result.success:
            logger.error("Map rendering failed: %s", result.error)
            raise HTTPException(status_code=500, detail="Failed to render map")

        return Response(content=result.image_bytes, media_type="image/png")

    return app


app = create_app()
