"""FastAPI application bridging host lifecycle and screen events to the tracker."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict

from .config import TrackerSettings
from .paths import get_totals_path
from .presentation import totals_to_dict
from .session import TrackerSession
from .signals import ScreenStateProbe, normalize_screen_signal
from .tracker import Clock

logger = logging.getLogger(__name__)


class PausePayload(BaseModel):
    paused: bool

    model_config = ConfigDict(extra="forbid")


class FocusPayload(BaseModel):
    focused: bool

    model_config = ConfigDict(extra="forbid")


class ScreenSignalPayload(BaseModel):
    signal: str

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    totals_path: Optional[Path] = None,
    settings: Optional[TrackerSettings] = None,
    clock: Optional[Clock] = None,
    probe: Optional[ScreenStateProbe] = None,
) -> FastAPI:
    """Instantiate the FastAPI application.

    Endpoints are ``async`` and the status poll is a ``call_later`` timer,
    so every callback runs on the event loop thread and the session is
    never touched concurrently.
    """
    session = TrackerSession(
        Path(totals_path or get_totals_path()),
        settings or TrackerSettings(),
        clock=clock,
        probe=probe,
    )

    app = FastAPI(title="Screen Time", version="0.1.0")
    app.state.session = session
    app.state.status_poll = None
    interval = session.settings.status_interval.total_seconds()

    def _poll_status(loop: asyncio.AbstractEventLoop) -> None:
        session.tick(interval)
        app.state.status_poll = loop.call_later(interval, _poll_status, loop)

    @app.on_event("startup")
    async def _startup() -> None:
        session.start()
        loop = asyncio.get_running_loop()
        app.state.status_poll = loop.call_later(interval, _poll_status, loop)

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        handle: Optional[asyncio.TimerHandle] = app.state.status_poll
        if handle is not None:
            handle.cancel()
            app.state.status_poll = None
        session.stop()

    @app.get("/api/status")
    async def status(request: Request) -> Dict[str, Any]:
        tracker_session: TrackerSession = request.app.state.session
        payload = tracker_session.status().to_dict()
        payload["running"] = tracker_session.is_running
        payload["totals_path"] = str(tracker_session.store.path)
        payload["lines"] = tracker_session.presenter.refresh()
        return payload

    @app.get("/api/totals")
    async def totals(request: Request) -> Dict[str, Any]:
        tracker_session: TrackerSession = request.app.state.session
        return totals_to_dict(tracker_session.aggregator.totals)

    @app.post("/api/lifecycle/pause")
    async def pause(payload: PausePayload, request: Request) -> Dict[str, Any]:
        tracker_session: TrackerSession = request.app.state.session
        tracker_session.on_pause(payload.paused)
        return _state_payload(tracker_session)

    @app.post("/api/lifecycle/focus")
    async def focus(payload: FocusPayload, request: Request) -> Dict[str, Any]:
        tracker_session: TrackerSession = request.app.state.session
        tracker_session.on_focus(payload.focused)
        return _state_payload(tracker_session)

    @app.post("/api/screen-signal")
    async def screen_signal(payload: ScreenSignalPayload, request: Request) -> Dict[str, Any]:
        signal = normalize_screen_signal(payload.signal)
        if signal is None:
            raise HTTPException(status_code=400, detail=f"Unknown screen signal: {payload.signal}")
        tracker_session: TrackerSession = request.app.state.session
        tracker_session.on_screen_signal(signal)
        return _state_payload(tracker_session)

    return app


def _state_payload(session: TrackerSession) -> Dict[str, Any]:
    return {
        "state": session.tracker.current.value,
        "app_in_foreground": session.tracker.app_in_foreground,
        "screen_on": session.tracker.screen_on,
    }
