from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import StreamingResponse

from ..crawler import SearchController
from ..events import EventBroadcaster
from ..schemas import SearchRequest

log = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

# strong references to running sessions, dropped once they finish
_running: set[asyncio.Task[None]] = set()


@router.post("")
async def start_search(body: SearchRequest, request: Request) -> StreamingResponse:
    """
    Start a search and stream its events as newline-delimited JSON.

    Any search already running is cancelled; its own stream ends with a
    complete event.  Closing this stream early cancels the new search.
    """
    controller: SearchController = request.app.state.controller
    broadcaster: EventBroadcaster = request.app.state.broadcaster

    session = controller.begin(body.query)
    if session is None:
        raise HTTPException(status_code=422, detail="query must not be empty")

    # subscribe before the first event can be emitted
    queue = broadcaster.subscribe()
    task = asyncio.create_task(controller.run(session))
    _running.add(task)
    task.add_done_callback(_running.discard)

    async def body_lines() -> AsyncIterator[str]:
        finished = False
        try:
            async for event in broadcaster.session_events(queue, session.id):
                yield event.model_dump_json() + "\n"
            finished = True
        finally:
            broadcaster.unsubscribe(queue)
            if not finished and session.active:
                log.info("Client went away, cancelling session %d", session.id)
                session.cancel()

    return StreamingResponse(body_lines(), media_type="application/x-ndjson")


@router.post("/stop", status_code=204)
async def stop_search(request: Request) -> Response:
    """Cancel the running search, if any.  Does not wait for it to wind down."""
    controller: SearchController = request.app.state.controller
    controller.stop()
    return Response(status_code=204)
