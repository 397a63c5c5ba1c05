"""
Complete Works Search – Search Service
======================================

Run locally:
    uvicorn sitesearch.main:app --reload

Environment variables (see .env.example):
    START_URL           page the crawl starts from
    TARGET_DOMAIN       crawl stays on this domain and its subdomains
    TARGET_LANGUAGE     pages declaring another language are skipped (default en)
    BATCH_SIZE          pages fetched concurrently per batch   (default 10)
    REQUEST_TIMEOUT     HTTP timeout in seconds                (default 15.0)
    MAX_PAGES           optional cap on pages searched per query
    LOG_LEVEL           logging level                          (default INFO)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .config import Settings, settings
from .crawler import FetchText, SearchController
from .events import EventBroadcaster
from .fetcher import PageFetcher, build_client
from .routes import search

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)-8s %(name)s – %(message)s",
)


def create_app(
    fetch_text: Optional[FetchText] = None,
    config: Settings = settings,
) -> FastAPI:
    """
    Build the service.  *fetch_text* replaces the HTTP fetcher, which is
    handy for serving a fixture site.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        broadcaster = EventBroadcaster()
        app.state.broadcaster = broadcaster
        if fetch_text is not None:
            app.state.controller = SearchController(
                fetch_text, broadcaster, settings=config
            )
            yield
            app.state.controller.stop()
            return

        # One pooled client shared by every session.
        async with build_client(config) as client:
            app.state.controller = SearchController(
                PageFetcher(client), broadcaster, settings=config
            )
            yield
            app.state.controller.stop()

    app = FastAPI(
        title="Complete Works Search – Search Service",
        description=(
            "Crawls the Complete Works site and streams back paragraphs "
            "matching a query, with the matching sentence highlighted."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(search.router)
    return app


app = create_app()
