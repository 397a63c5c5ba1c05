"""
Async batched crawl-and-search engine.

Entry point: SearchController.search()
  • Seeds a fresh frontier with the site's start URL.
  • Drains the frontier in batches of BATCH_SIZE; every URL in a batch is
    scanned concurrently and the batch settles before the next one starts.
  • Each scan fetches the page, extracts its structure, feeds on-site links
    back into the frontier and emits any matching paragraphs straight away.
  • Emits a progress event after each batch and a complete event exactly
    once when the session ends, whether drained or cancelled.

Only one session is live at a time: starting a search cancels the running
one.  Cancellation is cooperative; scans already in flight finish, but the
token is checked again right before anything is emitted.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import httpx

from .config import Settings, settings as default_settings
from .extractor import PageStructure, extract_structure
from .fetcher import NonDocumentError
from .links import filter_links
from .matcher import find_snippet
from .schemas import CompleteEvent, ProgressEvent, ResultEvent, ResultItem, SearchEvent
from .session import SearchSession

log = logging.getLogger(__name__)

FetchText = Callable[[str], Awaitable[str]]
ExtractStructure = Callable[[str], PageStructure]
Listener = Callable[[SearchEvent], Awaitable[None]]


def is_target_language(lang: str, target: str) -> bool:
    """True if *lang* is absent or its primary subtag equals *target*."""
    if not lang:
        return True
    primary = lang.strip().replace("_", "-").split("-", 1)[0]
    return primary.lower() == target.lower()


class SearchController:
    def __init__(
        self,
        fetch_text: FetchText,
        listener: Listener,
        *,
        extract: ExtractStructure = extract_structure,
        settings: Settings = default_settings,
    ) -> None:
        self._fetch_text = fetch_text
        self._listener = listener
        self._extract = extract
        self._settings = settings
        self._session: Optional[SearchSession] = None

    @property
    def active_session(self) -> Optional[SearchSession]:
        if self._session is not None and self._session.active:
            return self._session
        return None

    # -----------------------------------------------------------------------
    # Session lifecycle
    # -----------------------------------------------------------------------

    async def search(self, query: str) -> Optional[SearchSession]:
        """Run a whole session for *query*; returns None for an empty query."""
        session = self.begin(query)
        if session is not None:
            await self.run(session)
        return session

    def begin(self, query: str) -> Optional[SearchSession]:
        """
        Allocate a new session for *query*, cancelling the running one.

        No session is created (and the running one is left alone) when the
        query is empty.
        """
        if not query.strip():
            log.info("Ignoring empty search query")
            return None

        if self._session is not None and self._session.active:
            log.info("Session %d superseded by a new search", self._session.id)
            self._session.cancel()

        session = SearchSession(query=query)
        session.frontier.seed(self._settings.start_url)
        self._session = session
        return session

    def stop(self) -> None:
        """Cancel the active session without waiting for in-flight scans."""
        if self._session is not None and self._session.active:
            log.info("Stopping session %d", self._session.id)
            self._session.cancel()

    async def run(self, session: SearchSession) -> None:
        """
        Drain *session*'s frontier batch by batch.

        Algorithm
        ---------
        1. Stop when the frontier is empty, the session is cancelled, or the
           optional max_pages cap has been reached.
        2. Scan up to BATCH_SIZE URLs concurrently and wait for all of them.
        3. Recompute progress and emit it.
        4. Emit the complete event, exactly once, however the loop ends.
        """
        frontier = session.frontier
        max_pages = self._settings.max_pages
        log.info("Session %d starting, query=%r", session.id, session.query)

        try:
            while session.active and not frontier.is_empty:
                if max_pages is not None and frontier.searched >= max_pages:
                    log.info(
                        "Session %d reached max_pages=%d, stopping.",
                        session.id,
                        max_pages,
                    )
                    break

                batch_size = self._settings.batch_size
                if max_pages is not None:
                    batch_size = min(batch_size, max_pages - frontier.searched)
                batch = frontier.next_batch(batch_size)
                results = await asyncio.gather(
                    *(self._scan_page(session, url) for url in batch),
                    return_exceptions=True,
                )
                for url, result in zip(batch, results):
                    if isinstance(result, BaseException):
                        log.warning("Task-level error for %s: %s", url, result)

                progress = frontier.mark_searched(len(batch))
                if session.active:
                    await self._emit(
                        ProgressEvent(session_id=session.id, progress=progress)
                    )
        finally:
            log.info(
                "Session %d %s. searched=%d discovered=%d",
                session.id,
                "cancelled" if not session.active else "completed",
                frontier.searched,
                frontier.total_discovered,
            )
            await self._emit(
                CompleteEvent(session_id=session.id, cancelled=not session.active)
            )

    # -----------------------------------------------------------------------
    # Per-page worker
    # -----------------------------------------------------------------------

    async def _scan_page(self, session: SearchSession, url: str) -> None:
        """
        Fetch *url*, enqueue its links and emit its matching paragraphs.
        Any failure turns the page into a dead end.
        """
        if not session.active:
            return

        try:
            html = await self._fetch_text(url)
            page = await asyncio.to_thread(self._extract, html)

            if not is_target_language(page.lang, self._settings.target_language):
                log.debug("Skipping %s: lang=%r", url, page.lang)
                return

            links = filter_links(
                page.links,
                url,
                domain=self._settings.target_domain,
                extensions=self._settings.accepted_extensions,
                excluded_paths=self._settings.excluded_path_fragments,
            )
            added = session.frontier.report_discovered(links)

            items: list[ResultItem] = []
            for paragraph in page.paragraphs:
                snippet = find_snippet(
                    paragraph, session.query, self._settings.highlight_tag
                )
                if snippet is not None:
                    items.append(
                        ResultItem(url=url, title=page.title, paragraph=snippet)
                    )

            log.debug(
                "Scanned %s – %d matches, %d new links", url, len(items), added
            )

            # the session may have been cancelled while we were fetching
            if items and session.active:
                await self._emit(ResultEvent(session_id=session.id, results=items))

        except httpx.HTTPStatusError as exc:
            log.warning("HTTP error on %s: HTTP %d", url, exc.response.status_code)

        except httpx.RequestError as exc:
            log.warning("Request error on %s: %s", url, exc)

        except NonDocumentError as exc:
            log.debug("Skipping %s: %s", url, exc)

        except Exception:
            log.exception("Unexpected error scanning %s", url)

    async def _emit(self, event: SearchEvent) -> None:
        try:
            await self._listener(event)
        except Exception:
            log.exception("Listener failed on %s event", event.event)
