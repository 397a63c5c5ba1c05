"""HTTP fetch collaborator: URL in, page text out (or an exception)."""

from __future__ import annotations

import httpx

from .config import Settings, settings as default_settings


class NonDocumentError(Exception):
    """The response is not an HTML document."""


def build_client(settings: Settings = default_settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.request_timeout,
        follow_redirects=True,
        max_redirects=settings.max_redirects,
    )


class PageFetcher:
    """
    Async callable returning the body of an HTML page.

    Raises httpx.HTTPStatusError / httpx.RequestError on transport or status
    failures and NonDocumentError for non-HTML responses.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def __call__(self, url: str) -> str:
        response = await self._client.get(url)
        response.raise_for_status()

        # servers that omit the header get the benefit of the doubt
        content_type = response.headers.get("content-type", "")
        if content_type and "html" not in content_type:
            raise NonDocumentError(f"Non-HTML content-type: {content_type}")

        return response.text
