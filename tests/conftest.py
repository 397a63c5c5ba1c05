"""Shared fixtures: a small static site served by an in-memory fetcher."""

import asyncio

import httpx
import pytest

from sitesearch.config import Settings
from sitesearch.fetcher import NonDocumentError

BASE = "https://www.example-site.tld/works/"
START = BASE + "index.htm"


def _page(body: str, lang: str | None = "en", title: str = "Page") -> str:
    lang_attr = f' lang="{lang}"' if lang is not None else ""
    return (
        f"<html{lang_attr}><head><title>{title}</title></head>"
        f"<body>{body}</body></html>"
    )


SITE = {
    START: _page(
        '<p>Index of the collected works.</p>'
        '<a href="a.htm">A</a> <a href="b.htm">B</a> <a href="c.html">C</a>'
        '<a href="#top">top</a> <a href="javascript:void(0)">js</a>'
        '<a href="http://other.tld/x.htm">elsewhere</a>'
        '<a href="images/pic.jpg">picture</a>'
        '<a href="broken.htm">broken</a> <a href="data.htm">data</a>',
        title="Index",
    ),
    BASE + "a.htm": _page(
        "<p>The soul is not composed of any materials. It is a unity.</p>"
        "<p>Nothing to see here.</p>"
        '<a href="index.htm">back</a> <a href="c.html">C</a> <a href="e.htm">E</a>',
        title="Soul, God and Religion",
    ),
    BASE + "b.htm": _page(
        "<p>L'ame, the soul, est immortelle.</p>"
        '<a href="d.htm">D</a>',
        lang="fr",
        title="Religion",
    ),
    BASE + "c.html": _page(
        "<p>Each SOUL is potentially divine. The goal is to manifest it.</p>"
        '<a href="a.htm">A</a> <a href="e.htm#part2">E</a>',
        lang=None,
        title="Practical Vedanta",
    ),
    BASE + "d.htm": _page("<p>The soul again, but unreachable.</p>", title="D"),
    BASE + "e.htm": _page(
        "<p>On work and its secret.</p>", lang="en-GB", title="Karma Yoga"
    ),
}


class FakeSite:
    """Async fetcher over a dict of url -> html."""

    def __init__(self, pages: dict[str, str], delay: float = 0) -> None:
        self.pages = dict(pages)
        self.delay = delay
        self.fetched: list[str] = []
        self.hooks: dict = {}

    async def __call__(self, url: str) -> str:
        self.fetched.append(url)
        hook = self.hooks.get(url)
        if hook is not None:
            hook()
        await asyncio.sleep(self.delay)
        if url.endswith("data.htm"):
            raise NonDocumentError("Non-HTML content-type: application/pdf")
        if url not in self.pages:
            raise httpx.ConnectError("unreachable", request=httpx.Request("GET", url))
        return self.pages[url]


class Recorder:
    """Listener that keeps every event it is handed."""

    def __init__(self) -> None:
        self.events: list = []

    async def __call__(self, event) -> None:
        self.events.append(event)

    def of(self, kind: str) -> list:
        return [e for e in self.events if e.event == kind]

    @property
    def result_urls(self) -> set[str]:
        return {item.url for e in self.of("result") for item in e.results}


@pytest.fixture
def site() -> FakeSite:
    return FakeSite(SITE)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        start_url=START,
        target_domain="example-site.tld",
        batch_size=10,
        max_pages=None,
    )
