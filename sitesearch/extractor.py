"""
HTML structure extractor.

Turns a raw page into a PageStructure: the href of every anchor, the text of
every <p>, the document title and the declared <html lang>.

  • BeautifulSoup (lxml) does the parsing.
  • If the parser blows up, a best-effort regex scan of the markup is used
    instead, so a single pathological page never costs us its links.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

log = logging.getLogger(__name__)

# hrefs with these prefixes never lead to another document
_SKIPPED_HREF_PREFIXES = ("#", "javascript:")


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PageStructure:
    links: list[str] = field(default_factory=list)       # raw href values
    paragraphs: list[str] = field(default_factory=list)  # whitespace-normalised
    title: str = ""
    lang: str = ""  # empty when the page declares none


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_structure(html: str) -> PageStructure:
    """
    Parse *html* into a PageStructure.

    Falls back to the regex extractor when BeautifulSoup raises.
    """
    try:
        return _soup_extract(html)
    except Exception:
        log.warning("HTML parser failed, falling back to regex extraction", exc_info=True)
        return regex_extract(html)


def regex_extract(html: str) -> PageStructure:
    """Degraded extraction straight off the markup, no DOM involved."""
    links = [
        href
        for href in _HREF_RE.findall(html)
        if href and not href.startswith(_SKIPPED_HREF_PREFIXES)
    ]

    paragraphs: list[str] = []
    for inner in _PARAGRAPH_RE.findall(html):
        text = _normalise_space(_TAG_RE.sub("", inner))
        if text:
            paragraphs.append(text)

    m = _TITLE_RE.search(html)
    title = _normalise_space(_TAG_RE.sub("", m.group(1))) if m else ""

    m = _LANG_RE.search(html)
    lang = m.group(1).strip() if m else ""

    return PageStructure(links=links, paragraphs=paragraphs, title=title, lang=lang)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_HREF_RE = re.compile(r"<a\b[^>]*?\shref=['\"](.*?)['\"][^>]*>", re.IGNORECASE)
_PARAGRAPH_RE = re.compile(r"<p\b[^>]*>(.*?)</p>", re.IGNORECASE | re.DOTALL)
_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_LANG_RE = re.compile(r"<html\b[^>]*?\slang=['\"](.*?)['\"]", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")


def _soup_extract(html: str) -> PageStructure:
    soup = BeautifulSoup(html, "lxml")

    links: list[str] = []
    for a in soup.find_all("a", href=True):
        href: str = a["href"].strip()
        if href and not href.startswith(_SKIPPED_HREF_PREFIXES):
            links.append(href)

    paragraphs: list[str] = []
    for p in soup.find_all("p"):
        text = _normalise_space(p.get_text())
        if text:
            paragraphs.append(text)

    title = _normalise_space(soup.title.get_text()) if soup.title else ""

    lang = ""
    if soup.html is not None:
        value = soup.html.get("lang")
        if isinstance(value, str):
            lang = value.strip()

    return PageStructure(links=links, paragraphs=paragraphs, title=title, lang=lang)


def _normalise_space(text: str) -> str:
    """Collapse internal whitespace runs to a single space."""
    return " ".join(text.split())
