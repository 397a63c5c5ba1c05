"""
Link normaliser and filter.

Every href found on a page goes through normalize_link() before it may enter
the frontier.  A link survives only when it resolves to an absolute http(s)
URL on the target domain whose path names a document (.htm/.html).
"""

from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import urljoin, urlparse


def normalize_link(
    href: str,
    page_url: str,
    *,
    domain: str,
    extensions: Iterable[str],
    excluded_paths: Iterable[str] = (),
) -> Optional[str]:
    """
    Resolve *href* against *page_url* and return the absolute URL, or None
    if it is malformed, off-domain, not a document or under an excluded path.
    The fragment is dropped; the query string is kept.
    """
    try:
        parsed = urlparse(urljoin(page_url, href.strip()))
        host = (parsed.hostname or "").lower()
    except ValueError:
        # e.g. an unbalanced IPv6 bracket in the netloc
        return None

    if parsed.scheme not in ("http", "https"):
        return None
    if not _on_domain(host, domain.lower()):
        return None

    path = parsed.path.lower()
    if not path.endswith(tuple(ext.lower() for ext in extensions)):
        return None
    if any(fragment in path for fragment in excluded_paths):
        return None

    return parsed._replace(fragment="").geturl()


def filter_links(
    hrefs: Iterable[str],
    page_url: str,
    *,
    domain: str,
    extensions: Iterable[str],
    excluded_paths: Iterable[str] = (),
) -> list[str]:
    """Normalise *hrefs*, drop the rejects and dedupe in first-seen order."""
    extensions = tuple(extensions)
    excluded_paths = tuple(excluded_paths)
    seen: set[str] = set()
    links: list[str] = []
    for href in hrefs:
        url = normalize_link(
            href,
            page_url,
            domain=domain,
            extensions=extensions,
            excluded_paths=excluded_paths,
        )
        if url is not None and url not in seen:
            seen.add(url)
            links.append(url)
    return links


def _on_domain(host: str, domain: str) -> bool:
    return host == domain or host.endswith("." + domain)
