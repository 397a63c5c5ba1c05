"""
Query matcher and snippet highlighter.

A paragraph matches when it contains the query as a case-insensitive
substring.  The snippet returned for it is the first sentence holding the
query (or the whole paragraph when the match straddles a sentence boundary),
with every occurrence of the query wrapped in an emphasis tag.

The query is always taken literally: it is escaped before being compiled, so
"(soul)" matches the text "(soul)" and nothing else.
"""

from __future__ import annotations

import html
import re
from typing import Optional

# a sentence ends at . ? or ! followed by whitespace
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.?!])\s+")


def split_sentences(text: str) -> list[str]:
    return [s for s in _SENTENCE_BOUNDARY.split(text) if s]


def compile_query(query: str) -> re.Pattern[str]:
    """Compile *query* into a literal, case-insensitive pattern."""
    return re.compile(re.escape(query), re.IGNORECASE)


def highlight(text: str, query: str, tag: str = "b") -> str:
    """
    Wrap every case-insensitive occurrence of *query* in <tag>…</tag>.

    The original casing of the text is preserved.  Everything outside the
    tags is HTML-escaped, so the result is safe to drop into markup.
    """
    pattern = compile_query(query)
    out: list[str] = []
    pos = 0
    for m in pattern.finditer(text):
        out.append(html.escape(text[pos:m.start()], quote=False))
        out.append(f"<{tag}>{html.escape(m.group(0), quote=False)}</{tag}>")
        pos = m.end()
    out.append(html.escape(text[pos:], quote=False))
    return "".join(out)


def find_snippet(paragraph: str, query: str, tag: str = "b") -> Optional[str]:
    """
    Return the highlighted snippet for *paragraph*, or None if it does not
    contain *query*.
    """
    needle = query.lower()
    if not needle or needle not in paragraph.lower():
        return None

    sentence = next(
        (s for s in split_sentences(paragraph) if needle in s.lower()),
        paragraph,
    )
    return highlight(sentence, query, tag)
