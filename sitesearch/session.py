from __future__ import annotations

import itertools
from dataclasses import dataclass, field

from .frontier import Frontier

_session_ids = itertools.count(1)


class CancelToken:
    """Cooperative cancellation flag shared by one session's scans."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass
class SearchSession:
    query: str
    id: int = field(default_factory=lambda: next(_session_ids))
    frontier: Frontier = field(default_factory=Frontier)
    token: CancelToken = field(default_factory=CancelToken)

    @property
    def active(self) -> bool:
        return not self.token.cancelled

    def cancel(self) -> None:
        self.token.cancel()
