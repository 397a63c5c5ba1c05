from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, field_validator


class SearchRequest(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def non_empty_query(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query must not be empty")
        return v


class ResultItem(BaseModel):
    url: str
    title: str
    paragraph: str  # HTML fragment with the query occurrences emphasised


class ProgressEvent(BaseModel):
    event: Literal["progress"] = "progress"
    session_id: int
    progress: float


class ResultEvent(BaseModel):
    event: Literal["result"] = "result"
    session_id: int
    results: list[ResultItem]


class CompleteEvent(BaseModel):
    event: Literal["complete"] = "complete"
    session_id: int
    cancelled: bool = False


SearchEvent = Union[ProgressEvent, ResultEvent, CompleteEvent]
