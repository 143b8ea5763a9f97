"""
Wire schemas of the analysis service.
What it defines:
- Analyze request body
- Past plan records returned by the history endpoint
- The suggestions union (text | list | unrecognized)

And, the main purpose:
Decode every response shape once, at the service boundary.
"""


from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, Field


class SubmissionPayload(BaseModel):
    title: str
    steps: List[str] = Field(default_factory=list)


class PastPlan(BaseModel):
    goal: str = ""
    tasks: Any = None
    feedback: Any = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TextSuggestions:
    text: str


@dataclass(frozen=True)
class ListSuggestions:
    items: Tuple[str, ...]


@dataclass(frozen=True)
class UnrecognizedSuggestions:
    raw: Any


SuggestionsPayload = Union[TextSuggestions, ListSuggestions, UnrecognizedSuggestions]


def decode_suggestions(raw: Any) -> SuggestionsPayload:
    if isinstance(raw, str):
        return TextSuggestions(raw)
    if isinstance(raw, (list, tuple)) and all(isinstance(x, str) for x in raw):
        return ListSuggestions(tuple(raw))
    return UnrecognizedSuggestions(raw)
