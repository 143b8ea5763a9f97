"""
Turns the service's suggestions into one canonical list.
What it does:
- Splits numbered-list text ("1. ...\\n2. ...") into fragments
- Passes pre-split string arrays through untouched
- Reports anything else as MalformedSuggestions

And, the main purpose:
Give the presentation layer an ordered list of display strings, whatever the source shape.
"""


import re
from typing import Any, List

from planwise.api.types import (
    ListSuggestions,
    SuggestionsPayload,
    TextSuggestions,
    UnrecognizedSuggestions,
    decode_suggestions,
)
from planwise.core.errors import MalformedSuggestions

_NUMBERED_MARKER = re.compile(r"\n?[0-9]+\.\s+")


def split_numbered(text: str) -> List[str]:
    return [frag.strip() for frag in _NUMBERED_MARKER.split(text) if frag.strip()]


def normalize(raw: Any) -> List[str]:
    payload: SuggestionsPayload
    if isinstance(raw, (TextSuggestions, ListSuggestions, UnrecognizedSuggestions)):
        payload = raw
    else:
        payload = decode_suggestions(raw)

    if isinstance(payload, TextSuggestions):
        return split_numbered(payload.text)
    if isinstance(payload, ListSuggestions):
        return list(payload.items)
    raise MalformedSuggestions(f"Unexpected format for suggestions ({type(payload.raw).__name__})")
