from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .rounding import round_half_up


class MatchKind(str, Enum):
    primary = "primary"
    secondary = "secondary"


@dataclass(frozen=True)
class TextMatch:
    score: float
    secondary_match: bool
    span: str


def _is_word_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


def _span_from(text: str, start: int, query: str) -> str:
    """Return the query occurrence at *start* plus the word characters after it."""
    end = start + len(query)
    while end < len(text) and _is_word_char(text[end]):
        end += 1
    return text[start:end]


def classify_match(text: str, query: str) -> tuple[MatchKind, str] | None:
    """Classify where *query* occurs in *text*.

    A primary match starts the value; a secondary match is the first
    occurrence anywhere after position 0. Either way the matched span runs on
    over the word characters that follow the query. Matching is
    case-sensitive.
    """
    if not query:
        return None
    if text.startswith(query):
        return MatchKind.primary, _span_from(text, 0, query)
    position = text.find(query, 1)
    if position == -1:
        return None
    return MatchKind.secondary, _span_from(text, position, query)


def score_text(value: Any, query: str, malus: float, weight: float) -> TextMatch | None:
    """Score *query* against an attribute value, or ``None`` when it does not match.

    Shorter matched spans score higher: a query covering the whole matched
    token earns the full ``weight``. Secondary matches lose ``malus``.
    """
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)

    classified = classify_match(text, query)
    if classified is None:
        return None
    kind, span = classified

    secondary = kind is MatchKind.secondary
    applied_malus = malus if secondary else 0.0
    score = round_half_up(len(query) / len(span) * weight - applied_malus)
    return TextMatch(score=score, secondary_match=secondary, span=span)
