from typing import Protocol

from rapidfuzz import fuzz

from launchrank.constants import DEFAULT_PRECISION
from launchrank.models import MatchResult


class Matcher(Protocol):
    """Scores a query against a single label.

    `max_score` is the upper bound of raw scores the matcher produces; the
    ranking engine uses it to keep tier score bands apart.
    """

    max_score: int

    def match(self, query: str, label: str | None) -> MatchResult: ...


def fold_case(text: str) -> str:
    """Lowercase one character at a time so the result has the same length as
    `text` and offsets stay valid for it. Characters whose lowercase form is
    longer (e.g. "\u0130" -> "i\u0307") keep only its base letter."""
    return "".join(ch.lower()[0] for ch in text)


class FuzzyMatcher:
    """Case-insensitive partial-ratio matcher backed by rapidfuzz.

    The score is the best alignment ratio of the query against any window of
    the label (0..100). Offsets cover the aligned window so the host can
    highlight it.
    """

    max_score = 100

    def __init__(self, precision: int = DEFAULT_PRECISION):
        if not 0 <= precision <= self.max_score:
            raise ValueError(f"precision must be 0-{self.max_score}, got {precision}")
        self.precision = precision

    def match(self, query: str, label: str | None) -> MatchResult:
        if not query or not label:
            return MatchResult.miss()

        alignment = fuzz.partial_ratio_alignment(fold_case(query), fold_case(label))
        if alignment is None:
            return MatchResult.miss()

        score = round(alignment.score)
        if score == 0:
            return MatchResult.miss()

        end = min(alignment.dest_end, len(label))
        offsets = tuple(range(alignment.dest_start, end))
        return MatchResult(success=score >= self.precision, score=score, offsets=offsets)
