from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from launchrank.constants import AREA_PREFIX_WIDTH, MID_BONUS, NAME_BONUS
from launchrank.dispatch import ActionDispatcher
from launchrank.formatting import format_subtitle, format_title, format_tooltip
from launchrank.logging import get_logger
from launchrank.matcher import Matcher
from launchrank.models import Entry, Query, Result

_logger = get_logger(__name__)


@dataclass
class TierMatch:
    """Outcome of the first tier that accepted an entry."""

    tier: str
    raw_score: int = 0
    title_highlight: list[int] = field(default_factory=list)
    subtitle_highlight: list[int] = field(default_factory=list)


TierEvaluator = Callable[[Matcher, Entry, Query], TierMatch | None]


def match_name(matcher: Matcher, entry: Entry, query: Query) -> TierMatch | None:
    m = matcher.match(query.search, entry.name)
    if not m.success:
        return None
    return TierMatch(tier="name", raw_score=m.score, title_highlight=list(m.offsets))


def match_area(matcher: Matcher, entry: Entry, query: Query) -> TierMatch | None:
    m = matcher.match(query.search, entry.area)
    if not m.success:
        return None
    shifted = [offset + AREA_PREFIX_WIDTH for offset in m.offsets]
    return TierMatch(tier="area", raw_score=m.score, subtitle_highlight=shifted)


def match_alt_names(matcher: Matcher, entry: Entry, query: Query) -> TierMatch | None:
    for alt_name in entry.alt_names or ():
        m = matcher.match(query.search, alt_name)
        if m.success:
            return TierMatch(tier="alt_name", raw_score=m.score)
    return None


def match_keywords(matcher: Matcher, entry: Entry, query: Query) -> TierMatch | None:
    if entry.keywords is None:
        return None
    known = {keyword.casefold() for group in entry.keywords for keyword in group}
    if all(term.casefold() in known for term in query.terms):
        return TierMatch(tier="keyword")
    return None


DEFAULT_TIERS: tuple[TierEvaluator, ...] = (match_name, match_area, match_alt_names, match_keywords)


def evaluate_tiers(
    matcher: Matcher,
    entry: Entry,
    query: Query,
    tiers: Iterable[TierEvaluator] = DEFAULT_TIERS,
) -> TierMatch | None:
    for tier in tiers:
        hit = tier(matcher, entry, query)
        if hit is not None:
            return hit
    return None


def separated_name_bonus(mid_bonus: int, max_score: int) -> int:
    """Smallest name bonus >= NAME_BONUS that puts name hits above every other tier."""
    return max(NAME_BONUS, mid_bonus + max_score + 1)


class RankingEngine:
    """Scores catalog entries against a query.

    Results come back in catalog order; sorting by score is left to the host.
    """

    def __init__(
        self,
        matcher: Matcher,
        dispatcher: ActionDispatcher | None = None,
        name_bonus: int | None = None,
        mid_bonus: int = MID_BONUS,
        tiers: Sequence[TierEvaluator] = DEFAULT_TIERS,
    ):
        self.matcher = matcher
        self.dispatcher = dispatcher or ActionDispatcher()
        self.mid_bonus = mid_bonus
        self.tiers = tuple(tiers)

        if name_bonus is None:
            name_bonus = separated_name_bonus(mid_bonus, matcher.max_score)
        elif name_bonus <= mid_bonus + matcher.max_score:
            _logger.warning(
                "Name tier bonus %d overlaps lower tiers (mid bonus %d, max match score %d)",
                name_bonus,
                mid_bonus,
                matcher.max_score,
            )
        self.name_bonus = name_bonus

    def bonus_for(self, tier: str) -> int:
        return self.name_bonus if tier == "name" else self.mid_bonus

    def rank(self, catalog: Iterable[Entry], query: Query) -> list[Result]:
        if query.is_empty:
            return []

        results: list[Result] = []
        for entry in catalog:
            hit = evaluate_tiers(self.matcher, entry, query, self.tiers)
            if hit is None:
                continue
            results.append(self._build_result(entry, hit))

        _logger.debug("Ranked query", query=query.search, matches=len(results))
        return results

    def _build_result(self, entry: Entry, hit: TierMatch) -> Result:
        tooltip = format_tooltip(entry)
        dispatcher = self.dispatcher
        return Result(
            title=format_title(entry),
            subtitle=format_subtitle(entry),
            score=hit.raw_score + self.bonus_for(hit.tier),
            entry=entry,
            action=lambda _context=None: dispatcher.invoke(entry),
            title_tooltip=tooltip,
            subtitle_tooltip=tooltip,
            title_highlight=hit.title_highlight,
            subtitle_highlight=hit.subtitle_highlight,
        )


def sort_results(results: Iterable[Result], limit: int | None = None) -> list[Result]:
    """Host-side ordering: highest score first, ties keep catalog order."""
    ordered = sorted(results, key=lambda r: r.score, reverse=True)
    return ordered if limit is None else ordered[:limit]
