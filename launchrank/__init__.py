from launchrank.dispatch import ActionDispatcher
from launchrank.matcher import FuzzyMatcher, Matcher
from launchrank.models import Entry, MatchResult, Query, Result
from launchrank.ranking import RankingEngine, sort_results

__version__ = "0.1.0"

__all__ = [
    "ActionDispatcher",
    "Entry",
    "FuzzyMatcher",
    "MatchResult",
    "Matcher",
    "Query",
    "RankingEngine",
    "Result",
    "sort_results",
]
