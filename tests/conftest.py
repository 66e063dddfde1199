import pytest
import structlog

from launchrank.models import Entry, MatchResult


class FakeMatcher:
    """Deterministic substring matcher with a small score range.

    Exact (case-insensitive) label match scores 9, any other substring hit 5.
    Scores listed in `overrides` win over both.
    """

    max_score = 9

    def __init__(self, overrides: dict[tuple[str, str], MatchResult] | None = None):
        self.overrides = overrides or {}
        self.calls: list[tuple[str, str | None]] = []

    def match(self, query: str, label: str | None) -> MatchResult:
        self.calls.append((query, label))
        if (query, label) in self.overrides:
            return self.overrides[(query, label)]
        if not query or not label:
            return MatchResult.miss()
        pos = label.lower().find(query.lower())
        if pos < 0:
            return MatchResult.miss()
        score = 9 if len(query) == len(label) else 5
        return MatchResult(success=True, score=score, offsets=tuple(range(pos, pos + len(query))))


class RecordingDispatcher:
    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.invoked = []

    def invoke(self, entry: Entry) -> bool:
        self.invoked.append(entry)
        return self.succeed


def make_entry(
    name: str = "Display",
    area: str = "System",
    type: str = "AppSettingsApp",
    command: str = "ms-settings:display",
    **kwargs,
) -> Entry:
    return Entry(name=name, area=area, type=type, command=command, **kwargs)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()


@pytest.fixture
def matcher() -> FakeMatcher:
    return FakeMatcher()
