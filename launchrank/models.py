from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal


class Entry(BaseModel):
    """One catalog item: a searchable, launchable target."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
    )

    name: str
    area: str
    type: str
    command: str
    alt_names: tuple[str, ...] | None = None
    keywords: tuple[tuple[str, ...], ...] | None = None
    note: str | None = None
    glyph: str = ""

    # OS build gating, used only when filtering the catalog
    introduced_in_build: int | None = None
    deprecated_in_build: int | None = None


@dataclass(frozen=True)
class Query:
    search: str
    terms: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, text: str, action_keyword: str | None = None) -> "Query":
        """Build a query from raw input, dropping a leading action keyword if present."""
        text = text.strip()
        if action_keyword:
            head, _, rest = text.partition(" ")
            if head == action_keyword:
                text = rest.strip()
        return cls(search=text, terms=tuple(text.split()))

    @property
    def is_empty(self) -> bool:
        return not self.search


@dataclass(frozen=True)
class MatchResult:
    success: bool
    score: int
    offsets: tuple[int, ...] = ()

    @classmethod
    def miss(cls) -> "MatchResult":
        return cls(success=False, score=0)


@dataclass
class Result:
    """A ranked entry ready for the host to render and invoke."""

    title: str
    subtitle: str
    score: int
    entry: Entry
    action: Callable[[Any], bool]
    title_tooltip: str = ""
    subtitle_tooltip: str = ""
    title_highlight: list[int] = field(default_factory=list)
    subtitle_highlight: list[int] = field(default_factory=list)
