from conftest import FakeMatcher, RecordingDispatcher, make_entry

from launchrank.models import MatchResult, Query
from launchrank.ranking import (
    DEFAULT_TIERS,
    RankingEngine,
    evaluate_tiers,
    match_keywords,
    separated_name_bonus,
    sort_results,
)


def rank(entries, text, matcher=None, dispatcher=None, **kwargs):
    engine = RankingEngine(matcher or FakeMatcher(), dispatcher or RecordingDispatcher(), **kwargs)
    return engine.rank(entries, Query.from_text(text))


class TestNameTier:
    def test_name_match_gets_high_bonus(self):
        results = rank([make_entry(name="Display")], "disp")
        assert len(results) == 1
        assert results[0].score == 5 + 20

    def test_title_highlight_from_name_offsets(self):
        results = rank([make_entry(name="Display")], "play")
        assert results[0].title_highlight == [3, 4, 5, 6]
        assert results[0].subtitle_highlight == []

    def test_name_wins_over_higher_raw_area_score(self):
        matcher = FakeMatcher(
            overrides={
                ("sys", "Display"): MatchResult(success=True, score=1, offsets=(0,)),
                ("sys", "System"): MatchResult(success=True, score=9, offsets=(0, 1, 2)),
            }
        )
        results = rank([make_entry(name="Display", area="System")], "sys", matcher=matcher)
        assert results[0].score == 1 + 20
        assert results[0].title_highlight == [0]


class TestAreaTier:
    def test_area_match_gets_mid_bonus(self):
        results = rank([make_entry(name="Display", area="System")], "system")
        assert results[0].score == 9 + 10

    def test_subtitle_offsets_shifted_by_prefix(self):
        matcher = FakeMatcher(
            overrides={("net", "Network"): MatchResult(success=True, score=4, offsets=(0, 1, 2))}
        )
        results = rank([make_entry(name="Wi-Fi", area="Network")], "net", matcher=matcher)
        assert results[0].subtitle_highlight == [6, 7, 8]
        assert results[0].title_highlight == []

    def test_shifted_offsets_point_at_area_in_subtitle(self):
        results = rank([make_entry(name="Wi-Fi", area="Network", type="AppSettingsApp")], "work")
        subtitle = results[0].subtitle
        assert "".join(subtitle[i] for i in results[0].subtitle_highlight) == "work"


class TestAltNameTier:
    def test_first_qualifying_alt_name_is_used(self):
        entry = make_entry(
            name="Monitor",
            area="System",
            alt_names=("display", "screen"),
            keywords=(("screen",),),
        )
        matcher = FakeMatcher()
        results = rank([entry], "screen", matcher=matcher)
        assert results[0].score == 9 + 10
        assert ("screen", "display") in matcher.calls
        assert results[0].title_highlight == []
        assert results[0].subtitle_highlight == []

    def test_stops_at_first_hit(self):
        entry = make_entry(name="Monitor", area="System", alt_names=("screen", "screens"))
        matcher = FakeMatcher()
        results = rank([entry], "screen", matcher=matcher)
        assert results[0].score == 9 + 10
        assert ("screen", "screens") not in matcher.calls

    def test_empty_alt_names_skipped(self):
        assert rank([make_entry(name="Display", alt_names=())], "screen") == []


class TestKeywordTier:
    def test_all_terms_must_be_keywords(self):
        entry = make_entry(name="Wi-Fi", area="Network", keywords=(("wifi", "network"), ("settings",)))
        results = rank([entry], "WIFI Settings")
        assert len(results) == 1
        assert results[0].score == 10

    def test_keyword_case_insensitive_both_sides(self):
        entry = make_entry(name="Wi-Fi", area="Network", keywords=(("WiFi",),))
        assert rank([entry], "wifi")[0].score == 10

    def test_partial_term_overlap_does_not_qualify(self):
        entry = make_entry(name="Wi-Fi", area="Network", keywords=(("wifi", "network"),))
        assert rank([entry], "wifi bluetooth") == []

    def test_keywords_not_fuzzy(self):
        entry = make_entry(name="Wi-Fi", area="Network", keywords=(("wireless",),))
        assert rank([entry], "wire") == []

    def test_missing_keywords_not_applicable(self, matcher):
        entry = make_entry(name="Wi-Fi", area="Network", keywords=None)
        assert match_keywords(matcher, entry, Query.from_text("wifi")) is None


class TestCascade:
    def test_no_tier_excludes_entry(self):
        entries = [make_entry(name="Display"), make_entry(name="Sound", area="Audio")]
        results = rank(entries, "bluetooth")
        assert results == []

    def test_results_only_for_qualifying_entries_in_catalog_order(self):
        entries = [
            make_entry(name="Sound", area="Audio"),
            make_entry(name="Display"),
            make_entry(name="Bluetooth", area="Devices"),
            make_entry(name="Displays", area="Devices"),
        ]
        results = rank(entries, "display")
        assert [r.title for r in results] == ["Display", "Displays"]

    def test_blank_query_returns_nothing(self):
        entry = make_entry(keywords=(("display",),))
        assert rank([entry], "   ") == []

    def test_evaluate_tiers_reports_tier(self, matcher):
        entry = make_entry(name="Display", area="System", alt_names=("Screen",))
        assert evaluate_tiers(matcher, entry, Query.from_text("disp"), DEFAULT_TIERS).tier == "name"
        assert evaluate_tiers(matcher, entry, Query.from_text("syst"), DEFAULT_TIERS).tier == "area"
        assert evaluate_tiers(matcher, entry, Query.from_text("scre"), DEFAULT_TIERS).tier == "alt_name"

    def test_custom_tiers(self, matcher):
        engine = RankingEngine(matcher, RecordingDispatcher(), tiers=[match_keywords])
        entry = make_entry(name="Display", keywords=(("display",),))
        results = engine.rank([entry], Query.from_text("display"))
        assert results[0].score == 10


class TestScoreBands:
    def test_default_name_bonus_for_small_range(self):
        assert RankingEngine(FakeMatcher(), RecordingDispatcher()).name_bonus == 20

    def test_name_bonus_widened_for_large_range(self):
        assert separated_name_bonus(10, 100) == 111

    def test_name_band_above_all_other_bands(self):
        matcher = FakeMatcher()
        engine = RankingEngine(matcher, RecordingDispatcher())
        lowest_name = engine.name_bonus + 0
        highest_other = engine.mid_bonus + matcher.max_score
        assert lowest_name > highest_other

    def test_explicit_bonus_kept(self):
        engine = RankingEngine(FakeMatcher(), RecordingDispatcher(), name_bonus=15)
        assert engine.name_bonus == 15

    def test_sorting_reproduces_tier_order(self):
        entries = [
            make_entry(name="Wi-Fi", area="Network", keywords=(("display",),)),
            make_entry(name="Monitor", area="Hardware", alt_names=("display",)),
            make_entry(name="Screen", area="Display"),
            make_entry(name="Display settings", area="System"),
        ]
        ordered = sort_results(rank(entries, "display"))
        assert [r.title for r in ordered] == ["Display settings", "Monitor", "Screen", "Wi-Fi"]
        assert [r.score for r in ordered] == [25, 19, 19, 10]

    def test_sort_limit(self):
        entries = [make_entry(name=f"Display {i}") for i in range(5)]
        assert len(sort_results(rank(entries, "display"), limit=2)) == 2


class TestResultAssembly:
    def test_title_includes_glyph(self):
        results = rank([make_entry(name="Display", glyph=" ⚙")], "display")
        assert results[0].title == "Display ⚙"

    def test_subtitle_template(self):
        results = rank([make_entry(name="Display", area="System", type="AppSettingsApp")], "display")
        assert results[0].subtitle == 'Area "System" in AppSettingsApp'

    def test_tooltips_identical_and_unexpanded(self):
        entry = make_entry(name="Control Panel", command="%SystemRoot%\\System32\\control.exe")
        results = rank([entry], "control")
        assert "%SystemRoot%\\System32\\control.exe" in results[0].title_tooltip
        assert results[0].title_tooltip == results[0].subtitle_tooltip

    def test_action_dispatches_entry_ignoring_argument(self):
        dispatcher = RecordingDispatcher()
        entry = make_entry(name="Display")
        results = rank([entry], "display", dispatcher=dispatcher)
        assert results[0].action("host context") is True
        assert results[0].action() is True
        assert dispatcher.invoked == [entry, entry]

    def test_action_reports_failure(self):
        results = rank([make_entry(name="Display")], "display", dispatcher=RecordingDispatcher(succeed=False))
        assert results[0].action(None) is False

    def test_result_references_entry(self):
        entry = make_entry(name="Display")
        assert rank([entry], "display")[0].entry is entry
