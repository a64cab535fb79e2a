"""Unit tests for boundary-aware keyword matching."""

import pytest

from jobfilter.matching.patterns import (
    NO_MATCH,
    PatternMatch,
    compile_keyword,
    contains_inclusive_signal,
    detect_restrictive_pattern,
    iter_keyword_matches,
    keyword_pattern,
    order_keywords,
)


class TestOrderKeywords:
    """Tests for keyword de-duplication and ordering."""

    def test_longest_first(self):
        assert order_keywords(["us", "United States", "usa"]) == ["United States", "usa", "us"]

    def test_case_insensitive_dedup_keeps_first_spelling(self):
        assert order_keywords(["LatAm", "latam", "LATAM"]) == ["LatAm"]

    def test_equal_length_keeps_configured_order(self):
        assert order_keywords(["peru", "chile", "cuba"]) == ["chile", "peru", "cuba"]
        assert order_keywords(["cuba", "peru"]) == ["cuba", "peru"]

    def test_drops_blank_and_non_string_entries(self):
        assert order_keywords(["remote", "  ", None, 42, ""]) == ["remote"]

    def test_empty_input(self):
        assert order_keywords(None) == []
        assert order_keywords([]) == []


class TestWordBoundaries:
    """Keywords only match whole words or phrases."""

    @pytest.mark.parametrize(
        "text",
        ["Business Analyst", "European team", "Focus on customers", "Russian speaker", "Status page"],
    )
    def test_short_keyword_does_not_match_inside_words(self, text):
        assert not detect_restrictive_pattern(text, ["us"])

    @pytest.mark.parametrize("text", ["US only", "Remote (US)", "us", "Based in the US."])
    def test_short_keyword_matches_whole_word(self, text):
        match = detect_restrictive_pattern(text, ["us"])
        assert match.matched
        assert match.matched_keyword == "us"

    def test_case_insensitive(self):
        assert contains_inclusive_signal("Remote - LATAM", ["latam"]).matched_keyword == "latam"

    def test_internal_whitespace_matches_any_run(self):
        assert contains_inclusive_signal("Latin\n  America", ["latin america"])

    def test_phrase_with_dash(self):
        match = detect_restrictive_pattern("Remote - Berlin", ["remote", "remote - berlin"])
        assert match.matched_keyword == "remote - berlin"

    @pytest.mark.parametrize(
        "keyword,text",
        [("c++", "Senior C++ developer"), ("u.s.", "U.S. residents"), ("(us)", "Remote (US)")],
    )
    def test_special_characters_are_literal(self, keyword, text):
        assert detect_restrictive_pattern(text, [keyword]).matched_keyword == keyword

    def test_special_characters_still_need_boundaries(self):
        assert not detect_restrictive_pattern("abc++d", ["c++"])
        assert not detect_restrictive_pattern("USA", ["u.s."])

    def test_pattern_shapes(self):
        assert keyword_pattern("latam") == r"\blatam\b"
        assert keyword_pattern("c++").startswith(r"(?<!\w)")


class TestDetection:
    """Tests for detect_restrictive_pattern and contains_inclusive_signal."""

    def test_longest_keyword_wins(self):
        assert detect_restrictive_pattern("USA only", ["us", "usa"]).matched_keyword == "usa"

    def test_offsets(self):
        match = contains_inclusive_signal("Remote - Brazil", ["brazil"])
        assert (match.start, match.end) == (9, 15)

    def test_no_match_returns_sentinel(self):
        match = contains_inclusive_signal("Tokyo, Japan", ["brazil"])
        assert match == NO_MATCH
        assert match.matched_keyword is None
        assert match.start == -1

    @pytest.mark.parametrize("text", [None, "", 123, ["latam"]])
    def test_invalid_text_never_raises(self, text):
        assert not contains_inclusive_signal(text, ["latam"])

    def test_empty_keywords(self):
        assert not detect_restrictive_pattern("US only", [])
        assert not detect_restrictive_pattern("US only", None)

    def test_pattern_match_truthiness(self):
        assert PatternMatch(True, "us", 0, 2)
        assert not PatternMatch()

    def test_compiled_patterns_are_cached(self):
        assert compile_keyword("latam") is compile_keyword("latam")


class TestIterKeywordMatches:
    """Tests for occurrence-by-occurrence matching."""

    def test_every_occurrence_in_text_order(self):
        matches = list(iter_keyword_matches("US or LatAm, not US", ["us"]))
        assert [m.start for m in matches] == [0, 17]

    def test_longest_keyword_first(self):
        matches = list(iter_keyword_matches("US only; US", ["us", "us only"]))
        assert [m.matched_keyword for m in matches] == ["us only", "us", "us"]

    def test_invalid_text_yields_nothing(self):
        assert list(iter_keyword_matches(None, ["us"])) == []
