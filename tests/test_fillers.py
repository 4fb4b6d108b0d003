"""Tests for filler word detection."""
from speakcheck.services.fillers import (
    CANONICAL_FILLERS,
    FillerDetector,
    FillerMatcher,
    detect_fillers,
    tokenize,
)


def as_pairs(details):
    return [(d.word, d.count) for d in details]


def test_vocabulary_order_not_input_order():
    details = detect_fillers("I was, like, um, thinking")
    assert as_pairs(details) == [("um", 1), ("like", 1)]


def test_no_partial_word_matches():
    assert detect_fillers("likely candidate") == []
    assert detect_fillers("umm, sofa, uhh") == []


def test_case_insensitive():
    assert as_pairs(detect_fillers("UM. Um? uM")) == [("um", 3)]


def test_multi_word_filler_across_whitespace_runs():
    text = "You   know\nwhat, I\t\tmean it"
    assert as_pairs(detect_fillers(text)) == [("you know", 1), ("i mean", 1)]


def test_multi_word_filler_not_across_punctuation():
    assert detect_fillers("you, know") == []
    assert detect_fillers("kind-of") == []


def test_counts_non_overlapping_matches():
    assert as_pairs(detect_fillers("you you know you know")) == [("you know", 2)]


def test_hyphen_is_a_word_boundary():
    assert as_pairs(detect_fillers("so-so")) == [("so", 2)]


def test_overlapping_vocabulary_entries_are_counted_independently():
    details = detect_fillers("sort of like kind of so")
    assert as_pairs(details) == [("like", 1), ("so", 1), ("kind of", 1), ("sort of", 1)]


def test_empty_and_none_text():
    assert detect_fillers("") == []
    assert detect_fillers(None) == []
    assert detect_fillers("   ") == []


def test_full_canonical_scan_order():
    text = "i mean sort of kind of literally basically actually so you know like uh um"
    words = [d.word for d in detect_fillers(text)]
    assert words == list(CANONICAL_FILLERS)


def test_custom_vocabulary_keeps_configured_order():
    detector = FillerDetector(["so", "um"])
    assert as_pairs(detector.detect("um so um")) == [("so", 1), ("um", 2)]


def test_custom_vocabulary_normalizes_and_deduplicates():
    detector = FillerDetector(["  You   Know ", "you know", "RIGHT"])
    assert detector.vocabulary == ["you know", "right"]


def test_phrase_with_punctuation_requires_literal_separator():
    detector = FillerDetector(["uh-huh"])
    assert as_pairs(detector.detect("Uh-huh, sure. uh huh")) == [("uh-huh", 1)]


def test_phrase_without_word_characters_is_skipped():
    detector = FillerDetector(["...", "um"])
    assert detector.vocabulary == ["um"]


def test_empty_vocabulary_detects_nothing():
    assert FillerDetector([]).detect("um uh like") == []


def test_matcher_strips_edge_punctuation():
    matcher = FillerMatcher("'you know?'")
    assert matcher.phrase == "you know"
    assert matcher.words == ("you", "know")
    assert matcher.separators == (" ",)


def test_tokenize_reports_positions():
    tokens = tokenize("um, so")
    assert [(t.text, t.start, t.end) for t in tokens] == [("um", 0, 2), ("so", 4, 6)]
