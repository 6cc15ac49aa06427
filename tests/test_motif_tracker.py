"""Tests for motif, symbol and recurring phrase tracking."""

import pytest
from craftlens.core import tokenize
from craftlens.editor.motif_tracker import ChapterLocator, MotifTracker


MIRRORS = (
    "The mirror was old. She looked into the mirror. A mirror cracked. "
    "Every mirror lies. The last mirror broke."
)


def test_symbol_motif():
    analysis = MotifTracker().analyze(MIRRORS)

    mirror = next(motif for motif in analysis.motifs if motif.pattern == "mirror")
    assert mirror.category == "symbol"
    assert len(mirror.occurrences) == 5
    assert mirror.significance == "reflection, truth, self-awareness, duality"
    assert analysis.symbolism["mirror"] == ["reflection", "truth", "self-awareness", "duality"]
    assert mirror.occurrences[0].location == MIRRORS.index("mirror")


def test_single_symbol_mention_is_ignored():
    analysis = MotifTracker().analyze("A mirror hung on the wall.")
    assert analysis.motifs == []
    assert analysis.symbolism == {}


def test_chapter_attribution():
    text = "Chapter 1\nThe key was lost.\n\nChapter 2\nShe found the key."
    analysis = MotifTracker().analyze(text)

    assert analysis.chapter_count == 2
    key = analysis.by_category("symbol")[0]
    assert key.pattern == "key"
    assert [occurrence.chapter for occurrence in key.occurrences] == [1, 2]


def test_text_before_first_chapter_is_chapter_zero():
    locator = ChapterLocator("Prologue text.\n\nCHAPTER 1\nStart.")
    assert len(locator) == 1
    assert locator.chapter_at(3) == 0
    assert locator.chapter_at(40) == 1


def test_theme_motif():
    text = "I love you. Love is all. My heart aches. I feel it. We care."
    analysis = MotifTracker().analyze(text)

    themes = analysis.by_category("theme")
    assert [motif.pattern for motif in themes] == ["love"]
    assert themes[0].significance == "Recurring theme of love"
    assert len(themes[0].occurrences) == 5


def test_theme_occurrences_are_capped():
    analysis = MotifTracker().analyze("free " * 12)
    freedom = analysis.by_category("theme")[0]
    assert freedom.pattern == "freedom"
    assert len(freedom.occurrences) == 10


def test_recurring_phrases():
    analysis = MotifTracker().analyze("dark old house dark old house dark old house")

    assert len(analysis.recurring_phrases) == 1
    phrase = analysis.recurring_phrases[0]
    assert phrase.phrase == "dark old house"
    assert phrase.count == 3
    assert phrase.word_positions == [0, 3, 6]
    assert phrase.offsets == [0, 15, 30]
    assert analysis.motifs == []

    findings = analysis.findings
    assert [finding.category for finding in findings] == ["phrase"] * 3
    assert [finding.location.ordinal for finding in findings] == [0, 3, 6]
    assert findings[1].description == '"dark old house" repeated 3 times'


def test_short_words_never_form_phrases():
    analysis = MotifTracker().analyze("it is so it is so it is so")
    assert analysis.recurring_phrases == []


def test_empty_input():
    analysis = MotifTracker().analyze("")
    assert analysis.motifs == []
    assert analysis.recurring_phrases == []
    assert analysis.chapter_count == 0


def test_findings_point_inside_their_words():
    text = "Chapter 1\n" + MIRRORS + "\n\nChapter 2\nI love you. Love, heart, feel, care."
    index = tokenize(text)
    analysis = MotifTracker().analyze(text, index=index)

    assert analysis.findings
    for finding in analysis.findings:
        word = index.resolve(finding.location)
        assert word.start_offset <= finding.location.offset < word.end_offset


def test_by_category():
    analysis = MotifTracker().analyze(MIRRORS)
    assert analysis.by_category("image") == []
    with pytest.raises(ValueError):
        analysis.by_category("colour")
