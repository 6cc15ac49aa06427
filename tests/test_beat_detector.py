"""Tests for story beat detection."""

import pytest
from craftlens.core import get_template, tokenize
from craftlens.editor.beat_detector import BeatDetector, BeatSheetAnalysis


def manuscript(total=1000, **placed):
    """Filler text with keyword words placed at given word indices."""
    words = ["plain"] * total
    for position, word in placed.items():
        words[int(position.lstrip("w"))] = word
    return " ".join(words)


def test_midpoint_found_at_expected_position():
    text = manuscript(w500="revelation")
    analysis = BeatDetector().analyze(text, "three-act")

    assert analysis.total_words == 1000
    assert [beat.name for beat in analysis.beats] == ["Midpoint"]
    midpoint = analysis.beats[0]
    assert midpoint.location == 500
    assert abs(midpoint.actual_position - 50) <= 3
    assert midpoint.confidence == 40


def test_beat_findings_point_at_words():
    text = manuscript(w500="revelation")
    index = tokenize(text)
    analysis = BeatDetector().analyze(text, index=index)

    finding = analysis.findings[0]
    assert finding.category == "beat"
    assert finding.location.unit == "word"
    assert finding.location.offset == 3000
    assert index.resolve(finding.location).text == "revelation"


def test_pacing_and_sparse_beats():
    analysis = BeatDetector().analyze(manuscript(w500="revelation"))
    assert analysis.pacing == {"act1": 250, "act2": 500, "act3": 250}
    assert analysis.recommendations == [
        "Consider adding more clear story beats to strengthen structure"
    ]


def test_five_act_template():
    analysis = BeatDetector().analyze(manuscript(w200="conflict"), "five-act")
    assert analysis.structure == "five-act"
    assert [beat.name for beat in analysis.beats] == ["Rising Action"]
    assert analysis.beats[0].actual_position == 20.0


def test_empty_manuscript():
    analysis = BeatDetector().analyze("")
    assert analysis.beats == []
    assert analysis.total_words == 0
    assert analysis.pacing == {"act1": 0, "act2": 0, "act3": 0}
    assert analysis.recommendations == []


def test_tiny_manuscript_does_not_fail():
    analysis = BeatDetector().analyze("one two three")
    assert analysis.total_words == 3
    for beat in analysis.beats:
        assert 0 <= beat.location < 3


def test_unknown_template():
    with pytest.raises(ValueError):
        BeatDetector().analyze("Some text.", "seven-act")


def test_repeat_runs_are_identical():
    text = manuscript(w120="suddenly", w500="truth", w880="battle")
    detector = BeatDetector()
    assert detector.analyze(text).to_dict() == detector.analyze(text).to_dict()


def test_short_second_act_recommendation():
    """A one-word manuscript has no room for a second act."""
    analysis = BeatDetector().analyze("word")
    assert analysis.pacing == {"act1": 0, "act2": 0, "act3": 0}
    assert analysis.recommendations == [
        "Consider adding more clear story beats to strengthen structure",
        "Act 2 may be too short - consider expanding conflict development",
    ]


def test_long_first_act_recommendation():
    analysis = BeatSheetAnalysis(
        structure="three-act",
        total_words=100,
        pacing={"act1": 40, "act2": 45, "act3": 15},
    )
    recommendations = BeatDetector()._recommendations(analysis, get_template("three-act"))
    assert "Act 1 may be too long - consider tightening setup" in recommendations
    assert "Act 2 may be too short - consider expanding conflict development" not in recommendations
