"""Tests for point-of-view analysis."""

from craftlens.core import tokenize
from craftlens.editor.pov_checker import IssueType, Person, POVChecker, classify


def test_person_shift_detected():
    text = "I walked to the store. I bought milk.\n\nHe walked home. He was tired.\n\nI slept."
    analysis = POVChecker().analyze(text)

    assert analysis.paragraph_povs == ["first", "third", "first"]
    shifts = [issue for issue in analysis.issues if issue.type is IssueType.SHIFT]
    assert [issue.location for issue in shifts] == [1, 2]
    assert shifts[0].description == "POV shifts from first person to third person"
    assert analysis.pov_consistency == 70
    assert analysis.dominant_pov == "mixed"


def test_consistent_first_person():
    analysis = POVChecker().analyze("I went out. My dog followed me.")
    assert analysis.dominant_pov == "first"
    assert analysis.issues == []
    assert analysis.pov_consistency == 100
    assert analysis.recommendations == ["POV is consistent and well-maintained"]


def test_head_hopping():
    text = (
        "She smiled at him. Anna thought he was lying. "
        "Mark wondered why she cared. Anna felt cold and Mark knew it."
    )
    analysis = POVChecker().analyze(text)

    assert [issue.type for issue in analysis.issues] == [IssueType.HEAD_HOPPING]
    assert analysis.issues[0].description == "Multiple characters' thoughts in one paragraph: Anna, Mark"
    assert analysis.character_perspectives == {"Anna": 2, "Mark": 2}
    assert analysis.dominant_pov == "third-omniscient"
    assert analysis.pov_consistency == 85
    assert "Avoid head-hopping: Stay in one character's perspective per scene or chapter" in analysis.recommendations


def test_mixed_deep_and_distant_style():
    analysis = POVChecker().analyze("He felt like a stranger. The man seemed to know him.")
    assert [issue.type for issue in analysis.issues] == [IssueType.INCONSISTENT]
    assert analysis.pov_consistency == 92


def test_unknown_paragraph_does_not_break_the_chain():
    """A paragraph with no pronouns is skipped when comparing neighbours."""
    analysis = POVChecker().analyze("I ran.\n\nThe sky.\n\nHe ran.")
    assert analysis.paragraph_povs == ["first", "unknown", "third"]
    assert analysis.issues == []


def test_empty_input():
    analysis = POVChecker().analyze("")
    assert analysis.issues == []
    assert analysis.pov_consistency == 100
    assert analysis.dominant_pov == "mixed"
    assert analysis.paragraph_povs == []


def test_classify_requires_strict_plurality():
    assert classify(2, 0, 1) is Person.FIRST
    assert classify(1, 0, 1) is Person.UNKNOWN
    assert classify(0, 0, 0) is Person.UNKNOWN
    assert classify(0, 3, 1) is Person.SECOND


def test_findings_resolve_to_paragraphs():
    text = "I walked.\n\nShe walked.\n\nYou walked."
    index = tokenize(text)
    analysis = POVChecker().analyze(text, index=index)

    assert len(analysis.findings) == 2
    for finding in analysis.findings:
        assert finding.location.unit == "paragraph"
        paragraph = index.resolve(finding.location)
        assert paragraph.start_offset == finding.location.offset


def test_frequent_shifts_recommendations():
    """Three shifts drop the score below 70 and the POV reads as mixed."""
    analysis = POVChecker().analyze("I ran.\n\nHe ran.\n\nI ran.\n\nHe ran.")

    assert analysis.pov_consistency == 55
    assert analysis.dominant_pov == "mixed"
    assert analysis.recommendations == [
        "POV shifts should be intentional and clearly marked (chapter breaks, scene breaks)",
        "Consider choosing a consistent POV throughout your story",
        "Review POV consistency - readers may find perspective shifts confusing",
    ]


def test_many_perspective_characters():
    text = (
        "Anna thought he was sad. Mark wondered if she knew. Lena felt cold. "
        "Omar knew it. Ruth realized they lied. Paul thought so."
    )
    analysis = POVChecker().analyze(text)

    assert len(analysis.character_perspectives) == 6
    assert analysis.recommendations == [
        "Avoid head-hopping: Stay in one character's perspective per scene or chapter",
        "Multiple POV characters detected - ensure each has distinct voice and purpose",
    ]


def test_long_manuscript_keeps_every_issue_in_order():
    text = "\n\n".join(["I ran.", "He ran."] * 2000)
    analysis = POVChecker().analyze(text)

    assert len(analysis.paragraph_povs) == 4000
    assert len(analysis.issues) == 3999
    assert [issue.location for issue in analysis.issues] == list(range(1, 4000))
    assert analysis.pov_consistency == 0
