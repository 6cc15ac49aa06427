"""Story beat detection against a structure template.

This is a best-effort positional search, not a structural parse. For each beat
we scan a window around where the template expects it, score the surrounding
words for the beat's keywords, and keep the best-scoring position. The window
size, context radius and scoring weights are calibration values and must stay
as they are for results to remain comparable between runs.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import logging
import math

from ..core.findings import Finding, Position
from ..core.templates import BeatDefinition, StructureTemplate, get_template
from ..core.tokenizer import PositionIndex, tokenize

logger = logging.getLogger(__name__)

SEARCH_WINDOW_FRACTION = 0.1
CONTEXT_RADIUS = 50
KEYWORD_SCORE = 10
MAX_PROXIMITY_BONUS = 10
EXCERPT_LENGTH = 200
DEVIATION_THRESHOLD = 15
ACT_ONE_END = 0.25
ACT_TWO_END = 0.75


def rounded_percent(value: float) -> int:
    """Round a percentage to a whole number, halves up."""
    return math.floor(value + 0.5)


@dataclass
class StoryBeat:
    """A beat located in the manuscript."""

    name: str
    description: str
    location: int
    offset: int
    excerpt: str
    expected_position: float
    actual_position: float
    confidence: float

    def to_finding(self) -> Finding:
        return Finding(
            category="beat",
            location=Position("word", self.location, self.offset),
            excerpt=self.excerpt,
            description=f"{self.name}: {self.description}",
            confidence=self.confidence,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "location": self.location,
            "offset": self.offset,
            "excerpt": self.excerpt,
            "expected_position": self.expected_position,
            "actual_position": self.actual_position,
            "confidence": self.confidence,
        }


@dataclass
class BeatSheetAnalysis:
    """Beats found for one template plus act pacing."""

    structure: str
    beats: List[StoryBeat] = field(default_factory=list)
    total_words: int = 0
    pacing: Dict[str, int] = field(default_factory=lambda: {"act1": 0, "act2": 0, "act3": 0})
    recommendations: List[str] = field(default_factory=list)

    @property
    def findings(self) -> List[Finding]:
        return [beat.to_finding() for beat in self.beats]

    def to_dict(self) -> Dict[str, Any]:
        """Convert analysis to dictionary for serialization."""
        return {
            "structure": self.structure,
            "beats": [beat.to_dict() for beat in self.beats],
            "total_words": self.total_words,
            "pacing": dict(self.pacing),
            "recommendations": self.recommendations,
            "findings": [finding.to_dict() for finding in self.findings],
        }


class BeatDetector:
    """Locates template beats by keyword density near their expected position."""

    def analyze(
        self,
        text: str,
        structure_template: Union[str, StructureTemplate, None] = None,
        index: Optional[PositionIndex] = None,
    ) -> BeatSheetAnalysis:
        """Detect beats for a template (three-act by default)."""
        template = get_template(structure_template)
        index = index or tokenize(text)
        total_words = index.word_count

        analysis = BeatSheetAnalysis(structure=template.key, total_words=total_words)
        if total_words == 0:
            return analysis

        words = [token.text for token in index.words]
        beats = []
        for definition in template.beats:
            beat = self._locate_beat(definition, words, index)
            if beat:
                beats.append(beat)

        analysis.beats = sorted(beats, key=lambda beat: beat.location)
        analysis.pacing = self._pacing(total_words)
        analysis.recommendations = self._recommendations(analysis, template)

        logger.debug(
            "Beat sheet (%s): %d of %d beats over %d words",
            template.key, len(analysis.beats), len(template), total_words,
        )
        return analysis

    def _locate_beat(
        self,
        definition: BeatDefinition,
        words: List[str],
        index: PositionIndex,
    ) -> Optional[StoryBeat]:
        """Find the highest-scoring position for a beat inside its search window."""
        total_words = len(words)
        expected = (definition.expected_position_percent / 100) * total_words
        search_start = max(0, math.floor(expected - total_words * SEARCH_WINDOW_FRACTION))
        search_end = min(total_words, math.floor(expected + total_words * SEARCH_WINDOW_FRACTION))

        best_position = None
        best_score = 0.0
        best_context = ""

        for i in range(search_start, search_end):
            context = " ".join(words[max(0, i - CONTEXT_RADIUS):min(total_words, i + CONTEXT_RADIUS)])
            lower_context = context.lower()

            score = 0.0
            for keyword in definition.keywords:
                if keyword in lower_context:
                    score += KEYWORD_SCORE
                    distance = abs(i - expected)
                    score += max(0, MAX_PROXIMITY_BONUS - (distance / total_words) * 100)

            if score > 0 and (best_position is None or score > best_score):
                best_position = i
                best_score = score
                best_context = context

        if best_position is None:
            return None

        return StoryBeat(
            name=definition.name,
            description=definition.description,
            location=best_position,
            offset=index.words[best_position].start_offset,
            excerpt=best_context[:EXCERPT_LENGTH],
            expected_position=definition.expected_position_percent,
            actual_position=(best_position / total_words) * 100,
            confidence=min(100, best_score * 2),
        )

    def _pacing(self, total_words: int) -> Dict[str, int]:
        act1_end = total_words * ACT_ONE_END
        act2_end = total_words * ACT_TWO_END
        return {
            "act1": math.floor(act1_end),
            "act2": math.floor(act2_end - act1_end),
            "act3": math.floor(total_words - act2_end),
        }

    def _recommendations(self, analysis: BeatSheetAnalysis, template: StructureTemplate) -> List[str]:
        recommendations = []

        if len(analysis.beats) < len(template) * 0.5:
            recommendations.append("Consider adding more clear story beats to strengthen structure")

        for beat in analysis.beats:
            if abs(beat.actual_position - beat.expected_position) > DEVIATION_THRESHOLD:
                recommendations.append(
                    f'"{beat.name}" may be positioned unusually '
                    f"(expected ~{beat.expected_position:g}%, "
                    f"found at {rounded_percent(beat.actual_position)}%)"
                )

        act1_percent = analysis.pacing["act1"] / analysis.total_words * 100
        act2_percent = analysis.pacing["act2"] / analysis.total_words * 100
        if act1_percent > 30:
            recommendations.append("Act 1 may be too long - consider tightening setup")
        if act2_percent < 40:
            recommendations.append("Act 2 may be too short - consider expanding conflict development")

        return recommendations
