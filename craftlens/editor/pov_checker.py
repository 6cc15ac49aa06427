"""Point-of-view consistency checking.

Each paragraph is classified by pronoun plurality. The walk over paragraphs is
a fold: ``_step`` takes the state after the previous paragraph and returns the
state after the current one, so nothing outside the state is mutated.
"""

from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import reduce
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Tuple
import logging
import re

from ..core.findings import Finding, Position, Severity
from ..core.tokenizer import PositionIndex, Token, tokenize

logger = logging.getLogger(__name__)

FIRST_PERSON = re.compile(r"\b(I|me|my|mine|we|us|our|ours)\b", re.IGNORECASE)
SECOND_PERSON = re.compile(r"\b(you|your|yours)\b", re.IGNORECASE)
THIRD_PERSON = re.compile(r"\b(he|him|his|she|her|hers|they|them|their)\b", re.IGNORECASE)

INTERNAL_THOUGHTS = re.compile(
    r"\b(thought|wondered|realized|knew|felt|remembered|believed)\b", re.IGNORECASE
)
CHARACTER_THOUGHT = re.compile(r"\b([A-Z][a-z]+)\s+(thought|wondered|realized|knew|felt)")
DEEP_POV_MARKERS = re.compile(r"\b(felt like|seemed to|appeared to)\b", re.IGNORECASE)
DISTANT_MARKERS = re.compile(r"\b(the man|the woman|the person)\b", re.IGNORECASE)

EXCERPT_LENGTH = 150
DOMINANT_SHARE = 60
SEVERITY_PENALTY = MappingProxyType({Severity.HIGH: 15, Severity.MEDIUM: 8, Severity.LOW: 3})


class Person(Enum):
    """Grammatical person of a paragraph."""
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    UNKNOWN = "unknown"


class IssueType(Enum):
    HEAD_HOPPING = "head-hopping"
    INCONSISTENT = "inconsistent"
    SHIFT = "shift"


@dataclass(frozen=True)
class POVIssue:
    """A point-of-view problem in one paragraph."""

    type: IssueType
    location: int
    offset: int
    excerpt: str
    description: str
    severity: Severity

    def to_finding(self) -> Finding:
        return Finding(
            category=self.type.value,
            location=Position("paragraph", self.location, self.offset),
            excerpt=self.excerpt,
            description=self.description,
            severity=self.severity,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "location": self.location,
            "offset": self.offset,
            "excerpt": self.excerpt,
            "description": self.description,
            "severity": self.severity.value,
        }


# A chain is a nested (item, rest) pair, newest first; pushing never copies.
Chain = Optional[Tuple[Any, Any]]


def _push(chain: Chain, items) -> Chain:
    for item in items:
        chain = (item, chain)
    return chain


def _unwind(chain: Chain) -> List[Any]:
    """Return a chain's items oldest first."""
    items = []
    while chain is not None:
        item, chain = chain
        items.append(item)
    items.reverse()
    return items


@dataclass(frozen=True)
class _FoldState:
    previous: Person = Person.UNKNOWN
    pronoun_counts: Tuple[int, int, int] = (0, 0, 0)
    thinkers: Chain = None
    issues: Chain = None
    paragraph_povs: Chain = None


@dataclass
class POVAnalysis:
    """Point-of-view summary for a manuscript."""

    dominant_pov: str = "mixed"
    pov_consistency: int = 100
    issues: List[POVIssue] = field(default_factory=list)
    character_perspectives: Dict[str, int] = field(default_factory=dict)
    paragraph_povs: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def findings(self) -> List[Finding]:
        return [issue.to_finding() for issue in self.issues]

    def to_dict(self) -> Dict[str, Any]:
        """Convert analysis to dictionary for serialization."""
        return {
            "dominant_pov": self.dominant_pov,
            "pov_consistency": self.pov_consistency,
            "issues": [issue.to_dict() for issue in self.issues],
            "character_perspectives": dict(self.character_perspectives),
            "paragraph_povs": list(self.paragraph_povs),
            "recommendations": self.recommendations,
            "findings": [finding.to_dict() for finding in self.findings],
        }


def classify(first: int, second: int, third: int) -> Person:
    """Pick the person with a strict plurality; ties and zero are unknown."""
    if first > third and first > second:
        return Person.FIRST
    if third > first and third > second:
        return Person.THIRD
    if second > first and second > third:
        return Person.SECOND
    return Person.UNKNOWN


def _issue(issue_type: IssueType, paragraph: Token, description: str, severity: Severity) -> POVIssue:
    return POVIssue(
        type=issue_type,
        location=paragraph.ordinal,
        offset=paragraph.start_offset,
        excerpt=paragraph.text[:EXCERPT_LENGTH],
        description=description,
        severity=severity,
    )


def _head_hopping(paragraph: Token) -> Tuple[List[str], Optional[POVIssue]]:
    """Return the thinking characters in a paragraph and a head-hopping issue if several."""
    if len(INTERNAL_THOUGHTS.findall(paragraph.text)) <= 2:
        return [], None

    names = [match.group(1) for match in CHARACTER_THOUGHT.finditer(paragraph.text)]
    distinct = list(dict.fromkeys(names))
    if len(distinct) > 1:
        return names, _issue(
            IssueType.HEAD_HOPPING,
            paragraph,
            f"Multiple characters' thoughts in one paragraph: {', '.join(distinct)}",
            Severity.HIGH,
        )
    return names, None


def _step(state: _FoldState, paragraph: Token) -> _FoldState:
    text = paragraph.text
    first = len(FIRST_PERSON.findall(text))
    second = len(SECOND_PERSON.findall(text))
    third = len(THIRD_PERSON.findall(text))
    current = classify(first, second, third)

    issues = []
    names = []

    if (
        state.previous is not Person.UNKNOWN
        and current is not Person.UNKNOWN
        and state.previous is not current
    ):
        issues.append(_issue(
            IssueType.SHIFT,
            paragraph,
            f"POV shifts from {state.previous.value} person to {current.value} person",
            Severity.HIGH,
        ))

    if current is Person.THIRD:
        names, hopping = _head_hopping(paragraph)
        if hopping:
            issues.append(hopping)

        if DEEP_POV_MARKERS.search(text) and DISTANT_MARKERS.search(text):
            issues.append(_issue(
                IssueType.INCONSISTENT,
                paragraph,
                "Mixing deep and distant POV styles",
                Severity.MEDIUM,
            ))

    counts = state.pronoun_counts
    return replace(
        state,
        previous=current,
        pronoun_counts=(counts[0] + first, counts[1] + second, counts[2] + third),
        thinkers=_push(state.thinkers, names),
        issues=_push(state.issues, issues),
        paragraph_povs=_push(state.paragraph_povs, [current.value]),
    )


class POVChecker:
    """Classifies per-paragraph POV and flags shifts, head-hopping and mixed styles."""

    def analyze(self, text: str, index: Optional[PositionIndex] = None) -> POVAnalysis:
        index = index or tokenize(text)
        if not index.paragraphs:
            return POVAnalysis()

        final = reduce(_step, index.paragraphs, _FoldState())
        perspectives = dict(Counter(_unwind(final.thinkers)))
        issues = _unwind(final.issues)

        analysis = POVAnalysis(
            dominant_pov=self._dominant_pov(final.pronoun_counts, perspectives),
            pov_consistency=self._consistency_score(issues),
            issues=sorted(issues, key=lambda issue: issue.location),
            character_perspectives=perspectives,
            paragraph_povs=_unwind(final.paragraph_povs),
        )
        analysis.recommendations = self._recommendations(analysis)

        logger.debug(
            "POV: %d paragraphs, %d issues, dominant %s",
            len(index.paragraphs), len(analysis.issues), analysis.dominant_pov,
        )
        return analysis

    def _dominant_pov(self, counts: Tuple[int, int, int], perspectives: Dict[str, int]) -> str:
        total = sum(counts)
        if total == 0:
            return "mixed"

        first, second, third = (count / total * 100 for count in counts)
        if first > DOMINANT_SHARE:
            return "first"
        if second > DOMINANT_SHARE:
            return "second"
        if third > DOMINANT_SHARE:
            return "third-omniscient" if len(perspectives) > 1 else "third-limited"
        return "mixed"

    def _consistency_score(self, issues) -> int:
        score = 100 - sum(SEVERITY_PENALTY[issue.severity] for issue in issues)
        return max(0, score)

    def _recommendations(self, analysis: POVAnalysis) -> List[str]:
        recommendations = []
        types = [issue.type for issue in analysis.issues]

        if IssueType.HEAD_HOPPING in types:
            recommendations.append(
                "Avoid head-hopping: Stay in one character's perspective per scene or chapter"
            )
        if types.count(IssueType.SHIFT) > 2:
            recommendations.append(
                "POV shifts should be intentional and clearly marked (chapter breaks, scene breaks)"
            )
        if analysis.dominant_pov == "mixed":
            recommendations.append("Consider choosing a consistent POV throughout your story")
        if len(analysis.character_perspectives) > 5:
            recommendations.append(
                "Multiple POV characters detected - ensure each has distinct voice and purpose"
            )

        if analysis.pov_consistency < 70:
            recommendations.append(
                "Review POV consistency - readers may find perspective shifts confusing"
            )
        elif analysis.pov_consistency > 90:
            recommendations.append("POV is consistent and well-maintained")

        return recommendations
