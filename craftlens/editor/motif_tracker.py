"""Motif, symbol and recurring-phrase tracking."""

from bisect import bisect_right
from collections import defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Optional
import logging
import re

from ..core.findings import Finding, Position
from ..core.lexicon import SYMBOLS, THEME_KEYWORDS, whole_word_pattern
from ..core.tokenizer import PositionIndex, tokenize

logger = logging.getLogger(__name__)

CHAPTER_MARKER = re.compile(r"chapter\s+\d+", re.IGNORECASE)

PHRASE_LENGTHS = (3, 4, 5)
MIN_PHRASE_WORD_LENGTH = 3
MIN_PHRASE_COUNT = 3
MAX_RECURRING_PHRASES = 20

MIN_SYMBOL_MATCHES = 2
SYMBOL_CONTEXT = 100
MIN_THEME_MATCHES = 5
MAX_THEME_OCCURRENCES = 10
THEME_CONTEXT = 80

MOTIF_CATEGORIES = ("symbol", "theme", "phrase", "image")

SYMBOL_PATTERNS = tuple((entry, whole_word_pattern(entry.symbol)) for entry in SYMBOLS)
THEME_PATTERNS = MappingProxyType({
    theme: tuple(whole_word_pattern(keyword) for keyword in keywords)
    for theme, keywords in THEME_KEYWORDS.items()
})


@dataclass(frozen=True)
class MotifOccurrence:
    """One appearance of a motif in the text."""

    text: str
    location: int
    word_ordinal: int
    chapter: int
    context: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "location": self.location,
            "word_ordinal": self.word_ordinal,
            "chapter": self.chapter,
            "context": self.context,
        }


@dataclass
class Motif:
    """A recurring symbol or theme."""

    pattern: str
    category: str
    significance: str
    occurrences: List[MotifOccurrence] = field(default_factory=list)

    def to_findings(self) -> List[Finding]:
        return [
            Finding(
                category=self.category,
                location=Position("word", occurrence.word_ordinal, occurrence.location),
                excerpt=occurrence.context,
                description=f"{self.pattern} ({self.significance}) in chapter {occurrence.chapter}",
            )
            for occurrence in self.occurrences
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "category": self.category,
            "significance": self.significance,
            "occurrences": [occurrence.to_dict() for occurrence in self.occurrences],
        }


@dataclass
class RecurringPhrase:
    """A three-to-five word sequence repeated across the manuscript."""

    phrase: str
    count: int
    word_positions: List[int] = field(default_factory=list)
    offsets: List[int] = field(default_factory=list)

    def to_findings(self) -> List[Finding]:
        return [
            Finding(
                category="phrase",
                location=Position("word", ordinal, offset),
                excerpt=self.phrase,
                description=f"\"{self.phrase}\" repeated {self.count} times",
            )
            for ordinal, offset in zip(self.word_positions, self.offsets)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phrase": self.phrase,
            "count": self.count,
            "word_positions": self.word_positions,
            "offsets": self.offsets,
        }


@dataclass
class MotifAnalysis:
    """Motifs, recurring phrases and symbol meanings found in a manuscript."""

    motifs: List[Motif] = field(default_factory=list)
    recurring_phrases: List[RecurringPhrase] = field(default_factory=list)
    symbolism: Dict[str, List[str]] = field(default_factory=dict)
    chapter_count: int = 0

    @property
    def findings(self) -> List[Finding]:
        findings = [finding for motif in self.motifs for finding in motif.to_findings()]
        findings += [finding for phrase in self.recurring_phrases for finding in phrase.to_findings()]
        return findings

    def by_category(self, category: str) -> List[Motif]:
        if category not in MOTIF_CATEGORIES:
            raise ValueError(f"Unknown motif category '{category}'")
        return [motif for motif in self.motifs if motif.category == category]

    def to_dict(self) -> Dict[str, Any]:
        """Convert analysis to dictionary for serialization."""
        return {
            "motifs": [motif.to_dict() for motif in self.motifs],
            "recurring_phrases": [phrase.to_dict() for phrase in self.recurring_phrases],
            "symbolism": {symbol: list(meanings) for symbol, meanings in self.symbolism.items()},
            "chapter_count": self.chapter_count,
            "findings": [finding.to_dict() for finding in self.findings],
        }


class ChapterLocator:
    """Maps character offsets to chapter numbers.

    Chapter markers ("Chapter 3") are located once; an offset belongs to the
    chapter of the last marker starting at or before it. Text before the first
    marker is chapter 0.
    """

    def __init__(self, text: str):
        self.boundaries = [match.start() for match in CHAPTER_MARKER.finditer(text)]

    def __len__(self) -> int:
        return len(self.boundaries)

    def chapter_at(self, offset: int) -> int:
        return bisect_right(self.boundaries, offset)


class MotifTracker:
    """Finds recurring phrases, dictionary symbols and thematic keywords."""

    def analyze(self, text: str, index: Optional[PositionIndex] = None) -> MotifAnalysis:
        index = index or tokenize(text)
        text = index.text
        if index.is_empty:
            return MotifAnalysis()

        chapters = ChapterLocator(text)
        analysis = MotifAnalysis(chapter_count=len(chapters))
        analysis.recurring_phrases = self._recurring_phrases(index)

        for entry, pattern in SYMBOL_PATTERNS:
            matches = list(pattern.finditer(text))
            if len(matches) < MIN_SYMBOL_MATCHES:
                continue
            analysis.motifs.append(Motif(
                pattern=entry.symbol,
                category="symbol",
                significance=entry.significance,
                occurrences=[self._occurrence(m, text, index, chapters, SYMBOL_CONTEXT) for m in matches],
            ))
            analysis.symbolism[entry.symbol] = list(entry.meanings)

        for theme, patterns in THEME_PATTERNS.items():
            matches = [match for pattern in patterns for match in pattern.finditer(text)]
            if len(matches) < MIN_THEME_MATCHES:
                continue
            analysis.motifs.append(Motif(
                pattern=theme,
                category="theme",
                significance=f"Recurring theme of {theme}",
                occurrences=[
                    self._occurrence(m, text, index, chapters, THEME_CONTEXT)
                    for m in matches[:MAX_THEME_OCCURRENCES]
                ],
            ))

        analysis.motifs.sort(key=lambda motif: len(motif.occurrences), reverse=True)

        logger.debug(
            "Motifs: %d motifs, %d recurring phrases, %d chapters",
            len(analysis.motifs), len(analysis.recurring_phrases), len(chapters),
        )
        return analysis

    def _occurrence(self, match, text, index, chapters, radius) -> MotifOccurrence:
        position = match.start()
        return MotifOccurrence(
            text=match.group(0),
            location=position,
            word_ordinal=index.word_ordinal_at(position),
            chapter=chapters.chapter_at(position),
            context=text[max(0, position - radius):min(len(text), position + radius)],
        )

    def _recurring_phrases(self, index: PositionIndex) -> List[RecurringPhrase]:
        """Count 3-, 4- and 5-word windows made only of words longer than two characters."""
        words = [token.text.lower() for token in index.words]
        positions: Dict[str, List[int]] = defaultdict(list)

        for i in range(len(words)):
            for size in PHRASE_LENGTHS:
                window = words[i:i + size]
                if len(window) < size:
                    break
                if all(len(word) >= MIN_PHRASE_WORD_LENGTH for word in window):
                    positions[" ".join(window)].append(i)

        recurring = [
            RecurringPhrase(phrase, len(starts), starts, [index.words[i].start_offset for i in starts])
            for phrase, starts in positions.items()
            if len(starts) >= MIN_PHRASE_COUNT
        ]
        recurring.sort(key=lambda phrase: phrase.count, reverse=True)
        return recurring[:MAX_RECURRING_PHRASES]
