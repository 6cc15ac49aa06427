"""Readability scoring with the standard published indices."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import math

from ..core.lexicon import clean_word, estimate_syllables
from ..core.tokenizer import PositionIndex, tokenize

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 238
NOT_AVAILABLE = "N/A"


def round_half_up(value: float, places: int = 1) -> float:
    """Round to ``places`` decimals with halves rounded up (not to even)."""
    scale = 10 ** places
    return math.floor(value * scale + 0.5) / scale


def reading_level(flesch_reading_ease: float) -> str:
    """Map Flesch Reading Ease onto a school-grade band."""
    if flesch_reading_ease >= 90:
        return "5th Grade"
    if flesch_reading_ease >= 80:
        return "6th Grade"
    if flesch_reading_ease >= 70:
        return "7th Grade"
    if flesch_reading_ease >= 60:
        return "8th-9th Grade"
    if flesch_reading_ease >= 50:
        return "10th-12th Grade"
    if flesch_reading_ease >= 30:
        return "College"
    return "College Graduate"


def reading_time(word_count: int) -> str:
    """Anything short of a full minute of reading shows as "< 1 min"."""
    minutes = word_count / WORDS_PER_MINUTE
    if minutes < 1:
        return "< 1 min"
    return f"{math.ceil(minutes)} min"


@dataclass
class ReadabilityMetrics:
    """Flat readability record for a manuscript."""

    total_sentences: int = 0
    total_words: int = 0
    total_syllables: int = 0
    complex_words: int = 0
    average_words_per_sentence: float = 0.0
    average_syllables_per_word: float = 0.0
    percent_complex_words: float = 0.0
    flesch_reading_ease: float = 0.0
    flesch_kincaid_grade: float = 0.0
    gunning_fog_index: float = 0.0
    smog_index: float = 0.0
    reading_level: str = NOT_AVAILABLE
    reading_time: str = "< 1 min"
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary for serialization."""
        return {
            "total_sentences": self.total_sentences,
            "total_words": self.total_words,
            "total_syllables": self.total_syllables,
            "complex_words": self.complex_words,
            "average_words_per_sentence": self.average_words_per_sentence,
            "average_syllables_per_word": self.average_syllables_per_word,
            "percent_complex_words": self.percent_complex_words,
            "flesch_reading_ease": self.flesch_reading_ease,
            "flesch_kincaid_grade": self.flesch_kincaid_grade,
            "gunning_fog_index": self.gunning_fog_index,
            "smog_index": self.smog_index,
            "reading_level": self.reading_level,
            "reading_time": self.reading_time,
            "recommendations": self.recommendations,
        }


class ReadabilityAnalyzer:
    """Computes Flesch, Flesch-Kincaid, Gunning Fog and SMOG scores."""

    def analyze(self, text: str, index: Optional[PositionIndex] = None) -> ReadabilityMetrics:
        """Score a manuscript. Degenerate input returns zeroed defaults."""
        index = index or tokenize(text)

        words = [w for w in (clean_word(token.text) for token in index.words) if w]
        total_words = len(words)
        total_sentences = len(index.sentences)

        syllable_counts = [estimate_syllables(word) for word in words]
        total_syllables = sum(syllable_counts)
        complex_words = sum(1 for count in syllable_counts if count >= 3)

        metrics = ReadabilityMetrics(
            total_sentences=total_sentences,
            total_words=total_words,
            total_syllables=total_syllables,
            complex_words=complex_words,
            reading_time=reading_time(total_words),
        )

        if total_words == 0 or total_sentences == 0:
            logger.debug("Readability skipped: %d words, %d sentences", total_words, total_sentences)
            return metrics

        words_per_sentence = total_words / total_sentences
        syllables_per_word = total_syllables / total_words
        percent_complex = (complex_words / total_words) * 100

        fre = 206.835 - 1.015 * words_per_sentence - 84.6 * syllables_per_word
        fk_grade = 0.39 * words_per_sentence + 11.8 * syllables_per_word - 15.59
        fog = 0.4 * (words_per_sentence + percent_complex)
        smog = 1.043 * math.sqrt(complex_words * (30 / total_sentences)) + 3.1291

        metrics.average_words_per_sentence = round_half_up(words_per_sentence, 1)
        metrics.average_syllables_per_word = round_half_up(syllables_per_word, 2)
        metrics.percent_complex_words = round_half_up(percent_complex, 1)
        metrics.flesch_reading_ease = round_half_up(fre, 1)
        metrics.flesch_kincaid_grade = round_half_up(fk_grade, 1)
        metrics.gunning_fog_index = round_half_up(fog, 1)
        metrics.smog_index = round_half_up(smog, 1)
        metrics.reading_level = reading_level(fre)
        metrics.recommendations = self._recommendations(metrics, complex_words / total_words)

        logger.debug(
            "Readability: %d words, %d sentences, FRE %.1f",
            total_words, total_sentences, metrics.flesch_reading_ease,
        )
        return metrics

    def _recommendations(self, metrics: ReadabilityMetrics, complex_ratio: float) -> List[str]:
        recommendations = []

        if metrics.average_words_per_sentence > 25:
            recommendations.append(
                f"Shorten sentences (average is {metrics.average_words_per_sentence} words)"
            )
        if complex_ratio > 0.15:
            recommendations.append("Reduce complex words for easier reading")
        if metrics.flesch_reading_ease < 50:
            recommendations.append("Text is difficult - consider simplifying language")
        if metrics.flesch_kincaid_grade > 12:
            recommendations.append("Grade level is high - consider your target audience")
        if metrics.average_words_per_sentence <= 15 and metrics.flesch_reading_ease >= 70:
            recommendations.append("Text is clear and easy to read!")

        return recommendations
