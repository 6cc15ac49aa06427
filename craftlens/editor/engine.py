"""Single entry point for running analyzers by name."""

from types import MappingProxyType
from typing import Any, Dict, Iterable, Optional
import logging

from ..core.tokenizer import PositionIndex, tokenize
from .beat_detector import BeatDetector
from .motif_tracker import MotifTracker
from .pov_checker import POVChecker
from .readability import ReadabilityAnalyzer

logger = logging.getLogger(__name__)

ANALYZERS = MappingProxyType({
    "readability": ReadabilityAnalyzer,
    "beats": BeatDetector,
    "pov": POVChecker,
    "motifs": MotifTracker,
})


def run_analysis(
    name: str,
    text: str,
    index: Optional[PositionIndex] = None,
    structure_template=None,
):
    """Run one analyzer on the full manuscript text and return its result object.

    ``structure_template`` only applies to the beat detector.
    """
    if name not in ANALYZERS:
        raise ValueError(f"Unknown analyzer '{name}'. Choose from: {', '.join(ANALYZERS)}")

    analyzer = ANALYZERS[name]()
    if name == "beats":
        return analyzer.analyze(text, structure_template=structure_template, index=index)
    return analyzer.analyze(text, index=index)


def run_all(
    text: str,
    names: Optional[Iterable[str]] = None,
    structure_template=None,
) -> Dict[str, Any]:
    """Run several analyzers over one shared tokenization pass."""
    index = tokenize(text)
    names = list(names or ANALYZERS)
    logger.debug("Running %s over %d words", ", ".join(names), index.word_count)
    return {
        name: run_analysis(name, text, index=index, structure_template=structure_template)
        for name in names
    }
