"""Craft analyzers built on the shared tokenizer."""

from .readability import ReadabilityAnalyzer, ReadabilityMetrics
from .beat_detector import BeatDetector, BeatSheetAnalysis, StoryBeat
from .pov_checker import POVChecker, POVAnalysis, POVIssue
from .motif_tracker import MotifTracker, MotifAnalysis, Motif, RecurringPhrase
from .engine import ANALYZERS, run_analysis, run_all
from .session import AnalysisSession

__all__ = [
    "ReadabilityAnalyzer",
    "ReadabilityMetrics",
    "BeatDetector",
    "BeatSheetAnalysis",
    "StoryBeat",
    "POVChecker",
    "POVAnalysis",
    "POVIssue",
    "MotifTracker",
    "MotifAnalysis",
    "Motif",
    "RecurringPhrase",
    "ANALYZERS",
    "run_analysis",
    "run_all",
    "AnalysisSession",
]
