"""
CraftLens - Heuristic craft analysis for fiction manuscripts.
"""

__version__ = "1.0.0"
__author__ = "CraftLens Team"

from .core import PositionIndex, Finding, Position, tokenize, get_template
from .editor import (
    ReadabilityAnalyzer,
    BeatDetector,
    POVChecker,
    MotifTracker,
    AnalysisSession,
    run_analysis,
    run_all,
)

__all__ = [
    "PositionIndex",
    "Finding",
    "Position",
    "tokenize",
    "get_template",
    "ReadabilityAnalyzer",
    "BeatDetector",
    "POVChecker",
    "MotifTracker",
    "AnalysisSession",
    "run_analysis",
    "run_all",
]
