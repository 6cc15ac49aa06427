"""Shared finding types returned by every analyzer."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Severity(Enum):
    """How serious a flagged issue is."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Position:
    """A location the host can scroll to.

    ``unit`` names the token sequence ``ordinal`` indexes into (word, sentence,
    paragraph) or ``character`` when the offset itself is the anchor.
    """

    unit: str
    ordinal: int
    offset: int

    def to_dict(self) -> Dict[str, Any]:
        return {"unit": self.unit, "ordinal": self.ordinal, "offset": self.offset}


@dataclass(frozen=True)
class Finding:
    """A single flagged observation anchored to the manuscript."""

    category: str
    location: Position
    excerpt: str
    description: str
    severity: Optional[Severity] = None
    confidence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert finding to dictionary for serialization."""
        return {
            "category": self.category,
            "location": self.location.to_dict(),
            "excerpt": self.excerpt,
            "description": self.description,
            "severity": self.severity.value if self.severity else None,
            "confidence": self.confidence,
        }
