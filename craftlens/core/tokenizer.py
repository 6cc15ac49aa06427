"""Tokenization and position mapping for manuscripts.

Every analyzer works from a :class:`PositionIndex` instead of re-scanning the
raw text, so any finding can be traced back to a character range in the
manuscript the host passed in.
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Pattern
import re


WORD_PATTERN = re.compile(r"\S+")
SENTENCE_BREAK = re.compile(r"[.!?]+")
PARAGRAPH_BREAK = re.compile(r"(?:\r?\n){2,}")


class TokenKind(Enum):
    """Granularity of a token."""
    WORD = "word"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Token:
    """A unit of text anchored to its character range in the source."""

    text: str
    kind: TokenKind
    start_offset: int
    end_offset: int
    ordinal: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert token to dictionary for serialization."""
        return {
            "text": self.text,
            "kind": self.kind.value,
            "start_offset": self.start_offset,
            "end_offset": self.end_offset,
            "ordinal": self.ordinal,
        }


def _split_spans(text: str, delimiter: Pattern, kind: TokenKind) -> List[Token]:
    """Split on a delimiter pattern, trimming whitespace and dropping empty segments."""
    tokens: List[Token] = []
    cursor = 0
    bounds = [(m.start(), m.end()) for m in delimiter.finditer(text)]
    bounds.append((len(text), len(text)))

    for delim_start, delim_end in bounds:
        segment = text[cursor:delim_start]
        stripped = segment.strip()
        if stripped:
            start = cursor + (len(segment) - len(segment.lstrip()))
            end = start + len(stripped)
            tokens.append(Token(stripped, kind, start, end, len(tokens)))
        cursor = delim_end

    return tokens


@dataclass
class PositionIndex:
    """Aligned word, sentence and paragraph sequences for one manuscript."""

    text: str
    words: List[Token] = field(default_factory=list)
    sentences: List[Token] = field(default_factory=list)
    paragraphs: List[Token] = field(default_factory=list)

    def __post_init__(self):
        self._word_starts = [token.start_offset for token in self.words]

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def is_empty(self) -> bool:
        return not self.words

    def tokens(self, kind: TokenKind) -> List[Token]:
        """Return the token sequence for a kind."""
        if kind is TokenKind.WORD:
            return self.words
        if kind is TokenKind.SENTENCE:
            return self.sentences
        return self.paragraphs

    def word_at_offset(self, offset: int) -> Optional[Token]:
        """Return the word token whose range contains or precedes the offset."""
        if not self.words or offset < 0:
            return None
        idx = bisect_right(self._word_starts, offset) - 1
        if idx < 0:
            return None
        return self.words[idx]

    def word_ordinal_at(self, offset: int) -> int:
        """Ordinal of the word containing (or preceding) an offset, 0 if none."""
        token = self.word_at_offset(offset)
        return token.ordinal if token else 0

    def resolve(self, position) -> Optional[Token]:
        """Map a finding's position back to the token it points at."""
        if position.unit == "character":
            return self.word_at_offset(position.offset)

        sequence = self.tokens(TokenKind(position.unit))
        if 0 <= position.ordinal < len(sequence):
            return sequence[position.ordinal]
        return None


def tokenize(text: str) -> PositionIndex:
    """Build the position index for a manuscript.

    Empty or whitespace-only input yields empty sequences. A value that is not
    a string is rejected here so analyzers never have to check types.
    """
    if not isinstance(text, str):
        raise TypeError(f"Manuscript text must be a string, got {type(text).__name__}")

    words = [
        Token(match.group(), TokenKind.WORD, match.start(), match.end(), ordinal)
        for ordinal, match in enumerate(WORD_PATTERN.finditer(text))
    ]

    return PositionIndex(
        text=text,
        words=words,
        sentences=_split_spans(text, SENTENCE_BREAK, TokenKind.SENTENCE),
        paragraphs=_split_spans(text, PARAGRAPH_BREAK, TokenKind.PARAGRAPH),
    )
