"""Core tokenization, dictionaries and finding types for CraftLens."""

from .tokenizer import Token, TokenKind, PositionIndex, tokenize
from .findings import Finding, Position, Severity
from .templates import BeatDefinition, StructureTemplate, TEMPLATES, get_template
from .lexicon import SymbolEntry, SYMBOLS, THEME_KEYWORDS, SYNONYMS

__all__ = [
    "Token",
    "TokenKind",
    "PositionIndex",
    "tokenize",
    "Finding",
    "Position",
    "Severity",
    "BeatDefinition",
    "StructureTemplate",
    "TEMPLATES",
    "get_template",
    "SymbolEntry",
    "SYMBOLS",
    "THEME_KEYWORDS",
    "SYNONYMS",
]
