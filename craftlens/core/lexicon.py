"""Lexical utilities and static word dictionaries.

Everything here is stateless. The dictionaries are module-level read-only
tables shared by all analyzers.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Pattern, Sequence, Tuple
import re


NON_WORD_CHARS = re.compile(r"[^a-zA-Z'-]")
NON_LETTERS = re.compile(r"[^a-z]")
VOWEL_GROUPS = re.compile(r"[aeiouy]+")

RHYME_SCHEME_LINE_LIMIT = 20


def clean_word(word: str) -> str:
    """Strip everything except letters, apostrophes and hyphens."""
    return NON_WORD_CHARS.sub("", word)


def estimate_syllables(word: str) -> int:
    """Estimate syllables by counting vowel groups.

    Words of three letters or fewer count as one syllable.
    """
    word = NON_LETTERS.sub("", word.lower())
    if len(word) <= 3:
        return 1
    return max(1, len(VOWEL_GROUPS.findall(word)))


def is_complex(word: str) -> bool:
    """A word is complex when it has three or more syllables."""
    return estimate_syllables(word) >= 3


def last_word(line: str) -> str:
    """Return the final word of a line, lowercased, letters only."""
    words = line.strip().split()
    if not words:
        return ""
    return NON_LETTERS.sub("", words[-1].lower())


def rhymes(word1: str, word2: str) -> bool:
    """Crude end-rhyme check on the last two or three letters."""
    if len(word1) < 2 or len(word2) < 2:
        return False
    return word1[-2:] == word2[-2:] or word1[-3:] == word2[-3:]


def rhyme_scheme(lines: Sequence[str]) -> str:
    """Label lines with rhyme letters (A, B, C, ...).

    Blank lines are skipped and only the first twenty lines are labelled.
    A line takes the letter of the first earlier line it rhymes with.
    """
    endings: List[str] = []
    letters: List[str] = []
    next_letter = ord("A")

    for line in [l for l in lines if l.strip()][:RHYME_SCHEME_LINE_LIMIT]:
        ending = last_word(line)
        for prev_ending, prev_letter in zip(endings, letters):
            if rhymes(ending, prev_ending):
                letters.append(prev_letter)
                break
        else:
            letters.append(chr(next_letter))
            next_letter += 1
        endings.append(ending)

    return "".join(letters)


@dataclass(frozen=True)
class SymbolEntry:
    """A canonical image and what it traditionally stands for."""

    symbol: str
    meanings: Tuple[str, ...]

    @property
    def significance(self) -> str:
        return ", ".join(self.meanings)


def _symbol(symbol: str, meanings: str) -> SymbolEntry:
    return SymbolEntry(symbol, tuple(meanings.split(", ")))


SYMBOLS: Tuple[SymbolEntry, ...] = (
    _symbol("light", "enlightenment, hope, knowledge, purity"),
    _symbol("darkness", "ignorance, evil, mystery, the unknown"),
    _symbol("water", "life, cleansing, change, the subconscious"),
    _symbol("fire", "passion, destruction, transformation, energy"),
    _symbol("mirror", "reflection, truth, self-awareness, duality"),
    _symbol("door", "opportunity, transition, choice, threshold"),
    _symbol("window", "perspective, observation, barrier, insight"),
    _symbol("blood", "life force, sacrifice, violence, family ties"),
    _symbol("rose", "love, beauty, passion, secrecy"),
    _symbol("crow", "death, intelligence, transformation, prophecy"),
    _symbol("dove", "peace, innocence, hope, spirit"),
    _symbol("snake", "temptation, danger, wisdom, rebirth"),
    _symbol("tree", "growth, life, connection, stability"),
    _symbol("road", "journey, choice, destiny, progress"),
    _symbol("storm", "conflict, chaos, change, emotional turmoil"),
    _symbol("sunrise", "new beginning, hope, revelation"),
    _symbol("sunset", "ending, reflection, transition"),
    _symbol("moon", "femininity, mystery, cycles, emotion"),
    _symbol("sun", "masculinity, life, power, clarity"),
    _symbol("shadow", "the unknown, fear, hidden aspects, duality"),
    _symbol("bridge", "connection, transition, overcoming obstacles"),
    _symbol("key", "solution, access, knowledge, control"),
    _symbol("sword", "power, conflict, justice, decision"),
    _symbol("heart", "love, emotion, center, compassion"),
    _symbol("chains", "bondage, oppression, limitation, connection"),
)

SYMBOL_MEANINGS = MappingProxyType({entry.symbol: entry for entry in SYMBOLS})

THEME_KEYWORDS = MappingProxyType({
    "identity": ("who am i", "who i am", "true self", "identity", "become"),
    "betrayal": ("betrayed", "trust", "loyalty", "deceive", "lie"),
    "redemption": ("redeem", "forgive", "atone", "second chance", "salvation"),
    "sacrifice": ("sacrifice", "give up", "cost", "price", "lose"),
    "power": ("power", "control", "dominate", "authority", "rule"),
    "freedom": ("freedom", "free", "escape", "liberty", "independence"),
    "revenge": ("revenge", "vengeance", "payback", "retribution"),
    "love": ("love", "heart", "feel", "care", "passion"),
    "death": ("death", "die", "end", "mortality", "perish"),
    "justice": ("justice", "fair", "right", "wrong", "judge"),
})

SYNONYMS = MappingProxyType({
    "happy": ("joyful", "elated", "content", "delighted", "pleased"),
    "sad": ("melancholy", "sorrowful", "dejected", "downcast", "gloomy"),
    "angry": ("furious", "irate", "upset", "annoyed", "frustrated"),
    "big": ("large", "enormous", "massive", "huge", "substantial"),
    "small": ("tiny", "little", "petite", "minor", "compact"),
    "good": ("excellent", "great", "fine", "wonderful", "superb"),
    "bad": ("terrible", "awful", "poor", "dreadful", "unpleasant"),
    "walk": ("stroll", "amble", "stride", "march", "wander"),
    "run": ("sprint", "dash", "race", "jog", "hurry"),
    "look": ("gaze", "stare", "glance", "peer", "observe"),
    "say": ("state", "declare", "mention", "remark", "announce"),
    "think": ("believe", "consider", "suppose", "imagine", "reckon"),
    "very": ("extremely", "quite", "remarkably", "particularly", "highly"),
    "beautiful": ("gorgeous", "stunning", "lovely", "attractive", "elegant"),
    "fast": ("quick", "rapid", "swift", "speedy", "brisk"),
    "slow": ("gradual", "leisurely", "unhurried", "sluggish", "steady"),
    "start": ("begin", "commence", "initiate", "launch", "embark"),
    "end": ("finish", "conclude", "complete", "terminate", "wrap up"),
    "help": ("assist", "aid", "support", "guide", "facilitate"),
    "show": ("display", "demonstrate", "reveal", "present", "exhibit"),
    "make": ("create", "produce", "build", "construct", "form"),
    "get": ("obtain", "acquire", "receive", "gain", "secure"),
    "use": ("utilize", "employ", "apply", "implement", "operate"),
    "want": ("desire", "wish", "seek", "crave", "long for"),
    "need": ("require", "demand", "necessitate", "call for", "depend on"),
    "know": ("understand", "realize", "recognize", "comprehend", "grasp"),
    "see": ("observe", "notice", "spot", "witness", "view"),
    "come": ("arrive", "approach", "reach", "appear", "emerge"),
    "go": ("proceed", "advance", "move", "travel", "head"),
    "take": ("grab", "seize", "acquire", "accept", "receive"),
    "give": ("provide", "offer", "present", "deliver", "grant"),
    "find": ("discover", "locate", "uncover", "detect", "identify"),
    "tell": ("inform", "notify", "advise", "explain", "describe"),
    "ask": ("inquire", "question", "request", "query", "seek"),
    "work": ("function", "operate", "perform", "labor", "toil"),
    "seem": ("appear", "look", "sound", "feel", "come across as"),
    "feel": ("sense", "experience", "perceive", "notice", "undergo"),
    "try": ("attempt", "endeavor", "strive", "aim", "seek"),
    "leave": ("depart", "exit", "abandon", "vacate", "withdraw"),
    "call": ("contact", "phone", "summon", "name", "label"),
    "keep": ("maintain", "retain", "preserve", "hold", "sustain"),
    "let": ("allow", "permit", "enable", "authorize", "grant"),
    "put": ("place", "set", "position", "lay", "deposit"),
    "mean": ("signify", "indicate", "imply", "denote", "represent"),
    "become": ("turn into", "grow", "develop into", "evolve into", "transform into"),
    "bring": ("carry", "deliver", "transport", "convey", "fetch"),
    "begin": ("start", "commence", "initiate", "launch", "open"),
    "hold": ("grasp", "grip", "clutch", "clasp", "embrace"),
    "write": ("compose", "author", "draft", "pen", "record"),
    "provide": ("supply", "furnish", "offer", "give", "deliver"),
    "stand": ("rise", "remain", "endure", "tolerate", "bear"),
    "lose": ("misplace", "forfeit", "surrender", "sacrifice", "waste"),
    "pay": ("compensate", "reimburse", "settle", "remunerate", "fund"),
    "meet": ("encounter", "greet", "join", "gather", "assemble"),
    "include": ("contain", "comprise", "incorporate", "encompass", "cover"),
    "continue": ("proceed", "persist", "carry on", "resume", "maintain"),
    "set": ("establish", "arrange", "place", "position", "configure"),
    "learn": ("discover", "study", "master", "absorb", "acquire"),
    "change": ("alter", "modify", "adjust", "transform", "revise"),
    "lead": ("guide", "direct", "head", "conduct", "steer"),
    "understand": ("comprehend", "grasp", "fathom", "realize", "perceive"),
    "watch": ("observe", "view", "monitor", "survey", "scrutinize"),
    "follow": ("pursue", "trail", "track", "shadow", "accompany"),
    "stop": ("halt", "cease", "pause", "discontinue", "end"),
    "create": ("make", "produce", "generate", "develop", "design"),
    "speak": ("talk", "converse", "communicate", "articulate", "express"),
    "read": ("peruse", "scan", "study", "examine", "review"),
    "allow": ("permit", "enable", "authorize", "let", "grant"),
    "add": ("include", "append", "attach", "supplement", "insert"),
    "spend": ("use", "expend", "consume", "allocate", "invest"),
    "grow": ("expand", "develop", "increase", "flourish", "thrive"),
    "open": ("unlock", "unfold", "reveal", "expose", "uncover"),
    "move": ("shift", "relocate", "transfer", "transport", "displace"),
    "like": ("enjoy", "appreciate", "favor", "prefer", "admire"),
    "live": ("reside", "dwell", "inhabit", "exist", "survive"),
    "believe": ("think", "consider", "trust", "accept", "assume"),
    "happen": ("occur", "take place", "transpire", "unfold", "arise"),
    "love": ("adore", "cherish", "treasure", "appreciate", "admire"),
    "sit": ("settle", "rest", "perch", "seat oneself", "recline"),
    "wait": ("remain", "stay", "linger", "pause", "hold on"),
    "send": ("dispatch", "transmit", "deliver", "forward", "ship"),
    "expect": ("anticipate", "await", "predict", "foresee", "count on"),
    "build": ("construct", "erect", "assemble", "create", "establish"),
    "stay": ("remain", "linger", "wait", "reside", "continue"),
    "fall": ("drop", "descend", "plunge", "tumble", "collapse"),
    "cut": ("slice", "trim", "chop", "carve", "sever"),
    "reach": ("arrive at", "attain", "achieve", "get to", "extend to"),
    "kill": ("eliminate", "destroy", "slay", "terminate", "end"),
    "remain": ("stay", "persist", "endure", "continue", "linger"),
})


def synonyms_for(word: str, limit: int = 5) -> List[str]:
    """Look up alternatives for a word, case-insensitively."""
    return list(SYNONYMS.get(clean_word(word).lower(), ()))[:limit]


def whole_word_pattern(phrase: str) -> Pattern:
    """Compile a case-insensitive whole-word pattern for a dictionary entry."""
    return re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)
