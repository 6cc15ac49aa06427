"""Story structure templates used by the beat detector."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Tuple, Union


@dataclass(frozen=True)
class BeatDefinition:
    """A structural story event expected near a position in the narrative."""

    name: str
    description: str
    keywords: Tuple[str, ...]
    expected_position_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "keywords": list(self.keywords),
            "expected_position_percent": self.expected_position_percent,
        }


@dataclass(frozen=True)
class StructureTemplate:
    """Ordered list of beats making up a story structure."""

    key: str
    name: str
    beats: Tuple[BeatDefinition, ...]

    def __len__(self) -> int:
        return len(self.beats)

    def to_dict(self) -> Dict[str, Any]:
        """Convert template to dictionary for serialization."""
        return {
            "key": self.key,
            "name": self.name,
            "beats": [beat.to_dict() for beat in self.beats],
        }


def _beat(name: str, description: str, keywords: List[str], position: float) -> BeatDefinition:
    return BeatDefinition(name, description, tuple(keywords), position)


THREE_ACT = StructureTemplate("three-act", "Three-Act", (
    _beat("Opening Image", "The beginning of the story",
          ["begin", "start", "first", "once", "introduce"], 0),
    _beat("Inciting Incident", "Event that sets the story in motion",
          ["sudden", "unexpected", "arrived", "discovered", "learned", "revealed", "changed", "when"], 12),
    _beat("Lock In / Point of No Return", "Protagonist commits to the journey",
          ["decided", "must", "had to", "committed", "agreed", "couldn't", "no choice"], 25),
    _beat("Midpoint", "Major turning point or revelation",
          ["realized", "discovered", "truth", "everything changed", "understood", "revelation", "twist"], 50),
    _beat("All Is Lost", "Lowest point for the protagonist",
          ["failed", "lost", "defeated", "hopeless", "death", "destroyed", "never", "impossible"], 75),
    _beat("Climax", "Final confrontation",
          ["final", "last", "confronted", "faced", "battle", "showdown", "ultimate"], 88),
    _beat("Resolution", "Story wraps up",
          ["finally", "end", "at last", "peace", "settled", "concluded", "ever after"], 95),
))

FIVE_ACT = StructureTemplate("five-act", "Five-Act", (
    _beat("Exposition", "Setting and character introduction",
          ["introduce", "lived", "was", "known", "ordinary"], 0),
    _beat("Rising Action", "Conflict develops",
          ["began", "started", "conflict", "problem", "tension", "complicated"], 20),
    _beat("Climax", "Highest point of action",
          ["peak", "highest", "most", "critical", "crucial", "decisive"], 50),
    _beat("Falling Action", "Aftermath of climax",
          ["after", "following", "consequence", "result", "outcome"], 75),
    _beat("Denouement", "Resolution and conclusion",
          ["finally", "end", "concluded", "settled", "peace"], 90),
))

HERO_JOURNEY = StructureTemplate("hero-journey", "Hero's Journey", (
    _beat("Ordinary World", "Hero's normal life",
          ["ordinary", "normal", "usual", "everyday", "routine"], 0),
    _beat("Call to Adventure", "Hero receives a challenge",
          ["call", "summon", "quest", "mission", "challenge"], 10),
    _beat("Refusal of the Call", "Hero hesitates",
          ["refused", "hesitated", "doubt", "fear", "uncertain"], 15),
    _beat("Meeting the Mentor", "Hero finds guidance",
          ["mentor", "teacher", "guide", "wisdom", "learned", "taught"], 20),
    _beat("Crossing the Threshold", "Hero enters the special world",
          ["crossed", "entered", "journey", "left", "ventured"], 25),
    _beat("Tests, Allies, Enemies", "Hero faces challenges",
          ["test", "trial", "challenge", "ally", "enemy", "friend", "foe"], 40),
    _beat("Ordeal", "Greatest challenge",
          ["ordeal", "crisis", "death", "greatest", "hardest", "worst"], 60),
    _beat("Reward", "Hero seizes the prize",
          ["reward", "prize", "gained", "won", "achieved"], 70),
    _beat("The Road Back", "Hero returns to ordinary world",
          ["return", "back", "home", "journey back"], 80),
    _beat("Resurrection", "Final test",
          ["final", "last", "ultimate", "reborn", "transformed", "changed"], 90),
    _beat("Return with Elixir", "Hero brings back wisdom",
          ["wisdom", "lesson", "changed", "growth", "treasure"], 95),
))

TEMPLATES = MappingProxyType({
    template.key: template for template in (THREE_ACT, FIVE_ACT, HERO_JOURNEY)
})

DEFAULT_TEMPLATE = THREE_ACT.key


def get_template(template: Union[str, StructureTemplate, None] = None) -> StructureTemplate:
    """Resolve a template key (or pass a template object through)."""
    if isinstance(template, StructureTemplate):
        return template
    key = (template or DEFAULT_TEMPLATE).lower()
    if key not in TEMPLATES:
        raise ValueError(
            f"Unknown structure template '{template}'. "
            f"Choose from: {', '.join(TEMPLATES)}"
        )
    return TEMPLATES[key]
