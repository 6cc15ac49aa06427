"""Settings for the CraftLens command line.

Values come from, in increasing priority: built-in defaults, a YAML file
(``craftlens.yaml`` in the working directory or an explicit path), and
``CRAFTLENS_*`` environment variables (a ``.env`` file is loaded first).
Analyzer constants are not configurable.
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
import os

from dotenv import load_dotenv

from .core.templates import DEFAULT_TEMPLATE, TEMPLATES
from .io.file_handler import FileHandler

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "craftlens.yaml"
OUTPUT_FORMATS = ("text", "json", "yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_OVERRIDES = {
    "default_template": "CRAFTLENS_TEMPLATE",
    "output_format": "CRAFTLENS_FORMAT",
    "log_level": "CRAFTLENS_LOG_LEVEL",
}


@dataclass
class AnalysisSettings:
    """User-adjustable CLI settings."""

    default_template: str = DEFAULT_TEMPLATE
    output_format: str = "text"
    log_level: str = "WARNING"

    def normalize(self) -> None:
        """Check value types and fold case. Raises ValueError for non-string values."""
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {value!r}")
        self.default_template = self.default_template.lower()
        self.output_format = self.output_format.lower()
        self.log_level = self.log_level.upper()

    def validate(self) -> None:
        if self.default_template not in TEMPLATES:
            raise ValueError(
                f"default_template must be one of {', '.join(TEMPLATES)}, got '{self.default_template}'"
            )
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, got '{self.output_format}'"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{self.log_level}'")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisSettings":
        """Create settings from a mapping, ignoring unknown keys."""
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            logger.warning("Ignoring unknown settings: %s", ", ".join(sorted(unknown)))
        return cls(**{key: data[key] for key in cls.__dataclass_fields__ if key in data})


def load_settings(config_path: Optional[Union[str, Path]] = None) -> AnalysisSettings:
    """Load settings from defaults, an optional YAML file and the environment."""
    load_dotenv()

    data: Dict[str, Any] = {}
    path = Path(config_path) if config_path else Path.cwd() / DEFAULT_CONFIG_FILE
    if path.exists():
        loaded = FileHandler().read_yaml(path)
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        data.update(loaded)
        logger.debug("Loaded settings from %s", path)
    elif config_path:
        raise FileNotFoundError(f"Config file not found: {path}")

    for key, env_var in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            data[key] = value

    settings = AnalysisSettings.from_dict(data)
    settings.normalize()
    settings.validate()
    return settings
