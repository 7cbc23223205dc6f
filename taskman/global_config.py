"""Global configuration storage for taskman.

Stores user preferences like the data directory in ~/.taskman/config.json
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel

from taskman.domain.task import SortStrategy

logger = logging.getLogger(__name__)


class TrackerConfig(BaseModel):
    """User preferences."""

    # Relative paths resolve against the current working directory
    data_dir: str = "data"
    default_sort: SortStrategy = SortStrategy.PRIORITY_DESC

    def resolve_data_dir(self) -> Path:
        return Path(self.data_dir).expanduser().resolve()


def get_config_dir() -> Path:
    """Get the taskman config directory."""
    config_dir = Path.home() / ".taskman"
    config_dir.mkdir(exist_ok=True)
    return config_dir


def get_global_config() -> TrackerConfig:
    """Load global configuration, falling back to defaults."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return TrackerConfig(**data)
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring invalid config {config_file}: {e}")
    return TrackerConfig()  # defaults


def save_global_config(config: TrackerConfig) -> None:
    """Save global configuration."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(config.model_dump(mode="json"), indent=2),
        encoding="utf-8",
    )
