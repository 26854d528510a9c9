"""Configuration loading for the flyer extraction tools."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config/extraction_config.json")
PROVIDER_ENV_VAR = "FLYER_PROVIDER"


class ConfigError(ValueError):
    """Raised when a config file exists but is not usable."""


@dataclass
class ExtractionConfig:
    """Settings for replaying model responses through the pipeline.

    ``provider`` is the model identifier recorded on successful outcomes
    when the caller does not name one.
    """

    provider: str = "gemini-2.0-flash"
    log_level: str = "INFO"

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def load_config(config_path: Path | None = None) -> ExtractionConfig:
    """Load extraction configuration from JSON, falling back to defaults.

    Reads ``config/extraction_config.json`` when *config_path* is None. A
    missing file yields defaults; unknown keys are ignored. The
    ``FLYER_PROVIDER`` environment variable overrides the provider.

    Args:
        config_path: Optional explicit path to the JSON config file.

    Returns:
        ExtractionConfig populated from file + environment overrides.

    Raises:
        ConfigError: If the file is not valid JSON, not a JSON object, or
            names an unknown log level.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    data: dict = {}
    if config_path.exists():
        try:
            with open(config_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a JSON object")

    field_names = {f.name for f in fields(ExtractionConfig)}
    kwargs = {k: v for k, v in data.items() if k in field_names}
    config = ExtractionConfig(**kwargs)

    level = config.log_level
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        raise ConfigError(f"Unknown log_level {level!r} in {config_path}")
    config.log_level = level.upper()

    provider = os.environ.get(PROVIDER_ENV_VAR)
    if provider:
        config.provider = provider

    return config
