"""Configuration loader for the lexicon highlighter."""

import logging
from pathlib import Path
from typing import Any, Literal, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lexhighlight.preferences import ExclusionPreferences

ModelT = TypeVar("ModelT", bound=BaseModel)


class LexiconConfig(BaseModel):
    """Locations of the lexicon files."""

    main_path: str = Field(..., description="Path to the main lexicon JSON array", min_length=1)
    extra_path: str | None = Field(None, description="Path to an optional extra lexicon JSON array")

    model_config = ConfigDict(frozen=True, extra="forbid")


class MatchingConfig(BaseModel):
    """Configuration for index construction."""

    expand_inflection_tail: bool = Field(
        False,
        description="Also index the last token of multi-word inflection variants as a single-word phrase",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


class LoggingConfig(BaseModel):
    """Configuration for script logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO", description="Root log level")

    model_config = ConfigDict(frozen=True, extra="forbid")


def _format_validation_error(e: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors())


class Config:
    """Configuration class that loads and provides access to config.yaml."""

    def __init__(self, config_path: str | Path) -> None:
        """Initialize the Config by loading the YAML file.

        Args:
            config_path: Path to the config.yaml file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            yaml.YAMLError: If the YAML file is invalid.
            KeyError: If the required 'lexicon' section is missing.
            ValueError: If any section is invalid.
        """
        self.config_path = Path(config_path)
        self._load(self.config_path)

        self._lexicon = self._validate_lexicon()
        self._matching = self._validate_section("matching", MatchingConfig)
        self._preferences = self._validate_section("preferences", ExclusionPreferences)
        self._logging = self._validate_section("logging", LoggingConfig)

    def _load(self, config_path: Path) -> None:
        """Load the configuration from a YAML file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            yaml.YAMLError: If the YAML file is invalid.
            ValueError: If the YAML root is not a mapping.
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        # Empty file: let the required-section check report it
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping: {config_path}")

        self._data: dict[str, Any] = data

    def _validate_lexicon(self) -> LexiconConfig:
        """Validate the required lexicon section.

        Raises:
            KeyError: If the lexicon section is missing.
            ValueError: If the lexicon section is invalid.
        """
        if "lexicon" not in self._data:
            raise KeyError("Missing required key 'lexicon' in config file")

        try:
            return LexiconConfig.model_validate(self._data["lexicon"])
        except ValidationError as e:
            raise ValueError(f"Lexicon configuration validation failed: {_format_validation_error(e)}") from e

    def _validate_section(self, key: str, model: type[ModelT]) -> ModelT:
        """Validate an optional section, using the model defaults when it is absent.

        Raises:
            ValueError: If the section is present but invalid.
        """
        raw = self._data.get(key)
        if raw is None:
            raw = {}

        try:
            return model.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"{key.capitalize()} configuration validation failed: {_format_validation_error(e)}") from e

    def getConfigPath(self) -> Path:
        """Get the path to config.yaml."""
        return self.config_path

    def getMainLexiconPath(self) -> Path:
        """Get the main lexicon path (relative or absolute)."""
        return Path(self._lexicon.main_path)

    def getExtraLexiconPath(self) -> Path | None:
        """Get the extra lexicon path, or None when not configured."""
        if self._lexicon.extra_path is None:
            return None
        return Path(self._lexicon.extra_path)

    def get_matching_config(self) -> MatchingConfig:
        """Get index construction settings."""
        return self._matching

    def get_preferences(self) -> ExclusionPreferences:
        """Get the exclusion preferences configured for startup."""
        return self._preferences

    def getLogLevel(self) -> int:
        """Get the configured log level as a logging module constant."""
        return logging.getLevelNamesMapping()[self._logging.level]
