import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from filterflow.constants import (
    FILTERFLOW_DEFAULT_FILTERS_DIR,
    FILTERFLOW_DEFAULT_LOGGER,
    FILTERFLOW_DEFAULT_SETTINGS_FILE,
)
from filterflow.exceptions import SettingsError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FilterFlowSettings(BaseSettings):
    """
    Configuration for custom filter loading and logging.

    Keyword overrides and the YAML file win over FILTERFLOW_SETTINGS_* environment
    variables, which win over the field defaults. For example:
    - FILTERFLOW_SETTINGS_LOCAL_FILTERS=["filters", "more_filters"]
    - FILTERFLOW_SETTINGS_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="FILTERFLOW_SETTINGS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="forbid",
    )

    local_filters: list[str] = Field(
        default=[FILTERFLOW_DEFAULT_FILTERS_DIR],
        description="List of directories containing custom filter functions",
    )
    allow_filter_override: bool = Field(
        default=False, description="Whether custom filters may override already registered filters"
    )
    log_level: str = Field(default=FILTERFLOW_DEFAULT_LOGGER["level"], description="Logging level")
    log_dir: str | None = Field(
        default=None, description="Directory for log files; file logging is disabled when unset"
    )

    _base_dir: Path | None = PrivateAttr(default=None)
    _settings_file: str | None = PrivateAttr(default=None)

    @field_validator("local_filters", mode="before")
    @classmethod
    def validate_local_filters(cls, v: Any) -> list[str]:
        """Accept a single directory as a string."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Normalize and validate the log level name."""
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}")
        return level

    def resolve_relative_paths(self) -> "FilterFlowSettings":
        """Make relative ``local_filters`` entries and ``log_dir`` absolute against ``base_dir``."""
        base_dir = self.base_dir
        if not base_dir:
            return self

        self.local_filters = [
            dir_path if Path(dir_path).is_absolute() else str(base_dir / dir_path)
            for dir_path in self.local_filters
        ]

        if self.log_dir and not Path(self.log_dir).is_absolute():
            self.log_dir = str(base_dir / self.log_dir)

        return self

    @classmethod
    def load(
        cls, settings_file: str | None = None, base_dir: Path | None = None, **overrides: Any
    ) -> "FilterFlowSettings":
        """
        Load settings from a YAML file with automatic resolution and overrides.

        Settings file resolution priority (highest to lowest):
        1. Explicit settings_file parameter (caller's direct intent)
        2. FILTERFLOW_SETTINGS environment variable (session default)
        3. Default "filterflow.yaml" in current directory

        An explicitly requested file that does not exist is an error. When the
        default file is absent, defaults (plus overrides) are used instead.

        Args:
            settings_file: Path to settings YAML file.
            base_dir: Base directory for resolving relative paths. If None, uses the
                     directory containing the resolved settings file.
            **overrides: Additional settings to override YAML values. Example: log_level="DEBUG"

        Returns:
            FilterFlowSettings instance with all paths resolved.

        Raises:
            SettingsError: If settings file not found or contains invalid data.

        Examples:
            settings = FilterFlowSettings.load()
            settings = FilterFlowSettings.load("configs/filterflow.yaml", allow_filter_override=True)
        """
        explicit_file = settings_file or os.getenv("FILTERFLOW_SETTINGS")
        resolved_file = explicit_file or FILTERFLOW_DEFAULT_SETTINGS_FILE
        settings_path = Path(resolved_file).resolve()

        if not settings_path.exists():
            if explicit_file:
                raise SettingsError(
                    f"Settings file not found: {resolved_file}\n"
                    f"Resolved to absolute path: {settings_path}\n"
                    f"Current working directory: {Path.cwd()}"
                )
            instance = cls._build(overrides)
            instance._base_dir = base_dir or Path.cwd()
            return instance.resolve_relative_paths()

        try:
            with settings_path.open() as f:
                yaml_data = yaml.safe_load(f) or {}
        except Exception as e:
            raise SettingsError(f"Failed to load settings from {resolved_file}: {e}") from e

        if not isinstance(yaml_data, dict):
            raise SettingsError(
                f"Settings file must contain a YAML dictionary, got {type(yaml_data).__name__}"
            )

        instance = cls._build({**yaml_data, **overrides})
        instance._base_dir = base_dir or settings_path.parent
        instance._settings_file = str(settings_path)

        return instance.resolve_relative_paths()

    @classmethod
    def _build(cls, data: dict[str, Any]) -> "FilterFlowSettings":
        try:
            return cls(**data)
        except ValueError as e:
            raise SettingsError(f"Invalid settings: {e}") from e

    @property
    def as_dict(self) -> dict[str, Any]:
        """Plain dict of the field values."""
        return self.model_dump()

    @property
    def base_dir(self) -> Path | None:
        """Directory relative paths are resolved against, if known."""
        if self._base_dir:
            return self._base_dir
        if self._settings_file:
            return Path(self._settings_file).parent
        return None

    @property
    def settings_file(self) -> str | None:
        """Absolute path of the loaded settings file, if one was found."""
        return self._settings_file

    def __str__(self) -> str:
        return str(self.as_dict)
