"""
Configuration schema and loading for Edgeline.

Two layers live here:

- ReaderConfiguration: the per-reader settings resolved from the host's flat
  key/value job configuration when a reader is initialized.
- IngestSettings: the CLI's run description, loaded from YAML through
  Dynaconf and rendered back into a job configuration with to_job_conf().

Uses Pydantic for validation. Settings are frozen (immutable) after
construction.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from edgeline.contracts.enums import OutputFormat

# Job configuration keys read by every reader.
DELIMITER_KEY = "simple.edge.delimiter"
DELIMITER_DEFAULT = ","
EDGE_VALUE_KEY = "simple.edge.value.default"
REVERSE_DUPLICATOR_KEY = "io.edge.reverse.duplicator"
REVERSE_DUPLICATOR_DEFAULT = "false"


def parse_flag(value: str | bool | None) -> bool:
    """Interpret a job configuration flag.

    Only the string "true" (any case) enables a flag. Everything else,
    including unrecognised spellings such as "yes", disables it.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return value.strip().lower() == "true"


class ReaderConfiguration(BaseModel):
    """Settings one reader resolves once, at initialization.

    Every reader builds its own instance from the job configuration, so
    changing the job configuration afterwards affects only readers
    initialized later.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    delimiter: str = DELIMITER_DEFAULT
    default_value: str
    reverse_duplicate: bool = False

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter_not_empty(cls, v: str) -> str:
        """An empty delimiter cannot split anything."""
        if not v:
            raise ValueError("delimiter cannot be empty")
        return v

    @classmethod
    def from_job_conf(cls, conf: Mapping[str, Any], default_value: str) -> "ReaderConfiguration":
        """Resolve reader settings from a job configuration.

        Args:
            conf: Flat key/value configuration handed down by the host
            default_value: Codec-supplied raw value used when the job
                configuration does not override it

        Returns:
            Frozen reader configuration.
        """

        def lookup(key: str, fallback: str) -> str:
            # A key mapped to None is treated as unset
            value = conf.get(key)
            return fallback if value is None else str(value)

        return cls(
            delimiter=lookup(DELIMITER_KEY, DELIMITER_DEFAULT),
            default_value=lookup(EDGE_VALUE_KEY, default_value),
            reverse_duplicate=parse_flag(lookup(REVERSE_DUPLICATOR_KEY, REVERSE_DUPLICATOR_DEFAULT)),
        )


class LoggingSettings(BaseModel):
    """Log output settings for CLI runs."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING or ERROR")
    json_output: bool = Field(default=False, description="Emit JSON lines instead of console output")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Reject log levels the logging module does not know."""
        normalized = v.upper()
        if normalized not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{v}'")
        return normalized


class IngestSettings(BaseModel):
    """Top-level description of a CLI ingest run.

    Each entry of ``inputs`` becomes one whole-file split.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    codec: str = Field(default="text", description="Registered codec name for edge values")
    codec_options: dict[str, Any] = Field(default_factory=dict, description="Options passed to the codec")
    inputs: list[str] = Field(default_factory=list, description="Input files, one split each")
    delimiter: str = Field(default=DELIMITER_DEFAULT, description="Field separator")
    default_value: str | None = Field(
        default=None,
        description="Raw value for lines without a third field (codec default when unset)",
    )
    reverse_duplicate: bool = Field(default=False, description="Emit every edge forward and reversed")
    workers: int = Field(default=1, gt=0, description="Splits read in parallel")
    output_format: OutputFormat = Field(default=OutputFormat.TSV)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("codec")
    @classmethod
    def validate_codec_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("codec cannot be empty")
        return v.strip()

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("delimiter cannot be empty")
        return v

    @field_validator("default_value", mode="before")
    @classmethod
    def coerce_default_value(cls, v: Any) -> Any:
        """YAML and Dynaconf env parsing turn ``1`` into an int; edge values are raw text."""
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    def to_job_conf(self) -> dict[str, str]:
        """Render the reader-facing job configuration.

        The default value key is written only when set, so readers fall
        back to their codec's default otherwise.
        """
        conf = {
            DELIMITER_KEY: self.delimiter,
            REVERSE_DUPLICATOR_KEY: "true" if self.reverse_duplicate else "false",
        }
        if self.default_value is not None:
            conf[EDGE_VALUE_KEY] = self.default_value
        return conf


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    A reference with no environment value and no default is left untouched.
    """

    def replacer(match: re.Match[str]) -> str:
        env_value = os.environ.get(match.group(1))
        if env_value is not None:
            return env_value
        default = match.group(2)
        if default is not None:
            return default
        return match.group(0)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_VAR_PATTERN.sub(replacer, value)
        if isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        if isinstance(value, list):
            return [_expand_value(item) for item in value]
        return value

    return {k: _expand_value(v) for k, v in config.items()}


def load_settings(config_path: Path) -> IngestSettings:
    """Load settings from a YAML file with environment variable overrides.

    Precedence, highest first:
    1. Environment variables (EDGELINE_*), e.g. EDGELINE_WORKERS=4 or
       EDGELINE_LOGGING__LEVEL=DEBUG for nested keys
    2. Config file
    3. Defaults from the Pydantic schema

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated IngestSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="EDGELINE",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys and a few of its own settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    if isinstance(raw_config.get("logging"), dict):
        raw_config["logging"] = {k.lower(): v for k, v in raw_config["logging"].items()}

    raw_config = _expand_env_vars(raw_config)
    return IngestSettings(**raw_config)
