"""Configuration provider following Black Box Design principles.

The provider configuration is read once from a YAML stream holding a single
``global`` section::

    global:
      instances: true
      instances-url: http://inventory.example.com/api
      scheduler-extension: true
      scheduler-extension-url: http://scheduler.example.com

and is immutable afterwards.
"""

import logging
from enum import Enum
from typing import IO, Any, Dict, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

logger = logging.getLogger(__name__)

GLOBAL_SECTION = "global"

# Capability flag -> the URL field it needs
URL_REQUIREMENTS = {
    "instances": "instances_url",
    "scheduler_extension": "scheduler_extension_url",
}


class ConfigError(ValueError):
    """Raised when the provider configuration is missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class PrioritizeScope(str, Enum):
    """Which nodes a prioritize call is sent."""

    CANDIDATES = "candidates"  # the node list as handed in by the caller
    FILTERED = "filtered"  # the survivors of a remote filter call


class ProviderConfig(BaseModel):
    """Capability flags and base URLs for the HTTP cloud provider."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    instances: bool = False
    instances_url: Optional[str] = Field(default=None, alias="instances-url")
    tcp_load_balancer: bool = Field(default=False, alias="tcp-load-balancer")
    zones: bool = False
    clusters: bool = False
    scheduler_extension: bool = Field(default=False, alias="scheduler-extension")
    scheduler_extension_url: Optional[str] = Field(default=None, alias="scheduler-extension-url")
    prioritize_scope: PrioritizeScope = Field(
        default=PrioritizeScope.CANDIDATES, alias="prioritize-scope"
    )

    @field_validator("instances_url", "scheduler_extension_url")
    @classmethod
    def strip_trailing_slashes(cls, v):
        """Normalize URLs so suffix paths can be appended without doubled separators."""
        if v is None:
            return v
        v = v.strip()
        return v.rstrip("/") if v else None

    @model_validator(mode="after")
    def validate_enabled_urls(self) -> "ProviderConfig":
        """Every enabled capability needs an absolute http(s) URL."""
        for flag, url_field in URL_REQUIREMENTS.items():
            if not getattr(self, flag):
                continue
            key = ProviderConfig.model_fields[url_field].alias
            value = getattr(self, url_field)
            if not value:
                raise PydanticCustomError(
                    "missing_url",
                    "{field} is required when {flag} is enabled",
                    {"field": key, "flag": ProviderConfig.model_fields[flag].alias or flag},
                )
            if not is_absolute_url(value):
                raise PydanticCustomError(
                    "invalid_url",
                    "{field} must be an absolute http(s) URL, got '{value}'",
                    {"field": key, "value": value},
                )
        return self

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ProviderConfig":
        """
        Build a configuration from a mapping of configuration keys.

        Raises:
            ConfigError: If any key is unknown or any value is invalid
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise _to_config_error(e) from e


def is_absolute_url(value: str) -> bool:
    """Check that value is an absolute http(s) URL with a host."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc) and " " not in value


def _to_config_error(exc: ValidationError) -> ConfigError:
    """Convert the first pydantic error into a ConfigError naming its field."""
    error = exc.errors()[0]
    field = (error.get("ctx") or {}).get("field")
    if field is None and error.get("loc"):
        field = str(error["loc"][0])
    message = error.get("msg", str(exc))
    if field and field not in message:
        message = f"{field}: {message}"
    return ConfigError(f"Invalid provider configuration: {message}", field=field)


def load_config(stream: Optional[Union[IO[str], IO[bytes], str, bytes]]) -> ProviderConfig:
    """
    Load the provider configuration from a YAML stream.

    Args:
        stream: Text or byte stream (or raw document); None is rejected

    Returns:
        Validated, immutable ProviderConfig

    Raises:
        ConfigError: If the stream is absent or empty, or the configuration is invalid
    """
    if stream is None:
        raise ConfigError("Config file is empty or is not provided")

    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise ConfigError(f"Couldn't read config: {e}") from e

    if data is None:
        raise ConfigError("Config file is empty or is not provided")
    if not isinstance(data, dict):
        raise ConfigError(f"Couldn't read config: expected a mapping, got {type(data).__name__}")

    section = data.get(GLOBAL_SECTION, data)
    if section is None:
        raise ConfigError(f"Config section '{GLOBAL_SECTION}' is empty", field=GLOBAL_SECTION)
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{GLOBAL_SECTION}' must be a mapping", field=GLOBAL_SECTION)

    config = ProviderConfig.from_mapping(section)
    logger.debug(
        f"Loaded provider config (instances: {config.instances}, "
        f"scheduler-extension: {config.scheduler_extension})"
    )
    return config
