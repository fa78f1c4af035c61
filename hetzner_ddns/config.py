import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .dns.types import Target
from .errors import ConfigError

_CONFIG_PATH = os.getenv("HETZNER_DDNS_CONFIG", "config.toml")
_ENV_PATH = os.getenv("HETZNER_DDNS_ENV", ".env")

HETZNER_API_URL = "https://dns.hetzner.com/api/v1"
IPV4_LOOKUP_URL = "https://ipv4.icanhazip.com"
IPV6_LOOKUP_URL = "https://ipv6.icanhazip.com"


def split_fqdn(fqdn: str) -> Target:
    """
    Split an FQDN into its leaf label and the zone holding it.

    "dyn.example.com" -> Target(record_name="dyn", zone_name="example.com")

    Raises:
        ConfigError: If the FQDN has fewer than two labels or an empty label
    """
    labels = fqdn.strip().split(".")
    if len(labels) < 2 or not all(labels):
        raise ConfigError(
            f"DNS_FQDN must be a valid FQDN (e.g. dyndns.example.com), got {fqdn!r}"
        )
    return Target(record_name=labels[0], zone_name=".".join(labels[1:]))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        toml_file=_CONFIG_PATH,
        env_file=_ENV_PATH,
        extra="ignore",
    )

    api_token: str = Field(
        validation_alias=AliasChoices("api_token", "hetzner_api_token"),
        repr=False,
    )
    dns_fqdn: str
    ipv6: bool = False

    api_base_url: str = HETZNER_API_URL
    ipv4_lookup_url: str = IPV4_LOOKUP_URL
    ipv6_lookup_url: str = IPV6_LOOKUP_URL
    request_timeout: float = Field(default=10.0, gt=0)
    update_ttl: int = Field(default=60, gt=0)

    log_level: str = "INFO"
    logs_dir: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return value

    @property
    def target(self) -> Target:
        return split_fqdn(self.dns_fqdn)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Source order: init args > OS env > .env > config.toml > secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(ipv6: bool = False, **overrides) -> Settings:
    """
    Load settings and validate the managed FQDN.

    Raises:
        ConfigError: If a required value is missing or malformed
    """
    try:
        settings = Settings(ipv6=ipv6, **overrides)
    except ValidationError as e:
        missing = [
            str(error["loc"][0]).upper()
            for error in e.errors()
            if error["type"] == "missing"
        ]
        if missing:
            raise ConfigError(
                f"Missing {', '.join(missing)} in environment (check .env file)"
            ) from e
        raise ConfigError(f"Invalid configuration: {e}") from e

    split_fqdn(settings.dns_fqdn)
    return settings
