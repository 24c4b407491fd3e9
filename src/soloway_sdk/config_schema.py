"""Soloway connection configuration schemas.

Defines where the client connects and with which credentials.
"""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://dsp.soloway.ru"
DEFAULT_TIMEOUT = 30


class SolowayEndpoints(BaseModel):
    """API endpoint paths, relative to the base URL."""

    model_config = ConfigDict(extra="forbid")

    login: str = Field(default="/api/login", description="Login endpoint")
    whoami: str = Field(default="/api/whoami", description="Current account endpoint")
    clients: str = Field(default="/api/clients", description="Clients collection prefix")
    placements_stat: str = Field(default="/api/placements_stat", description="Aggregated placement statistics")
    placements: str = Field(default="/api/placements", description="Placements collection prefix")

    def client_placements(self, client_guid: str) -> str:
        """Path listing placements of a client."""
        return f"{self.clients}/{client_guid}/placements"

    def placement_stat(self, placement_guid: str) -> str:
        """Path of the per-day statistics of a placement."""
        return f"{self.placements}/{placement_guid}/stat"


class SolowayConnectionConfig(BaseModel):
    """Connection configuration for the Soloway API."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(
        ...,
        description="Soloway account username",
        json_schema_extra={"ui_order": 1},
    )
    password: str = Field(
        ...,
        description="Soloway account password",
        json_schema_extra={"secret": True, "ui_order": 2},
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API host, without trailing slash",
        json_schema_extra={"ui_order": 3},
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )
    endpoints: SolowayEndpoints = Field(default_factory=SolowayEndpoints)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("base_url must not be empty")
        return v


def parse_connection_config(config: dict[str, Any] | None) -> SolowayConnectionConfig:
    """Parse a connection config dict into a validated model.

    Args:
        config: Raw connection config dict

    Returns:
        Validated SolowayConnectionConfig

    Raises:
        ValueError: If no config is given
        pydantic.ValidationError: If the config is invalid
    """
    if not config:
        raise ValueError("Soloway connection config is empty")
    return SolowayConnectionConfig.model_validate(config)


def load_connection_config_from_env(environ: Mapping[str, str] | None = None) -> SolowayConnectionConfig:
    """Build a connection config from SOLOWAY_* environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Validated SolowayConnectionConfig

    Raises:
        ValueError: If SOLOWAY_USERNAME or SOLOWAY_PASSWORD is missing
    """
    env = os.environ if environ is None else environ

    username = env.get("SOLOWAY_USERNAME")
    password = env.get("SOLOWAY_PASSWORD")
    if not username or not password:
        raise ValueError("SOLOWAY_USERNAME and SOLOWAY_PASSWORD must be set")

    config: dict[str, Any] = {"username": username, "password": password}
    if env.get("SOLOWAY_BASE_URL"):
        config["base_url"] = env["SOLOWAY_BASE_URL"]
    if env.get("SOLOWAY_TIMEOUT"):
        config["timeout"] = env["SOLOWAY_TIMEOUT"]

    return parse_connection_config(config)
