"""
Client configuration.

Settings come from an optional YAML file and are then overridden by
BOX_* environment variables.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field

from box_client.http import DEFAULT_BASE_URL

ENV_PREFIX = "BOX_"
ENV_FIELDS = (
    "base_url",
    "access_token",
    "refresh_token",
    "client_id",
    "client_secret",
    "timeout",
    "max_retries",
)


class BoxClientConfig(BaseModel):
    base_url: str = Field(DEFAULT_BASE_URL, description="Box API base URL")
    access_token: Optional[str] = Field(None, description="OAuth2 access token or developer token")
    refresh_token: Optional[str] = Field(None, description="OAuth2 refresh token")
    client_id: Optional[str] = Field(None, description="OAuth2 client ID, needed for token refresh")
    client_secret: Optional[str] = Field(None, description="OAuth2 client secret, needed for token refresh")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(1, ge=1, description="Attempts per request on transport failures")

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "BoxClientConfig":
        return cls(**read_yaml(path))

    @classmethod
    def from_env(cls) -> "BoxClientConfig":
        return cls(**read_env())


def read_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, "r") as file:
        obj = yaml.safe_load(file)

    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError(f"{path}: expected a mapping of settings, got {type(obj).__name__}")
    return obj


def read_env(environ: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    environ = os.environ if environ is None else environ
    values = {}
    for name in ENV_FIELDS:
        value = environ.get(ENV_PREFIX + name.upper())
        if value:
            values[name] = value
    return values


def load_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> BoxClientConfig:
    """Load settings from path (if given), then apply environment overrides."""
    values: Dict[str, Any] = read_yaml(path) if path else {}
    values.update(read_env(environ))
    return BoxClientConfig(**values)
