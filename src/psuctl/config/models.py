"""Pydantic configuration models with code-baked defaults.

Sparse YAML contract: defaults baked here, the config file only contains
overrides.  A working setup needs only ``portainer.url`` plus credentials.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PortainerConfig(BaseModel):
    """``portainer`` section — how to reach and authenticate to the API."""

    model_config = {"frozen": True}

    url: str = ""
    user: str = ""
    password: str = ""
    auth_token: str = ""
    insecure: bool = False
    timeout: float = 30.0


class DefaultsConfig(BaseModel):
    """``defaults`` section."""

    model_config = {"frozen": True}

    endpoint: str = ""


class PsuConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    portainer: PortainerConfig = Field(default_factory=PortainerConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
