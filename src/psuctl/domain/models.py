"""Pydantic models for Portainer API resources.

Only the attributes psuctl relies on are declared; every other key sent by
the API is retained (``extra="allow"``) so ``--json`` and ``--format``
output can still reach it.  Field aliases follow the API's PascalCase.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class Endpoint(_ApiModel):
    """A registered Docker/Swarm environment."""

    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    type: int = Field(default=1, alias="Type")
    url: str = Field(default="", alias="URL")
    public_url: str = Field(default="", alias="PublicURL")
    group_id: int = Field(default=1, alias="GroupId")
    status: int = Field(default=1, alias="Status")


class StackEnvVar(_ApiModel):
    name: str
    value: str = ""


class Stack(_ApiModel):
    """A deployed compose/swarm stack."""

    id: int = Field(alias="Id")
    name: str = Field(alias="Name")
    type: int = Field(default=1, alias="Type")
    endpoint_id: int = Field(default=0, alias="EndpointId")
    swarm_id: str = Field(default="", alias="SwarmId")
    entry_point: str = Field(default="", alias="EntryPoint")
    env: list[StackEnvVar] | None = Field(default=None, alias="Env")
    status: int = Field(default=1, alias="Status")