"""EndpointResolver — list endpoints and pick one by name, ID, or default."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from psuctl.domain.errors import (
    EndpointNotFoundError,
    NoEndpointsAvailableError,
    SeveralEndpointsAvailableError,
)

if TYPE_CHECKING:
    from psuctl.domain.models import Endpoint
    from psuctl.infrastructure.client import PortainerClient


def find_by_id(endpoints: Sequence[Endpoint], endpoint_id: int) -> Endpoint:
    """Return the first endpoint in an already-fetched list with *endpoint_id*."""
    for endpoint in endpoints:
        if endpoint.id == endpoint_id:
            return endpoint
    raise EndpointNotFoundError(id=endpoint_id)


def find_by_name(endpoints: Sequence[Endpoint], name: str) -> Endpoint:
    """Return the first endpoint in an already-fetched list named *name*."""
    for endpoint in endpoints:
        if endpoint.name == name:
            return endpoint
    raise EndpointNotFoundError(name=name)


class EndpointResolver:
    """Resolve endpoints against the remote API.

    The default endpoint only exists when exactly one endpoint is
    configured; with several, callers must name one explicitly.
    Duplicate names are not detected: the first match wins.
    """

    def __init__(self, client: PortainerClient) -> None:
        self._client = client

    def list_endpoints(self) -> list[Endpoint]:
        return self._client.get_endpoints()

    def resolve_default(self) -> Endpoint:
        endpoints = self.list_endpoints()
        if not endpoints:
            raise NoEndpointsAvailableError()
        if len(endpoints) > 1:
            raise SeveralEndpointsAvailableError(count=len(endpoints))
        return endpoints[0]

    def resolve_by_name(self, name: str) -> Endpoint:
        return find_by_name(self.list_endpoints(), name)

    def resolve(self, name: str | None = None) -> Endpoint:
        """Resolve by *name* when given, otherwise fall back to the default."""
        if name:
            return self.resolve_by_name(name)
        return self.resolve_default()
