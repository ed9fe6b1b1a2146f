"""StackResolver — list stacks in a cluster/endpoint scope and pick one by name."""

from __future__ import annotations

from typing import TYPE_CHECKING

from psuctl.domain.errors import StackNotFoundError

if TYPE_CHECKING:
    from psuctl.domain.models import Stack
    from psuctl.infrastructure.client import PortainerClient


class StackResolver:
    """Resolve stacks scoped to one ``(cluster_id, endpoint_id)`` pair.

    Scoping is done server-side; an empty *cluster_id* means the endpoint
    is standalone.  First match wins on duplicate names.
    """

    def __init__(self, client: PortainerClient) -> None:
        self._client = client

    def list_stacks(self, cluster_id: str, endpoint_id: int) -> list[Stack]:
        return self._client.get_stacks(cluster_id, endpoint_id)

    def resolve_by_name(self, name: str, cluster_id: str, endpoint_id: int) -> Stack:
        for stack in self.list_stacks(cluster_id, endpoint_id):
            if stack.name == name:
                return stack
        raise StackNotFoundError(name=name, cluster_id=cluster_id, endpoint_id=endpoint_id)
