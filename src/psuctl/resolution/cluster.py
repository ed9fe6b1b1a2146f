"""ClusterIdentityLookup — swarm cluster ID of an endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from psuctl.domain.errors import StackClusterNotFoundError, ValueNotFoundError
from psuctl.domain.values import select_value

if TYPE_CHECKING:
    from psuctl.infrastructure.client import PortainerClient

CLUSTER_ID_PATH: tuple[str, ...] = ("Swarm", "Cluster", "ID")


class ClusterIdentityLookup:
    """Read ``Swarm.Cluster.ID`` from an endpoint's Docker info."""

    def __init__(self, client: PortainerClient) -> None:
        self._client = client

    def get_cluster_id(self, endpoint_id: int) -> str:
        """Return the swarm cluster ID of *endpoint_id*.

        Raises:
            StackClusterNotFoundError: The endpoint is not part of a cluster.
            ShapeMismatchError: The Docker info has an unexpected shape.
            TypeError: The cluster ID is not a string.
        """
        info = self._client.get_endpoint_docker_info(endpoint_id)
        try:
            cluster_id = select_value(info, CLUSTER_ID_PATH)
        except ValueNotFoundError as exc:
            raise StackClusterNotFoundError(endpoint_id=endpoint_id) from exc

        if not isinstance(cluster_id, str):
            raise TypeError(
                f"Swarm cluster ID of endpoint {endpoint_id} is "
                f"{type(cluster_id).__name__}, expected str"
            )
        return cluster_id

    def get_cluster_id_or_empty(self, endpoint_id: int) -> str:
        """Like :meth:`get_cluster_id`, but ``""`` for standalone endpoints."""
        try:
            return self.get_cluster_id(endpoint_id)
        except StackClusterNotFoundError:
            return ""
