"""StackService — list and inspect stacks within an endpoint's scope.

Both operations resolve the target endpoint first (by name, configured
default, or the sole endpoint), then look up its swarm cluster ID so the
stack listing is scoped the same way Portainer scopes it.  Standalone
endpoints have no cluster and are scoped by endpoint ID alone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from psuctl.domain.errors import PsuError
from psuctl.resolution.cluster import ClusterIdentityLookup
from psuctl.resolution.endpoints import EndpointResolver
from psuctl.resolution.stacks import StackResolver
from psuctl.services.base import BaseService
from psuctl.services.result import ServiceResult
from psuctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from psuctl.domain.models import Endpoint


class StackService(BaseService):
    """Read-only stack operations."""

    def _scope(self, endpoint_name: str | None) -> tuple[Endpoint, str]:
        with trace_span("resolve_endpoint") as span:
            endpoint = EndpointResolver(self._client).resolve(endpoint_name or None)
            if span:
                span.annotate("endpoint_id", endpoint.id)
        with trace_span("get_cluster_id") as span:
            cluster_id = ClusterIdentityLookup(self._client).get_cluster_id_or_empty(endpoint.id)
            if span:
                span.annotate("cluster_id", cluster_id)
        return endpoint, cluster_id

    @staticmethod
    def _scope_data(endpoint: Endpoint, cluster_id: str) -> dict[str, Any]:
        return {
            "endpoint": {"id": endpoint.id, "name": endpoint.name},
            "cluster_id": cluster_id,
        }

    @traced
    def list_stacks(self, endpoint_name: str | None = None) -> ServiceResult:
        """List the stacks deployed on one endpoint."""
        try:
            endpoint, cluster_id = self._scope(endpoint_name)
            with trace_span("get_stacks"):
                stacks = StackResolver(self._client).list_stacks(cluster_id, endpoint.id)
        except (PsuError, httpx.HTTPError) as exc:
            return self._error_result("list_stacks", exc)

        items = [stack.model_dump(mode="json") for stack in stacks]
        return ServiceResult(
            ok=True,
            op="list_stacks",
            data={**self._scope_data(endpoint, cluster_id), "count": len(items), "items": items},
        )

    @traced
    def inspect(self, name: str, endpoint_name: str | None = None) -> ServiceResult:
        """Resolve one stack by *name* on the target endpoint."""
        try:
            endpoint, cluster_id = self._scope(endpoint_name)
            with trace_span("get_stacks"):
                stack = StackResolver(self._client).resolve_by_name(name, cluster_id, endpoint.id)
        except (PsuError, httpx.HTTPError) as exc:
            return self._error_result("inspect_stack", exc)

        return ServiceResult(
            ok=True,
            op="inspect_stack",
            data=stack.model_dump(mode="json"),
        )
