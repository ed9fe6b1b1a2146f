"""EndpointService — list and inspect Portainer endpoints."""

from __future__ import annotations

import httpx

from psuctl.domain.errors import PsuError
from psuctl.resolution.endpoints import EndpointResolver
from psuctl.services.base import BaseService
from psuctl.services.result import ServiceResult
from psuctl.services.telemetry import trace_span, traced


class EndpointService(BaseService):
    """Read-only endpoint operations."""

    @traced
    def list_endpoints(self) -> ServiceResult:
        try:
            with trace_span("get_endpoints") as span:
                endpoints = EndpointResolver(self._client).list_endpoints()
                if span:
                    span.annotate("count", len(endpoints))
        except (PsuError, httpx.HTTPError) as exc:
            return self._error_result("list_endpoints", exc)

        items = [endpoint.model_dump(mode="json") for endpoint in endpoints]
        return ServiceResult(
            ok=True,
            op="list_endpoints",
            data={"count": len(items), "items": items},
        )

    @traced
    def inspect(self, name: str | None = None) -> ServiceResult:
        """Resolve one endpoint by *name*, or the sole endpoint when omitted."""
        try:
            with trace_span("resolve_endpoint") as span:
                endpoint = EndpointResolver(self._client).resolve(name or None)
                if span:
                    span.annotate("endpoint_id", endpoint.id)
        except (PsuError, httpx.HTTPError) as exc:
            return self._error_result("inspect_endpoint", exc)

        return ServiceResult(
            ok=True,
            op="inspect_endpoint",
            data=endpoint.model_dump(mode="json"),
        )
