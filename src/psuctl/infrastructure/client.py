"""Synchronous httpx client for the Portainer API.

Only the calls psuctl needs are wrapped.  Every call is a fresh request:
nothing is cached between calls.  HTTP failures are raised as
``httpx.HTTPError`` subclasses without translation, and a 2xx body that
is not the expected JSON shape raises ``httpx.DecodingError``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel

from psuctl.domain.models import Endpoint, Stack

if TYPE_CHECKING:
    from psuctl.config.models import PortainerConfig

log = structlog.get_logger(__name__)

_M = TypeVar("_M", bound=BaseModel)


def _decode(resp: httpx.Response) -> Any:
    """Parse a JSON body, raising ``httpx.DecodingError`` when it is not JSON."""
    try:
        return resp.json()
    except ValueError as exc:
        msg = f"Invalid JSON in response from {resp.request.url}"
        raise httpx.DecodingError(msg, request=resp.request) from exc


def _decode_list(resp: httpx.Response, model: type[_M]) -> list[_M]:
    """Parse a JSON array of *model* items; ``null`` is an empty list."""
    try:
        return [model.model_validate(item) for item in _decode(resp) or []]
    except (TypeError, ValueError) as exc:
        msg = f"Unexpected {model.__name__} list in response from {resp.request.url}"
        raise httpx.DecodingError(msg, request=resp.request) from exc


class PortainerClient:
    """HTTP client for a single Portainer instance.

    Authenticates lazily: the first request without a configured token
    calls ``POST /api/auth`` and reuses the returned JWT afterwards.

    Contract::

        POST /api/auth                          -> {"jwt": str}
        GET  /api/endpoints                     -> [Endpoint]
        GET  /api/stacks?filters={...}          -> [Stack]
        GET  /api/endpoints/{id}/docker/info    -> {...}
    """

    def __init__(
        self,
        *,
        url: str,
        user: str = "",
        password: str = "",
        auth_token: str = "",
        insecure: bool = False,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._user = user
        self._password = password
        self._token = auth_token or None
        self._http = httpx.Client(
            base_url=f"{url.rstrip('/')}/api",
            timeout=timeout,
            verify=not insecure,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: PortainerConfig, *, transport: httpx.BaseTransport | None = None
    ) -> PortainerClient:
        return cls(
            url=config.url,
            user=config.user,
            password=config.password,
            auth_token=config.auth_token,
            insecure=config.insecure,
            timeout=config.timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> PortainerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def authenticate(self) -> str:
        """Exchange the configured credentials for a JWT."""
        log.debug("Authenticating", user=self._user)
        resp = self._http.post(
            "/auth",
            json={"Username": self._user, "Password": self._password},
        )
        resp.raise_for_status()
        body = _decode(resp)
        if not isinstance(body, dict) or not isinstance(body.get("jwt"), str):
            msg = "Authentication response has no JWT"
            raise httpx.DecodingError(msg, request=resp.request)
        token = body["jwt"]
        self._token = token
        return token

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        token = self._token or self.authenticate()
        resp = self._http.request(
            method,
            path,
            headers={"Authorization": f"Bearer {token}"},
            **kwargs,
        )
        resp.raise_for_status()
        return resp

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def get_endpoints(self) -> list[Endpoint]:
        log.debug("Getting endpoints")
        resp = self._request("GET", "/endpoints")
        return _decode_list(resp, Endpoint)

    def get_stacks(self, swarm_id: str = "", endpoint_id: int = 0) -> list[Stack]:
        """List stacks, filtered server-side by cluster and/or endpoint."""
        filters: dict[str, Any] = {}
        if swarm_id:
            filters["SwarmID"] = swarm_id
        if endpoint_id:
            filters["EndpointID"] = endpoint_id
        params = {"filters": json.dumps(filters)} if filters else None

        log.debug("Getting stacks", swarm=swarm_id, endpoint=endpoint_id)
        resp = self._request("GET", "/stacks", params=params)
        return _decode_list(resp, Stack)

    def get_endpoint_docker_info(self, endpoint_id: int) -> dict[str, Any]:
        log.debug("Getting endpoint's Docker info", endpoint=endpoint_id)
        resp = self._request("GET", f"/endpoints/{endpoint_id}/docker/info")
        info = _decode(resp)
        if not isinstance(info, dict):
            msg = f"Docker info for endpoint {endpoint_id} is not an object"
            raise httpx.DecodingError(msg, request=resp.request)
        return info
