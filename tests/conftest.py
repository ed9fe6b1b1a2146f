"""Shared pytest fixtures and test doubles for psuctl tests."""

from __future__ import annotations

import json
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from psuctl.domain.models import Endpoint, Stack
from psuctl.infrastructure.client import PortainerClient

PORTAINER_URL = "http://portainer.test"


class FakePortainer:
    """In-memory Portainer API served through ``httpx.MockTransport``.

    Endpoints and stacks are stored in the API's own JSON shape; stack
    listing honours the ``filters`` query parameter like the real server.
    """

    def __init__(self) -> None:
        self.endpoints: list[dict[str, Any]] = []
        self.stacks: list[dict[str, Any]] = []
        self.docker_info: dict[int, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self.token = "jwt-token"

    # --- seeding helpers ---

    def add_endpoint(self, endpoint_id: int, name: str, cluster_id: str | None = None) -> None:
        self.endpoints.append(
            {"Id": endpoint_id, "Name": name, "Type": 2, "URL": f"tcp://{name}:9001", "Status": 1}
        )
        swarm: dict[str, Any] = {"NodeID": "", "LocalNodeState": "inactive"}
        if cluster_id is not None:
            swarm = {"NodeID": "n1", "LocalNodeState": "active", "Cluster": {"ID": cluster_id}}
        self.docker_info[endpoint_id] = {"Name": name, "Swarm": swarm}

    def add_stack(
        self, stack_id: int, name: str, endpoint_id: int, cluster_id: str = ""
    ) -> None:
        self.stacks.append(
            {
                "Id": stack_id,
                "Name": name,
                "Type": 1 if cluster_id else 2,
                "EndpointId": endpoint_id,
                "SwarmId": cluster_id,
                "EntryPoint": "docker-compose.yml",
                "Env": [{"name": "MODE", "value": "prod"}],
                "Status": 1,
            }
        )

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    # --- transport ---

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "boom"})

        path = request.url.path
        if path == "/api/auth" and request.method == "POST":
            body = json.loads(request.content)
            if body.get("Username") != "admin" or body.get("Password") != "secret":
                return httpx.Response(422, json={"message": "Invalid credentials"})
            return httpx.Response(200, json={"jwt": self.token})

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"message": "Unauthorized"})

        if path == "/api/endpoints":
            return httpx.Response(200, json=self.endpoints)
        if path == "/api/stacks":
            filters = json.loads(request.url.params.get("filters", "{}"))
            stacks = [
                s
                for s in self.stacks
                if ("SwarmID" not in filters or s["SwarmId"] == filters["SwarmID"])
                and ("EndpointID" not in filters or s["EndpointId"] == filters["EndpointID"])
            ]
            return httpx.Response(200, json=stacks)
        if path.startswith("/api/endpoints/") and path.endswith("/docker/info"):
            endpoint_id = int(path.split("/")[3])
            if endpoint_id not in self.docker_info:
                return httpx.Response(404, json={"message": "Endpoint not found"})
            return httpx.Response(200, json=self.docker_info[endpoint_id])
        return httpx.Response(404, json={"message": "Not found"})


class FakeClient:
    """Duck-typed stand-in for :class:`PortainerClient` used by resolver tests.

    Counts calls so tests can check that every resolution fetches fresh data.
    """

    def __init__(
        self,
        endpoints: list[Endpoint] | None = None,
        stacks: list[Stack] | None = None,
        docker_info: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.endpoints = endpoints or []
        self.stacks = stacks or []
        self.docker_info = docker_info if docker_info is not None else {}
        self.error = error
        self.calls: list[tuple[Any, ...]] = []

    def get_endpoints(self) -> list[Endpoint]:
        self.calls.append(("get_endpoints",))
        if self.error:
            raise self.error
        return list(self.endpoints)

    def get_stacks(self, swarm_id: str = "", endpoint_id: int = 0) -> list[Stack]:
        self.calls.append(("get_stacks", swarm_id, endpoint_id))
        if self.error:
            raise self.error
        return list(self.stacks)

    def get_endpoint_docker_info(self, endpoint_id: int) -> dict[str, Any]:
        self.calls.append(("get_endpoint_docker_info", endpoint_id))
        if self.error:
            raise self.error
        return self.docker_info


def make_endpoint(endpoint_id: int, name: str) -> Endpoint:
    return Endpoint(id=endpoint_id, name=name)


def make_stack(stack_id: int, name: str, endpoint_id: int = 1, swarm_id: str = "") -> Stack:
    return Stack(id=stack_id, name=name, endpoint_id=endpoint_id, swarm_id=swarm_id)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_api() -> FakePortainer:
    """Fake API seeded with one swarm endpoint ``prod`` (id 1, cluster ``c1``)."""
    api = FakePortainer()
    api.add_endpoint(1, "prod", cluster_id="c1")
    api.add_stack(9, "web", endpoint_id=1, cluster_id="c1")
    api.add_stack(10, "db", endpoint_id=1, cluster_id="c1")
    return api


@pytest.fixture
def client(fake_api: FakePortainer) -> Generator[PortainerClient]:
    """PortainerClient wired to the fake API with valid credentials."""
    c = PortainerClient(
        url=PORTAINER_URL,
        user="admin",
        password="secret",
        transport=httpx.MockTransport(fake_api.handler),
    )
    try:
        yield c
    finally:
        c.close()


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated config file location (not created) with a clean environment."""
    for var in list(os.environ):
        if var.startswith("PSUCTL_"):
            monkeypatch.delenv(var)
    path = tmp_path / ".psuctl.yaml"
    monkeypatch.setenv("PSUCTL_CONFIG", str(path))
    monkeypatch.chdir(tmp_path)
    return path


@pytest.fixture
def _mock_transport(
    fake_api: FakePortainer, config_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Route every client the CLI builds to the fake API.

    Use via ``@pytest.mark.usefixtures("_mock_transport")`` on command test
    classes, and pass ``--url``/``-u``/``-p`` on the command line.
    """
    original = PortainerClient.from_config.__func__  # type: ignore[attr-defined]

    def from_config(cls: type[PortainerClient], config: Any, **kwargs: Any) -> PortainerClient:
        return original(cls, config, transport=httpx.MockTransport(fake_api.handler))

    monkeypatch.setattr(PortainerClient, "from_config", classmethod(from_config))


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """Undo the logging and telemetry setup a CLI invocation leaves behind."""
    import logging

    from psuctl.services.telemetry import disable_telemetry

    root = logging.getLogger()
    handlers = root.handlers[:]
    yield
    disable_telemetry()
    root.handlers = handlers
