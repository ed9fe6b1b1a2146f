"""End-to-end scenarios across endpoint, cluster and stack resolution."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from psuctl.cli import cli
from psuctl.infrastructure.client import PortainerClient
from psuctl.resolution.cluster import ClusterIdentityLookup
from psuctl.resolution.endpoints import EndpointResolver
from psuctl.resolution.stacks import StackResolver
from psuctl.services.stack import StackService
from tests.conftest import PORTAINER_URL, FakePortainer


class TestResolutionChain:
    def test_default_endpoint_cluster_and_stack(self, client: PortainerClient) -> None:
        endpoint = EndpointResolver(client).resolve_default()
        assert endpoint.id == 1

        cluster_id = ClusterIdentityLookup(client).get_cluster_id(endpoint.id)
        assert cluster_id == "c1"

        stack = StackResolver(client).resolve_by_name("web", cluster_id, endpoint.id)
        assert stack.id == 9

    def test_missing_stack_reports_not_found(self, client: PortainerClient) -> None:
        result = StackService(client).inspect("missing")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_every_resolution_refetches(
        self, client: PortainerClient, fake_api: FakePortainer
    ) -> None:
        StackService(client).inspect("web")
        StackService(client).inspect("web")
        assert fake_api.paths().count("/api/endpoints") == 2
        assert fake_api.paths().count("/api/auth") == 1


@pytest.mark.usefixtures("_mock_transport")
class TestCliWorkflow:
    def test_configure_then_query(
        self, cli_runner: CliRunner, fake_api: FakePortainer, config_file: Path
    ) -> None:
        for key, value in (
            ("portainer.url", PORTAINER_URL),
            ("portainer.user", "admin"),
            ("portainer.password", "secret"),
        ):
            result = cli_runner.invoke(cli, ["config", key, value])
            assert result.exit_code == 0, result.output

        fake_api.add_endpoint(2, "edge")
        result = cli_runner.invoke(cli, ["config", "defaults.endpoint", "prod"])
        assert result.exit_code == 0

        result = cli_runner.invoke(cli, ["--json", "stack", "inspect", "web"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["id"] == 9

        result = cli_runner.invoke(cli, ["--json", "stack", "inspect", "missing"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_FOUND"
