"""Tests for EndpointService."""

from __future__ import annotations

import httpx

from psuctl.infrastructure.client import PortainerClient
from psuctl.services.endpoint import EndpointService
from tests.conftest import PORTAINER_URL, FakePortainer


class TestListEndpoints:
    def test_lists_all(self, client: PortainerClient, fake_api: FakePortainer) -> None:
        fake_api.add_endpoint(2, "staging")
        result = EndpointService(client).list_endpoints()
        assert result.ok
        assert result.op == "list_endpoints"
        assert result.data["count"] == 2
        assert [item["name"] for item in result.data["items"]] == ["prod", "staging"]

    def test_empty(self, client: PortainerClient, fake_api: FakePortainer) -> None:
        fake_api.endpoints.clear()
        result = EndpointService(client).list_endpoints()
        assert result.ok
        assert result.data == {"count": 0, "items": []}

    def test_transport_failure(self, client: PortainerClient, fake_api: FakePortainer) -> None:
        fake_api.fail_with = 500
        result = EndpointService(client).list_endpoints()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "TRANSPORT_FAILURE"
        assert result.error.detail["status_code"] == 500


class TestInspectEndpoint:
    def test_default(self, client: PortainerClient) -> None:
        result = EndpointService(client).inspect()
        assert result.ok
        assert result.op == "inspect_endpoint"
        assert result.data["id"] == 1
        assert result.data["name"] == "prod"

    def test_by_name(self, client: PortainerClient, fake_api: FakePortainer) -> None:
        fake_api.add_endpoint(2, "staging")
        result = EndpointService(client).inspect("staging")
        assert result.ok
        assert result.data["id"] == 2

    def test_ambiguous_default(self, client: PortainerClient, fake_api: FakePortainer) -> None:
        fake_api.add_endpoint(2, "staging")
        result = EndpointService(client).inspect()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "AMBIGUOUS_DEFAULT"
        assert result.error.message == "Several endpoints available"

    def test_no_endpoints(self, client: PortainerClient, fake_api: FakePortainer) -> None:
        fake_api.endpoints.clear()
        result = EndpointService(client).inspect()
        assert result.error is not None
        assert result.error.code == "EMPTY_RESULT"

    def test_not_found(self, client: PortainerClient) -> None:
        result = EndpointService(client).inspect("nope")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {"name": "nope"}


class TestMalformedResponses:
    def test_non_json_body_is_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>login</html>")

        with PortainerClient(
            url=PORTAINER_URL, auth_token="t", transport=httpx.MockTransport(handler)
        ) as c:
            result = EndpointService(c).list_endpoints()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "TRANSPORT_FAILURE"
        assert result.error.detail["url"] == f"{PORTAINER_URL}/api/endpoints"

    def test_auth_reply_without_jwt(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        with PortainerClient(
            url=PORTAINER_URL,
            user="admin",
            password="secret",
            transport=httpx.MockTransport(handler),
        ) as c:
            result = EndpointService(c).inspect()
        assert result.error is not None
        assert result.error.code == "TRANSPORT_FAILURE"
        assert "no JWT" in result.error.message
