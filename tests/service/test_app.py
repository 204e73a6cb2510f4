"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from modgen.errors import FetchError
from modgen.generator import StubGenerator
from modgen.service import create_app
from modgen.stubs.formatter import StubPolicy
from tests._fixtures.go_sources import ARM_CLIENT, INVALID_SOURCE

PAYLOAD = {
    "module_name": "my-module",
    "namespace": "my-org",
    "resource_type": "component",
    "resource_subtype": "arm",
    "model_name": "my-model",
    "sdk_version": "0.44.0",
}


class _StaticFetcher:
    def __init__(self, source: str) -> None:
        self.source = source

    def fetch_for(self, module) -> str:
        return self.source


class _MissingFetcher:
    def fetch_for(self, module) -> str:
        raise FetchError("unexpected http GET status: 404", url="http://x", status=404)


def _client(fetcher) -> TestClient:
    app = create_app(lambda: StubGenerator(fetcher=fetcher))
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    return _client(_StaticFetcher(ARM_CLIENT))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_stubs_endpoint_returns_go_source(client: TestClient) -> None:
    response = client.post("/stubs", json=PAYLOAD)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/x-go")
    assert response.text.startswith("package mymodule\n")
    assert response.text.count('panic("not implemented")') == 4


def test_stubs_endpoint_honours_policy(client: TestClient) -> None:
    response = client.post("/stubs", json={**PAYLOAD, "policy": "zero_values"})

    assert response.status_code == 200
    assert 'panic("not implemented")' not in response.text


def test_stubs_endpoint_maps_fetch_errors() -> None:
    response = _client(_MissingFetcher()).post("/stubs", json=PAYLOAD)

    assert response.status_code == 502
    assert "404" in response.json()["detail"]


def test_stubs_endpoint_maps_parse_errors() -> None:
    response = _client(_StaticFetcher(INVALID_SOURCE)).post("/stubs", json=PAYLOAD)

    assert response.status_code == 422
    assert "failed to parse client code" in response.json()["detail"]


def test_stubs_endpoint_rejects_unknown_resource_type(client: TestClient) -> None:
    response = client.post("/stubs", json={**PAYLOAD, "resource_type": "widget"})

    assert response.status_code == 400
    assert "Unknown resource type" in response.json()["detail"]


def test_request_policy_does_not_leak_into_shared_generator() -> None:
    generator = StubGenerator(fetcher=_StaticFetcher(ARM_CLIENT))  # type: ignore[arg-type]
    client = TestClient(create_app(lambda: generator))

    zero = client.post("/stubs", json={**PAYLOAD, "policy": "zero_values"})
    default = client.post("/stubs", json=PAYLOAD)

    assert zero.status_code == 200
    assert 'panic("not implemented")' not in zero.text
    assert default.status_code == 200
    assert default.text.count('panic("not implemented")') == 4
    assert generator.formatter.policy is StubPolicy.PANIC
