from __future__ import annotations

import httpx
import pytest

from conftest import FakeRegistry, crate_payload, make_registry, version_payload
from core.domain.version import Version
from core.errors import RegistryProtocolError, RegistryTransportError


def test_fetch_crate_summary_returns_max_version(settings) -> None:
    fake = FakeRegistry("0.1.0")
    with make_registry(settings, fake) as registry:
        version = registry.fetch_crate_summary("crates-staging-test-tb")

    assert version == Version(0, 1, 0)
    request = fake.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://staging.crates.io/api/v1/crates/crates-staging-test-tb?include=versions"
    assert request.headers["User-Agent"] == "crates.io smoke test"


def test_fetch_version_detail_returns_name_and_num(settings) -> None:
    fake = FakeRegistry("0.1.0")
    with make_registry(settings, fake) as registry:
        name, num = registry.fetch_version_detail("crates-staging-test-tb", Version(0, 1, 1))

    assert name == "crates-staging-test-tb"
    assert num == Version(0, 1, 1)
    assert fake.requests[0].url.path == "/api/v1/crates/crates-staging-test-tb/0.1.1"


def test_non_success_status_is_a_protocol_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"errors": [{"detail": "Not Found"}]})

    with make_registry(settings, handler) as registry:
        with pytest.raises(RegistryProtocolError, match="Failed to load crate information from staging.crates.io") as info:
            registry.fetch_crate_summary("missing")

    assert isinstance(info.value.__cause__, httpx.HTTPStatusError)
    assert info.value.__cause__.response.status_code == 404


def test_version_detail_status_error_names_the_step(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    with make_registry(settings, handler) as registry:
        with pytest.raises(RegistryProtocolError, match="Failed to load version information"):
            registry.fetch_version_detail("crates-staging-test-tb", Version(1, 0, 0))


def test_transport_failure_is_a_transport_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with make_registry(settings, handler) as registry:
        with pytest.raises(RegistryTransportError, match="Failed to load crate information") as info:
            registry.fetch_crate_summary("crates-staging-test-tb")

    assert isinstance(info.value.__cause__, httpx.ConnectError)


def test_invalid_json_is_a_protocol_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with make_registry(settings, handler) as registry:
        with pytest.raises(RegistryProtocolError, match="Failed to deserialize crate information"):
            registry.fetch_crate_summary("crates-staging-test-tb")


@pytest.mark.parametrize(
    "payload",
    [
        {"krate": {"max_version": "0.1.0"}},
        {"crate": {}},
        {"crate": {"max_version": "not-a-version"}},
        {"crate": {"max_version": 1}},
    ],
)
def test_unexpected_crate_shape_is_a_protocol_error(settings, payload: dict) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    with make_registry(settings, handler) as registry:
        with pytest.raises(RegistryProtocolError, match="Failed to deserialize crate information"):
            registry.fetch_crate_summary("crates-staging-test-tb")


def test_unexpected_version_shape_is_a_protocol_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"version": {"num": "1.0.0"}})

    with make_registry(settings, handler) as registry:
        with pytest.raises(RegistryProtocolError, match="Failed to deserialize version information"):
            registry.fetch_version_detail("crates-staging-test-tb", Version(1, 0, 0))


def test_extra_fields_are_ignored(settings) -> None:
    payload = crate_payload("3.4.5")
    payload["crate"]["keywords"] = ["test"]

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/3.4.5"):
            return httpx.Response(200, json=version_payload("crates-staging-test-tb", "3.4.5"))
        return httpx.Response(200, json=payload)

    with make_registry(settings, handler) as registry:
        assert registry.fetch_crate_summary("crates-staging-test-tb") == Version(3, 4, 5)
        assert registry.fetch_version_detail("crates-staging-test-tb", Version(3, 4, 5))[1] == Version(3, 4, 5)
