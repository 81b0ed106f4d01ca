"""
Test Suite: Prediction Client
=============================
Request shaping, response handling and failure mapping against a mocked
HTTP transport.
"""

import asyncio
import json
import logging

import httpx
import pytest

from impact_sim.backend import PredictionClient, PredictRequest, build_payload
from impact_sim.core.config import BackendCfg
from impact_sim.core.errors import ErrorKind, NetworkError, ProtocolError, ResponseShapeError
from impact_sim.core.model import ResponseShape

BASE_URL = "http://prediction.test"


def make_client(handler, **cfg_overrides):
    cfg = BackendCfg(base_url=BASE_URL, **cfg_overrides)
    return PredictionClient(cfg, transport=httpx.MockTransport(handler))


def run_predict(client, *args, **kwargs):
    async def scenario():
        try:
            return await client.predict(*args, **kwargs)
        finally:
            await client.aclose()

    return asyncio.run(scenario())


class TestBuildPayload:
    def test_canonical_fields(self):
        payload = build_payload(20.0, 1.57e9, "stony", 1908)
        assert payload == {"velocity": 20.0, "mass": 1.57e9, "type_meteor": "stony", "year": 1908}

    def test_defaults(self):
        payload = build_payload(20, 10)
        assert payload["type_meteor"] == "generic"
        assert payload["year"] == 1950

    def test_malformed_numbers_become_zero(self, caplog):
        with caplog.at_level(logging.WARNING, logger="impact_sim"):
            payload = build_payload(float("nan"), "", " ", "not-a-year")
        assert payload["velocity"] == 0.0
        assert payload["mass"] == 0.0
        assert payload["type_meteor"] == "generic"
        assert payload["year"] == 1950
        assert "velocity" in caplog.text and "mass" in caplog.text

    def test_year_coerced_to_int(self):
        assert build_payload(1, 1, year="1947")["year"] == 1947
        assert isinstance(build_payload(1, 1, year=1999.0)["year"], int)


class TestPredict:
    def test_posts_json_to_predict(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"impact_coordinates": {"lat": 12.5, "lon": -45.2}})

        result = run_predict(make_client(handler), 20.0, 1.57e9, "iron", 1947)

        assert seen["method"] == "POST"
        assert seen["url"] == f"{BASE_URL}/predict"
        assert seen["content_type"] == "application/json"
        assert seen["body"] == {"velocity": 20.0, "mass": 1.57e9, "type_meteor": "iron", "year": 1947}
        assert result.shape is ResponseShape.NESTED
        assert (result.coordinates.latitude, result.coordinates.longitude) == (12.5, -45.2)

    def test_non_2xx_raises_protocol_error(self):
        def handler(request):
            return httpx.Response(500, text="server overloaded")

        with pytest.raises(ProtocolError) as info:
            run_predict(make_client(handler), 20.0, 1.0)
        assert info.value.status_code == 500
        assert info.value.body == "server overloaded"
        assert info.value.kind is ErrorKind.PROTOCOL
        assert "500" in info.value.user_message()
        assert "server overloaded" in info.value.user_message()

    def test_invalid_json_raises_shape_error(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(ResponseShapeError) as info:
            run_predict(make_client(handler), 20.0, 1.0)
        assert info.value.body == "<html>oops</html>"

    def test_connection_failure_raises_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError) as info:
            run_predict(make_client(handler), 20.0, 1.0)
        assert info.value.kind is ErrorKind.NETWORK

    def test_single_request_by_default(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError):
            run_predict(make_client(handler), 20.0, 1.0)
        assert len(calls) == 1

    def test_optional_retry_on_transport_failure(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ReadTimeout("slow", request=request)
            return httpx.Response(200, json={"lat": 3.0, "lon": 4.0})

        result = run_predict(make_client(handler, retries=1, timeout=2.0), 20.0, 1.0)
        assert len(calls) == 2
        assert result.shape is ResponseShape.FLAT

    def test_http_errors_are_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503, text="busy")

        with pytest.raises(ProtocolError):
            run_predict(make_client(handler, retries=3), 20.0, 1.0)
        assert len(calls) == 1


class TestBackendCfg:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("IMPACT_BACKEND_URL", "http://example.invalid:9000")
        monkeypatch.setenv("IMPACT_BACKEND_TIMEOUT", "2.5")
        monkeypatch.setenv("IMPACT_BACKEND_RETRIES", "1")
        cfg = BackendCfg.from_env()
        assert cfg.base_url == "http://example.invalid:9000"
        assert cfg.timeout == 2.5
        assert cfg.retries == 1

    def test_defaults_have_no_timeout_or_retry(self, monkeypatch):
        for name in ("IMPACT_BACKEND_URL", "IMPACT_BACKEND_TIMEOUT", "IMPACT_BACKEND_RETRIES"):
            monkeypatch.delenv(name, raising=False)
        cfg = BackendCfg.from_env()
        assert cfg.timeout is None
        assert cfg.retries == 0

    def test_malformed_env_falls_back_to_defaults(self, monkeypatch, caplog):
        monkeypatch.delenv("IMPACT_BACKEND_URL", raising=False)
        monkeypatch.setenv("IMPACT_BACKEND_TIMEOUT", "soon")
        monkeypatch.setenv("IMPACT_BACKEND_RETRIES", "1.5")
        with caplog.at_level(logging.WARNING, logger="impact_sim"):
            cfg = BackendCfg.from_env()
        assert cfg.timeout is None
        assert cfg.retries == 0
        assert "IMPACT_BACKEND_TIMEOUT" in caplog.text
        assert "IMPACT_BACKEND_RETRIES" in caplog.text


class TestRequestModel:
    def test_payload_matches_request_model(self):
        payload = build_payload(12.0, 2.5e8, "iron", 1947)
        assert PredictRequest.model_validate(payload) == PredictRequest(
            velocity=12.0, mass=2.5e8, type_meteor="iron", year=1947
        )
