from __future__ import annotations

import httpx
import pytest

from src.domain.entities.forecast import AdvisoryRequest
from src.infrastructure.gateways.llm_advisor_gateway import (
    LLMDemandAdvisorGateway,
    NullDemandAdvisor,
)

API_URL = "https://advisor.example.com/v1/chat/completions"


def _advisory_request() -> AdvisoryRequest:
    return AdvisoryRequest(
        product_id="p-1",
        product_name="Espresso beans",
        recent_quantities=[4, 6, 5],
        ensemble_prediction=150,
        ensemble_confidence=0.62,
    )


def _completion(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class _StubResponse:
    def __init__(self, payload=None, status_code: int = 200, json_error=None):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("POST", API_URL)
            response = httpx.Response(self.status_code, request=request)
            raise httpx.HTTPStatusError("error", request=request, response=response)

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class _StubAsyncClient:
    def __init__(self, response=None, error=None, calls=None):
        self._response = response
        self._error = error
        self._calls = calls if calls is not None else []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    async def post(self, url, json=None, headers=None):
        self._calls.append({"url": url, "json": json, "headers": headers})
        if self._error is not None:
            raise self._error
        return self._response


def _patch_client(monkeypatch, **kwargs) -> list:
    calls: list = []
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(calls=calls, **kwargs),
    )
    return calls


def _gateway() -> LLMDemandAdvisorGateway:
    return LLMDemandAdvisorGateway(api_url=API_URL, api_key="secret", model="test-model")


def test_build_prompt_summarizes_the_forecast() -> None:
    prompt = _gateway().build_prompt(_advisory_request())

    assert '"Espresso beans"' in prompt
    assert "Recent 3-day sales: 4, 6, 5" in prompt
    assert "ML Prediction (30-day): 150 units" in prompt
    assert "Confidence: 62%" in prompt


@pytest.mark.asyncio
async def test_suggest_parses_prediction(monkeypatch) -> None:
    content = 'Sure! {"prediction": 180, "reasoning": "weekend peak"} Hope it helps.'
    calls = _patch_client(monkeypatch, response=_StubResponse(_completion(content)))

    suggestion = await _gateway().suggest(_advisory_request())

    assert suggestion == 180.0
    assert calls[0]["url"] == API_URL
    assert calls[0]["headers"]["Authorization"] == "Bearer secret"
    assert calls[0]["json"]["model"] == "test-model"
    assert calls[0]["json"]["messages"][0]["role"] == "user"


@pytest.mark.asyncio
async def test_suggest_accepts_numeric_strings(monkeypatch) -> None:
    content = '{"prediction": "175.5"}'
    _patch_client(monkeypatch, response=_StubResponse(_completion(content)))

    assert await _gateway().suggest(_advisory_request()) == 175.5


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [
        "no json here",
        '{"prediction": "lots"}',
        '{"prediction": true}',
        '{"reasoning": "missing"}',
        '{"prediction": 1,}',
        None,
    ],
)
async def test_suggest_returns_none_for_unusable_content(monkeypatch, content) -> None:
    _patch_client(monkeypatch, response=_StubResponse(_completion(content)))

    assert await _gateway().suggest(_advisory_request()) is None


@pytest.mark.asyncio
async def test_suggest_returns_none_for_unexpected_payload(monkeypatch) -> None:
    _patch_client(monkeypatch, response=_StubResponse({"choices": []}))

    assert await _gateway().suggest(_advisory_request()) is None


@pytest.mark.asyncio
async def test_suggest_returns_none_on_http_error(monkeypatch) -> None:
    _patch_client(monkeypatch, response=_StubResponse(status_code=429))

    assert await _gateway().suggest(_advisory_request()) is None


@pytest.mark.asyncio
async def test_suggest_returns_none_on_transport_error(monkeypatch) -> None:
    _patch_client(monkeypatch, error=httpx.ConnectError("refused"))

    assert await _gateway().suggest(_advisory_request()) is None


@pytest.mark.asyncio
async def test_suggest_returns_none_on_invalid_json_body(monkeypatch) -> None:
    _patch_client(
        monkeypatch, response=_StubResponse(json_error=ValueError("not json"))
    )

    assert await _gateway().suggest(_advisory_request()) is None


@pytest.mark.asyncio
async def test_null_advisor_never_suggests() -> None:
    advisor = NullDemandAdvisor()

    assert advisor.available is False
    assert await advisor.suggest(_advisory_request()) is None
