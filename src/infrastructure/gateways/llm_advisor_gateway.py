"""
Infrastructure Gateway - LLM Demand Advisor

Asks an OpenAI-compatible chat-completions endpoint for a second opinion
on the ensemble forecast. Every failure mode (transport, HTTP status,
malformed payload) is logged and reported as "no suggestion".
"""

import json
import re
from typing import Any, Optional

import httpx
import structlog

from src.domain.entities.forecast import AdvisoryRequest
from src.domain.ports.demand_advisor import IDemandAdvisor

logger = structlog.get_logger(__name__)

JSON_OBJECT_PATTERN = re.compile(r"\{[^{}]*\}")

PROMPT_TEMPLATE = """Analyze sales pattern and validate ML forecast:
Product: "{product_name}"
Recent {days}-day sales: {recent_sales}
ML Prediction ({horizon}-day): {prediction} units
Confidence: {confidence:.0f}%

Analyze trends, seasonality, anomalies. Return JSON only: {{"prediction": number, "reasoning": "brief"}}"""


class LLMDemandAdvisorGateway(IDemandAdvisor):
    """Demand advisor backed by a hosted large language model."""

    available = True

    def __init__(
        self,
        api_url: str,
        api_key: str,
        model: str = "google/gemini-2.5-flash",
        timeout: float = 15.0,
        horizon_days: int = 30,
    ):
        """
        Initialize the advisory gateway.

        Args:
            api_url: Full chat-completions URL
            api_key: Bearer token for the service
            model: Model identifier sent with each request
            timeout: Request timeout in seconds
            horizon_days: Forecast horizon quoted in the prompt
        """
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.horizon_days = horizon_days

    def build_prompt(self, request: AdvisoryRequest) -> str:
        return PROMPT_TEMPLATE.format(
            product_name=request.product_name,
            days=len(request.recent_quantities),
            recent_sales=", ".join(str(qty) for qty in request.recent_quantities),
            horizon=self.horizon_days,
            prediction=request.ensemble_prediction,
            confidence=request.ensemble_confidence * 100,
        )

    async def suggest(self, request: AdvisoryRequest) -> Optional[float]:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": self.build_prompt(request)}],
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(
            "advisory.request",
            url=self.api_url,
            product_id=request.product_id,
            ensemble_prediction=request.ensemble_prediction,
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "advisory.http_error",
                status_code=e.response.status_code,
                product_id=request.product_id,
            )
            return None

        except httpx.RequestError as e:
            logger.warning(
                "advisory.request_error",
                error=str(e),
                product_id=request.product_id,
            )
            return None

        except ValueError as e:
            logger.warning(
                "advisory.invalid_json",
                error=str(e),
                product_id=request.product_id,
            )
            return None

        return self._parse_suggestion(data, request.product_id)

    def _parse_suggestion(self, data: Any, product_id: str) -> Optional[float]:
        """Extract ``prediction`` from the first JSON object in the reply."""

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("advisory.unexpected_payload", product_id=product_id)
            return None

        if not isinstance(content, str):
            logger.warning("advisory.unexpected_payload", product_id=product_id)
            return None

        match = JSON_OBJECT_PATTERN.search(content.strip())
        if not match:
            logger.warning("advisory.no_json_found", product_id=product_id)
            return None

        try:
            result = json.loads(match.group(0))
        except ValueError:
            logger.warning("advisory.invalid_json", product_id=product_id)
            return None

        if not isinstance(result, dict):
            return None

        prediction = result.get("prediction")
        if isinstance(prediction, bool):
            return None
        try:
            value = float(prediction)
        except (TypeError, ValueError):
            logger.warning(
                "advisory.non_numeric_prediction",
                product_id=product_id,
                prediction=repr(prediction),
            )
            return None

        logger.info(
            "advisory.suggestion",
            product_id=product_id,
            prediction=value,
            reasoning=result.get("reasoning"),
        )
        return value


class NullDemandAdvisor(IDemandAdvisor):
    """Advisor used when no advisory service is configured."""

    available = False

    async def suggest(self, request: AdvisoryRequest) -> Optional[float]:
        return None
