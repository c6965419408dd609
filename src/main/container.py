"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager
from typing import Optional

from dependency_injector import containers, providers

from src.application.models import SystemInfo
from src.application.use_cases.forecast_use_cases import (
    GenerateForecastsUseCase,
    GetForecastConfigUseCase,
)
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.domain.entities.forecast import ForecastConfig
from src.domain.ports.demand_advisor import IDemandAdvisor
from src.domain.services.forecast_engine import DemandForecastEngine
from src.infrastructure.gateways.llm_advisor_gateway import (
    LLMDemandAdvisorGateway,
    NullDemandAdvisor,
)
from src.infrastructure.services.health_check_service import HealthCheckService
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _advisory_active(enabled: bool, api_key: Optional[str]) -> bool:
    return bool(enabled and api_key)


def build_demand_advisor(
    enabled: bool,
    api_url: str,
    api_key: Optional[str],
    model: str,
    timeout: float,
    horizon_days: int,
) -> IDemandAdvisor:
    """Return the LLM gateway when configured, a null advisor otherwise."""

    if not _advisory_active(enabled, api_key):
        return NullDemandAdvisor()
    return LLMDemandAdvisorGateway(
        api_url=api_url,
        api_key=api_key,
        model=model,
        timeout=timeout,
        horizon_days=horizon_days,
    )


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Domain
    forecast_config = providers.Singleton(
        ForecastConfig,
        alpha=config.forecast.alpha,
        es_weight=config.forecast.es_weight,
        lr_weight=config.forecast.lr_weight,
        ma_weight=config.forecast.ma_weight,
        horizon_days=config.forecast.horizon_days,
    )

    forecast_engine = providers.Singleton(
        DemandForecastEngine,
        config=forecast_config,
        advisory_context_days=config.advisory.recent_window,
    )

    # Gateways
    demand_advisor = providers.Singleton(
        build_demand_advisor,
        enabled=config.advisory.enabled,
        api_url=config.advisory.api_url,
        api_key=config.advisory.api_key,
        model=config.advisory.model,
        timeout=config.advisory.timeout_seconds,
        horizon_days=config.forecast.horizon_days,
    )

    # Infrastructure
    health_check_service = providers.Singleton(
        HealthCheckService,
        engine=forecast_engine,
        advisory_enabled=providers.Callable(
            _advisory_active, config.advisory.enabled, config.advisory.api_key
        ),
        advisory_url=config.advisory.api_url,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.service.title,
        description=config.service.description,
        version=config.service.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.service.git_commit,
        build_time=config.service.build_time,
        forecast_horizon_days=config.forecast.horizon_days,
        forecast_lookback_days=config.forecast.lookback_days,
        advisory_enabled=providers.Callable(
            _advisory_active, config.advisory.enabled, config.advisory.api_key
        ),
        advisory_api_url=config.advisory.api_url,
    )

    # Application (use cases)
    generate_forecasts_use_case = providers.Factory(
        GenerateForecastsUseCase,
        engine=forecast_engine,
        demand_advisor=demand_advisor,
        lookback_days=config.forecast.lookback_days,
        default_reorder_level=config.forecast.default_reorder_level,
        reorder_safety_factor=config.forecast.reorder_safety_factor,
        advisory_timeout=config.advisory.timeout_seconds,
        advisory_min_observations=config.advisory.min_observations,
        advisory_weight=config.advisory.blend_weight,
        advisory_confidence_boost=config.advisory.confidence_boost,
    )

    get_forecast_config_use_case = providers.Factory(
        GetForecastConfigUseCase,
        engine=forecast_engine,
        demand_advisor=demand_advisor,
        lookback_days=config.forecast.lookback_days,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Validate the forecasting setup when the application starts.

    Building the engine validates the ensemble configuration, so a bad
    weight set fails the startup instead of the first request.
    """
    container = get_container()

    engine = container.forecast_engine()
    advisor = container.demand_advisor()

    logger.info(
        "container.forecast_engine.ready",
        horizon_days=engine.config.horizon_days,
        weights=engine.config.weights,
        alpha=engine.config.alpha,
    )
    logger.info("container.advisory.state", available=advisor.available)

    try:
        yield container
    finally:
        logger.info("container.resources.shutdown")
