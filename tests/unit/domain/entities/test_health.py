from __future__ import annotations

from datetime import timezone

from src.domain.entities.health import (
    AdvisoryCheck,
    EngineCheck,
    ServiceStatus,
    SystemHealth,
)


def test_engine_check_defaults() -> None:
    check = EngineCheck(
        status=ServiceStatus.DOWN, horizon_days=30, expected_prediction=150
    )
    assert check.checked_at.tzinfo == timezone.utc
    assert check.actual_prediction is None


def test_advisory_check_reachable_follows_status() -> None:
    up = AdvisoryCheck(status=ServiceStatus.UP, url="https://a/", status_code=401)
    down = AdvisoryCheck(status=ServiceStatus.DOWN, url="https://a/", status_code=503)
    assert up.reachable is True
    assert down.reachable is False


def test_system_health_advisory_defaults_to_none() -> None:
    engine = EngineCheck(
        status=ServiceStatus.UP,
        horizon_days=30,
        expected_prediction=150,
        actual_prediction=150,
    )
    health = SystemHealth(status=ServiceStatus.UP, engine=engine)
    assert health.engine is engine
    assert health.advisory is None
