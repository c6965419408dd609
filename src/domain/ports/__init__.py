"""Domain ports package."""

from .demand_advisor import IDemandAdvisor
from .health_check import IHealthCheckService

__all__ = ["IDemandAdvisor", "IHealthCheckService"]
