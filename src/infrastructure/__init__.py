"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the advisory
service and health checks.
"""

from src.infrastructure import gateways, services

__all__ = ["gateways", "services"]
