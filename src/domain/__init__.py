"""
Domain Layer Package

This package contains the core business logic and rules of the application.
It defines the forecasting entities, the statistical services and the
ports to optional collaborators, without dependencies on frameworks or
infrastructure concerns.
"""

# Re-export submodules
from src.domain import entities, ports, services

__all__ = ["entities", "services", "ports"]
