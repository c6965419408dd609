"""
Presentation Layer Package

HTTP surface of the forecasting service: the forecast endpoints and the
health/info checks.
"""

from src.presentation import controllers

__all__ = ["controllers"]
