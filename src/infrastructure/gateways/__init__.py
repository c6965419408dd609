"""
Gateways Package - Infrastructure Layer

This package contains concrete implementations of the ports defined in
the domain layer. These implementations handle the details of external
service communications.
"""

from .llm_advisor_gateway import LLMDemandAdvisorGateway, NullDemandAdvisor

__all__ = ["LLMDemandAdvisorGateway", "NullDemandAdvisor"]
