"""
Source Code Root Module

Root package of the demand forecasting service.

Layer Structure:
- Domain: Sales entities and the statistical forecasting services
- Application: Forecast and health use cases and their DTOs
- Infrastructure: Advisory gateway and health check implementations
- Presentation: FastAPI controllers
- Shared: Logging and shared enumerations
- Main: Composition root, application entry point and configuration
"""
