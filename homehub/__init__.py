"""
homehub Root Module

Aggregates several smart-home backends into one home model.

Layer Structure:
- Domain: Entities, errors and the contracts backends must honour
- Application: Registry, identifier translation, aggregation and use cases
- Infrastructure: Vendor gateways, demo gateways, plugins and storage
- Presentation: FastAPI routers for the v2 API
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry point and configuration
"""
