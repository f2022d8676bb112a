"""
Glimmer Server Package.

This package contains the web server implementation for Glimmer.
It includes the API definition, WebSocket endpoint, service logic and configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    services: Business logic and service layer.
    exception_handlers: Mapping of exceptions to HTTP responses.
    middleware: Request tracing middleware.
"""
