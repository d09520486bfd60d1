"""
FastAPI routes and wiring.

- routes.py: /health, /api/models-rest, /api/ping-gen, /api/phishing
- dependencies.py: access to the RelayState owned by the app
- models.py: API-specific request/response models
- error_handlers.py: exception -> HTTP status mapping
- middleware.py: request tracing and body size limit
"""

from phish_relay.api import dependencies, error_handlers, models
from phish_relay.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
