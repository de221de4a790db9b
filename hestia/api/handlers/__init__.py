"""
API Handlers

Route handlers for the Hestia API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer. Domain errors are
raised as HestiaException subclasses and rendered by the error handler.
"""

from hestia.api.handlers import (
    artisan_handler,
    gallery_handler,
    health_handler,
)

__all__ = [
    "artisan_handler",
    "gallery_handler",
    "health_handler",
]
