"""API Package - FastAPI routes, middleware, error handlers and dependencies.

Components:
- routes: API endpoint routers (chat, debug, health)
- middleware: Request logging
- errors: JSON error envelope and exception handlers
- deps: FastAPI dependency injection functions

Note: Import routers directly from src.api.routes to avoid circular imports.
"""

__all__ = ["routes", "middleware", "errors", "deps"]
