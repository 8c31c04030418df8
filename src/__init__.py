"""Claude Relay - Source Package.

Note: Import `app` directly from `src.main` to avoid circular imports.
"""

__all__ = ["main", "api", "clients", "core", "models", "observability", "services"]
