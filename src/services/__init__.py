"""
Services Package - Service Layer

This package provides the relay's business logic, kept separate from routing.
"""

from src.services.relay import RelayService

__all__ = ["RelayService"]
