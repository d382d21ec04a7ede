"""
Shared API - model catalog and health endpoints.
"""

from . import providers, health

__all__ = ["providers", "health"] 