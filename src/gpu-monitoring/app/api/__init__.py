"""API endpoints for the GPU monitoring service."""

from . import gpu, health

__all__ = ["gpu", "health"]
