"""API routes package."""

from . import analysis, health


__all__ = [
    "analysis",
    "health",
]
