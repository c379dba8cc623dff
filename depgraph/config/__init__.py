"""
Configuration Package

Environment settings.
"""

from .settings import Settings

__all__ = [
    "Settings",
]
