"""
CLI Inbound Adapter Package

Console display for dependency analysis.
"""

from .display import ConsoleDisplay

__all__ = [
    "ConsoleDisplay",
]
