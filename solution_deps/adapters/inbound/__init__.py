"""
Inbound Adapters
"""

from .scan_loader import load_scan

__all__ = [
    "load_scan",
]
