"""
Database layer.

Owns the process-wide MongoDB client.
"""

from .connection import ConnectionManager

__all__ = ["ConnectionManager"]
