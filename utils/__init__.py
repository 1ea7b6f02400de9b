"""
Utility modules for the intake API.
"""

from .config import Config

__all__ = ["Config"]
