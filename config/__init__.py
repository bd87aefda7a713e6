"""
Configuration module for the number elimination server.
"""

from . import settings

__all__ = ['settings']
