"""
Configuration loading.
"""

from .loader import DEFAULT_CONFIG, ConfigLoader

__all__ = ["ConfigLoader", "DEFAULT_CONFIG"]
