"""
Configuration loading for mdpreview.
"""

from .manager import ConfigManager

__all__ = ["ConfigManager"]
