"""Configuration package for pumpscope.

Re-exports the settings symbols so callers can write::

    from pumpscope.config import get_settings
"""

from __future__ import annotations

from pumpscope.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
