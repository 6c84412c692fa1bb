"""Configuration components for the security monitor."""

from .defaults import (
    DEFAULT_CONFIG,
    DEFAULT_PATHS,
    DETECTION_SETTINGS,
    SYSTEM_CONSTANTS
)

__all__ = [
    'DEFAULT_CONFIG',
    'DEFAULT_PATHS',
    'DETECTION_SETTINGS',
    'SYSTEM_CONSTANTS'
]
