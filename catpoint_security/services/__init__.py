"""Services for the security monitor."""

from .interfaces import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener
)
from .errors import SecurityError, UnknownSensorError, DetectionUnavailableError
from .alarm_engine import AlarmEngine

__all__ = [
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'SecurityError',
    'UnknownSensorError',
    'DetectionUnavailableError',
    'AlarmEngine'
]
