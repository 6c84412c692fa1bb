"""
CatPoint Security Monitor

Tracks arming state, sensor activation and camera-based cat detection,
and derives a single alarm status from them.
"""

__version__ = "1.0.0"

from .config_manager import ConfigManager
from .models import (
    Sensor,
    SensorKey,
    SensorType,
    AlarmStatus,
    ArmingStatus,
    SystemConfig
)
from .services import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener,
    SecurityError,
    UnknownSensorError,
    DetectionUnavailableError,
    AlarmEngine
)

__all__ = [
    # Core
    'AlarmEngine',
    'ConfigManager',

    # Data models
    'Sensor',
    'SensorKey',
    'SensorType',
    'AlarmStatus',
    'ArmingStatus',
    'SystemConfig',

    # Service interfaces
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',

    # Errors
    'SecurityError',
    'UnknownSensorError',
    'DetectionUnavailableError'
]
