"""Wires configuration, storage, image classification and notifications into an engine."""

from typing import Optional

from .config_manager import ConfigManager
from .logging_config import setup_logging, get_logger
from .models.config import SystemConfig
from .services.alarm_engine import AlarmEngine
from .services.image_service import CatDetectionImageService
from .services.interfaces import ImageServiceInterface, SecurityRepositoryInterface
from .services.notification_service import AlarmNotifier, NotificationConfig
from .services.storage_service import SqliteSecurityRepository

logger = get_logger("security_system")


def build_alarm_engine(config: Optional[SystemConfig] = None,
                       repository: Optional[SecurityRepositoryInterface] = None,
                       image_service: Optional[ImageServiceInterface] = None) -> AlarmEngine:
    """Create an AlarmEngine from configuration.

    Missing collaborators are built from the config: a SQLite repository at
    ``database_path``, the OpenCV cat detector, and a webhook notifier when
    notifications are enabled.
    """
    config = config or SystemConfig()
    repository = repository or SqliteSecurityRepository(config.database_path)
    image_service = image_service or CatDetectionImageService.from_config(config)

    engine = AlarmEngine(repository, image_service, config=config)

    if config.notifications_enabled:
        engine.add_status_listener(AlarmNotifier(NotificationConfig.from_system_config(config)))
        logger.info("Alarm notifications enabled")

    return engine


def create_security_system(config_path: Optional[str] = None) -> AlarmEngine:
    """Load configuration from disk, set up logging and build the engine."""
    config_manager = ConfigManager(config_path)
    if not config_manager.validate_config():
        raise ValueError(f"Invalid configuration in {config_manager.config_path}")

    config = config_manager.get_config()
    setup_logging(config.log_level, config.log_dir)
    return build_alarm_engine(config)
