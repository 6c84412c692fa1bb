"""Configuration data models."""

from dataclasses import dataclass


@dataclass
class SystemConfig:
    """System configuration settings."""
    # Image classification
    cat_confidence_threshold: float = 50.0  # Percent
    detection_scale_factor: float = 1.1
    detection_min_neighbors: int = 3
    detection_min_size: int = 30  # Pixels
    detection_max_size: int = 300  # Pixels

    # Notification settings
    notifications_enabled: bool = False
    notification_webhook_url: str = ""
    notification_cooldown_seconds: int = 60

    # Storage settings
    database_path: str = "data/security.db"

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
