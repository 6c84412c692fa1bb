"""Default configuration values and constants."""

from typing import Dict, Any

# Default system configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Image classification
    "cat_confidence_threshold": 50.0,
    "detection_scale_factor": 1.1,
    "detection_min_neighbors": 3,
    "detection_min_size": 30,
    "detection_max_size": 300,

    # Notification settings
    "notifications_enabled": False,
    "notification_webhook_url": "",
    "notification_cooldown_seconds": 60,

    # Storage settings
    "database_path": "data/security.db",

    # Logging
    "log_level": "INFO",
    "log_dir": "logs"
}

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "config.json"
}

# Haar cascade detection settings
DETECTION_SETTINGS = {
    "cascade_files": (
        "haarcascade_frontalcatface.xml",
        "haarcascade_frontalcatface_extended.xml"
    ),
    "blur_kernel_size": 3,
    "contrast_alpha": 1.2,
    "brightness_beta": 10
}

# System constants
SYSTEM_CONSTANTS = {
    "NOTIFICATION_TIMEOUT_SECONDS": 5
}
