"""Security repository implementations for sensors and status fields."""

import os
import sqlite3
from typing import Dict, Set

from ..models.sensor import Sensor, SensorKey, SensorType
from ..models.status import AlarmStatus, ArmingStatus
from .interfaces import SecurityRepositoryInterface
from ..utils import ensure_directory_exists
from ..logging_config import get_logger

logger = get_logger("storage_service")

ALARM_STATUS_KEY = "alarm_status"
ARMING_STATUS_KEY = "arming_status"


class InMemorySecurityRepository(SecurityRepositoryInterface):
    """Process-local repository, used by tests and demos."""

    def __init__(self,
                 arming_status: ArmingStatus = ArmingStatus.DISARMED,
                 alarm_status: AlarmStatus = AlarmStatus.NO_ALARM):
        self._sensors: Dict[SensorKey, Sensor] = {}
        self._arming_status = arming_status
        self._alarm_status = alarm_status

    def get_sensors(self) -> Set[Sensor]:
        # Copies, so state only changes through update_sensor
        return {sensor.copy() for sensor in self._sensors.values()}

    def add_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.key] = sensor.copy()

    def remove_sensor(self, sensor: Sensor) -> None:
        self._sensors.pop(sensor.key, None)

    def update_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.key] = sensor.copy()

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status


class SqliteSecurityRepository(SecurityRepositoryInterface):
    """SQLite-backed repository that survives restarts."""

    def __init__(self, database_path: str = "data/security.db"):
        """
        Initialize the repository.

        Args:
            database_path: Path to SQLite database file
        """
        self.database_path = database_path
        self._initialize_storage()

    def get_sensors(self) -> Set[Sensor]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT name, sensor_type, sensor_id, active FROM sensors"
            ).fetchall()

        return {
            Sensor(name, SensorType(sensor_type), bool(active), sensor_id)
            for name, sensor_type, sensor_id, active in rows
        }

    def add_sensor(self, sensor: Sensor) -> None:
        self._upsert_sensor(sensor)
        logger.info(f"Added sensor {sensor.name} ({sensor.sensor_type.name})")

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM sensors WHERE name = ? AND sensor_type = ?",
                (sensor.name, sensor.sensor_type.value)
            )
            conn.commit()
        logger.info(f"Removed sensor {sensor.name} ({sensor.sensor_type.name})")

    def update_sensor(self, sensor: Sensor) -> None:
        self._upsert_sensor(sensor)
        logger.debug(f"Updated sensor {sensor.name}: active={sensor.active}")

    def get_alarm_status(self) -> AlarmStatus:
        return AlarmStatus[self._get_status(ALARM_STATUS_KEY, AlarmStatus.NO_ALARM.name)]

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._set_status(ALARM_STATUS_KEY, alarm_status.name)

    def get_arming_status(self) -> ArmingStatus:
        return ArmingStatus[self._get_status(ARMING_STATUS_KEY, ArmingStatus.DISARMED.name)]

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._set_status(ARMING_STATUS_KEY, arming_status.name)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.database_path)

    def _initialize_storage(self) -> None:
        """Create the database directory and tables."""
        directory = os.path.dirname(self.database_path)
        if directory:
            ensure_directory_exists(directory)

        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS sensors (
                        name TEXT NOT NULL,
                        sensor_type TEXT NOT NULL,
                        sensor_id TEXT NOT NULL,
                        active INTEGER NOT NULL DEFAULT 0,
                        PRIMARY KEY (name, sensor_type)
                    )
                """)

                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS status (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """)

                conn.commit()
                logger.debug("Database initialized successfully")

        except sqlite3.Error as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

        logger.info(f"Storage initialized: {self.database_path}")

    def _upsert_sensor(self, sensor: Sensor) -> None:
        with self._connect() as conn:
            conn.execute("""
                INSERT INTO sensors (name, sensor_type, sensor_id, active)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(name, sensor_type) DO UPDATE SET active = excluded.active
            """, (sensor.name, sensor.sensor_type.value, sensor.sensor_id, int(sensor.active)))
            conn.commit()

    def _get_status(self, key: str, default: str) -> str:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM status WHERE key = ?", (key,)).fetchone()
        return row[0] if row else default

    def _set_status(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO status (key, value) VALUES (?, ?)",
                (key, value)
            )
            conn.commit()
