"""Arming and alarm status enumerations."""

from enum import Enum


class ArmingStatus(Enum):
    """Whether the system is watching its sensors, and in which mode."""
    DISARMED = "Disarmed"
    ARMED_HOME = "Armed - At Home"
    ARMED_AWAY = "Armed - Away"

    @property
    def description(self) -> str:
        return self.value

    @property
    def is_armed(self) -> bool:
        """True for both armed modes."""
        return self is not ArmingStatus.DISARMED


class AlarmStatus(Enum):
    """Current threat assessment, ordered NO_ALARM < PENDING_ALARM < ALARM."""
    NO_ALARM = ("Cool and Good", "#47C970")
    PENDING_ALARM = ("I'm in Danger...", "#F2B705")
    ALARM = ("Awooga!", "#D93B3B")

    def __init__(self, description: str, color: str):
        self.description = description
        self.color = color
