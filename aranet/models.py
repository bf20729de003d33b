"""Data models for aranet."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Optional

DEFAULT_NAME_PREFIX = "Aranet4"
DEFAULT_SCAN_TIMEOUT = 10.0


class Status(Enum):
    """CO2 status light, as displayed by the device."""

    GREEN = 1
    AMBER = 2
    RED = 3


@dataclass(frozen=True)
class SensorData:
    """A single snapshot of the current readings."""

    co2: int
    temperature: float
    pressure: float
    humidity: int
    battery: int
    status: Status
    interval: timedelta
    since_last_update: timedelta

    @property
    def next_update(self) -> timedelta:
        """Time until the device takes its next measurement."""
        remaining = self.interval - self.since_last_update
        if remaining < timedelta(0):
            return timedelta(0)
        return remaining

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return {
            "co2": self.co2,
            "temperature": self.temperature,
            "pressure": self.pressure,
            "humidity": self.humidity,
            "battery": self.battery,
            "status": self.status.name,
            "interval": int(self.interval.total_seconds()),
            "since_last_update": int(self.since_last_update.total_seconds()),
        }


@dataclass(frozen=True)
class DeviceInfo:
    """Identification strings from the Device Information service."""

    manufacturer_name: str
    model_number: str
    serial_number: str
    hardware_revision: str
    firmware_revision: str

    def as_dict(self) -> dict[str, str]:
        return {
            "manufacturer_name": self.manufacturer_name,
            "model_number": self.model_number,
            "serial_number": self.serial_number,
            "hardware_revision": self.hardware_revision,
            "firmware_revision": self.firmware_revision,
        }


@dataclass
class DeviceConfig:
    """How to find the device."""

    address: Optional[str] = None
    name_prefix: str = DEFAULT_NAME_PREFIX
    scan_timeout: float = DEFAULT_SCAN_TIMEOUT

    def __post_init__(self) -> None:
        if self.address:
            self.address = self.address.upper()


@dataclass
class AppConfig:
    """Application configuration."""

    device: DeviceConfig = field(default_factory=DeviceConfig)
    watch_interval: Optional[int] = None
    output: Optional[str] = None
