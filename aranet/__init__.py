"""Read current measurements from Aranet4 CO2 sensors over Bluetooth LE."""

from .ble import Aranet4, connect
from .ble.parsers import decode_info_string, decode_readings
from .exceptions import (
    AdapterUnavailableError,
    AranetError,
    CharacteristicNotFoundError,
    ConnectError,
    DeviceError,
    PayloadError,
    ReportError,
    SearchTimeoutError,
)
from .models import DeviceInfo, SensorData, Status

__version__ = "0.2.0"

__all__ = [
    "AdapterUnavailableError",
    "Aranet4",
    "AranetError",
    "CharacteristicNotFoundError",
    "ConnectError",
    "DeviceError",
    "DeviceInfo",
    "PayloadError",
    "ReportError",
    "SearchTimeoutError",
    "SensorData",
    "Status",
    "connect",
    "decode_info_string",
    "decode_readings",
]
