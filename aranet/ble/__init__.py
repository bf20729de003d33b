"""BLE discovery, connection and parsing module."""

from .device import Aranet4, connect
from .scanner import DeviceFinder, find_device

__all__ = ["Aranet4", "DeviceFinder", "connect", "find_device"]
