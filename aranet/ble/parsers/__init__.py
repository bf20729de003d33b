"""GATT characteristic parsers."""

from .aranet4 import (
    CURRENT_READINGS_UUID,
    CurrentReadingsParser,
    decode_readings,
    encode_readings,
)
from .base import BaseParser
from .device_info import (
    DEVICE_INFO_PARSERS,
    DEVICE_INFO_UUIDS,
    DeviceInfoStringParser,
    decode_info_string,
)

__all__ = [
    "BaseParser",
    "CURRENT_READINGS_UUID",
    "CurrentReadingsParser",
    "DEVICE_INFO_PARSERS",
    "DEVICE_INFO_UUIDS",
    "DeviceInfoStringParser",
    "decode_info_string",
    "decode_readings",
    "encode_readings",
]
