"""Device Information service (0x180A) string parser."""

from .base import BaseParser

# Bluetooth SIG Device Information characteristics, keyed by DeviceInfo field
DEVICE_INFO_UUIDS = {
    "manufacturer_name": "00002a29-0000-1000-8000-00805f9b34fb",
    "model_number": "00002a24-0000-1000-8000-00805f9b34fb",
    "serial_number": "00002a25-0000-1000-8000-00805f9b34fb",
    "hardware_revision": "00002a27-0000-1000-8000-00805f9b34fb",
    "firmware_revision": "00002a26-0000-1000-8000-00805f9b34fb",
}


def decode_info_string(data: bytes) -> str:
    """Decode a NUL-padded UTF-8 Device Information string."""
    return bytes(data).decode("utf-8", errors="replace").rstrip("\x00").strip()


class DeviceInfoStringParser(BaseParser):
    """Parser for one UTF-8 string characteristic of the Device Information service."""

    def __init__(self, uuid: str) -> None:
        self.uuid = uuid

    def parse(self, data: bytes) -> str:
        return decode_info_string(data)


# One parser per DeviceInfo field
DEVICE_INFO_PARSERS = {
    field_name: DeviceInfoStringParser(uuid) for field_name, uuid in DEVICE_INFO_UUIDS.items()
}
