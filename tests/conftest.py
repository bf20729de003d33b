"""Pytest configuration and fixtures for aranet tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from aranet.ble.parsers import CURRENT_READINGS_UUID

# 612 ppm, 22.45 °C, 1012.3 hPa, 41 %, 87 % battery, green, 300 s interval, 74 s ago
SAMPLE_PAYLOAD = bytes.fromhex("6402c1018b272957012c014a00")


def make_ble_device(address: str = "AA:BB:CC:DD:EE:FF", name: str = "Aranet4 1A2B3") -> MagicMock:
    """Mock BLEDevice. name must be set after construction on a MagicMock."""
    device = MagicMock()
    device.address = address
    device.name = name
    return device


def make_advertisement(local_name: str | None = "Aranet4 1A2B3", rssi: int = -60) -> MagicMock:
    """Mock AdvertisementData."""
    advertisement = MagicMock()
    advertisement.local_name = local_name
    advertisement.rssi = rssi
    return advertisement


@pytest.fixture
def sample_payload() -> bytes:
    """Current readings value as read from a real device."""
    return SAMPLE_PAYLOAD


@pytest.fixture
def readings_characteristic() -> MagicMock:
    characteristic = MagicMock()
    characteristic.uuid = CURRENT_READINGS_UUID
    return characteristic


@pytest.fixture
def mock_client(sample_payload, readings_characteristic) -> MagicMock:
    """Mock BleakClient connected to an Aranet4."""
    client = MagicMock()
    client.address = "AA:BB:CC:DD:EE:FF"
    client.is_connected = True
    client.connect = AsyncMock()
    client.disconnect = AsyncMock()
    client.read_gatt_char = AsyncMock(return_value=bytearray(sample_payload))
    client.services.get_characteristic = MagicMock(return_value=readings_characteristic)
    return client
