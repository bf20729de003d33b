"""Connection to a single Aranet4 device over GATT."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from bleak import BleakClient
from bleak.backends.characteristic import BleakGATTCharacteristic
from bleak.backends.device import BLEDevice
from bleak.exc import BleakError

from ..exceptions import CharacteristicNotFoundError, ConnectError, DeviceError
from ..models import DEFAULT_NAME_PREFIX, DEFAULT_SCAN_TIMEOUT, DeviceInfo, SensorData
from .parsers import DEVICE_INFO_PARSERS, CurrentReadingsParser
from .scanner import find_device

logger = logging.getLogger(__name__)


class Aranet4:
    """A connection to an Aranet4 device.

    Created by connect(). Use as an async context manager to disconnect
    automatically:

        async with await connect() as device:
            data = await device.measurements()
    """

    def __init__(
        self,
        client: BleakClient,
        current_readings: BleakGATTCharacteristic,
        name: Optional[str] = None,
    ) -> None:
        self._client = client
        self._current_readings = current_readings
        self._readings_parser = CurrentReadingsParser()
        self._name = name

    @property
    def address(self) -> str:
        """BLE address (a UUID on macOS)."""
        return self._client.address

    @property
    def name(self) -> Optional[str]:
        """Advertised local name, if known."""
        return self._name

    @property
    def is_connected(self) -> bool:
        return self._client.is_connected

    async def __aenter__(self) -> "Aranet4":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.disconnect()

    async def _ensure_connected(self) -> None:
        if not self._client.is_connected:
            logger.info("Connection to %s lost, reconnecting", self.address)
            await self.reconnect()

    async def _read(self, char_specifier: Union[BleakGATTCharacteristic, str]) -> bytes:
        try:
            return bytes(await self._client.read_gatt_char(char_specifier))
        except (BleakError, OSError, asyncio.TimeoutError) as e:
            raise DeviceError(f"Failed to read from {self.address}: {e}") from e

    async def measurements(self) -> SensorData:
        """Read the current sensor values from the device."""
        await self._ensure_connected()

        payload = await self._read(self._current_readings)
        reading = self._readings_parser.parse(payload)

        logger.debug(
            "Read from %s: %d ppm, %.2f°C, %d%%, %.1f hPa",
            self.address,
            reading.co2,
            reading.temperature,
            reading.humidity,
            reading.pressure,
        )
        return reading

    async def info(self) -> DeviceInfo:
        """Read manufacturer, model, serial and revision strings."""
        await self._ensure_connected()

        values: dict[str, str] = {}
        for field_name, parser in DEVICE_INFO_PARSERS.items():
            characteristic = self._client.services.get_characteristic(parser.uuid)
            if characteristic is None:
                logger.warning("Device %s has no %s characteristic", self.address, field_name)
                values[field_name] = ""
                continue
            values[field_name] = parser.parse(await self._read(characteristic))

        return DeviceInfo(**values)

    async def reconnect(self) -> None:
        """Reconnect to the device."""
        try:
            await self._client.connect()
        except (BleakError, OSError, asyncio.TimeoutError) as e:
            raise DeviceError(f"Failed to reconnect to {self.address}: {e}") from e
        logger.info("Reconnected to %s", self.address)

    async def disconnect(self) -> None:
        """Disconnect from the device. Does nothing if already disconnected."""
        if not self._client.is_connected:
            return
        try:
            await self._client.disconnect()
        except (BleakError, OSError) as e:
            raise DeviceError(f"Failed to disconnect from {self.address}: {e}") from e
        logger.info("Disconnected from %s", self.address)


async def connect(
    address: Optional[str] = None,
    name_prefix: str = DEFAULT_NAME_PREFIX,
    timeout: float = DEFAULT_SCAN_TIMEOUT,
) -> Aranet4:
    """Find an Aranet4 device and connect to it.

    Args:
        address: Connect only to this address instead of the first device
            whose name starts with name_prefix
        name_prefix: Advertised local name prefix to look for
        timeout: Seconds to scan before giving up

    Raises:
        AdapterUnavailableError: No Bluetooth adapter could be used
        SearchTimeoutError: No matching device advertised in time
        CharacteristicNotFoundError: The device lacks the readings characteristic
        ConnectError: The BLE connection failed
    """
    device: BLEDevice = await find_device(address=address, name_prefix=name_prefix, timeout=timeout)

    client = BleakClient(device)
    try:
        await client.connect()
    except (BleakError, OSError, asyncio.TimeoutError) as e:
        raise ConnectError(f"Failed to connect to {device.address}: {e}") from e

    logger.info("Connected to %s (%s)", device.name, device.address)

    current_readings = client.services.get_characteristic(CurrentReadingsParser.uuid)
    if current_readings is None:
        try:
            await client.disconnect()
        except (BleakError, OSError) as e:
            logger.debug("Error disconnecting from %s: %s", device.address, e)
        raise CharacteristicNotFoundError(CurrentReadingsParser.uuid)

    return Aranet4(client, current_readings, name=device.name)
