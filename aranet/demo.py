"""Demo mode: a simulated Aranet4 that needs no Bluetooth hardware."""

from __future__ import annotations

import math
import random
import time
from datetime import timedelta
from typing import Optional

from .ble.parsers import DEVICE_INFO_PARSERS, decode_readings, encode_readings
from .models import DeviceInfo, SensorData, Status

DEMO_ADDRESS = "AA:BB:CC:DD:EE:01"
DEMO_NAME = "Aranet4 1A2B3"
DEMO_INTERVAL_SECONDS = 300

DEMO_INFO = {
    "manufacturer_name": b"SAF Tehnika\x00",
    "model_number": b"Aranet4\x00",
    "serial_number": b"123456789\x00",
    "hardware_revision": b"12\x00",
    "firmware_revision": b"v1.4.19\x00",
}


def _status_for(co2: int) -> Status:
    """Status light thresholds used by the device's default settings."""
    if co2 < 1000:
        return Status.GREEN
    if co2 < 1400:
        return Status.AMBER
    return Status.RED


class SimulatedAranet4:
    """Stand-in for Aranet4 — provides .measurements(), .info(), .disconnect().

    Values follow a slow sinusoidal cycle with small noise. Every reading is
    encoded to the device's byte format and decoded with the real parser.
    """

    def __init__(
        self,
        interval: int = DEMO_INTERVAL_SECONDS,
        seed: Optional[int] = 42,
    ) -> None:
        self._interval = interval
        self._random = random.Random(seed)
        self._started = time.monotonic()
        self._connected = True
        self._battery = 87

    @property
    def address(self) -> str:
        return DEMO_ADDRESS

    @property
    def name(self) -> str:
        return DEMO_NAME

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def __aenter__(self) -> "SimulatedAranet4":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.disconnect()

    def _payload(self) -> bytes:
        elapsed = time.monotonic() - self._started
        cycle = int(elapsed // self._interval)
        since = int(elapsed % self._interval)
        phase = 2 * math.pi * cycle / 12.0

        co2 = max(400, int(800 + 500 * math.sin(phase) + self._random.gauss(0, 20)))
        reading = SensorData(
            co2=co2,
            temperature=round(21.5 + 1.2 * math.sin(phase + 0.5) + self._random.gauss(0, 0.1), 2),
            pressure=round(1013.0 + self._random.gauss(0, 0.5), 1),
            humidity=min(100, max(0, int(40 + 5 * math.sin(phase + 1.0)))),
            battery=self._battery,
            status=_status_for(co2),
            interval=timedelta(seconds=self._interval),
            since_last_update=timedelta(seconds=since),
        )
        return encode_readings(reading)

    async def measurements(self) -> SensorData:
        self._connected = True
        return decode_readings(self._payload())

    async def info(self) -> DeviceInfo:
        self._connected = True
        return DeviceInfo(**{key: DEVICE_INFO_PARSERS[key].parse(raw) for key, raw in DEMO_INFO.items()})

    async def reconnect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False


async def connect_demo() -> SimulatedAranet4:
    """Return a simulated device (the demo counterpart of connect())."""
    return SimulatedAranet4()
