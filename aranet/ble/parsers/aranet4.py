"""Aranet4 current readings characteristic parser."""

import logging
import struct
from datetime import timedelta

from ...exceptions import PayloadError
from ...models import SensorData, Status
from .base import BaseParser

logger = logging.getLogger(__name__)

# Aranet4 proprietary service, current readings characteristic
CURRENT_READINGS_UUID = "f0cd3001-95da-4f4b-9ac8-aa55d312af0c"

# co2, temperature, pressure, humidity, battery, status, interval, since update
_READINGS_FORMAT = struct.Struct("<HHHBBBHH")

TEMPERATURE_DIVISOR = 20.0
PRESSURE_DIVISOR = 10.0


class CurrentReadingsParser(BaseParser):
    """Parser for the Aranet4 current readings characteristic."""

    uuid = CURRENT_READINGS_UUID

    def parse(self, data: bytes) -> SensorData:
        """
        Parse the current readings value.

        Format (little-endian, 13 bytes):
        - Bytes 0-1: CO2 (ppm)
        - Bytes 2-3: Temperature (1/20 °C per unit)
        - Bytes 4-5: Pressure (1/10 hPa per unit)
        - Byte 6: Humidity (%)
        - Byte 7: Battery (%)
        - Byte 8: Status light (1 green, 2 amber, 3 red)
        - Bytes 9-10: Measurement interval (s)
        - Bytes 11-12: Time since last measurement (s)
        """
        if len(data) < _READINGS_FORMAT.size:
            raise PayloadError(
                f"Current readings too short: {len(data)} bytes, "
                f"expected {_READINGS_FORMAT.size}"
            )

        if len(data) > _READINGS_FORMAT.size:
            logger.debug("Ignoring %d trailing bytes", len(data) - _READINGS_FORMAT.size)

        (
            co2,
            temp_raw,
            pressure_raw,
            humidity,
            battery,
            status_raw,
            interval,
            since_last_update,
        ) = _READINGS_FORMAT.unpack_from(data)

        try:
            status = Status(status_raw)
        except ValueError:
            raise PayloadError(f"Invalid status value: {status_raw}") from None

        return SensorData(
            co2=co2,
            temperature=temp_raw / TEMPERATURE_DIVISOR,
            pressure=pressure_raw / PRESSURE_DIVISOR,
            humidity=humidity,
            battery=battery,
            status=status,
            interval=timedelta(seconds=interval),
            since_last_update=timedelta(seconds=since_last_update),
        )

    def encode(self, reading: SensorData) -> bytes:
        """Build the characteristic value for a reading (used by the simulator)."""
        return _READINGS_FORMAT.pack(
            reading.co2,
            round(reading.temperature * TEMPERATURE_DIVISOR),
            round(reading.pressure * PRESSURE_DIVISOR),
            reading.humidity,
            reading.battery,
            reading.status.value,
            int(reading.interval.total_seconds()),
            int(reading.since_last_update.total_seconds()),
        )


_parser = CurrentReadingsParser()


def decode_readings(data: bytes) -> SensorData:
    """Decode a current readings characteristic value."""
    return _parser.parse(bytes(data))


def encode_readings(reading: SensorData) -> bytes:
    """Encode a reading into a current readings characteristic value."""
    return _parser.encode(reading)
