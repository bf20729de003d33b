"""Shared formatting functions for console and file output."""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Optional

from .models import DeviceInfo, SensorData, Status

STATUS_LABELS = {
    Status.GREEN: "green",
    Status.AMBER: "amber",
    Status.RED: "red",
}


def format_age(seconds: float) -> str:
    """Format age in seconds to short human-readable string (e.g. '5min', '2h')."""
    if seconds < 60:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        return f"{int(seconds / 60)}min"
    else:
        return f"{int(seconds / 3600)}h"


def format_duration(duration: timedelta) -> str:
    """Format an interval as minutes and seconds (e.g. '5min', '2min 30s')."""
    total_seconds = int(duration.total_seconds())
    minutes, seconds = divmod(total_seconds, 60)
    if minutes and seconds:
        return f"{minutes}min {seconds}s"
    elif minutes:
        return f"{minutes}min"
    return f"{seconds}s"


def format_reading(reading: SensorData) -> str:
    """Format a reading as an aligned table."""
    rows = [
        ("CO2", f"{reading.co2} ppm ({STATUS_LABELS[reading.status]})"),
        ("Temperature", f"{reading.temperature:.1f}°C"),
        ("Humidity", f"{reading.humidity}%"),
        ("Pressure", f"{reading.pressure:.1f} hPa"),
        ("Battery", f"{reading.battery}%"),
        ("Interval", format_duration(reading.interval)),
        ("Updated", f"{format_age(reading.since_last_update.total_seconds())} ago"),
    ]
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label:<{width}}  {value}" for label, value in rows)


def format_info(info: DeviceInfo) -> str:
    """Format device information as an aligned table."""
    rows = [
        ("Manufacturer", info.manufacturer_name),
        ("Model", info.model_number),
        ("Serial", info.serial_number),
        ("Hardware", info.hardware_revision),
        ("Firmware", info.firmware_revision),
    ]
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label:<{width}}  {value}" for label, value in rows)


def format_json(reading: SensorData, info: Optional[DeviceInfo] = None) -> str:
    """Format a reading (and optionally device info) as a JSON object."""
    payload = {"measurements": reading.as_dict()}
    if info is not None:
        payload["info"] = info.as_dict()
    return json.dumps(payload, ensure_ascii=False)


def format_report(reading: SensorData, info: Optional[DeviceInfo] = None) -> str:
    """Format a plain-text report with one value per line.

    Device information lines come first when given, followed by
    temperature, humidity, CO2, pressure and battery.
    """
    lines: list[str] = []
    if info is not None:
        lines.extend([
            info.manufacturer_name,
            info.model_number,
            info.serial_number,
            info.hardware_revision,
            info.firmware_revision,
        ])
    lines.extend([
        f"{reading.temperature:g}",
        str(reading.humidity),
        str(reading.co2),
        f"{reading.pressure:g}",
        str(reading.battery),
    ])
    return "\n".join(lines) + "\n"
