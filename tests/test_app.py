"""Tests for the application coordinator."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from aranet.app import AranetApp
from aranet.ble.parsers import decode_readings
from aranet.exceptions import DeviceError, PayloadError, ReportError
from aranet.models import AppConfig, DeviceInfo

INFO = DeviceInfo(
    manufacturer_name="SAF Tehnika",
    model_number="Aranet4",
    serial_number="123456789",
    hardware_revision="12",
    firmware_revision="v1.4.19",
)


def make_device(sample_payload, disconnect_error=None):
    device = MagicMock()
    device.measurements = AsyncMock(return_value=decode_readings(sample_payload))
    device.info = AsyncMock(return_value=INFO)
    device.disconnect = AsyncMock(side_effect=disconnect_error)
    return device


@pytest.mark.asyncio
async def test_run_once(sample_payload, capsys):
    device = make_device(sample_payload)

    with patch("aranet.app.connect", AsyncMock(return_value=device)):
        await AranetApp(AppConfig()).run()

    device.measurements.assert_awaited_once()
    device.disconnect.assert_awaited_once()
    assert "612 ppm" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_disconnect_failure_is_logged(sample_payload, caplog):
    """Test a failing disconnect on shutdown does not fail the run."""
    device = make_device(sample_payload, disconnect_error=DeviceError("Failed to disconnect"))

    with patch("aranet.app.connect", AsyncMock(return_value=device)):
        await AranetApp(AppConfig()).run()

    assert "Failed to disconnect" in caplog.text


@pytest.mark.asyncio
async def test_disconnect_failure_keeps_read_error(sample_payload):
    """Test the read error is raised, not the disconnect error that follows it."""
    device = make_device(sample_payload, disconnect_error=DeviceError("Failed to disconnect"))
    device.measurements.side_effect = PayloadError("Invalid status value: 9")

    with patch("aranet.app.connect", AsyncMock(return_value=device)):
        with pytest.raises(PayloadError, match="Invalid status"):
            await AranetApp(AppConfig()).run()

    device.disconnect.assert_awaited_once()


@pytest.mark.asyncio
async def test_unwritable_report_raises(sample_payload, tmp_path):
    device = make_device(sample_payload)
    config = AppConfig(output=str(tmp_path / "nodir" / "aranet.txt"))

    with patch("aranet.app.connect", AsyncMock(return_value=device)):
        with pytest.raises(ReportError) as exc_info:
            await AranetApp(config).run()

    assert isinstance(exc_info.value.__cause__, OSError)
    device.disconnect.assert_awaited_once()
