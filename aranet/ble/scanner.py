"""BLE discovery of advertising Aranet4 devices using Bleak."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from bleak import BleakScanner as BleakScannerLib
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData
from bleak.exc import BleakError

from ..exceptions import AdapterUnavailableError, SearchTimeoutError
from ..models import DEFAULT_NAME_PREFIX, DEFAULT_SCAN_TIMEOUT

logger = logging.getLogger(__name__)

# Service UUID the Aranet4 includes in its advertisements
ADVERTISED_SERVICE_UUID = "0000fce0-0000-1000-8000-00805f9b34fb"


class DeviceFinder:
    """Scans for the first Aranet4 matching an address or name prefix."""

    # Timeout for stop() operation - don't let it hang forever
    STOP_TIMEOUT_SECONDS = 10

    def __init__(
        self,
        address: Optional[str] = None,
        name_prefix: str = DEFAULT_NAME_PREFIX,
    ) -> None:
        self._address = address.upper() if address else None
        self._name_prefix = name_prefix
        self._scanner: Optional[BleakScannerLib] = None
        self._found: Optional[BLEDevice] = None
        self._event: Optional[asyncio.Event] = None

    def matches(self, device: BLEDevice, advertisement_data: AdvertisementData) -> bool:
        """Check whether an advertisement belongs to the wanted device."""
        if self._address:
            return device.address.upper() == self._address

        name = advertisement_data.local_name or device.name
        if not name:
            return False
        return name.startswith(self._name_prefix)

    def _detection_callback(
        self,
        device: BLEDevice,
        advertisement_data: AdvertisementData,
    ) -> None:
        """Handle detected BLE advertisement."""
        if self._found is not None:
            return

        if not self.matches(device, advertisement_data):
            logger.debug("Ignoring %s (%s)", device.address, advertisement_data.local_name)
            return

        logger.info(
            "Found %s (%s), RSSI %s",
            advertisement_data.local_name or device.name,
            device.address,
            advertisement_data.rssi,
        )
        self._found = device
        if self._event:
            self._event.set()

    async def _create_scanner(self) -> BleakScannerLib:
        """Create a fresh scanner instance."""
        return BleakScannerLib(
            detection_callback=self._detection_callback,
            service_uuids=[ADVERTISED_SERVICE_UUID],
        )

    async def _stop_scanner_safe(self) -> None:
        """Stop scanner with timeout protection."""
        if self._scanner is None:
            return

        try:
            await asyncio.wait_for(
                self._scanner.stop(),
                timeout=self.STOP_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError:
            logger.warning("Scanner stop() timed out after %ds", self.STOP_TIMEOUT_SECONDS)
        except (BleakError, OSError) as e:
            logger.debug("Error stopping scanner: %s", e)
        finally:
            self._scanner = None

    async def find(self, timeout: float = DEFAULT_SCAN_TIMEOUT) -> BLEDevice:
        """Scan until a matching device advertises.

        Raises AdapterUnavailableError if scanning cannot start and
        SearchTimeoutError if nothing matched within ``timeout`` seconds.
        """
        self._found = None
        self._event = asyncio.Event()

        logger.info(
            "Scanning for %s (timeout %gs)...",
            self._address or f"{self._name_prefix}*",
            timeout,
        )

        try:
            self._scanner = await self._create_scanner()
            await self._scanner.start()
        except (BleakError, OSError) as e:
            self._scanner = None
            raise AdapterUnavailableError(f"Failed to start BLE scan: {e}") from e

        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            raise SearchTimeoutError(timeout) from None
        finally:
            await self._stop_scanner_safe()

        found = self._found
        if found is None:
            raise SearchTimeoutError(timeout)
        return found


async def find_device(
    address: Optional[str] = None,
    name_prefix: str = DEFAULT_NAME_PREFIX,
    timeout: float = DEFAULT_SCAN_TIMEOUT,
) -> BLEDevice:
    """Find the first advertising Aranet4."""
    return await DeviceFinder(address=address, name_prefix=name_prefix).find(timeout)
