"""Watch mode: read the device repeatedly and report each reading."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Callable, Optional, Protocol

from .exceptions import DeviceError
from .models import SensorData

logger = logging.getLogger(__name__)

# Extra wait after the device's scheduled update before reading again
UPDATE_GRACE_SECONDS = 2
# Never poll faster than this in schedule-following mode
MIN_WAIT_SECONDS = 5
# Wait after a failed read before retrying
RETRY_SECONDS = 10


class MeasurementSource(Protocol):
    async def measurements(self) -> SensorData: ...


class WatchReporter:
    """Reads measurements in a loop and hands them to a callback.

    Supports two modes:
    - Fixed mode (interval > 0): reads every N seconds
    - Schedule mode (interval == 0): reads right after the device's next
      internal measurement, using interval and since_last_update
    """

    def __init__(
        self,
        device: MeasurementSource,
        on_reading: Callable[[SensorData], None],
        interval: int = 0,
        count: Optional[int] = None,
    ) -> None:
        self._device = device
        self._on_reading = on_reading
        self._interval = interval
        self._count = count
        self._reads = 0
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def task(self) -> Optional[asyncio.Task]:
        """Background task created by start()."""
        return self._task

    @property
    def reads(self) -> int:
        """Number of successful reads so far."""
        return self._reads

    def next_wait(self, reading: Optional[SensorData]) -> float:
        """Seconds to sleep before the next read."""
        if reading is None:
            return RETRY_SECONDS
        if self._interval > 0:
            return self._interval

        wait = reading.next_update + timedelta(seconds=UPDATE_GRACE_SECONDS)
        return max(wait.total_seconds(), MIN_WAIT_SECONDS)

    async def start(self) -> asyncio.Task:
        """Start the reporter as a background task and return it."""
        self._running = True
        task = asyncio.create_task(self.run(), name="watch_reporter")
        self._task = task
        if self._interval:
            logger.info("Watch reporter started (every %ds)", self._interval)
        else:
            logger.info("Watch reporter started (following device schedule)")
        return task

    async def stop(self) -> None:
        """Stop the reporter."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def run(self) -> None:
        """Read until stopped or until count readings have been reported."""
        self._running = True

        while self._running:
            reading: Optional[SensorData] = None
            try:
                reading = await self._device.measurements()
            except DeviceError as e:
                logger.warning("Failed to read measurements: %s", e)

            if reading is not None:
                self._reads += 1
                self._on_reading(reading)

                if self._count is not None and self._reads >= self._count:
                    break

            wait = self.next_wait(reading)
            logger.debug("Next read in %.0fs", wait)
            await asyncio.sleep(wait)

        self._running = False
