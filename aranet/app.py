"""Main application coordinator."""

from __future__ import annotations

import asyncio
import logging
import signal
from pathlib import Path
from typing import Optional, Union

from .ble.device import Aranet4, connect
from .console import WatchReporter
from .demo import SimulatedAranet4, connect_demo
from .formatting import format_info, format_json, format_reading, format_report
from .exceptions import DeviceError, ReportError
from .models import AppConfig, DeviceInfo, SensorData

logger = logging.getLogger(__name__)


class AranetApp:
    """Connects to the device, reads it once or keeps watching it."""

    def __init__(
        self,
        config: AppConfig,
        show_info: bool = False,
        json_output: bool = False,
        watch: bool = False,
        count: Optional[int] = None,
        demo: bool = False,
    ) -> None:
        self._config = config
        self._show_info = show_info
        self._json_output = json_output
        self._watch = watch
        self._count = count
        self._demo = demo
        self._device: Optional[Union[Aranet4, SimulatedAranet4]] = None
        self._info: Optional[DeviceInfo] = None
        self._reporter: Optional[WatchReporter] = None
        self._shutdown_event: Optional[asyncio.Event] = None

    async def _connect(self) -> Union[Aranet4, SimulatedAranet4]:
        if self._demo:
            logger.info("Demo mode, using simulated device")
            return await connect_demo()

        device_config = self._config.device
        return await connect(
            address=device_config.address,
            name_prefix=device_config.name_prefix,
            timeout=device_config.scan_timeout,
        )

    def _report(self, reading: SensorData) -> None:
        """Print a reading and write the report file if configured."""
        if self._json_output:
            print(format_json(reading, self._info), flush=True)
        else:
            print(format_reading(reading), flush=True)
            if self._watch:
                print(flush=True)

        if self._config.output:
            try:
                self._write_report(Path(self._config.output), reading)
            except ReportError as e:
                if not self._watch:
                    raise
                logger.warning("%s", e)

    def _write_report(self, path: Path, reading: SensorData) -> None:
        try:
            path.write_text(format_report(reading, self._info), encoding="utf-8")
        except OSError as e:
            raise ReportError(f"Failed to write report to {path}: {e}") from e
        logger.debug("Wrote report to %s", path)

    async def start(self) -> Union[Aranet4, SimulatedAranet4]:
        """Connect and read device information if requested."""
        device = await self._connect()
        self._device = device

        # The report file always carries device info, like the console with --info
        if self._show_info or self._config.output:
            self._info = await device.info()
            if self._show_info and not self._json_output:
                print(format_info(self._info), flush=True)
                print(flush=True)

        return device

    async def stop(self) -> None:
        """Stop watching and disconnect."""
        if self._reporter:
            await self._reporter.stop()
            self._reporter = None

        if self._device:
            try:
                await self._device.disconnect()
            except DeviceError as e:
                logger.warning("%s", e)
            self._device = None

    async def read_once(self, device: Union[Aranet4, SimulatedAranet4]) -> SensorData:
        """Read and report a single snapshot."""
        reading = await device.measurements()
        self._report(reading)
        return reading

    async def run(self) -> None:
        """Run until done, or until a shutdown signal in watch mode."""
        self._shutdown_event = asyncio.Event()

        try:
            device = await self.start()

            if not self._watch:
                await self.read_once(device)
                return

            self._install_signal_handlers()
            self._reporter = WatchReporter(
                device,
                self._report,
                interval=self._config.watch_interval or 0,
                count=self._count,
            )
            watch_task = await self._reporter.start()

            shutdown = asyncio.create_task(self._shutdown_event.wait())
            done, _ = await asyncio.wait(
                {shutdown, watch_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
            shutdown.cancel()
            if watch_task in done and not watch_task.cancelled():
                exc = watch_task.exception()
                if exc:
                    raise exc

        finally:
            self._remove_signal_handlers()
            await self.stop()

    def _install_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self._handle_shutdown)
            except (NotImplementedError, RuntimeError):
                # Windows event loops have no signal handler support
                pass

    def _remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.remove_signal_handler(sig)
            except (NotImplementedError, RuntimeError):
                pass

    def _handle_shutdown(self) -> None:
        """Handle shutdown signal."""
        logger.info("Shutdown signal received")
        if self._shutdown_event:
            self._shutdown_event.set()
