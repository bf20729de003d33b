"""Configuration loading from YAML."""

import logging
from pathlib import Path

import yaml

from .models import DEFAULT_SCAN_TIMEOUT, AppConfig, DeviceConfig

logger = logging.getLogger(__name__)


def load_config(config_path: Path) -> AppConfig:
    """Load configuration from a YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        data = {}
    elif not isinstance(data, dict):
        logger.warning("Invalid configuration: %s", data)
        data = {}

    device_data = data.get("device") or {}
    device_config = DeviceConfig()
    if not isinstance(device_data, dict):
        logger.warning("Invalid device configuration: %s", device_data)
        device_data = {}

    address = device_data.get("address")
    if address is not None:
        device_config.address = str(address).upper()

    name_prefix = device_data.get("name_prefix")
    if name_prefix:
        device_config.name_prefix = str(name_prefix)

    scan_timeout = device_data.get("scan_timeout")
    if scan_timeout is not None:
        try:
            device_config.scan_timeout = float(scan_timeout)
            if device_config.scan_timeout <= 0:
                raise ValueError("must be positive")
        except (ValueError, TypeError) as e:
            logger.warning("Invalid scan_timeout value: %s - %s", scan_timeout, e)
            device_config.scan_timeout = DEFAULT_SCAN_TIMEOUT

    watch_interval = data.get("watch_interval")
    if watch_interval is not None:
        try:
            watch_interval = int(watch_interval)
            if watch_interval < 0:
                raise ValueError("must not be negative")
        except (ValueError, TypeError) as e:
            logger.warning("Invalid watch_interval value: %s - %s", data.get("watch_interval"), e)
            watch_interval = None

    output = data.get("output")
    if output is not None:
        output = str(output)

    config = AppConfig(
        device=device_config,
        watch_interval=watch_interval,
        output=output,
    )
    logger.info(
        "Loaded configuration: %s",
        device_config.address or f"first device named {device_config.name_prefix}*",
    )
    return config
