"""Exceptions raised by aranet."""


class AranetError(Exception):
    """Base exception for aranet."""

    pass


class ConnectError(AranetError):
    """Could not establish a session with an Aranet4 device."""

    pass


class AdapterUnavailableError(ConnectError):
    """No usable Bluetooth adapter."""

    def __init__(self, message: str = "Failed to find a Bluetooth adapter") -> None:
        super().__init__(message)


class SearchTimeoutError(ConnectError):
    """No Aranet4 device advertised before the scan timed out."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Failed to find an Aranet4 device within {timeout:g}s")
        self.timeout = timeout


class CharacteristicNotFoundError(ConnectError):
    """The device does not expose a required GATT characteristic."""

    def __init__(self, uuid: str) -> None:
        super().__init__(f"The characteristic {uuid} was not found")
        self.uuid = uuid


class DeviceError(AranetError):
    """Reading from a connected device failed."""

    pass


class PayloadError(DeviceError):
    """A characteristic value could not be decoded."""

    pass


class ReportError(AranetError):
    """The report file could not be written."""

    pass
