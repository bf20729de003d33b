"""Base parser class for GATT characteristic values."""

from abc import ABC, abstractmethod
from typing import Any


class BaseParser(ABC):
    """Abstract base class for characteristic value parsers."""

    #: UUID of the characteristic this parser decodes
    uuid: str

    @abstractmethod
    def parse(self, data: bytes) -> Any:
        """
        Decode a raw characteristic value.

        Args:
            data: Bytes read from the characteristic

        Returns:
            The decoded value

        Raises:
            PayloadError: If the value cannot be decoded
        """
        pass
