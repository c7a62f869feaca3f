"""Exceptions raised while decoding VITAL streams."""

from __future__ import annotations


class VitalError(Exception):
    """Base class for vitalfile errors."""


class InvalidFormatError(VitalError, ValueError):
    """The byte stream does not follow the VITAL layout."""


class TruncatedStreamError(VitalError, ValueError):
    """The stream ended in the middle of the header or a packet."""

    def __init__(self, message: str, pending: int = 0):
        super().__init__(message)
        self.pending = pending
