"""Custom exceptions for the price-aware heater controller.

Every error raised by the control engine and the price cache lives here
so that callers can catch ``HeaterError`` without importing from each module.
"""


class HeaterError(Exception):
    """Base exception for all heater errors."""


class FetchError(HeaterError):
    """Raised when the price feed cannot be reached or answers with an error status."""


class DecodeError(HeaterError):
    """Raised when a price schedule document is malformed or inconsistent."""


class StaleDataError(HeaterError):
    """Raised when a fetched schedule has already expired relative to now."""


class ConfigurationError(HeaterError):
    """Raised when configured limits violate their invariants.

    This is the only error that should halt startup.
    """
