"""Status indicator mapping: device status to RGB colour."""

from heater.models import CacheStatus, DeviceStatus

#: Dim colours; the indicator LED is bright at full scale.
STATUS_COLOURS: dict[DeviceStatus, tuple[int, int, int]] = {
    DeviceStatus.INITIALIZING: (10, 10, 0),
    DeviceStatus.READY: (0, 10, 0),
    DeviceStatus.COLLECTING: (0, 0, 10),
    DeviceStatus.MISSING_DATA: (10, 0, 0),
}


def status_colour(status: DeviceStatus) -> tuple[int, int, int]:
    """Return the (r, g, b) colour for a device status."""
    return STATUS_COLOURS[status]


def device_status(cache_status: CacheStatus | None) -> DeviceStatus:
    """Derive the device status from the price cache health signal."""
    if cache_status is CacheStatus.MISSING_DATA:
        return DeviceStatus.MISSING_DATA
    return DeviceStatus.READY
