import enum
import logging
from abc import ABC, abstractmethod
from typing import Optional

from my_trips.exceptions import (
    LocationError,
    PermissionDenied,
    PermissionDeniedForever,
    PositionUnavailable,
    ServiceDisabled,
)
from my_trips.models import Coordinates

logger = logging.getLogger(__name__)


class PermissionStatus(str, enum.Enum):
    GRANTED = "granted"
    DENIED = "denied"
    DENIED_FOREVER = "denied_forever"


class LocationProvider(ABC):
    """Capabilities expected from the platform location API."""

    @abstractmethod
    def is_service_enabled(self) -> bool:
        ...

    @abstractmethod
    def check_permission(self) -> PermissionStatus:
        ...

    @abstractmethod
    def request_permission(self) -> PermissionStatus:
        ...

    @abstractmethod
    def get_current_position(self) -> Coordinates:
        ...


def acquire_current_position(provider: LocationProvider) -> Coordinates:
    """
    Run the permission checks and read the current position.

    Raises:
        ServiceDisabled: location services are switched off.
        PermissionDenied: permission refused, the user may be asked again.
        PermissionDeniedForever: permission refused permanently; only the
            system settings can restore it.
        PositionUnavailable: the provider failed to produce a position.
    """
    if not provider.is_service_enabled():
        raise ServiceDisabled()

    permission = provider.check_permission()
    if permission == PermissionStatus.DENIED:
        permission = provider.request_permission()
        if permission == PermissionStatus.DENIED:
            raise PermissionDenied()

    if permission == PermissionStatus.DENIED_FOREVER:
        raise PermissionDeniedForever()

    try:
        position = provider.get_current_position()
    except LocationError:
        raise
    except Exception as e:
        logger.error(f"Error getting location: {e}")
        raise PositionUnavailable(f"Error getting location: {e}") from e

    logger.debug(f"Current position: ({position.latitude}, {position.longitude})")
    return position


class ReportedLocationProvider(LocationProvider):
    """
    Location provider fed by the client device.

    The device reports its last known position, permission status and whether
    its location service is on; the session reads them back as if querying the
    platform API directly. Requesting permission cannot prompt anyone from
    here, so it returns the last reported status.
    """

    def __init__(self):
        self.position: Optional[Coordinates] = None
        self.permission = PermissionStatus.GRANTED
        self.service_enabled = False

    def report(
        self,
        position: Optional[Coordinates] = None,
        permission: PermissionStatus = PermissionStatus.GRANTED,
        service_enabled: bool = True,
    ) -> None:
        self.position = position
        self.permission = permission
        self.service_enabled = service_enabled
        logger.info(f"Device reported location state: permission={permission.value}, service_enabled={service_enabled}")

    def forget(self) -> None:
        self.position = None
        self.service_enabled = False

    def is_service_enabled(self) -> bool:
        return self.service_enabled

    def check_permission(self) -> PermissionStatus:
        return self.permission

    def request_permission(self) -> PermissionStatus:
        return self.permission

    def get_current_position(self) -> Coordinates:
        if self.position is None:
            raise PositionUnavailable("No position has been reported by the device")
        return self.position
