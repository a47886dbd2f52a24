# Location services and the adapter that feeds coordinates to the screen controller.

from abc import ABC, abstractmethod

from map_structures import Coordinates, LocationServiceUnavailable


class LocationService(ABC):
    """Blueprint for a device location source."""

    @abstractmethod
    def request_permission(self):
        pass

    @abstractmethod
    def start_updates(self, callback):
        """Starts delivering coordinates to `callback` until the process ends."""
        pass

    @abstractmethod
    def is_service_enabled(self) -> bool:
        pass


class StaticLocationService(LocationService):
    """
    A location service with a known position, e.g. from the command line.
    The position is delivered once updates start; push() delivers later fixes.
    """

    def __init__(self, coordinates: Coordinates | None = None, enabled: bool = True):
        self.coordinates = coordinates
        self.enabled = enabled
        self.authorized = False
        self._callback = None

    def request_permission(self):
        self.authorized = True

    def start_updates(self, callback):
        self._callback = callback
        if self.coordinates is not None:
            callback(self.coordinates)

    def is_service_enabled(self) -> bool:
        return self.enabled

    def push(self, coordinates: Coordinates):
        self.coordinates = coordinates
        if self._callback is not None:
            self._callback(coordinates)


class LocationProviderAdapter:
    """Requests permission, starts updates and forwards every fix unchanged."""

    def __init__(self, service: LocationService, on_update):
        self.service = service
        self.on_update = on_update
        self.started = False
        self.error: LocationServiceUnavailable | None = None

    def start(self) -> bool:
        self.service.request_permission()
        if not self.service.is_service_enabled():
            # Never reaches the UI.
            self.error = LocationServiceUnavailable("No location services")
            print(self.error)
            return False
        self.service.start_updates(self.on_update)
        self.started = True
        return True
