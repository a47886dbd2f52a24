# Defines the standardized, internal data structures for the navigator.

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_OVERLAY_COLOR = "black"
HEADER_TITLE = "Location"


@dataclass
class Coordinates:
    """A standardized representation of geographic coordinates."""
    lat: float
    lon: float


@dataclass
class Span:
    """Latitude/longitude extent of a map region, in degrees."""
    lat_delta: float
    lon_delta: float


@dataclass
class Region:
    """A rectangular map region centered on a coordinate."""
    center: Coordinates
    span: Span

    @classmethod
    def around(cls, center: Coordinates, delta: float = 0.1) -> "Region":
        return cls(center=center, span=Span(lat_delta=delta, lon_delta=delta))

    def bounds(self) -> tuple[Coordinates, Coordinates]:
        """Returns the (south-west, north-east) corners of the region."""
        half_lat = self.span.lat_delta / 2
        half_lon = self.span.lon_delta / 2
        south_west = Coordinates(lat=self.center.lat - half_lat,
                                 lon=self.center.lon - half_lon)
        north_east = Coordinates(lat=self.center.lat + half_lat,
                                 lon=self.center.lon + half_lon)
        return south_west, north_east


@dataclass
class Route:
    """A standardized representation of a computed driving route."""
    path: list[Coordinates] = field(default_factory=list)
    distance_m: float = 0.0
    travel_time_sec: int = 0
    traffic_data_included: bool = False


class Destination(Enum):
    """The two fixed places the toolbar can navigate to."""
    WORK = ("NYC", "222 Broadway, New York, NY 10038", "red", "Go to work")
    VACATION = ("Cancun", "Cancún, Quintana Roo, México", "cyan", "Go on vacation")

    def __init__(self, title, address, color, button_label):
        self.title = title
        self.address = address
        self.color = color
        self.button_label = button_label

    @classmethod
    def from_name(cls, name: str) -> "Destination":
        """Resolves a case-insensitive name such as 'work' or 'vacation'."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown destination: '{name}'") from None


class ViewState(Enum):
    LOADING = "loading"
    FOUND = "found"
    ERROR = "error"


class NavigationError(Exception):
    """Base class for everything that can end a navigation attempt."""
    pass


class NoCurrentLocation(NavigationError):
    pass


class AddressNotFound(NavigationError):
    pass


class RouteComputationFailed(NavigationError):
    pass


class LocationServiceUnavailable(NavigationError):
    pass
