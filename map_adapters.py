# Contains the adapter classes for communicating with external mapping APIs.

import requests
import os
import polyline
from urllib.parse import quote
from abc import ABC, abstractmethod
from dotenv import load_dotenv

from map_structures import Coordinates, Region, Route

# --- API Configuration ---
# Keys are read from environment variables for security.
load_dotenv()
TOMTOM_API_KEY = os.getenv("TOMTOM_API_KEY")
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")

REQUEST_TIMEOUT_SEC = 10
METERS_PER_DEGREE = 111_320


class MappingProvider(ABC):
    """
    Abstract Base Class (blueprint) for all mapping providers.
    Every provider answers address searches and route computations in our
    standard structures. None means the request failed; an empty list means
    the provider answered but found nothing.
    """
    name = "Provider"

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    @abstractmethod
    def search_address(self, query: str, region: Region | None = None) -> list[Coordinates] | None:
        """Finds the coordinates matching an address, best match first."""
        pass

    @abstractmethod
    def compute_route(self, origin: Coordinates, destination: Coordinates) -> list[Route] | None:
        """Calculates the driving routes between two coordinates."""
        pass

    def _log_request(self, url: str, params: dict):
        if self.verbose:
            shown = {k: v for k, v in params.items() if k != 'key'}
            print(f"   > [{self.name}] GET {url} {shown}")


class TomTomAdapter(MappingProvider):
    """The adapter for the TomTom API."""
    name = "TomTom"
    GEOCODE_URL = "https://api.tomtom.com/search/2/geocode/{address}.json"
    ROUTING_URL = "https://api.tomtom.com/routing/1/calculateRoute/{locations}/json"

    def __init__(self, verbose: bool = False):
        super().__init__(verbose)
        if not TOMTOM_API_KEY:
            raise ValueError(
                "FATAL ERROR: The TOMTOM_API_KEY environment variable is not set.")

    def search_address(self, query: str, region: Region | None = None) -> list[Coordinates] | None:
        print(f"   > [TomTom] Searching address: '{query}'...")
        url = self.GEOCODE_URL.format(address=quote(query))
        params = {'key': TOMTOM_API_KEY}
        if region is not None:
            # Bias the search towards the visible map region.
            params['lat'] = region.center.lat
            params['lon'] = region.center.lon
            params['radius'] = int(max(region.span.lat_delta, region.span.lon_delta)
                                   * METERS_PER_DEGREE / 2)
        self._log_request(url, params)
        try:
            response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT_SEC)
            response.raise_for_status()
            data = response.json()
            matches = [Coordinates(lat=r['position']['lat'], lon=r['position']['lon'])
                       for r in data.get('results', [])]
            if not matches:
                print(f"   > Error: Could not find coordinates for address: {query}")
            return matches
        except requests.exceptions.RequestException as e:
            print(f"   > Error connecting to TomTom Search API: {e}")
            return None
        except (KeyError, IndexError):
            print(f"   > Error parsing TomTom Search API response for: {query}")
            return None

    def compute_route(self, origin: Coordinates, destination: Coordinates) -> list[Route] | None:
        locations = f"{origin.lat},{origin.lon}:{destination.lat},{destination.lon}"
        url = self.ROUTING_URL.format(locations=locations)
        params = {
            'key': TOMTOM_API_KEY,
            'travelMode': 'car',
            'maxAlternatives': 1,
            'traffic': 'true'
        }
        self._log_request(url, params)
        try:
            response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT_SEC)
            response.raise_for_status()
            data = response.json()
            routes = []
            for route in data['routes']:
                path = [Coordinates(lat=p['latitude'], lon=p['longitude'])
                        for leg in route['legs'] for p in leg['points']]
                summary = route['summary']
                # *** NORMALIZATION to our standard Route object ***
                routes.append(Route(path=path,
                                    distance_m=summary['lengthInMeters'],
                                    travel_time_sec=summary['travelTimeInSeconds'],
                                    traffic_data_included=True))
            return routes
        except requests.exceptions.RequestException as e:
            print(f"   > [TomTom] A network error occurred for route calculation: {e}")
            return None
        except (KeyError, IndexError):
            print(f"   > [TomTom] Could not find a valid route to {destination.lat},{destination.lon}.")
            return None


class GoogleMapsAdapter(MappingProvider):
    """The adapter for the Google Maps API."""
    name = "Google"
    GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"
    DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

    def __init__(self, verbose: bool = False):
        super().__init__(verbose)
        if not GOOGLE_API_KEY:
            raise ValueError(
                "FATAL ERROR: The GOOGLE_API_KEY environment variable is not set.")

    def search_address(self, query: str, region: Region | None = None) -> list[Coordinates] | None:
        print(f"   > [Google] Searching address: '{query}'...")
        params = {
            'address': query,
            'key': GOOGLE_API_KEY
        }
        if region is not None:
            south_west, north_east = region.bounds()
            params['bounds'] = (f"{south_west.lat},{south_west.lon}|"
                                f"{north_east.lat},{north_east.lon}")
        self._log_request(self.GEOCODING_URL, params)
        try:
            response = requests.get(self.GEOCODING_URL, params=params, timeout=REQUEST_TIMEOUT_SEC)
            response.raise_for_status()
            data = response.json()
            status = data.get('status')
            if status == 'ZERO_RESULTS':
                print(f"   > Error: Could not find coordinates for address: {query}")
                return []
            if status != 'OK':
                print(f"   > Error: Geocoding failed for address: {query}. Status: {status}")
                return None
            return [Coordinates(lat=r['geometry']['location']['lat'],
                                lon=r['geometry']['location']['lng'])
                    for r in data.get('results', [])]
        except requests.exceptions.RequestException as e:
            print(f"   > Error connecting to Google Geocoding API: {e}")
            return None
        except (KeyError, IndexError):
            print(f"   > Error parsing Google Geocoding API response for: {query}")
            return None

    def compute_route(self, origin: Coordinates, destination: Coordinates) -> list[Route] | None:
        params = {
            'origin': f"{origin.lat},{origin.lon}",
            'destination': f"{destination.lat},{destination.lon}",
            'mode': 'driving',
            'alternatives': 'true',
            'departure_time': 'now',
            'key': GOOGLE_API_KEY
        }
        self._log_request(self.DIRECTIONS_URL, params)
        try:
            response = requests.get(self.DIRECTIONS_URL, params=params, timeout=REQUEST_TIMEOUT_SEC)
            response.raise_for_status()
            data = response.json()
            status = data.get('status')
            if status == 'ZERO_RESULTS':
                print(f"   > [Google] No route found to {destination.lat},{destination.lon}.")
                return []
            if status != 'OK':
                print(f"   > [Google] Route calculation failed. Status: {status}")
                return None
            return [self._parse_route(route) for route in data['routes']]
        except requests.exceptions.RequestException as e:
            print(f"   > [Google] A network error occurred for route calculation: {e}")
            return None
        except (KeyError, IndexError):
            print(f"   > [Google] Could not find a valid route to {destination.lat},{destination.lon}.")
            return None

    @staticmethod
    def _parse_route(route: dict) -> Route:
        # overview_polyline is an encoded polyline of the whole route.
        path = [Coordinates(lat=lat, lon=lon)
                for lat, lon in polyline.decode(route['overview_polyline']['points'])]
        distance = 0
        seconds = 0
        traffic_used = True
        for leg in route['legs']:
            distance += leg['distance']['value']
            # Use duration_in_traffic if available, otherwise fall back to duration.
            if 'duration_in_traffic' in leg:
                seconds += leg['duration_in_traffic']['value']
            else:
                seconds += leg['duration']['value']
                traffic_used = False
        return Route(path=path, distance_m=distance, travel_time_sec=seconds,
                     traffic_data_included=traffic_used)


ADAPTERS = {
    'tomtom': TomTomAdapter,
    'google': GoogleMapsAdapter,
}


def create_adapter(name: str, verbose: bool = False) -> MappingProvider:
    """Builds the mapping provider registered under `name`."""
    try:
        adapter_class = ADAPTERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown mapping provider: '{name}'") from None
    return adapter_class(verbose=verbose)
