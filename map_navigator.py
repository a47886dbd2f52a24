# Main script: route from the current location to work or vacation and draw it on a map.

import os
import sys
import argparse
from dotenv import load_dotenv

from event_loop import MainLoop
from location_provider import LocationProviderAdapter, StaticLocationService
from map_adapters import ADAPTERS, create_adapter
from map_structures import Coordinates, Destination, Route, ViewState
from map_view import FoliumMapView
from screen_controller import ControllerOptions, ScreenController
from ui_shell import ConsoleShell


def read_current_location(lat: float | None, lon: float | None) -> Coordinates | None:
    """Uses the command line position, falling back to CURRENT_LAT/CURRENT_LON."""
    if lat is None:
        lat = os.getenv("CURRENT_LAT")
    if lon is None:
        lon = os.getenv("CURRENT_LON")
    if lat is None or lon is None:
        return None
    try:
        return Coordinates(lat=float(lat), lon=float(lon))
    except ValueError:
        print(f"Ignoring invalid current location: {lat}, {lon}")
        return None


def choose_destination(controller: ScreenController) -> Destination:
    """Asks which toolbar button to press."""
    items = controller.toolbar_items()
    choice = input(f"Choose a destination [1-{len(items)}, default 1]: ") or "1"
    try:
        return items[int(choice) - 1][1]
    except (ValueError, IndexError):
        print("Invalid choice. Going to work by default.")
        return Destination.WORK


def format_duration(seconds: int, traffic_ok: bool) -> str:
    """Converts seconds into a readable 'XX min' format, noting if traffic data was missing."""
    duration_str = f"{round(seconds / 60)} min"
    if not traffic_ok:
        return f"{duration_str}*"
    return duration_str


def display_routes(routes: list[Route]):
    """Prints one line per drawn route: distance and travel time."""
    if not routes:
        print("\nNo route was drawn.")
        return

    print(f"\nDrew {len(routes)} route(s).")
    if any(not r.traffic_data_included for r in routes):
        print("NOTE: An asterisk (*) indicates the travel time was calculated without live traffic data.")
    for i, route in enumerate(routes, start=1):
        print(f"   {i}. {route.distance_m / 1000:.1f} km, "
              f"{format_duration(route.travel_time_sec, route.traffic_data_included)}")


def run_navigation(controller: ScreenController, location: LocationProviderAdapter,
                   destination: Destination) -> ViewState:
    """Starts location updates, taps the destination and waits for the outcome."""
    location.start()
    controller.select_destination(destination)
    controller.loop.run_until_idle()
    return controller.state


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Map Navigator: draw the driving route to work or to vacation.")
    parser.add_argument('--provider', choices=sorted(ADAPTERS),
                        default=os.getenv("MAP_PROVIDER", "google"),
                        help="Mapping API used for address search and routing.")
    parser.add_argument('--destination', choices=[d.name.lower() for d in Destination],
                        help="Where to go. Prompted for when omitted.")
    parser.add_argument('--lat', type=float, help="Current latitude.")
    parser.add_argument('--lon', type=float, help="Current longitude.")
    parser.add_argument('--allow-reentrant', action='store_true',
                        help="Accept a new destination while a search is still loading.")
    parser.add_argument('--empty-result', choices=["error", "found"],
                        help="Outcome of an address search without matches.")
    parser.add_argument('--output', default="route_map.html",
                        help="Where to write the rendered map.")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Enable verbose mode to see the exact API calls being made.")
    return parser


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        mapping = create_adapter(args.provider, verbose=args.verbose)
    except ValueError as e:
        print(e)
        return 2
    print(f"Using {mapping.name} API.\n")

    try:
        options = ControllerOptions.from_env(
            guard_reentrant=False if args.allow_reentrant else None,
            empty_result=args.empty_result)
    except ValueError as e:
        print(f"FATAL ERROR: Invalid navigation options. {e}")
        print("Set NAV_EMPTY_RESULT to 'error' or 'found', or pass --empty-result.")
        return 2

    map_view = FoliumMapView()
    controller = ScreenController(mapping, map_view, ConsoleShell(), MainLoop(), options)
    location = LocationProviderAdapter(
        StaticLocationService(read_current_location(args.lat, args.lon)),
        controller.on_location_update)

    if args.destination:
        destination = Destination.from_name(args.destination)
    else:
        destination = choose_destination(controller)

    state = run_navigation(controller, location, destination)
    if state != ViewState.FOUND:
        return 1

    display_routes(controller.routes)
    map_view.save(args.output)
    print(f"\nRoute map written to {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
