# The screen controller: sequences location -> address search -> route -> overlay
# and maps each step's outcome onto the loading/found/error view states.

import os
from dataclasses import dataclass

from event_loop import MainLoop
from map_adapters import MappingProvider
from map_structures import (Coordinates, Destination, Region, Route, ViewState,
                            DEFAULT_OVERLAY_COLOR, HEADER_TITLE, NavigationError,
                            AddressNotFound, NoCurrentLocation, RouteComputationFailed)
from map_view import FoliumMapView
from ui_shell import UiShell

ALERT_TITLE = "Error"
ALERT_MESSAGE = "Location Error"
ALERT_ACTION = "Ok"

EMPTY_RESULT_POLICIES = ("error", "found")


@dataclass
class ControllerOptions:
    """
    guard_reentrant: ignore destination taps while a navigation is loading.
    empty_result: what an address search with no matches leads to, "error"
        or "found" (quietly drop the attempt).
    search_span: size in degrees of the region centered on the match.
    """
    guard_reentrant: bool = True
    empty_result: str = "error"
    search_span: float = 0.1

    def __post_init__(self):
        if self.empty_result not in EMPTY_RESULT_POLICIES:
            raise ValueError(
                f"empty_result must be one of {EMPTY_RESULT_POLICIES}, got '{self.empty_result}'")

    @classmethod
    def from_env(cls, guard_reentrant: bool | None = None,
                 empty_result: str | None = None) -> "ControllerOptions":
        """Explicit values win; the environment only fills in what is missing."""
        if guard_reentrant is None:
            guard_reentrant = os.getenv("NAV_GUARD_REENTRANT", "1") != "0"
        if empty_result is None:
            empty_result = os.getenv("NAV_EMPTY_RESULT", "error")
        return cls(guard_reentrant=guard_reentrant, empty_result=empty_result.lower())


class ScreenController:
    """
    Owns the view state and drives one navigation attempt at a time.
    Provider requests are posted to the main loop; their results come back
    through on_address_search_result() and on_route_computed().
    """

    def __init__(self, mapping: MappingProvider, map_view: FoliumMapView, shell: UiShell,
                 loop: MainLoop | None = None, options: ControllerOptions | None = None):
        self.mapping = mapping
        self.map_view = map_view
        self.shell = shell
        self.loop = loop or MainLoop()
        self.options = options or ControllerOptions()

        self.state = ViewState.FOUND
        self.current_location: Coordinates | None = None
        self.selected: Destination | None = None
        self.last_error: NavigationError | None = None
        self.routes: list[Route] = []

        self.shell.set_title(HEADER_TITLE)
        self.shell.set_loading_visible(False)
        self.shell.set_toolbar([label for label, _ in self.toolbar_items()])

    # --- Toolbar ---

    @staticmethod
    def toolbar_items() -> list[tuple[str, Destination]]:
        return [(d.button_label, d) for d in Destination]

    def press_toolbar_button(self, label: str):
        for button_label, destination in self.toolbar_items():
            if button_label == label:
                self.select_destination(destination)
                return
        raise ValueError(f"No toolbar button labelled '{label}'")

    # --- Navigation ---

    def select_destination(self, destination: Destination):
        if self.state == ViewState.LOADING and self.options.guard_reentrant:
            return
        self.selected = destination
        self.update_state(ViewState.LOADING)
        self.loop.post(self._search, destination.address, self.map_view.region)
        self.shell.set_title(destination.title)

    def _search(self, query: str, region: Region | None):
        self.on_address_search_result(self.mapping.search_address(query, region))

    def on_address_search_result(self, result: list[Coordinates] | None):
        if result is None:
            self._fail(AddressNotFound("Address search failed"))
            return
        if not result:
            if self.options.empty_result == "found":
                print("Failed to parse location")
                self.update_state(ViewState.FOUND)
            else:
                self._fail(AddressNotFound("Address search returned no matches"))
            return

        region = Region.around(result[0], self.options.search_span)
        self.map_view.set_view_region(region.center, region.span)

        if self.current_location is None:
            self._fail(NoCurrentLocation("No current location to route from"))
            return
        self.loop.post(self._route, self.current_location, region.center)

    def _route(self, origin: Coordinates, destination: Coordinates):
        self.on_route_computed(self.mapping.compute_route(origin, destination))

    def on_route_computed(self, result: list[Route] | None):
        if self.current_location is None:
            self._fail(NoCurrentLocation("Current location lost before routing finished"))
            return
        if not result:
            print("No location found")
            self._fail(RouteComputationFailed("No route returned"))
            return

        self.routes = list(result)
        self.map_view.remove_overlays()
        for route in result:
            self.render_overlay(route)
        self.update_state(ViewState.FOUND)

    def render_overlay(self, route: Route):
        self.map_view.render_overlay(route.path, self.overlay_color())

    def overlay_color(self) -> str:
        if self.selected is not None:
            return self.selected.color
        return DEFAULT_OVERLAY_COLOR

    # --- Location ---

    def on_location_update(self, coords: Coordinates):
        self.current_location = coords
        self.map_view.show_user_location(coords)

    # --- View state ---

    def update_state(self, state: ViewState):
        self.state = state
        if state == ViewState.LOADING:
            self.shell.set_loading_visible(True)
        elif state == ViewState.FOUND:
            self.shell.set_loading_visible(False)
        else:
            self.shell.set_loading_visible(False)
            self.shell.present_alert(ALERT_TITLE, ALERT_MESSAGE, ALERT_ACTION)

    def _fail(self, error: NavigationError):
        self.last_error = error
        print(f"   ! {type(error).__name__}: {error}")
        self.update_state(ViewState.ERROR)
