"""Pytest configuration and fixtures."""
import pytest

from event_loop import MainLoop
from map_adapters import MappingProvider
from map_structures import Coordinates, Route
from map_view import FoliumMapView
from screen_controller import ControllerOptions, ScreenController
from ui_shell import UiShell

NYC = Coordinates(lat=40.7108, lon=-74.0105)
HOME = Coordinates(lat=40.7484, lon=-73.9857)


class FakeMappingProvider(MappingProvider):
    """Answers with canned results and records every request."""
    name = "Fake"

    def __init__(self, matches=None, routes=None):
        super().__init__()
        self.matches = [NYC] if matches is None else matches
        self.routes = [Route(path=[HOME, NYC], distance_m=5200, travel_time_sec=900)] \
            if routes is None else routes
        self.searches = []
        self.route_requests = []

    def search_address(self, query, region=None):
        self.searches.append((query, region))
        return self.matches

    def compute_route(self, origin, destination):
        self.route_requests.append((origin, destination))
        return self.routes


class RecordingShell(UiShell):
    def __init__(self):
        self.title = None
        self.loading_visible = None
        self.alerts = []
        self.toolbar = []

    def set_title(self, title):
        self.title = title

    def set_loading_visible(self, visible):
        self.loading_visible = visible

    def present_alert(self, title, message, action_label):
        self.alerts.append((title, message, action_label))

    def set_toolbar(self, labels):
        self.toolbar = list(labels)


@pytest.fixture
def provider():
    return FakeMappingProvider()


@pytest.fixture
def shell():
    return RecordingShell()


@pytest.fixture
def map_view():
    return FoliumMapView()


@pytest.fixture
def loop():
    return MainLoop()


@pytest.fixture
def make_controller(provider, map_view, shell, loop):
    def _make(**options):
        return ScreenController(provider, map_view, shell, loop, ControllerOptions(**options))
    return _make


@pytest.fixture
def controller(make_controller):
    return make_controller()
