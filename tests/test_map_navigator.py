"""End-to-end tests for the command line entry point with a fake provider."""
import pytest

import map_navigator
from conftest import FakeMappingProvider
from map_structures import Route
from screen_controller import ScreenController


@pytest.fixture
def fake_provider(monkeypatch):
    provider = FakeMappingProvider()
    monkeypatch.setattr(map_navigator, "create_adapter", lambda name, verbose=False: provider)
    monkeypatch.delenv("CURRENT_LAT", raising=False)
    monkeypatch.delenv("CURRENT_LON", raising=False)
    monkeypatch.delenv("NAV_GUARD_REENTRANT", raising=False)
    monkeypatch.delenv("NAV_EMPTY_RESULT", raising=False)
    return provider


def test_navigate_to_work_writes_map(fake_provider, tmp_path):
    output = tmp_path / "map.html"
    code = map_navigator.main(["--destination", "work", "--lat", "40.7484",
                               "--lon", "-73.9857", "--output", str(output)])
    assert code == 0
    assert output.exists()
    assert fake_provider.searches[0][0] == "222 Broadway, New York, NY 10038"


def test_missing_location_fails(fake_provider, tmp_path):
    output = tmp_path / "map.html"
    code = map_navigator.main(["--destination", "vacation", "--output", str(output)])
    assert code == 1
    assert not output.exists()
    assert fake_provider.route_requests == []


def test_location_from_environment(fake_provider, monkeypatch, tmp_path):
    monkeypatch.setenv("CURRENT_LAT", "40.7484")
    monkeypatch.setenv("CURRENT_LON", "-73.9857")
    code = map_navigator.main(["--destination", "work", "--output", str(tmp_path / "m.html")])
    assert code == 0


def test_destination_prompt(fake_provider, monkeypatch, tmp_path):
    monkeypatch.setattr("builtins.input", lambda prompt: "2")
    code = map_navigator.main(["--lat", "40.7", "--lon", "-74.0",
                               "--output", str(tmp_path / "m.html")])
    assert code == 0
    assert fake_provider.searches[0][0] == "Cancún, Quintana Roo, México"


def test_unknown_provider_key_error(monkeypatch):
    def refuse(name, verbose=False):
        raise ValueError("FATAL ERROR: The GOOGLE_API_KEY environment variable is not set.")
    monkeypatch.setattr(map_navigator, "create_adapter", refuse)
    assert map_navigator.main(["--destination", "work"]) == 2


@pytest.fixture
def controllers(monkeypatch):
    """Collects every controller main() builds."""
    built = []

    class RecordingController(ScreenController):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            built.append(self)

    monkeypatch.setattr(map_navigator, "ScreenController", RecordingController)
    return built


def test_empty_result_found_flag(fake_provider, controllers, tmp_path):
    fake_provider.matches = []
    code = map_navigator.main(["--destination", "work", "--lat", "40.7", "--lon", "-74.0",
                               "--empty-result", "found", "--output", str(tmp_path / "m.html")])
    assert code == 0
    assert controllers[0].options.empty_result == "found"
    assert fake_provider.route_requests == []


def test_empty_result_defaults_to_error(fake_provider, tmp_path):
    fake_provider.matches = []
    code = map_navigator.main(["--destination", "work", "--lat", "40.7", "--lon", "-74.0",
                               "--output", str(tmp_path / "m.html")])
    assert code == 1


def test_allow_reentrant_flag(fake_provider, controllers, tmp_path):
    map_navigator.main(["--destination", "work", "--allow-reentrant",
                        "--output", str(tmp_path / "m.html")])
    assert controllers[0].options.guard_reentrant is False


def test_guard_comes_from_environment(fake_provider, controllers, monkeypatch, tmp_path):
    monkeypatch.setenv("NAV_GUARD_REENTRANT", "0")
    map_navigator.main(["--destination", "work", "--output", str(tmp_path / "m.html")])
    assert controllers[0].options.guard_reentrant is False


def test_invalid_empty_result_setting_exits(fake_provider, monkeypatch, capsys):
    monkeypatch.setenv("NAV_EMPTY_RESULT", "ignore")
    code = map_navigator.main(["--destination", "work", "--lat", "40.7", "--lon", "-74.0"])
    assert code == 2
    assert "FATAL ERROR" in capsys.readouterr().out
    assert fake_provider.searches == []


def test_flag_overrides_invalid_empty_result_setting(fake_provider, controllers, monkeypatch,
                                                     tmp_path):
    monkeypatch.setenv("NAV_EMPTY_RESULT", "ignore")
    code = map_navigator.main(["--destination", "work", "--lat", "40.7", "--lon", "-74.0",
                               "--empty-result", "error", "--output", str(tmp_path / "m.html")])
    assert code == 0
    assert controllers[0].options.empty_result == "error"


def test_route_summary_is_printed(fake_provider, tmp_path, capsys):
    fake_provider.routes = [
        Route(distance_m=5200, travel_time_sec=900, traffic_data_included=True),
        Route(distance_m=6100, travel_time_sec=1260, traffic_data_included=False),
    ]
    code = map_navigator.main(["--destination", "work", "--lat", "40.7", "--lon", "-74.0",
                               "--output", str(tmp_path / "m.html")])
    out = capsys.readouterr().out
    assert code == 0
    assert "Drew 2 route(s)." in out
    assert "1. 5.2 km, 15 min" in out
    assert "2. 6.1 km, 21 min*" in out
    assert "without live traffic data" in out


def test_format_duration():
    assert map_navigator.format_duration(900, True) == "15 min"
    assert map_navigator.format_duration(900, False) == "15 min*"
