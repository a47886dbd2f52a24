"""Tests for the folium map view."""
from map_structures import Coordinates, Span
from map_view import FoliumMapView

HOME = Coordinates(lat=40.7484, lon=-73.9857)
NYC = Coordinates(lat=40.7108, lon=-74.0105)


def test_region_starts_empty():
    view = FoliumMapView()
    assert view.region is None
    view.set_view_region(NYC, Span(0.1, 0.1))
    assert view.region.center == NYC


def test_overlays_are_kept_until_removed():
    view = FoliumMapView()
    view.render_overlay([HOME, NYC], "red")
    assert view.overlays == [([HOME, NYC], "red")]
    view.remove_overlays()
    assert view.overlays == []


def test_save_writes_html(tmp_path):
    view = FoliumMapView()
    view.show_user_location(HOME)
    view.set_view_region(NYC, Span(0.1, 0.1))
    view.render_overlay([HOME, NYC], "cyan")

    out = view.save(str(tmp_path / "route.html"))

    html = (tmp_path / "route.html").read_text(encoding="utf-8")
    assert out.endswith("route.html")
    assert "polyline" in html.lower()
    assert "cyan" in html
    assert "Current location" in html
