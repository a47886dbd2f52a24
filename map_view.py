# Renders the navigation map (region, user location, route overlays) with folium.

import folium

from map_structures import Coordinates, Region, Span

OVERLAY_WEIGHT = 5


class FoliumMapView:
    """
    Keeps what the screen's map shows and builds a folium map from it.
    Nothing is drawn until build_map() or save() is called.
    """

    def __init__(self, zoom_start: int = 12):
        self.zoom_start = zoom_start
        self.region: Region | None = None
        self.user_location: Coordinates | None = None
        self.overlays: list[tuple[list[Coordinates], str]] = []

    def set_view_region(self, center: Coordinates, span: Span):
        self.region = Region(center=center, span=span)

    def render_overlay(self, path: list[Coordinates], color: str):
        self.overlays.append((list(path), color))

    def remove_overlays(self):
        self.overlays.clear()

    def show_user_location(self, coords: Coordinates):
        self.user_location = coords

    def build_map(self) -> folium.Map:
        if self.region is not None:
            center = self.region.center
        elif self.user_location is not None:
            center = self.user_location
        else:
            center = Coordinates(lat=0.0, lon=0.0)

        m = folium.Map(location=[center.lat, center.lon], zoom_start=self.zoom_start)

        if self.user_location is not None:
            folium.Marker(
                [self.user_location.lat, self.user_location.lon],
                tooltip="Current location",
                icon=folium.Icon(color="blue"),
            ).add_to(m)

        for path, color in self.overlays:
            if not path:
                continue
            folium.PolyLine([[c.lat, c.lon] for c in path],
                            color=color, weight=OVERLAY_WEIGHT).add_to(m)

        if self.region is not None:
            south_west, north_east = self.region.bounds()
            m.fit_bounds([[south_west.lat, south_west.lon],
                          [north_east.lat, north_east.lon]])
        return m

    def save(self, path: str) -> str:
        """Writes the map as a standalone HTML page and returns the path."""
        self.build_map().save(path)
        return path
