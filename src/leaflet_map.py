from __future__ import annotations

from typing import Sequence

import folium

from src.brands import KNOWN_BRANDS
from src.geo import Bounds, MapRenderer, MarkerSpec
from src.page import RenderSink
from src.settings import TileSettings

MARKER_ICON_HTML = (
    '<div style="width:12px;height:12px;border-radius:50%;background:{color};'
    'border:2px solid #fff;box-shadow:0 0 0 1px rgba(0,0,0,.25)"></div>'
)
POPUP_MAX_WIDTH = 280


class FoliumGeoRenderer:
    """Leaflet drawing adapter built on folium.

    With ``brand_layers`` every brand gets its own overlay and the map carries a
    layer control, so a page without a server behind it can still toggle brands.
    """

    def __init__(self, tiles: TileSettings, brand_layers: bool = False) -> None:
        self.tiles = tiles
        self.brand_layers = brand_layers
        self.map: folium.Map | None = None
        self.marker_count = 0
        self.fitted_bounds: Bounds | None = None

    def clear(self, center: tuple[float, float], zoom: int) -> None:
        # A fresh Map object drops every layer and listener of the previous one.
        self.map = folium.Map(
            location=list(center),
            zoom_start=zoom,
            tiles=None,
            max_zoom=self.tiles.max_zoom,
        )
        folium.TileLayer(
            tiles=self.tiles.url,
            attr=self.tiles.attribution,
            max_zoom=self.tiles.max_zoom,
        ).add_to(self.map)
        self.marker_count = 0
        self.fitted_bounds = None

    def place_markers(self, markers: Sequence[MarkerSpec]) -> None:
        map_obj = self._require_map()
        layers = self._brand_groups(map_obj, markers) if self.brand_layers else {}
        for marker in markers:
            folium.Marker(
                location=[marker.lat, marker.lng],
                icon=folium.DivIcon(
                    html=MARKER_ICON_HTML.format(color=marker.color),
                    icon_size=(16, 16),
                    icon_anchor=(8, 8),
                    class_name="custom-marker",
                ),
                popup=folium.Popup(marker.popup_html, max_width=POPUP_MAX_WIDTH),
                tooltip=marker.title,
            ).add_to(layers.get(marker.brand, map_obj))
            self.marker_count += 1

    def _brand_groups(self, map_obj: folium.Map, markers: Sequence[MarkerSpec]) -> dict[str, folium.FeatureGroup]:
        present = {marker.brand for marker in markers}
        ordered = [brand for brand in KNOWN_BRANDS if brand in present]
        ordered += sorted(present.difference(KNOWN_BRANDS))
        groups: dict[str, folium.FeatureGroup] = {}
        for brand in ordered:
            groups[brand] = folium.FeatureGroup(name=brand, show=True).add_to(map_obj)
        if groups:
            folium.LayerControl(collapsed=False).add_to(map_obj)
        return groups

    def fit_bounds(self, bounds: Bounds) -> None:
        self._require_map().fit_bounds(bounds.as_pairs(), max_zoom=self.tiles.max_zoom)
        self.fitted_bounds = bounds

    def to_html(self) -> str:
        return self._require_map()._repr_html_()

    def _require_map(self) -> folium.Map:
        if self.map is None:
            raise RuntimeError("clear() must be called before drawing")
        return self.map


def folium_map_renderer(
    sink: RenderSink,
    tiles: TileSettings | None = None,
    brand_layers: bool = False,
) -> MapRenderer:
    def adapter_factory(tile_settings: TileSettings) -> FoliumGeoRenderer:
        return FoliumGeoRenderer(tile_settings, brand_layers=brand_layers)

    return MapRenderer(sink, adapter_factory=adapter_factory, tiles=tiles)
