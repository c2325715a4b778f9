from __future__ import annotations

from dataclasses import dataclass
import html
import logging
from typing import AbstractSet, Callable, Iterable, Protocol, Sequence

from src.brands import brand_color, filter_brand
from src.models import Review
from src.page import RenderSink
from src.settings import TileSettings

logger = logging.getLogger(__name__)

DEFAULT_CENTER: tuple[float, float] = (53.5, -7.7)
DEFAULT_ZOOM = 6
BOUNDS_PADDING = 0.2
# A lone marker has a zero-size box; pad it as if it spanned this many degrees.
MIN_SPAN_DEGREES = 0.01
REVIEW_PAGE = "reviews.html"


@dataclass(frozen=True, slots=True)
class MarkerSpec:
    review_id: str
    lat: float
    lng: float
    color: str
    title: str
    popup_html: str
    brand: str


@dataclass(frozen=True, slots=True)
class Bounds:
    south: float
    west: float
    north: float
    east: float

    @classmethod
    def around(cls, points: Iterable[tuple[float, float]]) -> Bounds:
        coords = list(points)
        if not coords:
            raise ValueError("Bounds need at least one point")
        lats = [lat for lat, _lng in coords]
        lngs = [lng for _lat, lng in coords]
        return cls(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))

    def padded(self, ratio: float = BOUNDS_PADDING, min_span: float = MIN_SPAN_DEGREES) -> Bounds:
        lat_buffer = max(self.north - self.south, min_span) * ratio
        lng_buffer = max(self.east - self.west, min_span) * ratio
        return Bounds(
            south=self.south - lat_buffer,
            west=self.west - lng_buffer,
            north=self.north + lat_buffer,
            east=self.east + lng_buffer,
        )

    def contains(self, lat: float, lng: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lng <= self.east

    def as_pairs(self) -> list[list[float]]:
        return [[self.south, self.west], [self.north, self.east]]


@dataclass(frozen=True, slots=True)
class MapHandle:
    container_id: str
    center: tuple[float, float]
    zoom: int
    markers: tuple[MarkerSpec, ...]
    bounds: Bounds | None
    html: str

    @property
    def fitted(self) -> bool:
        return self.bounds is not None


class GeoRenderer(Protocol):
    """Drawing capability implemented once per mapping library."""

    def clear(self, center: tuple[float, float], zoom: int) -> None: ...

    def place_markers(self, markers: Sequence[MarkerSpec]) -> None: ...

    def fit_bounds(self, bounds: Bounds) -> None: ...

    def to_html(self) -> str: ...


def plan_markers(
    reviews: Iterable[Review],
    active_brands: AbstractSet[str] | None = None,
    review_page: str = REVIEW_PAGE,
) -> list[MarkerSpec]:
    markers: list[MarkerSpec] = []
    for review in reviews:
        brand = filter_brand(review.brand)
        if active_brands is not None and brand not in active_brands:
            continue
        markers.append(
            MarkerSpec(
                review_id=review.id,
                lat=review.lat,
                lng=review.lng,
                color=brand_color(review.brand),
                title=review.bar,
                popup_html=popup_html(review, review_page),
                brand=brand,
            )
        )
    return markers


def popup_html(review: Review, review_page: str = REVIEW_PAGE) -> str:
    image = ""
    if review.image_url:
        image = (
            f'<img src="{html.escape(review.image_url, quote=True)}" '
            f'alt="{html.escape(f"{review.bar} {review.brand}", quote=True)}" '
            'style="width:100%;max-width:260px;border-radius:8px;margin-bottom:6px">'
        )
    target = " 🎯 Target locked" if review.target_locked else ""
    link = html.escape(f"{review_page}#{review.id}", quote=True)
    return (
        f"{image}"
        f"<strong>{html.escape(review.bar)}</strong><br>"
        f"{html.escape(review.city)}, {html.escape(review.country)}<br>"
        f'<span class="badge">{html.escape(review.brand)}</span> — '
        f"<strong>{html.escape(review.score_label)}</strong>{target}<br>"
        f"<em>{html.escape(review.one_liner)}</em><br>"
        f'<a href="{link}" target="_top">Read review</a>'
    )


class MapRenderer:
    """Places filtered review markers into a page container and fits the viewport.

    One drawing adapter is kept per container. Every render clears it first, so
    repeated renders replace the previous markers instead of adding to them.
    """

    def __init__(
        self,
        sink: RenderSink,
        adapter_factory: Callable[[TileSettings], GeoRenderer],
        tiles: TileSettings | None = None,
        review_page: str = REVIEW_PAGE,
    ) -> None:
        self.sink = sink
        self.adapter_factory = adapter_factory
        self.tiles = tiles or TileSettings()
        self.review_page = review_page
        self._adapters: dict[str, GeoRenderer] = {}

    def render(
        self,
        container_id: str,
        reviews: Iterable[Review],
        active_brands: AbstractSet[str] | None = None,
    ) -> MapHandle | None:
        if not self.sink.has_container(container_id):
            logger.debug(f"No '{container_id}' container on this page; skipping map")
            return None

        adapter = self._adapters.get(container_id)
        if adapter is None:
            adapter = self.adapter_factory(self.tiles)
            self._adapters[container_id] = adapter
        adapter.clear(DEFAULT_CENTER, DEFAULT_ZOOM)

        markers = plan_markers(reviews, active_brands, self.review_page)
        adapter.place_markers(markers)

        bounds: Bounds | None = None
        if markers:
            bounds = Bounds.around((marker.lat, marker.lng) for marker in markers).padded(BOUNDS_PADDING)
            adapter.fit_bounds(bounds)

        markup = adapter.to_html()
        self.sink.write(container_id, markup)
        logger.debug(f"Rendered {len(markers)} markers into '{container_id}'")
        return MapHandle(
            container_id=container_id,
            center=DEFAULT_CENTER,
            zoom=DEFAULT_ZOOM,
            markers=tuple(markers),
            bounds=bounds,
            html=markup,
        )
