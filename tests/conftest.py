"""Shared fixtures and sample data for review rendering tests."""

import json
from pathlib import Path
from typing import Callable

import pytest
from bs4 import BeautifulSoup

from src.data_store import review_from_record
from src.models import Review


def make_soup(html):
    """Helper to create a BeautifulSoup object from HTML string."""
    return BeautifulSoup(html, "html.parser")


def make_review(**overrides) -> Review:
    values = {
        "id": "a",
        "bar": "The Long Hall",
        "brand": "Guinness",
        "city": "Dublin",
        "country": "Ireland",
        "lat": 53.3418,
        "lng": -6.2654,
        "appearance": 4,
        "creaminess": 4,
        "mouthfeel": 4,
        "taste": 4,
        "overall": 8.0,
        "one_liner": "Proper pint.",
        "image_url": None,
        "date": "2024-03-17T19:30:00Z",
        "target_locked": False,
    }
    values.update(overrides)
    return Review(**values)


class RecordingGeoRenderer:
    """GeoRenderer double that records every drawing call."""

    def __init__(self, tiles) -> None:
        self.tiles = tiles
        self.calls: list[str] = []
        self.center = None
        self.zoom = None
        self.markers = []
        self.bounds = None

    def clear(self, center, zoom) -> None:
        self.calls.append("clear")
        self.center = center
        self.zoom = zoom
        self.markers = []
        self.bounds = None

    def place_markers(self, markers) -> None:
        self.calls.append("place_markers")
        self.markers.extend(markers)

    def fit_bounds(self, bounds) -> None:
        self.calls.append("fit_bounds")
        self.bounds = bounds

    def to_html(self) -> str:
        ids = ",".join(marker.review_id for marker in self.markers)
        return f'<div class="fake-map" data-markers="{ids}"></div>'


# ---------------------------------------------------------------------------
# Sample dataset records
# ---------------------------------------------------------------------------

SAMPLE_RECORDS = [
    {
        "id": "kehoes",
        "bar": "Kehoe's",
        "brand": "Guinness",
        "city": "Dublin",
        "country": "Ireland",
        "lat": 53.3406,
        "lng": -6.2603,
        "appearance": 5,
        "creaminess": 5,
        "mouthfeel": 4,
        "taste": 5,
        "overall": 9,
        "one_liner": "Textbook two-part pour.",
        "image_url": "https://img.example/kehoes.jpg",
        "date": "2024-03-17T19:30:00Z",
        "target_locked": False,
    },
    {
        "id": "sin-e",
        "bar": "Sin É",
        "brand": "Murphy's",
        "city": "Cork",
        "country": "Ireland",
        "lat": 51.9021,
        "lng": -8.4734,
        "appearance": 4,
        "creaminess": 4,
        "mouthfeel": 4,
        "taste": 4,
        "overall": 8,
        "one_liner": "Murphy's on home turf.",
        "image_url": None,
        "date": "2024-05-02T21:00:00Z",
        "target_locked": True,
        "visited_with": "the lads",
    },
    {
        "id": "porterhouse",
        "bar": "The Porterhouse",
        "brand": "Craft",
        "city": "Dublin",
        "country": "Ireland",
        "lat": 53.3453,
        "lng": -6.2676,
        "appearance": 4,
        "creaminess": 3,
        "mouthfeel": 4,
        "taste": 5,
        "overall": 8.5,
        "one_liner": "Oyster stout.",
        "image_url": "",
        "date": "2024-06-11",
        "target_locked": False,
    },
    {
        "id": "mulligans",
        "bar": "Mulligan's",
        "brand": "Guinness",
        "city": "Dublin",
        "country": "Ireland",
        "lat": 53.3466,
        "lng": -6.2569,
        "appearance": 5,
        "creaminess": 4,
        "mouthfeel": 5,
        "taste": 4,
        "overall": 8,
        "one_liner": "Old-school room.",
        "date": "2024-07-20T20:10:00Z",
    },
]


def sample_reviews() -> tuple[Review, ...]:
    return tuple(review_from_record(index, record) for index, record in enumerate(SAMPLE_RECORDS))


def recording_factory(adapters: list) -> Callable[..., RecordingGeoRenderer]:
    """Adapter factory that keeps every adapter it builds in `adapters`."""

    def build(tiles) -> RecordingGeoRenderer:
        adapter = RecordingGeoRenderer(tiles)
        adapters.append(adapter)
        return adapter

    return build


@pytest.fixture
def geo_adapters() -> list:
    return []


@pytest.fixture
def dataset_file(tmp_path: Path) -> Path:
    path = tmp_path / "data" / "reviews.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(SAMPLE_RECORDS), encoding="utf-8")
    return path
