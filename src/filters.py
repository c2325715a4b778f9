from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, Sequence

from src.brands import KNOWN_BRANDS, filter_brand
from src.geo import MapHandle, MapRenderer
from src.models import Review
from src.page import MAP

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FilterControl:
    brand: str
    checked: bool


@dataclass(frozen=True, slots=True)
class FilterState:
    active_brands: frozenset[str] = frozenset(KNOWN_BRANDS)

    @classmethod
    def from_controls(cls, controls: Iterable[FilterControl]) -> FilterState:
        return cls(active_brands=frozenset(control.brand for control in controls if control.checked))

    def allows(self, brand: str) -> bool:
        return filter_brand(brand) in self.active_brands


class FilterController:
    """Owns the brand filter of the full map and re-renders it on every toggle."""

    def __init__(self, reviews: Sequence[Review], map_renderer: MapRenderer, container_id: str = MAP) -> None:
        self.reviews = reviews
        self.map_renderer = map_renderer
        self.container_id = container_id
        self._state = FilterState()

    @property
    def state(self) -> FilterState:
        return self._state

    def start(self) -> MapHandle | None:
        return self._render()

    def on_toggle(self, controls: Iterable[FilterControl]) -> MapHandle | None:
        self._state = FilterState.from_controls(controls)
        logger.debug(f"Active brands: {sorted(self._state.active_brands)}")
        return self._render()

    def controls(self) -> list[FilterControl]:
        return [FilterControl(brand=brand, checked=self._state.allows(brand)) for brand in KNOWN_BRANDS]

    def _render(self) -> MapHandle | None:
        return self.map_renderer.render(self.container_id, self.reviews, self._state.active_brands)
