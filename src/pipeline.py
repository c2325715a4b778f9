from __future__ import annotations

from dataclasses import dataclass
import logging

from src.data_store import DataStore
from src.filters import FilterController
from src.geo import MapRenderer
from src.models import Review
from src.page import MAP, MAP_PREVIEW, RenderSink
from src.views import render_featured, render_grid, render_leaderboard, render_target_locked

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResult:
    reviews: tuple[Review, ...]
    filter_controller: FilterController | None


def bootstrap(store: DataStore, sink: RenderSink, map_renderer: MapRenderer) -> PipelineResult:
    """Load the dataset and render every view the page has a container for.

    Load errors propagate before anything is written.
    """
    reviews = store.load()

    render_featured(sink, reviews)
    render_target_locked(sink, reviews)
    render_leaderboard(sink, reviews)
    map_renderer.render(MAP_PREVIEW, reviews)

    controller: FilterController | None = None
    if sink.has_container(MAP):
        controller = FilterController(reviews, map_renderer, container_id=MAP)
        controller.start()

    render_grid(sink, reviews)
    return PipelineResult(reviews=reviews, filter_controller=controller)
