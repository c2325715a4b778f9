from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import Response
from fastapi.templating import Jinja2Templates

from src.brands import KNOWN_BRANDS
from src.data_store import DataStore
from src.errors import StoutMapError
from src.filters import FilterControl
from src.leaflet_map import folium_map_renderer
from src.page import Page
from src.pipeline import PipelineResult, bootstrap
from src.settings import Settings, load_settings
from src.site_builder import (
    HOME_CONTAINERS,
    MAP_CONTAINERS,
    REVIEWS_CONTAINERS,
    TEMPLATES_DIR,
    page_context,
    style_css,
)

logger = logging.getLogger(__name__)

TEMPLATES = Jinja2Templates(directory=str(TEMPLATES_DIR))


def create_app(data_source: str | Path, settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(title="Stout Map")
    app.state.settings = settings
    app.state.store = DataStore(data_source, timeout_seconds=settings.request_timeout_seconds)

    def render(page: Page) -> PipelineResult:
        try:
            return bootstrap(app.state.store, page, folium_map_renderer(page, app.state.settings.tiles))
        except StoutMapError as error:
            logger.error(f"Dataset unavailable: {error}")
            raise HTTPException(status_code=503, detail=str(error)) from error

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/")
    @app.get("/index.html")
    def home(request: Request):
        page = Page(HOME_CONTAINERS)
        render(page)
        return TEMPLATES.TemplateResponse(request=request, name="index.html", context=page_context(page, "Home"))

    @app.get("/map.html")
    def full_map(request: Request, brand: list[str] = Query(default=[]), filtered: bool = False):
        page = Page(MAP_CONTAINERS)
        controller = render(page).filter_controller
        if filtered:
            checked = set(brand)
            controller.on_toggle(FilterControl(brand=name, checked=name in checked) for name in KNOWN_BRANDS)
        context = page_context(page, "Map", filters=controller.controls())
        return TEMPLATES.TemplateResponse(request=request, name="map.html", context=context)

    @app.get("/reviews.html")
    def reviews(request: Request, focus: str = ""):
        page = Page(REVIEWS_CONTAINERS, fragment=focus)
        render(page)
        return TEMPLATES.TemplateResponse(request=request, name="reviews.html", context=page_context(page, "Reviews"))

    @app.get("/data/reviews.json")
    def dataset() -> list[dict[str, object]]:
        try:
            reviews = app.state.store.load()
        except StoutMapError as error:
            raise HTTPException(status_code=503, detail=str(error)) from error
        return [review.to_dict() for review in reviews]

    @app.get("/assets/style.css")
    def stylesheet() -> Response:
        return Response(content=style_css(), media_type="text/css")

    return app


_settings = load_settings()
app = create_app(data_source=_settings.data_source, settings=_settings)
