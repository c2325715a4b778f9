import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from src.data_store import DataStore
from src.filters import FilterControl
from src.leaflet_map import folium_map_renderer
from src.page import FEATURED, LEADERBOARD, MAP, MAP_PREVIEW, REVIEWS_GRID, TARGET_LOCKED, Page
from src.pipeline import bootstrap
from src.settings import BASE_DIR, Settings

logger = logging.getLogger(__name__)

TEMPLATES_DIR = BASE_DIR / "templates"

HOME_CONTAINERS: tuple[str, ...] = (FEATURED, TARGET_LOCKED, LEADERBOARD, MAP_PREVIEW)
MAP_CONTAINERS: tuple[str, ...] = (MAP,)
REVIEWS_CONTAINERS: tuple[str, ...] = (REVIEWS_GRID,)

PAGES: dict[str, tuple[str, tuple[str, ...]]] = {
    "index.html": ("Home", HOME_CONTAINERS),
    "map.html": ("Map", MAP_CONTAINERS),
    "reviews.html": ("Reviews", REVIEWS_CONTAINERS),
}


def build_static_site(data_source: str | Path, site_dir: Path, settings: Settings | None = None) -> list[Path]:
    """Render the home, map and review pages into ``site_dir``.

    The dataset is retrieved once and shared by all pages. The static map page
    has no server to re-filter it, so its brands become toggleable map layers.
    """
    settings = settings or Settings()
    store = DataStore(data_source, timeout_seconds=settings.request_timeout_seconds)
    environment = template_environment()

    site_dir.mkdir(parents=True, exist_ok=True)
    assets_dir = site_dir / "assets"
    assets_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for page_name, (title, container_ids) in PAGES.items():
        page = Page(container_ids)
        map_renderer = folium_map_renderer(page, settings.tiles, brand_layers=page.has_container(MAP))
        bootstrap(store, page, map_renderer)
        html_output = environment.get_template(page_name).render(**page_context(page, title))
        target = site_dir / page_name
        target.write_text(html_output, encoding="utf-8")
        written.append(target)

    stylesheet = assets_dir / "style.css"
    stylesheet.write_text(style_css(), encoding="utf-8")
    written.append(stylesheet)
    logger.info(f"Wrote {len(written)} files to {site_dir}")
    return written


def template_environment() -> Environment:
    return Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=True)


def page_context(
    page: Page,
    title: str,
    filters: list[FilterControl] | None = None,
    stylesheet_href: str = "assets/style.css",
) -> dict[str, object]:
    return {
        "page_title": title,
        "containers": page.contents(),
        "scroll_target": page.scroll_target,
        "filters": filters,
        "stylesheet_href": stylesheet_href,
    }


def style_css() -> str:
    return """
:root {
  --stout-black: #14110f;
  --stout-head: #f3e9d2;
  --stout-amber: #c8963e;
  --stout-card: #1f1a17;
  --stout-gray: #9a918a;
  --line: rgba(243, 233, 210, 0.12);
}
* { box-sizing: border-box; }
body {
  margin: 0;
  color: var(--stout-head);
  background: var(--stout-black);
  font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
}
a { color: var(--stout-amber); }
.topbar {
  display: flex;
  align-items: center;
  justify-content: space-between;
  padding: 12px 20px;
  border-bottom: 1px solid var(--line);
}
.topbar .brand { font-weight: 800; text-decoration: none; color: var(--stout-head); }
.topbar nav a { margin-left: 14px; text-decoration: none; }
main { max-width: 1100px; margin: 0 auto; padding: 16px 20px 40px; }
.grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(260px, 1fr)); gap: 16px; }
.card {
  background: var(--stout-card);
  border: 1px solid var(--line);
  border-radius: 12px;
  overflow: hidden;
}
.card img { width: 100%; height: 180px; object-fit: cover; display: block; }
.pad { padding: 12px 14px; }
.small { font-size: 0.85rem; color: var(--stout-gray); }
.badge {
  display: inline-block;
  padding: 1px 8px;
  border-radius: 999px;
  background: var(--stout-amber);
  color: var(--stout-black);
  font-size: 0.75rem;
  font-weight: 700;
}
.btn {
  display: inline-block;
  padding: 6px 12px;
  border-radius: 8px;
  background: var(--stout-amber);
  color: var(--stout-black);
  text-decoration: none;
  font-weight: 600;
}
.btn.secondary { background: transparent; border: 1px solid var(--stout-amber); color: var(--stout-amber); }
table { width: 100%; border-collapse: collapse; }
th, td { text-align: left; padding: 8px; border-bottom: 1px solid var(--line); }
.map { border-radius: 12px; overflow: hidden; border: 1px solid var(--line); }
.map-preview { height: 320px; }
.map-full { height: 70vh; }
.filters { display: flex; flex-wrap: wrap; gap: 12px; margin-bottom: 12px; }
.custom-marker { background: transparent; border: none; }
"""
