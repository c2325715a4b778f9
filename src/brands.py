from __future__ import annotations

GUINNESS = "Guinness"
MURPHYS = "Murphy's"
BEAMISH = "Beamish"
CRAFT = "Craft"
OTHER = "Other"

KNOWN_BRANDS: tuple[str, ...] = (GUINNESS, MURPHYS, BEAMISH, CRAFT, OTHER)

BRAND_COLOR_MAP: dict[str, str] = {
    GUINNESS: "#1a1a1a",
    MURPHYS: "#3b5",
    BEAMISH: "#b33",
    CRAFT: "#26c",
}
DEFAULT_BRAND_COLOR = "#666"


def brand_color(brand: str | None) -> str:
    if brand is None:
        return DEFAULT_BRAND_COLOR
    return BRAND_COLOR_MAP.get(brand, DEFAULT_BRAND_COLOR)


def filter_brand(brand: str) -> str:
    """The checkbox a review answers to; unlisted brands fall under Other."""
    return brand if brand in KNOWN_BRANDS else OTHER
