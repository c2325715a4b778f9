from src.page import FEATURED, LEADERBOARD, REVIEWS_GRID, TARGET_LOCKED, Page, ScrollRequest
from src.views import (
    NO_TARGET_HTML,
    format_date,
    render_featured,
    render_grid,
    render_leaderboard,
    render_target_locked,
    stars,
)

from tests.conftest import make_review, make_soup, sample_reviews


def test_featured_renders_top_three_cards() -> None:
    page = Page([FEATURED])

    render_featured(page, sample_reviews())

    soup = make_soup(page.read(FEATURED))
    cards = soup.select("article.card")
    assert [card["id"] for card in cards] == ["card-kehoes", "card-porterhouse", "card-sin-e"]
    assert cards[0].find("img")["src"] == "https://img.example/kehoes.jpg"
    assert cards[1].find("img") is None
    assert cards[0].find("a")["href"] == "reviews.html#kehoes"
    assert "9/10" in cards[0].get_text()


def test_target_locked_renders_first_target() -> None:
    page = Page([TARGET_LOCKED])

    render_target_locked(page, sample_reviews())

    soup = make_soup(page.read(TARGET_LOCKED))
    assert soup.find("h3").get_text() == "Sin É"
    assert "🎯 Target locked" in soup.get_text()


def test_target_locked_renders_placeholder_when_none() -> None:
    page = Page([TARGET_LOCKED])

    render_target_locked(page, [make_review()])

    assert page.read(TARGET_LOCKED) == NO_TARGET_HTML


def test_leaderboard_renders_one_row_per_brand() -> None:
    page = Page([LEADERBOARD])

    render_leaderboard(page, sample_reviews())

    soup = make_soup(page.read(LEADERBOARD))
    headers = [cell.get_text() for cell in soup.select("thead th")]
    rows = [[cell.get_text() for cell in row.find_all("td")] for row in soup.select("tbody tr")]
    assert headers == ["Brand", "Average", "Reviews"]
    assert rows == [["Guinness", "8.5", "2"], ["Craft", "8.5", "1"], ["Murphy's", "8.0", "1"]]


def test_grid_renders_every_review_in_dataset_order() -> None:
    page = Page([REVIEWS_GRID])

    render_grid(page, sample_reviews())

    soup = make_soup(page.read(REVIEWS_GRID))
    assert [card["id"] for card in soup.select("article.card")] == ["kehoes", "sin-e", "porterhouse", "mulligans"]
    first = soup.find(id="kehoes").get_text()
    assert "Appearance ★★★★★" in first
    assert "Mouthfeel ★★★★" in first
    assert "17 Mar 2024" in first
    assert "— 🎯" in soup.find(id="sin-e").get_text()
    assert page.scroll_requests == []


def test_grid_scrolls_to_matching_fragment() -> None:
    page = Page([REVIEWS_GRID], fragment="#porterhouse")

    render_grid(page, sample_reviews())

    assert page.scroll_requests == [ScrollRequest(element_id="porterhouse", behavior="smooth")]


def test_grid_ignores_unknown_fragment() -> None:
    page = Page([REVIEWS_GRID], fragment="zzz")

    render_grid(page, sample_reviews())

    assert page.scroll_requests == []
    assert page.scroll_target is None


def test_negative_rating_renders_zero_stars() -> None:
    page = Page([REVIEWS_GRID])

    render_grid(page, [make_review(appearance=-1, creaminess=9)])

    text = make_soup(page.read(REVIEWS_GRID)).get_text()
    assert stars(-1) == ""
    assert "Appearance  " in text
    assert "Creaminess ★★★★★ " in text


def test_grid_escapes_review_text() -> None:
    page = Page([REVIEWS_GRID])

    render_grid(page, [make_review(bar="<b>Loud</b>", one_liner="Fish & chips")])

    markup = page.read(REVIEWS_GRID)
    assert "&lt;b&gt;Loud&lt;/b&gt;" in markup
    assert "Fish &amp; chips" in markup


def test_views_skip_missing_containers() -> None:
    page = Page([])

    render_featured(page, sample_reviews())
    render_target_locked(page, sample_reviews())
    render_leaderboard(page, sample_reviews())
    render_grid(page, sample_reviews())

    assert page.contents() == {}


def test_format_date_falls_back_to_raw_value() -> None:
    assert format_date("2024-06-11") == "11 Jun 2024"
    assert format_date("last Tuesday") == "last Tuesday"
    assert format_date("") == ""
