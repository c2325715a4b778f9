from __future__ import annotations

from datetime import datetime
import html
import logging
from typing import Sequence

from src.aggregator import FEATURED_COUNT, find_target, leaderboard, top_n
from src.geo import REVIEW_PAGE
from src.models import Review
from src.page import FEATURED, LEADERBOARD, REVIEWS_GRID, TARGET_LOCKED, RenderSink

logger = logging.getLogger(__name__)

STAR = "★"
RATING_MIN = 0
RATING_MAX = 5
NO_TARGET_HTML = '<p class="small">No target set yet.</p>'


def render_featured(sink: RenderSink, reviews: Sequence[Review]) -> None:
    if not _available(sink, FEATURED):
        return
    cards: list[str] = []
    for review in top_n(reviews, FEATURED_COUNT):
        cards.append(
            f'<article class="card" id="card-{_attr(review.id)}">'
            f"{_image_html(review)}"
            '<div class="pad">'
            f'<div class="small"><span class="badge">{_text(review.brand)}</span> • {_text(review.city)}</div>'
            f'<h3 style="margin:.4rem 0;">{_text(review.bar)}</h3>'
            f'<p class="small">{_text(review.one_liner)}</p>'
            f"<p><strong>{_text(review.score_label)}</strong></p>"
            f'<a class="btn secondary" href="{_review_link(review)}">Read review</a>'
            "</div>"
            "</article>"
        )
    sink.write(FEATURED, "".join(cards))


def render_target_locked(sink: RenderSink, reviews: Sequence[Review]) -> None:
    if not _available(sink, TARGET_LOCKED):
        return
    target = find_target(reviews)
    if target is None:
        sink.write(TARGET_LOCKED, NO_TARGET_HTML)
        return
    sink.write(
        TARGET_LOCKED,
        '<div class="grid">'
        '<article class="card">'
        f"{_image_html(target)}"
        '<div class="pad">'
        f'<div class="small"><span class="badge">{_text(target.brand)}</span> • {_text(target.city)}</div>'
        f'<h3 style="margin:.4rem 0;">{_text(target.bar)}</h3>'
        f'<p class="small">{_text(target.one_liner)}</p>'
        f"<p><strong>{_text(target.score_label)}</strong> — 🎯 Target locked</p>"
        f'<a class="btn secondary" href="{_review_link(target)}">Read review</a>'
        "</div>"
        "</article>"
        "</div>",
    )


def render_leaderboard(sink: RenderSink, reviews: Sequence[Review]) -> None:
    if not _available(sink, LEADERBOARD):
        return
    rows = "".join(
        f"<tr><td>{_text(row.brand)}</td><td>{row.average:.1f}</td><td>{row.count}</td></tr>"
        for row in leaderboard(reviews)
    )
    sink.write(
        LEADERBOARD,
        "<table>"
        "<thead><tr><th>Brand</th><th>Average</th><th>Reviews</th></tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table>",
    )


def render_grid(sink: RenderSink, reviews: Sequence[Review]) -> None:
    """Render every review in dataset order, then scroll to the fragment's card."""
    if not _available(sink, REVIEWS_GRID):
        return
    cards: list[str] = []
    for review in reviews:
        target = " — 🎯" if review.target_locked else ""
        cards.append(
            f'<article class="card" id="{_attr(review.id)}">'
            f"{_image_html(review)}"
            '<div class="pad">'
            f'<div class="small"><span class="badge">{_text(review.brand)}</span> • '
            f"{_text(review.city)}, {_text(review.country)} • {_text(format_date(review.date))}</div>"
            f'<h3 style="margin:.4rem 0;">{_text(review.bar)}</h3>'
            f"<p>{_text(review.one_liner)}</p>"
            f'<p class="small">{rating_row(review)}</p>'
            f"<p><strong>Overall {_text(review.score_label)}</strong>{target}</p>"
            "</div>"
            "</article>"
        )
    sink.write(REVIEWS_GRID, "".join(cards))

    fragment = sink.fragment
    if fragment and any(review.id == fragment for review in reviews):
        sink.scroll_into_view(fragment, behavior="smooth")


def stars(value: int) -> str:
    return STAR * min(max(value, RATING_MIN), RATING_MAX)


def rating_row(review: Review) -> str:
    return " &nbsp; ".join(
        [
            f"Appearance {stars(review.appearance)}",
            f"Creaminess {stars(review.creaminess)}",
            f"Mouthfeel {stars(review.mouthfeel)}",
            f"Taste {stars(review.taste)}",
        ]
    )


def format_date(value: str) -> str:
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed.day} {parsed:%b %Y}"


def _available(sink: RenderSink, container_id: str) -> bool:
    if sink.has_container(container_id):
        return True
    logger.debug(f"No '{container_id}' container on this page; skipping view")
    return False


def _image_html(review: Review) -> str:
    if not review.image_url:
        return ""
    return f'<img src="{_attr(review.image_url)}" alt="{_attr(f"{review.bar} {review.brand}")}">'


def _review_link(review: Review) -> str:
    return _attr(f"{REVIEW_PAGE}#{review.id}")


def _text(value: str) -> str:
    return html.escape(value, quote=False)


def _attr(value: str) -> str:
    return html.escape(value, quote=True)
