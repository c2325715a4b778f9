from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from src.errors import MissingContainer

MAP_PREVIEW = "mapPreview"
MAP = "map"
REVIEWS_GRID = "reviewsGrid"
FEATURED = "featured"
TARGET_LOCKED = "targetLocked"
LEADERBOARD = "leaderboard"

ALL_CONTAINERS: tuple[str, ...] = (MAP_PREVIEW, MAP, REVIEWS_GRID, FEATURED, TARGET_LOCKED, LEADERBOARD)


class RenderSink(Protocol):
    fragment: str

    def has_container(self, container_id: str) -> bool: ...

    def write(self, container_id: str, markup: str) -> None: ...

    def scroll_into_view(self, element_id: str, behavior: str = "smooth") -> None: ...


@dataclass(frozen=True, slots=True)
class ScrollRequest:
    element_id: str
    behavior: str


class Page:
    """In-memory render sink: named containers, a URL fragment and scroll requests.

    Writing replaces a container's markup. Writing to a container the page does
    not declare raises MissingContainer.
    """

    def __init__(self, container_ids: Iterable[str], fragment: str = "") -> None:
        self._containers: dict[str, str] = {container_id: "" for container_id in container_ids}
        self.fragment = fragment.lstrip("#")
        self.scroll_requests: list[ScrollRequest] = []

    @property
    def container_ids(self) -> tuple[str, ...]:
        return tuple(self._containers)

    def has_container(self, container_id: str) -> bool:
        return container_id in self._containers

    def write(self, container_id: str, markup: str) -> None:
        if container_id not in self._containers:
            raise MissingContainer(container_id)
        self._containers[container_id] = markup

    def read(self, container_id: str) -> str:
        if container_id not in self._containers:
            raise MissingContainer(container_id)
        return self._containers[container_id]

    def scroll_into_view(self, element_id: str, behavior: str = "smooth") -> None:
        self.scroll_requests.append(ScrollRequest(element_id=element_id, behavior=behavior))

    @property
    def scroll_target(self) -> ScrollRequest | None:
        return self.scroll_requests[-1] if self.scroll_requests else None

    def contents(self) -> dict[str, str]:
        return dict(self._containers)
