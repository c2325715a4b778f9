"""
Loader for the stout review dataset.

Retrieves the dataset once (over HTTP or from a local file), validates every
record against the review schema and keeps the parsed tuple for the lifetime
of the store.
"""

import json
import logging
import math
from pathlib import Path
import threading

import requests

from src.errors import NetworkError, ParseError
from src.models import Review

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {"Accept": "application/json"}

_STRING_FIELDS = ("id", "bar", "brand", "city", "country")
_RATING_FIELDS = ("appearance", "creaminess", "mouthfeel", "taste")


class DataStore:
    def __init__(self, source: str | Path, timeout_seconds: float = 15.0) -> None:
        self.source = str(source)
        self.timeout_seconds = timeout_seconds
        self._reviews: tuple[Review, ...] | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._reviews is not None

    def load(self) -> tuple[Review, ...]:
        """Return the dataset, retrieving and parsing it on first use only."""
        if self._reviews is not None:
            return self._reviews
        # Concurrent first requests wait here so the source is retrieved only once.
        with self._lock:
            if self._reviews is None:
                text = self._retrieve()
                self._reviews = parse_reviews(text)
                logger.info(f"Loaded {len(self._reviews)} reviews from {self.source}")
        return self._reviews

    def _retrieve(self) -> str:
        if self.source.startswith(("http://", "https://")):
            return self._fetch_url()
        return self._read_file()

    def _fetch_url(self) -> str:
        logger.info(f"Fetching dataset from {self.source}")
        try:
            response = requests.get(self.source, headers=REQUEST_HEADERS, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as error:
            logger.error(f"Dataset retrieval failed for {self.source}: {error}")
            raise NetworkError(f"Could not retrieve {self.source}: {error}") from error
        return response.text

    def _read_file(self) -> str:
        path = Path(self.source)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as error:
            logger.error(f"Dataset read failed for {path}: {error}")
            raise NetworkError(f"Could not read {path}: {error}") from error


def parse_reviews(text: str) -> tuple[Review, ...]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise ParseError(f"Dataset is not valid JSON: {error}") from error

    if not isinstance(payload, list):
        raise ParseError(f"Dataset must be a list of reviews, got {type(payload).__name__}")
    return tuple(review_from_record(index, record) for index, record in enumerate(payload))


def review_from_record(index: int, record: object) -> Review:
    """Build a Review from one JSON record; unknown keys are ignored."""
    if not isinstance(record, dict):
        raise ParseError(f"Record {index} must be an object, got {type(record).__name__}")

    values: dict[str, object] = {}
    for name in _STRING_FIELDS:
        values[name] = _required_string(index, record, name)
    values["lat"] = _required_number(index, record, "lat")
    values["lng"] = _required_number(index, record, "lng")
    for name in _RATING_FIELDS:
        values[name] = _required_rating(index, record, name)
    values["overall"] = _required_number(index, record, "overall")

    values["one_liner"] = _optional_string(index, record, "one_liner") or ""
    values["image_url"] = _optional_string(index, record, "image_url") or None
    values["date"] = _optional_string(index, record, "date") or ""

    target_locked = record.get("target_locked", False)
    if target_locked is None:
        target_locked = False
    if not isinstance(target_locked, bool):
        raise ParseError(f"Record {index}: field 'target_locked' must be a boolean")
    values["target_locked"] = target_locked

    return Review(**values)


def _required(index: int, record: dict, name: str) -> object:
    if name not in record or record[name] is None:
        raise ParseError(f"Record {index}: missing required field '{name}'")
    return record[name]


def _required_string(index: int, record: dict, name: str) -> str:
    value = _required(index, record, name)
    if not isinstance(value, str):
        raise ParseError(f"Record {index}: field '{name}' must be a string")
    return value


def _optional_string(index: int, record: dict, name: str) -> str | None:
    value = record.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParseError(f"Record {index}: field '{name}' must be a string")
    return value


def _required_number(index: int, record: dict, name: str) -> float:
    value = _required(index, record, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"Record {index}: field '{name}' must be a number")
    try:
        number = float(value)
    except OverflowError as error:
        raise ParseError(f"Record {index}: field '{name}' is out of range") from error
    if not math.isfinite(number):
        raise ParseError(f"Record {index}: field '{name}' must be finite")
    return number


def _required_rating(index: int, record: dict, name: str) -> int:
    value = _required_number(index, record, name)
    if not value.is_integer():
        raise ParseError(f"Record {index}: rating '{name}' must be a whole number")
    return int(value)
