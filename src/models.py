from dataclasses import dataclass, asdict


@dataclass(frozen=True, slots=True)
class Review:
    id: str
    bar: str
    brand: str
    city: str
    country: str
    lat: float
    lng: float
    appearance: int
    creaminess: int
    mouthfeel: int
    taste: int
    overall: float
    one_liner: str = ""
    image_url: str | None = None
    date: str = ""
    target_locked: bool = False

    @property
    def score_label(self) -> str:
        return f"{self.overall:g}/10"

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class LeaderboardRow:
    brand: str
    average: float
    count: int
