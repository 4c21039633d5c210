from dataclasses import asdict, dataclass
from typing import Dict, Optional

MISSING = "N/A"

# external catalogue key -> field name
_RECORD_ALIASES = {
    "Title": "title",
    "Year": "year",
    "Genre": "genre",
    "Actors": "actors",
    "Director": "director",
    "imdbID": "imdb_id",
    "imdbId": "imdb_id",
    "Released": "released",
    "Runtime": "runtime",
    "Plot": "plot",
    "Poster": "poster",
}


@dataclass(frozen=True)
class ImportRow:
    """One spreadsheet line proposing a movie to add."""

    title: str
    release_year: Optional[str] = None
    imdb_id: Optional[str] = None
    watched: bool = False
    rating: Optional[float] = None
    review: str = ""

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class CanonicalRecord:
    """Catalogue metadata treated as ground truth. List fields are comma-joined."""

    title: str
    year: Optional[str] = None
    genre: Optional[str] = None
    actors: Optional[str] = None
    director: Optional[str] = None
    imdb_id: Optional[str] = None
    released: Optional[str] = None
    runtime: Optional[str] = None
    plot: Optional[str] = None
    poster: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "CanonicalRecord":
        fields = {}
        for key, value in data.items():
            name = _RECORD_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                continue
            if value is None:
                continue
            fields[name] = str(value)
        fields.setdefault("title", "")
        return cls(**fields)

    def to_dict(self) -> Dict[str, object]:
        return {k: v for k, v in asdict(self).items() if v is not None}
