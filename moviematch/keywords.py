import re
from typing import Dict, List, Optional

from .models import MISSING, CanonicalRecord
from .normalize import generate_sort_title, normalize_title

KEYWORD_LIMIT = 200

_runtime_re = re.compile(r"^\s*(\d+)")


def extract_keywords(record: CanonicalRecord) -> List[str]:
    """Search tokens for a catalogue record: full normalized phrases plus their words.

    Capped at KEYWORD_LIMIT in insertion order, so very long cast lists lose
    their tail.
    """
    tokens: Dict[str, None] = {}

    def push(text: Optional[str]):
        norm = normalize_title(text)
        if not norm:
            return
        tokens[norm] = None
        for word in norm.split(" "):
            if word:
                tokens[word] = None

    push(record.title)
    if _present(record.year):
        tokens[record.year] = None
    for joined in (record.genre, record.actors, record.director):
        for segment in split_list(joined):
            push(segment)

    return list(tokens)[:KEYWORD_LIMIT]


def split_list(joined: Optional[str]) -> List[str]:
    if not _present(joined):
        return []
    return [part.strip() for part in joined.split(",") if part.strip() and part.strip() != MISSING]


def format_catalogue_record(record: CanonicalRecord) -> Dict[str, object]:
    """Catalogue document for a record, with the precomputed search fields."""
    sort_title = generate_sort_title(record.title)

    if _present(record.released):
        release_date = record.released
    elif _present(record.year):
        release_date = f"{record.year}-01-01"
    else:
        release_date = None

    runtime = None
    if _present(record.runtime):
        m = _runtime_re.match(record.runtime)
        if m:
            runtime = int(m.group(1))

    return {
        "imdb_id": record.imdb_id,
        "title": record.title,
        "sort_title": sort_title,
        "sort_title_lower": normalize_title(sort_title),
        "original_title": record.title,
        "release_date": release_date,
        "runtime": runtime,
        "genres": split_list(record.genre),
        "directors": split_list(record.director),
        "cast": split_list(record.actors),
        "overview": record.plot if _present(record.plot) else None,
        "poster_url": record.poster if _present(record.poster) else None,
        "keywords": extract_keywords(record),
    }


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip() and value.strip() != MISSING)
