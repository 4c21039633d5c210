import math
import re
from typing import Optional

from .config import MatchConfig
from .models import CanonicalRecord, ImportRow

TITLE_EXACT = 60
TITLE_CONTAINS = 40
TITLE_WORDS = 40
YEAR_EXACT = 40
YEAR_NEAR = 20

STATUS_MATCHED = "matched"
STATUS_MANUAL = "manual"
STATUS_DUPLICATE = "duplicate"
STATUS_UNMATCHED = "unmatched"

_leading_int_re = re.compile(r"^\s*([+-]?\d+)")


def title_score(local_title: Optional[str], candidate_title: Optional[str]) -> float:
    a = str(local_title or "").lower()
    b = str(candidate_title or "").lower()
    if not a or not b:
        return 0.0
    if a == b:
        return float(TITLE_EXACT)
    if a in b or b in a:
        return float(TITLE_CONTAINS)
    a_words = a.split(" ")
    b_words = b.split(" ")
    matching = [w for w in a_words if w in b_words]
    return len(matching) / max(len(a_words), len(b_words)) * TITLE_WORDS


def year_score(local_year: Optional[str], candidate_year: Optional[str]) -> int:
    if not local_year or not candidate_year:
        return 0
    ly = _parse_year(local_year)
    cy = _parse_year(candidate_year)
    if ly is None or cy is None:
        return 0
    if ly == cy:
        return YEAR_EXACT
    if abs(ly - cy) <= 1:
        return YEAR_NEAR
    return 0


def calculate_confidence(row: ImportRow, candidate: CanonicalRecord) -> int:
    """0-100 estimate that an import row and a catalogue record are the same movie.

    Up to 60 points come from the titles and up to 40 from the release years.
    """
    total = title_score(row.title, candidate.title) + year_score(row.release_year, candidate.year)
    return max(0, min(_round_half_up(total), 100))


def confidence_band(confidence: int) -> str:
    if confidence >= 70:
        return "high"
    if confidence >= 40:
        return "medium"
    return "low"


def classify_match(
    confidence: int,
    has_candidate: bool,
    already_owned: bool = False,
    config: Optional[MatchConfig] = None,
) -> str:
    config = config or MatchConfig()
    if not has_candidate:
        return STATUS_UNMATCHED
    if already_owned:
        return STATUS_DUPLICATE
    if confidence >= config.auto_match_threshold:
        return STATUS_MATCHED
    if confidence >= config.review_threshold:
        return STATUS_MANUAL
    return STATUS_UNMATCHED


def _parse_year(value: str) -> Optional[int]:
    m = _leading_int_re.match(str(value)[:4])
    if not m:
        return None
    return int(m.group(1))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
