from typing import Dict, Iterable, List, Optional, Tuple

from .config import MatchConfig
from .matching import (
    STATUS_DUPLICATE,
    STATUS_MANUAL,
    STATUS_UNMATCHED,
    calculate_confidence,
    classify_match,
    confidence_band,
)
from .models import CanonicalRecord, ImportRow


def find_by_imdb_id(imdb_id: Optional[str], catalogue: List[CanonicalRecord]) -> Optional[CanonicalRecord]:
    if not imdb_id or not imdb_id.strip():
        return None
    wanted = imdb_id.strip().lower()
    for record in catalogue:
        if record.imdb_id and record.imdb_id.strip().lower() == wanted:
            return record
    return None


def best_candidate(row: ImportRow, catalogue: List[CanonicalRecord]) -> Tuple[Optional[CanonicalRecord], int]:
    """Highest-confidence record for a row; the first record wins ties."""
    best: Optional[CanonicalRecord] = None
    best_score = -1
    for record in catalogue:
        score = calculate_confidence(row, record)
        if score > best_score:
            best, best_score = record, score
    if best is None:
        return None, 0
    return best, best_score


def match_row(
    row: ImportRow,
    catalogue: List[CanonicalRecord],
    owned_ids: Iterable[str] = (),
    config: Optional[MatchConfig] = None,
) -> Dict[str, object]:
    config = config or MatchConfig()
    owned = {i.strip().lower() for i in owned_ids if i}

    record = find_by_imdb_id(row.imdb_id, catalogue)
    pinned = record is not None
    if pinned:
        confidence = calculate_confidence(row, record)
    else:
        record, confidence = best_candidate(row, catalogue)

    already_owned = bool(record and record.imdb_id and record.imdb_id.strip().lower() in owned)
    status = classify_match(confidence, record is not None, already_owned, config)
    if pinned and status == STATUS_UNMATCHED:
        # an explicit IMDb id is trusted enough for review even when titles disagree
        status = STATUS_MANUAL

    if status == STATUS_UNMATCHED:
        # a candidate below review_threshold is not reported
        record, confidence = None, 0

    return {
        "row": row.to_dict(),
        "match": record.to_dict() if record else None,
        "confidence": confidence,
        "band": confidence_band(confidence),
        "status": status,
        "selected": status not in (STATUS_DUPLICATE, STATUS_UNMATCHED),
    }


def match_rows(
    rows: List[ImportRow],
    catalogue: List[CanonicalRecord],
    owned_ids: Iterable[str] = (),
    config: Optional[MatchConfig] = None,
) -> List[Dict[str, object]]:
    owned = list(owned_ids)
    return [match_row(row, catalogue, owned, config) for row in rows]
