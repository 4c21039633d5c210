import csv
import json
from typing import Dict, List, Optional, Tuple

import yaml

from .models import CanonicalRecord, ImportRow
from .quiz import Question

Issue = Dict[str, object]

TITLE_COLUMNS = ("title", "Title", "name", "Name")
YEAR_COLUMNS = ("year", "Year", "releaseDate", "ReleaseDate", "release_date")
IMDB_COLUMNS = ("imdb", "IMDB", "Imdb", "imdbId", "imdbID")
WATCHED_COLUMNS = ("watched", "Watched")
RATING_COLUMNS = ("rating", "Rating")
REVIEW_COLUMNS = ("review", "Review", "notes", "Notes")

_TRUTHY = {"1", "true", "yes", "y", "x"}


def load_import_rows(path: str, max_rows: Optional[int] = None) -> Tuple[List[ImportRow], List[Issue]]:
    """Read a spreadsheet export (CSV with a header row) into import rows and issues."""
    issues: List[Issue] = []
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            records = list(csv.DictReader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        issues.append(_issue("PARSE_ERROR", "ERROR", f"Cannot read spreadsheet: {exc}", {"path": path}))
        return [], issues

    rows: List[ImportRow] = []
    for line_no, record in enumerate(records, start=2):
        if max_rows and len(rows) >= max_rows:
            break
        title = _first(record, TITLE_COLUMNS)
        if not title:
            issues.append(_issue("MISSING_TITLE", "WARNING", f"Row on line {line_no} has no title, skipped", {"line": line_no}))
            continue
        rows.append(
            ImportRow(
                title=title,
                release_year=_first(record, YEAR_COLUMNS) or None,
                imdb_id=_first(record, IMDB_COLUMNS) or None,
                watched=_first(record, WATCHED_COLUMNS).lower() in _TRUTHY,
                rating=_parse_rating(_first(record, RATING_COLUMNS)),
                review=_first(record, REVIEW_COLUMNS),
            )
        )
    return rows, issues


def load_catalogue(path: str) -> Tuple[List[CanonicalRecord], List[Issue]]:
    issues: List[Issue] = []
    data = _load_document(path, issues, loader=json.loads)
    if data is None:
        return [], issues
    if isinstance(data, dict):
        if "Search" in data or "records" in data:
            data = data.get("Search") or data.get("records") or []
        elif "Title" in data or "title" in data:
            # a single detail response
            data = [data]
        else:
            issues.append(_issue("PARSE_ERROR", "ERROR", "Catalogue object has no Search or records list", {"path": path}))
            return [], issues
    if not isinstance(data, list):
        issues.append(_issue("PARSE_ERROR", "ERROR", "Catalogue must be a list of records", {"path": path}))
        return [], issues

    records: List[CanonicalRecord] = []
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            issues.append(_issue("BAD_RECORD", "WARNING", f"Catalogue item {idx} is not an object, skipped", {"index": idx}))
            continue
        record = CanonicalRecord.from_dict(item)
        if not record.title:
            issues.append(_issue("MISSING_TITLE", "WARNING", f"Catalogue item {idx} has no title", {"index": idx}))
        records.append(record)
    return records, issues


def load_owned_ids(path: Optional[str]) -> List[str]:
    """One IMDb id per line; blank lines and '#' comments are ignored."""
    if not path:
        return []
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip() and not line.lstrip().startswith("#")]


def load_quiz(path: str) -> Tuple[List[Question], List[Issue]]:
    issues: List[Issue] = []
    data = _load_document(path, issues, loader=yaml.safe_load)
    if data is None:
        return [], issues
    items = data.get("questions", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        issues.append(_issue("PARSE_ERROR", "ERROR", "Quiz must contain a list of questions", {"path": path}))
        return [], issues

    questions: List[Question] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict) or "id" not in item:
            issues.append(_issue("BAD_QUESTION", "WARNING", f"Question {idx} has no id, skipped", {"index": idx}))
            continue
        try:
            questions.append(Question.from_dict(item))
        except (TypeError, ValueError) as exc:
            issues.append(_issue("BAD_QUESTION", "WARNING", f"Question {item['id']} is malformed: {exc}", {"index": idx}))
    return questions, issues


def load_answers(path: str) -> Tuple[Dict[str, object], List[Issue]]:
    issues: List[Issue] = []
    # YAML is a superset of JSON, so one loader covers both
    data = _load_document(path, issues, loader=yaml.safe_load)
    if data is None:
        return {}, issues
    if not isinstance(data, dict):
        issues.append(_issue("PARSE_ERROR", "ERROR", "Answers must map question ids to answers", {"path": path}))
        return {}, issues
    return {str(k): v for k, v in data.items()}, issues


def _load_document(path: str, issues: List[Issue], loader):
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as exc:
        issues.append(_issue("PARSE_ERROR", "ERROR", f"Cannot read file: {exc}", {"path": path}))
        return None
    try:
        return loader(content)
    except (ValueError, yaml.YAMLError) as exc:
        issues.append(_issue("PARSE_ERROR", "ERROR", f"Cannot parse {path}: {exc}", {"path": path}))
        return None


def _first(record: Dict[str, Optional[str]], columns) -> str:
    for col in columns:
        value = record.get(col)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def _parse_rating(value: str) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _issue(type_: str, severity: str, message: str, details: dict) -> Issue:
    return {"type": type_, "severity": severity, "message": message, "details": details}
