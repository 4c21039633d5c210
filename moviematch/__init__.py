from .answers import MatchOptions, answer_similarity, is_text_answer_correct, normalize_answer
from .keywords import extract_keywords, format_catalogue_record
from .matching import calculate_confidence, classify_match, confidence_band
from .models import CanonicalRecord, ImportRow
from .normalize import generate_sort_title, normalize_title

__all__ = [
    "CanonicalRecord",
    "ImportRow",
    "MatchOptions",
    "answer_similarity",
    "calculate_confidence",
    "classify_match",
    "confidence_band",
    "extract_keywords",
    "format_catalogue_record",
    "generate_sort_title",
    "is_text_answer_correct",
    "normalize_answer",
    "normalize_title",
]
