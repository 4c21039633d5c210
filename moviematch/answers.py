import re
from dataclasses import dataclass
from typing import Optional, Sequence

from rapidfuzz import fuzz


_punct_re = re.compile(r"[^\w\s]")
_whitespace_re = re.compile(r"\s+")

DEFAULT_MATCH_PERCENTAGE = 70

# word-aligned partial answers need this many words and this share of the longer
# answer's words; the rule is off above the default percentage
PARTIAL_MIN_WORDS = 2
PARTIAL_WORD_COVERAGE = 0.5


@dataclass(frozen=True)
class MatchOptions:
    allow_partial_match: bool = True
    min_match_percentage: float = DEFAULT_MATCH_PERCENTAGE
    acceptable_alternatives: Sequence[str] = ()


def normalize_answer(text: Optional[str]) -> str:
    if not text:
        return ""
    t = str(text).lower()
    t = _punct_re.sub("", t)
    return _whitespace_re.sub(" ", t).strip()


def is_text_answer_correct(
    user_answer: Optional[str],
    correct_answer: Optional[str],
    options: Optional[MatchOptions] = None,
) -> bool:
    """Lenient check of a free-text quiz answer.

    Case, punctuation and extra spaces are ignored and listed alternatives are
    accepted. With partial matching enabled, an answer contained in the other
    passes when it covers min_match_percentage of its length, or when it is a
    run of whole words long enough to be meaningful ("Christmas Vacation" for
    "National Lampoon's Christmas Vacation", but never "a"). The word rule only
    applies up to the default percentage.
    """
    if not correct_answer or not user_answer:
        return False
    options = options or MatchOptions()

    user = normalize_answer(user_answer)
    correct = normalize_answer(correct_answer)

    if user == correct:
        return True

    alternatives = options.acceptable_alternatives or ()
    if any(normalize_answer(alt) == user for alt in alternatives if alt):
        return True

    if options.allow_partial_match and user and correct:
        ratio = options.min_match_percentage / 100
        if user in correct and (len(user) >= len(correct) * ratio or _covers_words(user, correct, options)):
            return True
        if correct in user and (len(correct) >= len(user) * ratio or _covers_words(correct, user, options)):
            return True

    return False


def answer_similarity(user_answer: Optional[str], correct_answer: Optional[str]) -> int:
    """Fuzzy closeness of an answer, 0-100. Informational only."""
    user = normalize_answer(user_answer)
    correct = normalize_answer(correct_answer)
    if not user or not correct:
        return 0
    return int(round(fuzz.token_set_ratio(user, correct)))


def _covers_words(part: str, whole: str, options: MatchOptions) -> bool:
    if options.min_match_percentage > DEFAULT_MATCH_PERCENTAGE:
        return False
    part_words = part.split(" ")
    whole_words = whole.split(" ")
    if len(part_words) < PARTIAL_MIN_WORDS:
        return False
    if len(part_words) < len(whole_words) * PARTIAL_WORD_COVERAGE:
        return False
    return f" {part} " in f" {whole} "
