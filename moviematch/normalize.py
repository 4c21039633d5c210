import re
from typing import Optional


_leading_article_re = re.compile(r"^(?:the|a|an) ")
_sort_article_re = re.compile(r"^(the|a|an)\s+", flags=re.I)
_apostrophe_re = re.compile(r"['’]")
_non_alnum_re = re.compile(r"[^a-z0-9]+")


def normalize_title(title: Optional[str]) -> str:
    """Lower-case, drop the leading article and collapse punctuation to single spaces.

    "The Grinch" and "Grinch" normalize to the same key; so do
    "Mr. Magorium's" and "mr magoriums".
    """
    if title is None:
        return ""
    t = str(title).lower()
    t = _apostrophe_re.sub("", t)
    t = _non_alnum_re.sub(" ", t).strip()
    # repeated so that normalize_title(normalize_title(x)) == normalize_title(x)
    while True:
        stripped = _leading_article_re.sub("", t, count=1)
        if stripped == t:
            return t
        t = stripped


def generate_sort_title(title: Optional[str]) -> str:
    """Display title minus its leading English article: 'The Holiday' -> 'Holiday'."""
    if title is None:
        return ""
    t = str(title)
    m = _sort_article_re.match(t)
    if not m or m.end() == len(t):
        return t
    return t[m.end():]
