# lead_scout/filters.py
from typing import Iterable, Optional, Tuple

from .sources import EXCLUDE_KEYWORDS, INCLUDE_KEYWORDS


class RelevanceFilter:
    """Keyword classifier for candidate lead text. Exclusion always wins over inclusion."""

    def __init__(self, include: Iterable[str] = INCLUDE_KEYWORDS, exclude: Iterable[str] = EXCLUDE_KEYWORDS):
        self.include: Tuple[str, ...] = tuple(k.lower() for k in include if k.strip())
        self.exclude: Tuple[str, ...] = tuple(k.lower() for k in exclude if k.strip())

    def is_relevant(self, text: Optional[str]) -> bool:
        if not text:
            return False
        lower_text = text.lower()
        if any(keyword in lower_text for keyword in self.exclude):
            return False
        return any(keyword in lower_text for keyword in self.include)

    def __call__(self, text: Optional[str]) -> bool:
        return self.is_relevant(text)


_default_filter = RelevanceFilter()


def is_relevant(text: Optional[str]) -> bool:
    """Classify ``text`` with the built-in keyword sets."""
    return _default_filter.is_relevant(text)
