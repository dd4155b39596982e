"""Text normalization shared by the search engine and the table view."""

from __future__ import annotations

import re
import unicodedata
from typing import List

__all__ = ["normalize_text", "tokenize", "is_blank"]

_WHITESPACE = re.compile(r"\s+")
_TOKEN_PATTERN = re.compile(r"\w+", re.UNICODE)


def normalize_text(text: str | None) -> str:
    """Case-fold *text* and collapse runs of whitespace.

    NFKC folds full-width and compatibility forms so that pasted identifiers
    compare equal to typed ones.
    """

    if not text:
        return ""
    folded = unicodedata.normalize("NFKC", text).strip().strip('"“”‘’').casefold()
    return _WHITESPACE.sub(" ", folded).strip()


def tokenize(text: str | None) -> List[str]:
    """Split normalized text into word tokens."""

    return _TOKEN_PATTERN.findall(normalize_text(text))


def is_blank(text: str | None) -> bool:
    return not text or not text.strip()
