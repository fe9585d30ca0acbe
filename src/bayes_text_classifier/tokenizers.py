"""Tokenization and per-document frequency counting.

The default tokenizer treats any Unicode word character (letters of any
script, digits, underscore) as part of a token and everything else except
whitespace as a separator. It performs no case folding, stemming or
stop-word filtering: callers who need linguistic normalization pass their
own tokenizer to the classifier.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

Tokenizer = Callable[[str], Iterable[str]]

# str patterns are Unicode-aware, so \w covers Cyrillic, Greek, CJK, ...
_PUNCTUATION_RE = re.compile(r"[^\w\s]")


def default_tokenizer(text: str) -> list[str]:
    """Split text into word tokens.

    Every character that is neither a word character nor whitespace is
    replaced with a space, then the text is split on runs of whitespace.

    Example::

        >>> default_tokenizer("amazing, awesome movie!! Yeah!!")
        ['amazing', 'awesome', 'movie', 'Yeah']
    """
    sanitized = _PUNCTUATION_RE.sub(" ", text)
    return sanitized.split()


def frequency_table(tokens: Iterable[str]) -> dict[str, int]:
    """Count the occurrences of each distinct token.

    Args:
        tokens: Token sequence for a single document (may be empty).

    Returns:
        Mapping of token to occurrence count, in first-occurrence order.
    """
    table: dict[str, int] = {}
    for token in tokens:
        if token in table:
            table[token] += 1
        else:
            table[token] = 1
    return table
