#!/usr/bin/env python3
"""
Word Catalog
============
Read-only mapping from word length to the candidate words of that length.

The catalog is built once per process from a line-oriented word list
(one quoted word per line) and then shared by every experiment task.

Usage:
    from nickcollide.catalog import load_word_catalog

    catalog = load_word_catalog()          # bundled word list
    catalog = load_word_catalog("my.txt")  # explicit path

    catalog.count(3, 8)      # candidates with 3 <= len <= 8
    catalog.bucket(5)        # tuple of 5-letter words
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from nickcollide.settings import get_setting, require_setting, resolve_path

logger = logging.getLogger(__name__)


class ResourceUnavailable(OSError):
    """The word-list resource could not be opened."""


# =============================================================================
# Catalog
# =============================================================================

@dataclass(frozen=True)
class WordCatalog:
    """
    Immutable word buckets indexed by word length.

    ``buckets[n]`` holds every word of length ``n`` in load order, for
    ``n`` in ``0..max_len``. Bucket 0 is always empty.
    """
    buckets: Tuple[Tuple[str, ...], ...]

    @classmethod
    def from_words(cls, words: Iterable[str], max_len: int) -> "WordCatalog":
        """Bucket already-clean words by length, dropping those longer than max_len."""
        if max_len < 1:
            raise ValueError("max_len must be positive")
        staging = [[] for _ in range(max_len + 1)]
        for word in words:
            if 0 < len(word) <= max_len:
                staging[len(word)].append(word)
        return cls(tuple(tuple(bucket) for bucket in staging))

    @property
    def max_len(self) -> int:
        return len(self.buckets) - 1

    def bucket(self, length: int) -> Tuple[str, ...]:
        if 0 <= length <= self.max_len:
            return self.buckets[length]
        return ()

    def count(self, min_len: int, max_len: int) -> int:
        """Number of candidate words with min_len <= length <= max_len."""
        return sum(len(self.bucket(n)) for n in range(min_len, max_len + 1))

    def counts(self) -> Dict[int, int]:
        """Candidate count per length bucket, from 1 to max_len."""
        return {n: len(self.buckets[n]) for n in range(1, self.max_len + 1)}

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self.buckets)

    def describe(self) -> str:
        """One-line bucket summary, e.g. ``ENV: WORD DB { [1]=0, [2]=3 }``."""
        parts = ', '.join(f"[{n}]={size}" for n, size in self.counts().items())
        return f"ENV: WORD DB {{ {parts} }}"


# =============================================================================
# Loading
# =============================================================================

def default_wordlist_path() -> Path:
    """Location of the bundled word list."""
    return resolve_path(require_setting("catalog.default_wordlist"))


def parse_word(line: str, quote_chars: str = "\"'") -> Optional[str]:
    """
    Extract the candidate word from one word-list line.

    Strips the line terminator and one surrounding quote character on
    each side. Returns None for blank lines and for tokens that are not
    purely ASCII letters.
    """
    token = line.strip()
    if token[:1] and token[0] in quote_chars:
        token = token[1:]
    if token[-1:] and token[-1] in quote_chars:
        token = token[:-1]
    if not token or not (token.isascii() and token.isalpha()):
        return None
    return token.lower()


def load_word_catalog(path: Union[str, Path, None] = None,
                      max_len: Optional[int] = None,
                      quote_chars: Optional[str] = None) -> WordCatalog:
    """
    Load a WordCatalog from a word-list file.

    Args:
        path: Word-list path. Defaults to the bundled list.
        max_len: Largest word length kept (catalog.max_nickname_len).
        quote_chars: Characters stripped from either end of each line.

    Raises:
        ResourceUnavailable: If the file cannot be opened.
    """
    path = Path(path) if path is not None else default_wordlist_path()
    if max_len is None:
        max_len = require_setting("catalog.max_nickname_len")
    if quote_chars is None:
        quote_chars = get_setting("catalog.quote_chars", "\"'")

    try:
        f = open(path, 'r', encoding='utf-8', errors='replace')
    except OSError as e:
        logger.critical(f"failed to open word list file: {path}")
        raise ResourceUnavailable(f"failed to open word list file: {path}") from e

    skipped = 0
    words = []
    with f:
        for line in f:
            word = parse_word(line, quote_chars)
            if word is None:
                skipped += 1
                continue
            words.append(word)

    catalog = WordCatalog.from_words(words, max_len)
    logger.debug(f"Loaded {len(catalog)} words from {path} "
                 f"({len(words) - len(catalog)} too long, {skipped} unusable lines)")
    return catalog


__all__ = [
    'ResourceUnavailable',
    'WordCatalog',
    'default_wordlist_path',
    'parse_word',
    'load_word_catalog',
]
