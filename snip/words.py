"""
Word splitting and stemming for snippet text.
"""

import re
from typing import TextIO

import snowballstemmer

# Characters removed (once per side) from the edges of a word
PUNCTUATION = frozenset('.,!?"[]()')

_WHITESPACE_RE = re.compile(r'\s+')


def strip_punctuation(word: str) -> str:
    """Remove at most one punctuation character from each end of a word.

    Only a single character is taken per side: '((x))' becomes '(x)'.
    """
    if word and word[0] in PUNCTUATION:
        word = word[1:]
    if word and word[-1] in PUNCTUATION:
        word = word[:-1]
    return word


def split_words(text: str) -> list[str]:
    """Split text into punctuation-trimmed words.

    Leading and trailing whitespace is dropped and the rest is split on
    whitespace runs, newlines included. Empty input gives [''], never [].
    """
    return [strip_punctuation(w) for w in _WHITESPACE_RE.split(text.strip())]


def stem(word: str) -> str:
    """Lower-case a word and reduce it with the English Snowball stemmer."""
    stemmer = snowballstemmer.stemmer("english")
    return stemmer.stemWord(word.lower())


def read_lines(stream: TextIO) -> str:
    """Read every line of a text stream."""
    return "".join(stream)


def read_word(stream: TextIO) -> str:
    """Read the first line of a text stream without its line ending."""
    return stream.readline().rstrip()
