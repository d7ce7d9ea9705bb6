"""Shortcode generation utility

This module provides random sources and a helper function for generating
short, random, human-friendly shortcodes.

Classes:
    RandomSource:
        Interface: `randint(max)` returns an integer in [0, max).
    SystemRandomSource:
        Cryptographically strong source backed by the OS entropy pool (`secrets`).
    PseudoRandomSource:
        Mersenne Twister source (`random.Random`). NOT suitable for unguessable codes.

Functions:
    default_random_source() -> RandomSource:
        Strong source when the OS provides entropy, weak fallback otherwise.
    generate_shortcode(random_source=None) -> str:
        Generate a 6 to 8 character shortcode without confusable characters.

Example:
    >>> from shortlinks.utils import generate_shortcode
    >>> generate_shortcode()
    'fW7kRzq'
"""

import os
import random
import secrets
import string
import logging
from abc import ABC, abstractmethod

from shortlinks.constants import ShortcodeLimits


logger = logging.getLogger(__name__)


# Glyphs that are easily misread in a short string: 0/O and 1/l/I
CONFUSABLE_CHARACTERS = frozenset('0O1lI')

# 57 glyphs: [a-zA-Z0-9] minus the confusable ones
ALPHABET = ''.join(c for c in string.ascii_lowercase + string.ascii_uppercase + string.digits if c not in CONFUSABLE_CHARACTERS)


class RandomSource(ABC):
    """Interface for random integer sources used by the shortcode generator.

    Attributes:
        secure (bool):
            True if the source is cryptographically strong.
    """

    secure: bool = False

    @abstractmethod
    def randint(self, max: int) -> int:  # noqa: A002
        """Return a uniformly distributed integer in [0, max)."""
        pass


class SystemRandomSource(RandomSource):
    secure = True

    def randint(self, max: int) -> int:  # noqa: A002
        return secrets.randbelow(max)


class PseudoRandomSource(RandomSource):
    """Weak source for environments without an OS entropy pool.

    Generated shortcodes are predictable for anyone who can observe enough of
    them. Use it only for tests (pass a `seed`) or as a degraded fallback.
    """

    secure = False

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)  # noqa: S311

    def randint(self, max: int) -> int:  # noqa: A002
        return self._random.randrange(max)


def default_random_source() -> RandomSource:
    """Return the strongest random source available on this platform.

    Falls back to PseudoRandomSource (and logs a warning) when `os.urandom`
    is not implemented, which is a degraded-security mode.
    """
    try:
        os.urandom(1)
    except NotImplementedError:
        logger.warning(
            'OS entropy source unavailable. Falling back to a pseudo-random shortcode generator.',
            extra={'event': 'WEAK_RANDOM_SOURCE'},
        )
        return PseudoRandomSource()
    return SystemRandomSource()


def generate_shortcode(random_source: RandomSource | None = None) -> str:
    """Generate a random shortcode.

    The length is picked uniformly from {6, 7, 8} and every character is drawn
    from ALPHABET, so a generated shortcode never contains 0, O, 1, l or I.

    Args:
        random_source (RandomSource | None):
            Source of randomness. Defaults to `default_random_source()`.

    Returns:
        str: the generated shortcode.

    NOTE:
        Consecutive calls are NOT guaranteed to be unique. Callers must insert
        through the record store's insert-if-absent and retry on collision.
    """
    source = random_source if random_source is not None else default_random_source()

    lengths = ShortcodeLimits.GENERATED_LENGTHS
    length = lengths[source.randint(len(lengths))]
    return ''.join(ALPHABET[source.randint(len(ALPHABET))] for _ in range(length))
