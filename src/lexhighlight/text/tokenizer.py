"""Letter-run tokenizer for scanning page text.

Splits raw text into lowercased Unicode letter runs while keeping the
character offsets of each run in the original string, so that matches can be
mapped back onto the source text.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from lexhighlight.text.normalizer import LETTER_RUN_PATTERN


@dataclass(frozen=True)
class Token:
    """A single letter-run token.

    Attributes:
        token: Lowercased letter run.
        start: Offset of the first character in the source text.
        end: Offset one past the last character (exclusive).
    """

    token: str
    start: int
    end: int


class Tokenizer:
    """Letter-run tokenizer using the same run definition as the normalizer.

    Example:
        >>> [t.token for t in Tokenizer().tokenize("Sol-skinn, 2 ganger!")]
        ['sol', 'skinn', 'ganger']
    """

    TOKEN_PATTERN = LETTER_RUN_PATTERN

    def tokenize(self, text: str) -> Iterator[Token]:
        """Yield tokens left to right.

        Each call scans ``text`` from the beginning; no scan state is shared
        between calls.

        Args:
            text: Raw input text.

        Yields:
            Token objects in source order.
        """
        if not text:
            return

        for match in self.TOKEN_PATTERN.finditer(text):
            yield Token(token=match.group().lower(), start=match.start(), end=match.end())


_DEFAULT_TOKENIZER = Tokenizer()


def tokenize(text: str) -> Iterator[Token]:
    """Tokenize text with the default tokenizer."""
    return _DEFAULT_TOKENIZER.tokenize(text)
