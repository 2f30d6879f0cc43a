"""Greedy leftmost-longest phrase scanner.

At each token position the scanner tries the phrase lengths registered for
that token's bucket, longest first, and takes the first phrase that matches.
A taken match is never revisited, so the result is non-overlapping but not a
globally optimal segmentation: a long match at one position can consume
tokens that would have started a better combination further right.
"""

from lexhighlight.lexicon.index import LexiconIndex
from lexhighlight.lexicon.models import MatchSpan
from lexhighlight.text.tokenizer import Token, tokenize


def scan(text: str, index: LexiconIndex) -> list[MatchSpan]:
    """Find indexed phrases in text.

    Args:
        text: Raw text to scan.
        index: Lexicon index to match against.

    Returns:
        Match spans in source order. Adjacent spans never overlap.
    """
    tokens = list(tokenize(text))
    return scan_tokens(tokens, index)


def scan_tokens(tokens: list[Token], index: LexiconIndex) -> list[MatchSpan]:
    """Run the greedy scan over an already tokenized text."""
    matches: list[MatchSpan] = []
    token_count = len(tokens)
    i = 0

    while i < token_count:
        bucket = index.bucket(tokens[i].token)
        if bucket is None:
            i += 1
            continue

        matched_length = 0
        for length in bucket.lengths_desc:
            if i + length > token_count:
                continue

            window = tokens[i : i + length]
            phrase = " ".join(token.token for token in window)
            entry = bucket.by_length[length].get(phrase)
            if entry is None:
                continue

            matches.append(MatchSpan.from_entry(entry, start=window[0].start, end=window[-1].end))
            matched_length = length
            break

        i += matched_length or 1

    return matches
