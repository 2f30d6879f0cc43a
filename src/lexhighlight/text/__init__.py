"""Text normalization and tokenization."""

from lexhighlight.text.normalizer import flatten_inflection, normalize_phrase, split_variants
from lexhighlight.text.tokenizer import Token, Tokenizer, tokenize

__all__ = [
    "Token",
    "Tokenizer",
    "flatten_inflection",
    "normalize_phrase",
    "split_variants",
    "tokenize",
]
