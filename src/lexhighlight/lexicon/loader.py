"""Loading lexicon JSON files from disk.

A lexicon file is a JSON array of record objects. The main lexicon is
required; an extra (user-maintained) lexicon is optional and any problem with
it is logged and ignored.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, cast

from lexhighlight.lexicon.index import coerce_record
from lexhighlight.lexicon.models import DictionaryRecord
from lexhighlight.util.fs_util import FSUtil

logger = logging.getLogger(__name__)

_PREVIEW_LENGTH = 120
_WS = re.compile(r"\s+")


class LexiconLoadError(ValueError):
    """Raised when a lexicon file is empty, unparsable or not a JSON array."""


def load_lexicon(path: Path) -> list[dict[str, Any]]:
    """Load raw lexicon records from a JSON file.

    Args:
        path: Path to the lexicon JSON file.

    Returns:
        The raw record list, unvalidated.

    Raises:
        FileNotFoundError: If the file does not exist.
        LexiconLoadError: If the file is blank, invalid JSON, or not an array.
    """
    text = FSUtil.read_text_file(path)
    if not text.strip():
        raise LexiconLoadError(f"Lexicon file is empty: {path}")

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        preview = _WS.sub(" ", text[:_PREVIEW_LENGTH])
        raise LexiconLoadError(
            f"Lexicon JSON parse failed for {path}: {e.msg}; length={len(text)}; preview={preview!r}"
        ) from e

    if not isinstance(raw, list):
        raise LexiconLoadError(f"Lexicon root must be a JSON array: {path}")

    records = cast(list[dict[str, Any]], raw)
    logger.info("Loaded lexicon %s: %d records", path, len(records))
    return records


def load_optional_lexicon(path: Path | None) -> list[dict[str, Any]]:
    """Load an optional lexicon, returning an empty list if it cannot be loaded."""
    if path is None:
        return []

    try:
        return load_lexicon(path)
    except (OSError, ValueError) as e:
        logger.warning("Optional lexicon %s not loaded, ignoring it: %s", path, e)
        return []


def merge_lexicons(main: list[Any], extra: list[Any], include_extra: bool) -> list[Any]:
    """Return the main records followed by the extra records when enabled.

    Main records come first so that they win over extra records producing the
    same canonical phrase.
    """
    if not include_extra:
        return main
    return [*main, *extra]


def parse_records(raw_records: Any) -> list[DictionaryRecord]:
    """Parse raw records leniently, dropping items that are not usable records.

    Anything other than a list is treated as an empty lexicon.
    """
    if not isinstance(raw_records, list | tuple):
        logger.warning("Lexicon records must be a list, got %s; using an empty lexicon", type(raw_records).__name__)
        return []

    records: list[DictionaryRecord] = []
    for item in raw_records:
        record = coerce_record(item)
        if record is not None:
            records.append(record)

    dropped = len(raw_records) - len(records)
    if dropped:
        logger.debug("Dropped %d malformed lexicon records", dropped)
    return records
