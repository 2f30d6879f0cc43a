#!/usr/bin/env python3
"""Find lexicon phrases in a text file and write the matches as JSON.

Builds the lexicon index from the configured lexicon files and exclusion
preferences, scans the text file paragraph by paragraph, and writes the
matches with their character offsets and lexicon metadata.

Usage:
    uv run python scripts/highlight-text.py --file path/to/page.txt
    uv run python scripts/highlight-text.py --file page.txt --output matches.json --no-extra
"""

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from lexhighlight.config import Config
from lexhighlight.highlighter import Highlighter
from lexhighlight.util.fs_util import FSUtil

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "config.yaml"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Find lexicon phrases in a text file.")
    parser.add_argument("--file", type=Path, required=True, help="UTF-8 text file to scan")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to config.yaml")
    parser.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")
    parser.add_argument("--no-extra", action="store_true", help="Do not merge the extra lexicon")
    return parser.parse_args(argv)


def build_report(source_file: Path, text: str, highlighter: Highlighter) -> dict[str, Any]:
    """Scan the text and assemble the JSON report.

    Paragraphs are scanned separately, like separate text nodes of a page, so
    no match spans a blank line. Offsets are relative to the whole file.
    """
    paragraphs: list[tuple[int, str]] = []
    offset = 0
    for block in text.split("\n\n"):
        paragraphs.append((offset, block))
        offset += len(block) + 2

    per_paragraph, stats = highlighter.scan_segments(block for _, block in paragraphs)

    matches: list[dict[str, Any]] = []
    for (base, _), paragraph_matches in zip(paragraphs, per_paragraph, strict=True):
        for match in paragraph_matches:
            data = match.to_dict()
            data["start"] += base
            data["end"] += base
            data["text"] = text[data["start"] : data["end"]]
            matches.append(data)

    return {
        "source_file": str(source_file),
        "scanned_at": datetime.now(UTC).isoformat(),
        "index_size": highlighter.index.size,
        "total_matches": len(matches),
        "level_stats": stats.to_dict(),
        "matches": matches,
    }


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = Config(args.config)
        logging.basicConfig(level=config.getLogLevel(), format="%(levelname)s: %(message)s")

        highlighter = Highlighter.from_config(config)
        if args.no_extra and highlighter.preferences.include_extra:
            highlighter.set_include_extra(False)

        text = FSUtil.read_text_file(args.file)
        report = build_report(args.file, text, highlighter)

        if args.output is not None:
            FSUtil.write_json_file(args.output, report, create_parents=True)
            logger.info("Wrote %d matches to %s", report["total_matches"], args.output)
        else:
            print(json.dumps(report, indent=2, ensure_ascii=False))

    except Exception as e:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
        logger.error(f"Highlighting failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
