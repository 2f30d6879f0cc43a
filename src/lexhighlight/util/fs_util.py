"""File system utility functions for lexicon and text files."""

import json
from pathlib import Path
from typing import Any


class FSUtil:
    """Utility class for file system operations."""

    @staticmethod
    def read_text_file(file_path: Path) -> str:
        """Read UTF-8 encoded text file.

        Args:
            file_path: Path to the text file.

        Returns:
            File contents as a string.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the path is not a file.
            UnicodeDecodeError: If the file cannot be decoded as UTF-8.
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if not file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        return file_path.read_text(encoding="utf-8")

    @staticmethod
    def write_text_file(file_path: Path, content: str, create_parents: bool) -> None:
        """Write UTF-8 encoded text file.

        Args:
            file_path: Path where the file should be written.
            content: Content to write to the file.
            create_parents: If True, create parent directories if they don't exist.

        Raises:
            OSError: If the file cannot be written.
        """
        if create_parents:
            file_path.parent.mkdir(parents=True, exist_ok=True)

        file_path.write_text(content, encoding="utf-8")

    @staticmethod
    def write_json_file(file_path: Path, data: Any, create_parents: bool) -> None:
        """Write data as pretty-printed UTF-8 JSON, keeping non-ASCII characters.

        Args:
            file_path: Path where the file should be written.
            data: JSON-serializable data.
            create_parents: If True, create parent directories if they don't exist.
        """
        FSUtil.write_text_file(file_path, json.dumps(data, indent=2, ensure_ascii=False) + "\n", create_parents)
