"""
Physician note source.

Reads a note from disk and substitutes a fixed sample note when the file
is missing or unreadable, so the pipeline always has text to extract from.
"""

import logging
import pathlib
import typing

from .settings import DEFAULT_NOTE_PATH, DEFAULT_NOTE_TEXT

logger = logging.getLogger(__name__)


class NoteFileReader:
    def __init__(
        self,
        path: typing.Union[str, pathlib.Path, None] = None,
        fallback_text: typing.Optional[str] = None,
    ):
        # blank path -> default location
        self.path = pathlib.Path(path) if path and str(path).strip() else pathlib.Path(DEFAULT_NOTE_PATH)
        self.fallback_text = DEFAULT_NOTE_TEXT if fallback_text is None else fallback_text
        logger.debug(f"NoteFileReader initialized with path {str(self.path)!r}")

    def read(self) -> str:
        """Return the note contents, or the fallback text if the file cannot be read."""
        if not self.path.is_file():
            logger.warning(f"Note file not found: {str(self.path)!r}; using fallback note")
            return self.fallback_text

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read note file {str(self.path)!r}: {e}; using fallback note")
            return self.fallback_text

        logger.info(f"Read physician note from {str(self.path)!r}")
        return text
