"""
Runtime configuration.

Defaults live here instead of inside the collaborators so that tests and the
CLI can override them.

Environment
-----------
DREXTRACT_NOTE_PATH     : note file to read (default "physician_note.txt")
DREXTRACT_FALLBACK_NOTE : note text used when the file is missing/unreadable
DREXTRACT_ENDPOINT      : intake endpoint (default "https://alert-api.com/DrExtract")
DREXTRACT_TIMEOUT       : HTTP timeout in seconds (default 10)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_NOTE_PATH = "physician_note.txt"
DEFAULT_NOTE_TEXT = (
    "Patient needs a CPAP with full face mask and humidifier. "
    "AHI > 20. Ordered by Dr. Cameron."
)
DEFAULT_ENDPOINT_URL = "https://alert-api.com/DrExtract"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    note_path: str = DEFAULT_NOTE_PATH
    fallback_note_text: str = DEFAULT_NOTE_TEXT
    endpoint_url: str = DEFAULT_ENDPOINT_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from DREXTRACT_* variables; unset or blank variables
        keep their defaults. Raises ValueError for a non-numeric timeout.
        """
        env = os.environ if environ is None else environ

        def _get(name: str, default: str) -> str:
            value = env.get(name, "").strip()
            return value or default

        raw_timeout = _get("DREXTRACT_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"DREXTRACT_TIMEOUT must be a number, got {raw_timeout!r}")

        return cls(
            note_path=_get("DREXTRACT_NOTE_PATH", DEFAULT_NOTE_PATH),
            fallback_note_text=_get("DREXTRACT_FALLBACK_NOTE", DEFAULT_NOTE_TEXT),
            endpoint_url=_get("DREXTRACT_ENDPOINT", DEFAULT_ENDPOINT_URL).rstrip("/"),
            timeout=timeout,
        )
