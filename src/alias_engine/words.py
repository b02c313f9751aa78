"""
alias_engine.words — Word list files
====================================

Loads candidate words from disk.

CSV files need a header row with a ``text`` column. An optional
``complexity`` column holds 1 (easy), 2 (medium) or 3 (hard); every
other non-empty cell on the row is a taboo word for that text:

    text,complexity,taboo1,taboo2,taboo3
    apple,1,fruit,red,tree

Any other file is read as plain text, one word per line; blank lines
and lines starting with ``#`` are skipped.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List, Union

from ._engine.word_bank import EASY, HARD, WordEntry
from .errors import ConfigurationError

logger = logging.getLogger("alias_engine.words")


def load_word_list(path: Union[str, Path]) -> List[WordEntry]:
    """
    Read word entries from a CSV or plain-text file.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Word list not found: {file_path}")

    if file_path.suffix.lower() == ".csv":
        entries = _read_csv(file_path)
    else:
        entries = _read_plain(file_path)

    logger.info("Loaded %d words from %s", len(entries), file_path)
    return entries


def _read_plain(path: Path) -> List[WordEntry]:
    entries = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            text = line.strip()
            if not text or text.startswith("#"):
                continue
            entries.append(WordEntry(text=text))
    return entries


def _read_csv(path: Path) -> List[WordEntry]:
    entries = []
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames or "text" not in reader.fieldnames:
            raise ConfigurationError(f"{path}: CSV word list needs a 'text' column")
        for line_no, row in enumerate(reader, start=2):
            text = (row.get("text") or "").strip()
            if not text:
                continue
            entries.append(WordEntry(
                text=text,
                complexity=_parse_complexity(row.get("complexity"), path, line_no),
                taboo_words=tuple(
                    value.strip()
                    for key, value in row.items()
                    if key not in ("text", "complexity") and isinstance(value, str) and value.strip()
                ),
            ))
    return entries


def _parse_complexity(raw, path: Path, line_no: int) -> int:
    if raw is None or not str(raw).strip():
        return EASY
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ConfigurationError(f"{path}:{line_no}: complexity must be 1, 2 or 3, got {raw!r}")
    if not EASY <= value <= HARD:
        raise ConfigurationError(f"{path}:{line_no}: complexity must be 1, 2 or 3, got {value}")
    return value
