"""Word-list loading utilities.

Supports two formats:
  - Plain text: one word per line
  - CSV with a header containing a ``word`` column (other columns ignored)

Words are accent-stripped, lower-cased, filtered to exactly
``WORD_LENGTH`` letters a-z, deduplicated and sorted.
"""

from __future__ import annotations

import csv
import logging
import re
import unicodedata
from pathlib import Path

from feedback import WORD_LENGTH

log = logging.getLogger(__name__)

_DIR = Path(__file__).resolve().parent
DEFAULT_WORDS = _DIR / "data" / f"mini_english_{WORD_LENGTH}.txt"


def _strip_accents(text: str) -> str:
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in nfkd if unicodedata.category(ch) != "Mn")


def _keep(raw_words, word_length: int) -> list[str]:
    pattern = re.compile(rf"^[a-z]{{{word_length}}}$")
    seen: set[str] = set()
    words: list[str] = []
    skipped = 0
    for raw in raw_words:
        w = _strip_accents(raw.strip().lower())
        if not w or w in seen:
            continue
        if not pattern.match(w):
            skipped += 1
            continue
        seen.add(w)
        words.append(w)
    if skipped:
        log.debug("skipped %d entries that are not %d-letter words", skipped, word_length)
    words.sort()
    return words


def _load_txt(path: Path, word_length: int) -> list[str]:
    return _keep(path.read_text(encoding="utf-8").splitlines(), word_length)


def _load_csv(path: Path, word_length: int) -> list[str]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None or "word" not in reader.fieldnames:
            raise ValueError(f"{path}: CSV word lists need a 'word' column")
        return _keep((row["word"] or "" for row in reader), word_length)


def load_words(path: str | Path | None = None, word_length: int = WORD_LENGTH) -> list[str]:
    """Load a normalized, deduplicated, sorted word list.

    Parameters
    ----------
    path : str, Path or None
        ``.txt`` (one word per line) or ``.csv`` (``word`` column).
        None loads the bundled ``data/mini_english_5.txt``.
    word_length : int
        Only keep words of this exact length.
    """
    src = Path(path) if path is not None else DEFAULT_WORDS
    if not src.exists():
        raise FileNotFoundError(f"Word list not found: {src}")

    if src.suffix == ".csv":
        words = _load_csv(src, word_length)
    else:
        words = _load_txt(src, word_length)

    if not words:
        raise ValueError(f"No {word_length}-letter words found in {src}")
    log.debug("loaded %d words from %s", len(words), src)
    return words
