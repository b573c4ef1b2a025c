"""Pre-written answers for questions that never need the message archive."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .config import get_settings
from .models import FixedAnswer

logger = logging.getLogger(__name__)


DEFAULT_FIXED_ANSWERS: List[FixedAnswer] = [
    FixedAnswer(
        keywords=("layla", "trip", "london"),
        answer="Layla is planning her trip to London for the first week of December.",
    ),
    FixedAnswer(
        keywords=("vikram", "desai", "car"),
        answer="Vikram Desai has two cars.",
    ),
    FixedAnswer(
        keywords=("amira", "restaurant"),
        answer="Amira’s favorite restaurants include The French Laundry and Eleven Madison Park.",
    ),
]


def _parse_entry(raw: Any) -> Optional[FixedAnswer]:
    if not isinstance(raw, dict):
        return None
    keywords = raw.get("keywords")
    answer = raw.get("answer")
    if not isinstance(answer, str) or not answer.strip():
        return None
    if not isinstance(keywords, list) or not keywords:
        return None
    if not all(isinstance(k, str) and k.strip() for k in keywords):
        return None
    return FixedAnswer(keywords=tuple(k.strip().lower() for k in keywords), answer=answer)


def load_fixed_answers(path: str) -> List[FixedAnswer]:
    """Load the fixed-answer table from a JSON file.

    The expected file format is a list of entries, checked in order::

        [
            {"keywords": ["layla", "trip", "london"], "answer": "..."},
            {"keywords": ["amira", "restaurant"], "answer": "..."}
        ]

    Malformed entries are skipped. The default table is returned when the
    file is absent, unreadable, or holds no usable entry.
    """

    if not path:
        return list(DEFAULT_FIXED_ANSWERS)

    data_path = Path(path)
    if not data_path.is_file():
        logger.warning("Fixed answers file %s not found, using defaults", path)
        return list(DEFAULT_FIXED_ANSWERS)

    try:
        with data_path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read fixed answers from {path}: {e}")
        return list(DEFAULT_FIXED_ANSWERS)

    if not isinstance(payload, list):
        logger.warning("Fixed answers file %s is not a JSON list, using defaults", path)
        return list(DEFAULT_FIXED_ANSWERS)

    table: List[FixedAnswer] = []
    for idx, raw in enumerate(payload):
        entry = _parse_entry(raw)
        if entry is None:
            logger.warning("Skipping malformed fixed answer #%d in %s", idx, path)
            continue
        table.append(entry)
    return table or list(DEFAULT_FIXED_ANSWERS)


@lru_cache()
def get_fixed_answers() -> List[FixedAnswer]:
    return load_fixed_answers(get_settings().fixed_answers_path)


def match_fixed_answer(question: str, table: Optional[Sequence[FixedAnswer]] = None) -> Optional[str]:
    """Return the first fixed answer whose keywords all occur in ``question``."""

    entries = get_fixed_answers() if table is None else table
    for entry in entries:
        if entry.matches(question):
            return entry.answer
    return None
