# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Word normalization shared by all puzzle engines.

Turns raw word/clue lines into deduplicated WordEntry records.
"""

import re
from typing import List, Optional, Sequence

from models import WordEntry


# Leading part-of-speech abbreviation, e.g. "n. : apple" or "adv./prep. : inside"
POS_PATTERN = re.compile(r"^\s*([a-z]{1,4}\.)", re.IGNORECASE)
NON_LETTERS = re.compile(r"[^A-Z]")


def clean_word(raw: str) -> str:
    """Uppercase a raw word and strip everything that is not A-Z."""
    return NON_LETTERS.sub("", raw.upper())


def extract_pos(clue: Optional[str]) -> Optional[str]:
    """
    Extract a part-of-speech tag from the start of a clue.

    Examples:
        "n. : a fruit"   -> "n."
        "ADV. quickly"   -> "adv."
        "a fruit"        -> None
    """
    if not clue:
        return None
    match = POS_PATTERN.match(clue)
    return match.group(1).lower() if match else None


def normalize_entries(
    words: Sequence[str],
    clues: Optional[Sequence[str]] = None,
) -> List[WordEntry]:
    """
    Normalize parallel word/clue lists into unique WordEntry records.

    The clue list may be shorter than the word list. Order of first
    occurrence is kept; later duplicates (after cleaning) are dropped.
    """
    clues = clues or []
    seen = set()
    entries: List[WordEntry] = []

    for index, raw in enumerate(words):
        text = clean_word(raw or "")
        if not text or text in seen:
            continue
        seen.add(text)

        clue = clues[index].strip() if index < len(clues) and clues[index] else ""
        entries.append(WordEntry.from_text(text, pos_tag=extract_pos(clue), clue=clue))

    return entries


def unique_words(words: Sequence[str]) -> List[str]:
    """Cleaned, deduplicated words in first-seen order."""
    return [entry.text for entry in normalize_entries(words)]
