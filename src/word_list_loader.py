# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Word list loader.

Reads the raw word/clue lines of a classroom word list, either from a YAML file
or a plain text file, and returns parallel word and clue lists.

YAML:
    words:
      - apple                      # bare word
      - {word: berry, clue: "n. : a small fruit"}
    clues: [...]                   # optional, parallel to bare words

Text (one entry per line, clue after a TAB, '#' starts a comment):
    apple\tn. : a fruit
    berry
"""

from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import yaml


class WordListImportError(Exception):
    """Raised when a word list file is missing or malformed."""
    pass


def split_entries(
    items: Sequence[Any],
    clues: Optional[Sequence[str]] = None,
) -> Tuple[List[str], List[str]]:
    """
    Split mixed word items into parallel word and clue lists.

    Items are strings or mappings with 'word' and optional 'clue'. A mapping's
    clue wins over the parallel clues list.
    """
    clues = list(clues or [])
    words: List[str] = []
    out_clues: List[str] = []

    for index, item in enumerate(items):
        parallel = clues[index] if index < len(clues) and clues[index] is not None else ""
        if isinstance(item, dict):
            if 'word' not in item:
                raise WordListImportError(f"Entry {index + 1} has no 'word': {item}")
            words.append(str(item['word']))
            out_clues.append(str(item.get('clue') or parallel))
        else:
            words.append(str(item))
            out_clues.append(str(parallel))

    return words, out_clues


def load_word_list(path: str) -> Tuple[List[str], List[str]]:
    """
    Load a word list file.

    Args:
        path: .yaml/.yml or any other extension (read as text)

    Returns:
        (words, clues) with clues parallel to words ('' when absent)

    Raises:
        WordListImportError: If the file doesn't exist or is invalid
    """
    path = Path(path)
    if not path.exists():
        raise WordListImportError(f"Word list file not found: {path}")

    if path.suffix.lower() in ('.yaml', '.yml'):
        return _load_yaml(path)
    return _load_text(path)


def _load_yaml(path: Path) -> Tuple[List[str], List[str]]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise WordListImportError(f"Invalid YAML in word list {path}: {e}")

    if isinstance(data, list):
        data = {'words': data}
    if not isinstance(data, dict) or not isinstance(data.get('words'), list):
        raise WordListImportError(f"Word list {path} must contain a 'words' list")

    return split_entries(data['words'], data.get('clues'))


def _load_text(path: Path) -> Tuple[List[str], List[str]]:
    words: List[str] = []
    clues: List[str] = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.rstrip("\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            word, _, clue = line.partition("\t")
            words.append(word.strip())
            clues.append(clue.strip())
    return words, clues
