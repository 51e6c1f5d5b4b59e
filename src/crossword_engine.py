# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Crossword Placement Engine

Builds a free-form crossword from a word list:
- A random anchor word is placed across, centred in the grid
- Remaining words (longest first) are crossed onto placed words
- First valid intersection wins (greedy first-fit, not exhaustive)
- Words that cannot be crossed are reported as unused
"""

import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from models import Cell, CrosswordResult, Direction, PlacedWord, WordEntry
from search import make_rng

logger = logging.getLogger(__name__)

MIN_GRID_SIZE = 15
GRID_MARGIN = 5


def grid_size_for(entries: Sequence[WordEntry]) -> int:
    """Grid size for a word list: room for the longest word plus a margin."""
    longest = max((entry.length for entry in entries), default=0)
    return max(MIN_GRID_SIZE, longest + GRID_MARGIN)


def default_clue(word: str) -> str:
    return f"Clue for {word}"


class WorkingGrid:
    """
    Mutable letter buffer used while placing words.

    Owned by a single generate() call; None marks an empty cell.
    """

    def __init__(self, size: int):
        self.size = size
        self.cells: List[List[Optional[str]]] = [
            [None for _ in range(size)] for _ in range(size)
        ]

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= row < self.size and 0 <= col < self.size

    def is_filled(self, row: int, col: int) -> bool:
        """True for an in-bounds cell holding a letter."""
        return self.is_valid_position(row, col) and self.cells[row][col] is not None

    def get_letter(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col]

    def can_place(self, word: str, row: int, col: int, direction: Direction) -> bool:
        """
        Check whether word fits at (row, col) in direction.

        Rules:
        - every letter in bounds
        - cells just before and after the run are empty
        - each newly filled cell has empty perpendicular neighbours
        - each already-filled cell holds the same letter
        """
        dr, dc = (0, 1) if direction == Direction.ACROSS else (1, 0)
        end_row = row + dr * (len(word) - 1)
        end_col = col + dc * (len(word) - 1)

        if not (self.is_valid_position(row, col) and self.is_valid_position(end_row, end_col)):
            return False

        if self.is_filled(row - dr, col - dc) or self.is_filled(end_row + dr, end_col + dc):
            return False

        for i, letter in enumerate(word):
            r, c = row + dr * i, col + dc * i
            existing = self.cells[r][c]

            if existing is None:
                # Perpendicular neighbours: above/below for across, left/right for down
                if self.is_filled(r - dc, c - dr) or self.is_filled(r + dc, c + dr):
                    return False
            elif existing != letter:
                return False

        return True

    def place(self, word: str, row: int, col: int, direction: Direction):
        """Write word into the buffer. Caller must check can_place first."""
        dr, dc = (0, 1) if direction == Direction.ACROSS else (1, 0)
        for i, letter in enumerate(word):
            self.cells[row + dr * i][col + dc * i] = letter


class CrosswordGenerator:
    """
    Greedy crossword placement engine.

    Usage:
        entries = normalize_entries(words, clues)
        generator = CrosswordGenerator(grid_size_for(entries), rng=make_rng(7))
        result = generator.generate(entries)
    """

    def __init__(self, grid_size: int, rng: Optional[random.Random] = None):
        """
        Initialize the engine.

        Args:
            grid_size: Width and height of the square grid
            rng: Random source used to pick the anchor word
        """
        self.grid_size = grid_size
        self.rng = rng or make_rng()

    def generate(self, entries: Sequence[WordEntry]) -> CrosswordResult:
        """
        Place as many entries as possible.

        Returns:
            CrosswordResult; unused_words lists entries that could not be placed.
            If the anchor is longer than the grid, nothing is placed.
        """
        if not entries:
            return CrosswordResult(grid=self._empty_grid(), grid_size=self.grid_size)

        anchor_index = self.rng.randrange(len(entries))
        anchor = entries[anchor_index]
        rest = [e for i, e in enumerate(entries) if i != anchor_index]
        # Stable sort keeps input order among equal lengths
        rest.sort(key=lambda e: e.length, reverse=True)

        if anchor.length > self.grid_size:
            logger.warning(
                f"Anchor word {anchor.text} ({anchor.length}) does not fit a "
                f"{self.grid_size}x{self.grid_size} grid"
            )
            return CrosswordResult(
                grid=self._empty_grid(),
                unused_words=[anchor.text] + [e.text for e in rest],
                grid_size=self.grid_size,
            )

        working = WorkingGrid(self.grid_size)
        placed: List[PlacedWord] = []
        unused: List[str] = []

        start_row = (self.grid_size - 1) // 2
        start_col = (self.grid_size - anchor.length) // 2
        working.place(anchor.text, start_row, start_col, Direction.ACROSS)
        placed.append(self._placed(anchor, start_row, start_col, Direction.ACROSS))
        logger.debug(f"Anchor {anchor.text} at ({start_row}, {start_col}) across")

        for entry in rest:
            position = self._find_intersection(working, placed, entry.text)
            if position is None:
                unused.append(entry.text)
                logger.debug(f"No valid crossing for {entry.text}")
                continue

            row, col, direction = position
            working.place(entry.text, row, col, direction)
            placed.append(self._placed(entry, row, col, direction))
            logger.debug(f"Placed {entry.text} at ({row}, {col}) {direction.value}")

        numbers = self._assign_numbers(placed)
        for word in placed:
            word.number = numbers[(word.row, word.col)]

        if unused:
            logger.warning(f"Crossword placed {len(placed)} words, {len(unused)} unused: {unused}")
        else:
            logger.info(f"Crossword placed all {len(placed)} words")

        return CrosswordResult(
            grid=self._build_grid(working, numbers),
            placed_words=placed,
            unused_words=unused,
            grid_size=self.grid_size,
        )

    def _find_intersection(
        self,
        working: WorkingGrid,
        placed: List[PlacedWord],
        word: str,
    ) -> Optional[Tuple[int, int, Direction]]:
        """First valid perpendicular crossing against already placed words."""
        for other in placed:
            direction = other.direction.perpendicular()
            for (row, col), placed_char in zip(other.cells(), other.word):
                for k, letter in enumerate(word):
                    if letter != placed_char:
                        continue
                    if direction == Direction.DOWN:
                        try_row, try_col = row - k, col
                    else:
                        try_row, try_col = row, col - k
                    if working.can_place(word, try_row, try_col, direction):
                        return try_row, try_col, direction
        return None

    @staticmethod
    def _placed(entry: WordEntry, row: int, col: int, direction: Direction) -> PlacedWord:
        return PlacedWord(
            word=entry.text,
            clue=entry.clue or default_clue(entry.text),
            row=row,
            col=col,
            direction=direction,
        )

    @staticmethod
    def _assign_numbers(placed: List[PlacedWord]) -> Dict[Tuple[int, int], int]:
        """Number distinct start cells in row-major order."""
        numbers: Dict[Tuple[int, int], int] = {}
        for start in sorted((w.row, w.col) for w in placed):
            if start not in numbers:
                numbers[start] = len(numbers) + 1
        return numbers

    def _build_grid(
        self,
        working: WorkingGrid,
        numbers: Dict[Tuple[int, int], int],
    ) -> List[List[Cell]]:
        grid = []
        for r in range(self.grid_size):
            row = []
            for c in range(self.grid_size):
                letter = working.get_letter(r, c)
                row.append(Cell(
                    char=letter or "",
                    is_active=letter is not None,
                    number=numbers.get((r, c)),
                ))
            grid.append(row)
        return grid

    def _empty_grid(self) -> List[List[Cell]]:
        return [[Cell() for _ in range(self.grid_size)] for _ in range(self.grid_size)]


def generate_crossword(
    entries: Sequence[WordEntry],
    rng: Optional[random.Random] = None,
    grid_size: Optional[int] = None,
) -> CrosswordResult:
    """Convenience wrapper: derive the grid size and run the engine."""
    size = grid_size if grid_size is not None else grid_size_for(entries)
    return CrosswordGenerator(size, rng=rng).generate(entries)
