# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Puzzle Validator

Independent checks for generated puzzles:
1. Crossword: letters agree, no flush neighbours, numbering order
2. DGA: one clue per word, clue stack solvable one word at a time
3. Tic-Tac-Word: nine distinct solution words per board

simulate_elimination() is the DGA solvability oracle; the generator uses
it to accept a clue set and the tests use it on returned results.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from crossword_engine import WorkingGrid
from models import (
    CrosswordResult, DGAResult, Direction, TicTacResult, WordEntry
)


@dataclass
class ValidationResult:
    """Result of puzzle validation."""
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict = field(default_factory=dict)

    def add_error(self, message: str):
        self.errors.append(message)
        self.valid = False

    def __str__(self):
        status = "✅ VALID" if self.valid else "❌ INVALID"
        lines = [f"Structure: {status}"]

        if self.errors:
            lines.append("\nErrors:")
            for e in self.errors:
                lines.append(f"  ❌ {e}")

        if self.warnings:
            lines.append("\nWarnings:")
            for w in self.warnings:
                lines.append(f"  ⚠️ {w}")

        if self.stats:
            lines.append("\nStats:")
            for k, v in self.stats.items():
                lines.append(f"  {k}: {v}")

        return "\n".join(lines)


@dataclass
class EliminationTrace:
    """Outcome of simulating a solver over a DGA clue stack."""
    solved: bool
    order: List[str] = field(default_factory=list)
    remaining: List[str] = field(default_factory=list)


def simulate_elimination(constraints: Sequence, words: Sequence[str]) -> EliminationTrace:
    """
    Resolve words one at a time the way a student would.

    Repeatedly find a constraint whose matches among the still-unresolved
    words are exactly one word, strike that word and that constraint, and
    start over. Stops with solved=False at the first deadlock.

    Args:
        constraints: Objects with a matches(word) -> bool method
        words: The full word pool

    Returns:
        EliminationTrace with the resolution order and any leftovers
    """
    remaining_words = list(words)
    remaining_constraints = list(constraints)
    order: List[str] = []

    while remaining_words:
        found = False
        for i, constraint in enumerate(remaining_constraints):
            matches = [w for w in remaining_words if constraint.matches(w)]
            if len(matches) == 1:
                solved_word = matches[0]
                remaining_words.remove(solved_word)
                del remaining_constraints[i]
                order.append(solved_word)
                found = True
                break

        if not found:
            return EliminationTrace(solved=False, order=order, remaining=remaining_words)

    return EliminationTrace(solved=True, order=order)


def is_solvable(constraints: Sequence, words: Sequence[str]) -> bool:
    return simulate_elimination(constraints, words).solved


def validate_crossword(result: CrosswordResult) -> ValidationResult:
    """Check letter agreement, placement adjacency and clue numbering."""
    validation = ValidationResult()
    size = result.grid_size

    # Letters agree between every word and the grid
    for word in result.placed_words:
        for (r, c), letter in zip(word.cells(), word.word):
            if not (0 <= r < size and 0 <= c < size):
                validation.add_error(f"{word.word} leaves the grid at ({r}, {c})")
                continue
            cell = result.grid[r][c]
            if not cell.is_active or cell.char != letter:
                validation.add_error(
                    f"Cell ({r}, {c}) holds '{cell.char}' but {word.word} needs '{letter}'"
                )

    # Replay placements: every word after the anchor must be a legal crossing
    working = WorkingGrid(size)
    for index, word in enumerate(result.placed_words):
        if index > 0 and not working.can_place(word.word, word.row, word.col, word.direction):
            validation.add_error(f"{word.word} was not a legal placement when added")
        elif index > 0 and not any(working.is_filled(r, c) for r, c in word.cells()):
            validation.add_error(f"{word.word} does not cross any earlier word")
        working.place(word.word, word.row, word.col, word.direction)

    # Active cells must all be covered by a placed word
    covered = {pos for word in result.placed_words for pos in word.cells()}
    for r, row in enumerate(result.grid):
        for c, cell in enumerate(row):
            if cell.is_active and (r, c) not in covered:
                validation.add_error(f"Active cell ({r}, {c}) is not part of any word")

    # Numbers increase strictly over start cells in row-major order
    starts = {(w.row, w.col) for w in result.placed_words}
    last = 0
    for r, row in enumerate(result.grid):
        for c, cell in enumerate(row):
            if cell.number is None:
                if (r, c) in starts:
                    validation.add_error(f"Start cell ({r}, {c}) has no number")
                continue
            if (r, c) not in starts:
                validation.add_error(f"Cell ({r}, {c}) is numbered but starts no word")
            if cell.number != last + 1:
                validation.add_error(f"Clue number {cell.number} at ({r}, {c}) is out of order")
            last = cell.number

    for word in result.placed_words:
        cell_number = result.grid[word.row][word.col].number
        if cell_number != word.number:
            validation.add_error(f"{word.word} has number {word.number}, grid says {cell_number}")

    if result.unused_words:
        validation.warnings.append(f"{len(result.unused_words)} words unused")

    validation.stats["placed_words"] = len(result.placed_words)
    validation.stats["across_words"] = sum(
        1 for w in result.placed_words if w.direction == Direction.ACROSS
    )
    validation.stats["down_words"] = sum(
        1 for w in result.placed_words if w.direction == Direction.DOWN
    )
    return validation


def validate_dga(result: DGAResult) -> ValidationResult:
    """Check the one-clue-per-word bijection and full solvability."""
    validation = ValidationResult()
    if not result.success:
        validation.add_error(result.message or "Generation failed")
        return validation

    for word in result.word_bank:
        count = sum(1 for clue in result.clues if clue.word == word)
        if count != 1:
            validation.add_error(f"{word} has {count} clues (expected 1)")

    bank = set(result.word_bank)
    for clue in result.clues:
        if clue.word not in bank:
            validation.add_error(f"Clue {clue.id} targets {clue.word}, which is not in the bank")
        expected = sorted(w for w in result.word_bank if clue.matches(w))
        if clue.matching_words != expected:
            validation.add_error(f"Clue {clue.id} lists {clue.matching_words}, expected {expected}")

    ids = sorted(clue.id for clue in result.clues)
    if ids != list(range(1, len(result.clues) + 1)):
        validation.add_error(f"Clue ids are not 1..{len(result.clues)}: {ids}")

    trace = simulate_elimination(result.clues, result.word_bank)
    if not trace.solved:
        validation.add_error(f"Deadlock with {trace.remaining} unresolved")

    validation.stats["clues"] = len(result.clues)
    validation.stats["ambiguous_clues"] = result.ambiguous_count
    validation.stats["solve_order"] = trace.order
    return validation


def validate_tictac(
    result: TicTacResult,
    entries: Optional[Sequence[WordEntry]] = None,
) -> ValidationResult:
    """
    Check every board has nine distinct solutions that fit their cells.

    If entries are given, each solution is also checked against the cell's
    attributes (part of speech included).
    """
    validation = ValidationResult()
    if not result.success:
        validation.add_error(result.message or "Generation failed")
        return validation

    by_word = {entry.text: entry for entry in entries} if entries else {}

    for grid in result.grids:
        if len(grid.cells) != 9:
            validation.add_error(f"Board {grid.id} has {len(grid.cells)} cells")
            continue

        solutions = grid.solutions()
        if len(set(solutions)) != 9:
            validation.add_error(f"Board {grid.id} repeats a solution word: {solutions}")

        for index, cell in enumerate(grid.cells):
            if cell.solution not in cell.matching_words:
                validation.add_error(f"Board {grid.id} cell {index}: solution not in matches")
            entry = by_word.get(cell.solution)
            if entry is not None and not cell.attributes.matches(entry):
                validation.add_error(
                    f"Board {grid.id} cell {index}: {cell.solution} does not fit '{cell.label}'"
                )

    validation.stats["boards"] = len(result.grids)
    return validation
