# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for validator module."""

import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from models import (
    Cell, CrosswordResult, DGAClue, DGAResult, Direction, PlacedWord,
    RevealKind, TicTacResult, VisualSpec,
)
from validator import (
    ValidationResult, is_solvable, simulate_elimination,
    validate_crossword, validate_dga, validate_tictac,
)


def make_clue(clue_id, word, kind, char, matching):
    return DGAClue(
        id=clue_id,
        word=word,
        kind=kind,
        anchor_char=char,
        visual_spec=VisualSpec.for_kind(kind, char),
        is_ambiguous=len(matching) >= 2,
        matching_words=matching,
    )


def crossword_from(size, placed):
    """Build a CrosswordResult whose grid matches the placed words."""
    grid = [[Cell() for _ in range(size)] for _ in range(size)]
    starts = sorted({(w.row, w.col) for w in placed})
    numbers = {start: i + 1 for i, start in enumerate(starts)}
    for word in placed:
        word.number = numbers[(word.row, word.col)]
        for (r, c), letter in zip(word.cells(), word.word):
            grid[r][c] = Cell(char=letter, is_active=True)
    for (r, c), number in numbers.items():
        grid[r][c].number = number
    return CrosswordResult(grid=grid, placed_words=placed, grid_size=size)


class TestSimulateElimination(unittest.TestCase):
    """Tests for the DGA solvability oracle."""

    def test_unique_clues_solve(self):
        clues = [
            make_clue(1, "APPLE", RevealKind.SUFFIX1, "E", ["APPLE"]),
            make_clue(2, "BERRY", RevealKind.PREFIX1, "B", ["BERRY"]),
        ]
        trace = simulate_elimination(clues, ["APPLE", "BERRY"])

        self.assertTrue(trace.solved)
        self.assertEqual(sorted(trace.order), ["APPLE", "BERRY"])

    def test_ambiguous_clue_resolves_after_strike(self):
        clues = [
            make_clue(1, "APPLY", RevealKind.PREFIX1, "A", ["APPLE", "APPLY"]),
            make_clue(2, "APPLE", RevealKind.SUFFIX1, "E", ["APPLE"]),
        ]
        trace = simulate_elimination(clues, ["APPLE", "APPLY"])

        self.assertTrue(trace.solved)
        self.assertEqual(trace.order, ["APPLE", "APPLY"])

    def test_deadlock(self):
        clues = [
            make_clue(1, "APPLE", RevealKind.PREFIX1, "A", ["APPLE", "APPLY"]),
            make_clue(2, "APPLY", RevealKind.PREFIX2, "P", ["APPLE", "APPLY"]),
        ]
        trace = simulate_elimination(clues, ["APPLE", "APPLY"])

        self.assertFalse(trace.solved)
        self.assertEqual(trace.order, [])
        self.assertEqual(sorted(trace.remaining), ["APPLE", "APPLY"])
        self.assertFalse(is_solvable(clues, ["APPLE", "APPLY"]))

    def test_missing_clue_deadlocks(self):
        clues = [make_clue(1, "APPLE", RevealKind.SUFFIX1, "E", ["APPLE"])]
        self.assertFalse(is_solvable(clues, ["APPLE", "BERRY"]))


class TestValidateDGA(unittest.TestCase):
    """Tests for validate_dga."""

    def test_valid_result(self):
        result = DGAResult(
            clues=[
                make_clue(1, "APPLY", RevealKind.PREFIX1, "A", ["APPLE", "APPLY"]),
                make_clue(2, "APPLE", RevealKind.SUFFIX1, "E", ["APPLE"]),
            ],
            word_bank=["APPLE", "APPLY"],
            success=True,
        )
        validation = validate_dga(result)

        self.assertTrue(validation.valid, validation.errors)
        self.assertEqual(validation.stats["ambiguous_clues"], 1)

    def test_wrong_matching_words(self):
        result = DGAResult(
            clues=[
                make_clue(1, "APPLY", RevealKind.PREFIX1, "A", ["APPLY"]),
                make_clue(2, "APPLE", RevealKind.SUFFIX1, "E", ["APPLE"]),
            ],
            word_bank=["APPLE", "APPLY"],
            success=True,
        )
        self.assertFalse(validate_dga(result).valid)

    def test_failed_result(self):
        validation = validate_dga(DGAResult(success=False, message="nope"))
        self.assertFalse(validation.valid)
        self.assertEqual(validation.errors, ["nope"])


class TestValidateCrossword(unittest.TestCase):
    """Tests for validate_crossword."""

    def test_valid_crossing(self):
        result = crossword_from(7, [
            PlacedWord("APPLE", "c1", 3, 1, Direction.ACROSS),
            PlacedWord("PEN", "c2", 3, 2, Direction.DOWN),
        ])
        validation = validate_crossword(result)

        self.assertTrue(validation.valid, validation.errors)
        self.assertEqual(validation.stats["across_words"], 1)
        self.assertEqual(validation.stats["down_words"], 1)

    def test_word_not_crossing(self):
        result = crossword_from(7, [
            PlacedWord("APPLE", "c1", 0, 0, Direction.ACROSS),
            PlacedWord("PEN", "c2", 4, 4, Direction.DOWN),
        ])
        validation = validate_crossword(result)

        self.assertFalse(validation.valid)
        self.assertTrue(any("does not cross" in e for e in validation.errors))

    def test_letter_disagreement(self):
        result = crossword_from(7, [
            PlacedWord("APPLE", "c1", 3, 1, Direction.ACROSS),
            PlacedWord("PEN", "c2", 3, 2, Direction.DOWN),
        ])
        result.grid[3][2].char = "X"

        self.assertFalse(validate_crossword(result).valid)


class TestValidateTicTac(unittest.TestCase):
    """Tests for validate_tictac."""

    def test_failed_result(self):
        validation = validate_tictac(TicTacResult(success=False, message="too few words"))
        self.assertFalse(validation.valid)


class TestValidationResult(unittest.TestCase):
    """Tests for ValidationResult."""

    def test_add_error(self):
        validation = ValidationResult()
        validation.add_error("broken")

        self.assertFalse(validation.valid)
        self.assertIn("broken", str(validation))


if __name__ == '__main__':
    unittest.main()
