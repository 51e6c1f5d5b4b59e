# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for the Tic-Tac-Word board assembler."""

import itertools
import os
import sys
import unittest
from collections import Counter
from unittest import mock

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from models import AmbiguityBand, AttributeKind, ConstraintAttributes, TicTacDifficulty
from tictac_generator import (
    TicTacGenerator, build_candidates, build_key, build_label,
    find_distinct_assignment, parse_difficulty, pick_constraint_set,
    BOARD_COUNT, CENTER_CELL, DIFFICULTY_PROFILES,
)
from search import make_rng
from validator import validate_tictac
from word_normalizer import normalize_entries


WORDS = ["planet", "river", "forest", "jump", "swim", "climb", "bright", "quiet", "gentle"]
CLUES = [
    "n. : orbits a star",
    "n. : flowing water",
    "n. : many trees",
    "v. : leave the ground",
    "v. : move through water",
    "v. : go up",
    "adj. : full of light",
    "adj. : making little noise",
    "adj. : soft and kind",
]


class TestLabelsAndKeys(unittest.TestCase):
    """Tests for candidate keys and student-facing labels."""

    def test_labels(self):
        attrs = ConstraintAttributes(length=5, start="B", end="T", pos="n.")
        self.assertEqual(build_label(AttributeKind.LENGTH, attrs), "5")
        self.assertEqual(build_label(AttributeKind.START, attrs), "B_____")
        self.assertEqual(build_label(AttributeKind.END, attrs), "_____T")
        self.assertEqual(build_label(AttributeKind.POS_END, attrs), "n. | _____T")
        self.assertEqual(build_label(AttributeKind.START_END, attrs), "B_____T")
        self.assertEqual(build_label(AttributeKind.LENGTH_START, attrs), "5 | B_____")

    def test_keys_distinguish_kinds(self):
        start = build_key(AttributeKind.START, ConstraintAttributes(start="B"))
        pos_start = build_key(AttributeKind.POS_START, ConstraintAttributes(start="B", pos="n."))
        self.assertNotEqual(start, pos_start)
        self.assertEqual(start, "start|start=B")

    def test_parse_difficulty(self):
        self.assertEqual(parse_difficulty("Hard"), TicTacDifficulty.HARD)
        self.assertEqual(parse_difficulty(TicTacDifficulty.EASY), TicTacDifficulty.EASY)
        with self.assertRaises(ValueError):
            parse_difficulty("expert")


class TestCandidates(unittest.TestCase):
    """Tests for build_candidates."""

    def setUp(self):
        self.entries = normalize_entries(WORDS, CLUES)
        self.candidates = {c.key: c for c in build_candidates(self.entries)}

    def test_length_bucket(self):
        six = self.candidates["length|len=6"]
        self.assertEqual(six.matching_words, ["BRIGHT", "FOREST", "GENTLE", "PLANET"])
        self.assertEqual(six.band, AmbiguityBand.HIGH)

    def test_pos_bucket(self):
        verbs = self.candidates["pos|pos=v."]
        self.assertEqual(verbs.matching_words, ["CLIMB", "JUMP", "SWIM"])
        self.assertEqual(verbs.band, AmbiguityBand.MEDIUM)
        self.assertEqual(verbs.label, "v.")

    def test_singleton_band(self):
        self.assertEqual(self.candidates["start|start=Q"].band, AmbiguityBand.LOW)

    def test_untagged_words_skip_pos_kinds(self):
        entries = normalize_entries(["apple"])
        kinds = {c.kind for c in build_candidates(entries)}
        self.assertNotIn(AttributeKind.POS, kinds)
        self.assertNotIn(AttributeKind.POS_LENGTH, kinds)
        self.assertIn(AttributeKind.START_END, kinds)


class TestConstraintSetSelection(unittest.TestCase):
    """Tests for pick_constraint_set caps and coverage."""

    # Distinct first and last letters, so these kinds only hold single words
    SINGLETON_WORDS = [
        "acorn", "bright", "climb", "dance", "flow", "grasp",
        "happy", "jazz", "kind", "music", "quick", "river",
    ]
    SINGLETON_KINDS = {
        AttributeKind.START, AttributeKind.END,
        AttributeKind.POS_START, AttributeKind.LENGTH_START,
    }

    def setUp(self):
        clues = ["n. : a thing"] * len(self.SINGLETON_WORDS)
        entries = normalize_entries(self.SINGLETON_WORDS, clues)
        self.candidates = [
            c for c in build_candidates(entries) if c.kind in self.SINGLETON_KINDS
        ]
        self.profile = DIFFICULTY_PROFILES[TicTacDifficulty.MEDIUM]

    def test_all_candidates_are_singletons(self):
        self.assertEqual(len(self.candidates), 48)
        for candidate in self.candidates:
            self.assertEqual(len(candidate.matching_words), 1)

    def test_first_attempt_respects_kind_caps(self):
        for seed in range(10):
            pick = pick_constraint_set(self.candidates, self.profile, 0, make_rng(seed))

            self.assertIsNotNone(pick)
            self.assertEqual(len(pick), 9)
            self.assertEqual(len({c.key for c in pick}), 9)
            for kind, count in Counter(c.kind for c in pick).items():
                self.assertLessEqual(count, self.profile.cap_for(kind))

    def test_caps_loosen_with_attempts(self):
        for seed in range(10):
            pick = pick_constraint_set(self.candidates, self.profile, 75, make_rng(seed))

            self.assertEqual(len(pick), 9)
            for kind, count in Counter(c.kind for c in pick).items():
                self.assertLessEqual(count, self.profile.cap_for(kind) + 3)

    def test_early_picks_add_new_words(self):
        for seed in range(10):
            pick = pick_constraint_set(self.candidates, self.profile, 0, make_rng(seed))

            coverage = set()
            for candidate in pick[:6]:
                self.assertTrue(any(w not in coverage for w in candidate.matching_words))
                coverage.update(candidate.matching_words)

    def test_too_few_candidates(self):
        self.assertIsNone(
            pick_constraint_set(self.candidates[:8], self.profile, 0, make_rng(0))
        )


class TestDistinctAssignment(unittest.TestCase):
    """Tests for find_distinct_assignment."""

    def test_assignment_is_distinct(self):
        entries = normalize_entries(WORDS, CLUES)
        candidates = [c for c in build_candidates(entries) if c.kind == AttributeKind.START]

        assignment = find_distinct_assignment(candidates, make_rng(0))

        self.assertIsNotNone(assignment)
        self.assertEqual(len(set(assignment.values())), 9)

    def test_no_assignment_when_words_collide(self):
        entries = normalize_entries(WORDS, CLUES)
        by_key = {c.key: c for c in build_candidates(entries)}
        # Three cells that only PLANET satisfies
        candidates = [
            by_key["start|start=P"],
            by_key["length_start|len=6|start=P"],
            by_key["start_end|start=P|end=T"],
        ]
        self.assertIsNone(find_distinct_assignment(candidates, make_rng(0)))


class TestTicTacGenerator(unittest.TestCase):
    """Tests for TicTacGenerator.generate."""

    def test_medium_scenario(self):
        result = TicTacGenerator(rng=make_rng(7)).generate(WORDS, CLUES, "medium")

        self.assertTrue(result.success)
        self.assertEqual(len(result.grids), BOARD_COUNT)
        for grid in result.grids:
            self.assertEqual(len(grid.cells), 9)
            self.assertEqual(len(set(grid.solutions())), 9)
        self.assertTrue(validate_tictac(result, normalize_entries(WORDS, CLUES)).valid)

    def test_hard_scenario(self):
        result = TicTacGenerator(rng=make_rng(7)).generate(WORDS, CLUES, "hard")

        self.assertTrue(result.success)
        self.assertEqual(result.difficulty, TicTacDifficulty.HARD)
        self.assertEqual(len(result.grids), BOARD_COUNT)
        kinds = set()
        for grid in result.grids:
            self.assertEqual(len(set(grid.solutions())), 9)
            kinds.update(cell.kind for cell in grid.cells)
        self.assertTrue(kinds <= set(AttributeKind))
        self.assertTrue(kinds & {AttributeKind.POS_LENGTH, AttributeKind.START_END})
        self.assertTrue(validate_tictac(result, normalize_entries(WORDS, CLUES)).valid)

    def test_time_limit_spans_all_boards(self):
        # Clock reads 0 when generation starts and 100 on every later check
        clock = itertools.chain([0.0], itertools.repeat(100.0))
        generator = TicTacGenerator(rng=make_rng(0), time_limit=5)

        with mock.patch('time.monotonic', side_effect=clock):
            result = generator.generate(WORDS, CLUES)

        self.assertFalse(result.success)
        self.assertEqual(result.grids, [])
        self.assertEqual(generator.stats["attempts"], 0)

    def test_board_ids(self):
        result = TicTacGenerator(rng=make_rng(2)).generate(WORDS, CLUES)
        self.assertEqual([g.id for g in result.grids], [0, 1, 2, 3])

    def test_medium_uses_only_medium_kinds(self):
        allowed = {
            AttributeKind.LENGTH, AttributeKind.START, AttributeKind.END,
            AttributeKind.POS, AttributeKind.POS_START, AttributeKind.POS_END,
            AttributeKind.LENGTH_START, AttributeKind.LENGTH_END,
        }
        result = TicTacGenerator(rng=make_rng(4)).generate(WORDS, CLUES, TicTacDifficulty.MEDIUM)

        for grid in result.grids:
            for cell in grid.cells:
                self.assertIn(cell.kind, allowed)

    def test_easy_centre_holds_longest_length(self):
        result = TicTacGenerator(rng=make_rng(5)).generate(WORDS, CLUES, "easy")
        longest = max(len(w) for w in WORDS)

        self.assertTrue(result.success)
        for grid in result.grids:
            for cell in grid.cells:
                self.assertIn(cell.kind, {AttributeKind.LENGTH, AttributeKind.START, AttributeKind.END})
            has_longest = any(cell.attributes.length == longest for cell in grid.cells)
            if has_longest:
                self.assertEqual(grid.cells[CENTER_CELL].attributes.length, longest)

    def test_solution_listed_first(self):
        result = TicTacGenerator(rng=make_rng(6)).generate(WORDS, CLUES)
        for grid in result.grids:
            for cell in grid.cells:
                self.assertEqual(cell.solution, cell.matching_words[0])
                self.assertEqual(sorted(cell.matching_words[1:]), cell.matching_words[1:])

    def test_too_few_words(self):
        result = TicTacGenerator(rng=make_rng(0)).generate(WORDS[:8], CLUES[:8])

        self.assertFalse(result.success)
        self.assertEqual(result.grids, [])
        self.assertEqual(result.message, "Please provide at least 9 unique words.")

    def test_duplicates_do_not_count(self):
        words = WORDS[:8] + ["PLANET"]
        result = TicTacGenerator(rng=make_rng(0)).generate(words, CLUES)
        self.assertFalse(result.success)

    def test_invalid_difficulty(self):
        with self.assertRaises(ValueError):
            TicTacGenerator().generate(WORDS, CLUES, "impossible")

    def test_same_seed_same_boards(self):
        first = TicTacGenerator(rng=make_rng(21)).generate(WORDS, CLUES)
        second = TicTacGenerator(rng=make_rng(21)).generate(WORDS, CLUES)
        self.assertEqual(first.to_dict(), second.to_dict())


if __name__ == '__main__':
    unittest.main()
