# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Constraint Board Assembler (Tic-Tac-Word)

Builds four 3x3 boards. Each cell is an attribute constraint such as
"5", "B_____", "n. | _____T"; each board must admit nine different words,
one per cell. Uses a most-constrained-first backtracking search for the
distinct assignment.
"""

import logging
import random
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from models import (
    AmbiguityBand, AttributeKind, ConstraintAttributes, ConstraintCandidate,
    TicTacCell, TicTacDifficulty, TicTacGrid, TicTacResult, WordEntry,
)
from search import SearchBudget, make_rng, shuffled, weighted_order
from word_normalizer import normalize_entries

logger = logging.getLogger(__name__)

BOARD_COUNT = 4
BOARD_CELLS = 9
CENTER_CELL = 4
MIN_WORDS = BOARD_CELLS

MAX_GRID_ATTEMPTS = 50
MAX_SELECTION_ATTEMPTS = 120

VISUAL_PLACEHOLDER = "_____"


@dataclass
class DifficultyProfile:
    """Which kinds a board may use, how many of each, and band preference."""
    allowed_kinds: List[AttributeKind]
    default_kind_cap: int
    per_kind_cap: Dict[AttributeKind, int] = field(default_factory=dict)
    band_weights: Dict[AmbiguityBand, float] = field(default_factory=dict)

    def cap_for(self, kind: AttributeKind) -> int:
        return self.per_kind_cap.get(kind, self.default_kind_cap)


K = AttributeKind

DIFFICULTY_PROFILES: Dict[TicTacDifficulty, DifficultyProfile] = {
    TicTacDifficulty.EASY: DifficultyProfile(
        allowed_kinds=[K.LENGTH, K.START, K.END],
        default_kind_cap=4,
        per_kind_cap={K.LENGTH: 5},
        band_weights={AmbiguityBand.HIGH: 4, AmbiguityBand.MEDIUM: 2, AmbiguityBand.LOW: 1},
    ),
    TicTacDifficulty.MEDIUM: DifficultyProfile(
        allowed_kinds=[
            K.LENGTH, K.START, K.END, K.POS, K.POS_START, K.POS_END,
            K.LENGTH_START, K.LENGTH_END,
        ],
        default_kind_cap=3,
        per_kind_cap={K.POS: 4},
        band_weights={AmbiguityBand.HIGH: 3, AmbiguityBand.MEDIUM: 4, AmbiguityBand.LOW: 2},
    ),
    TicTacDifficulty.HARD: DifficultyProfile(
        allowed_kinds=list(AttributeKind),
        default_kind_cap=3,
        per_kind_cap={K.POS: 4, K.START_END: 4},
        band_weights={AmbiguityBand.HIGH: 1, AmbiguityBand.MEDIUM: 3, AmbiguityBand.LOW: 5},
    ),
}


def parse_difficulty(value: Union[str, TicTacDifficulty]) -> TicTacDifficulty:
    if isinstance(value, TicTacDifficulty):
        return value
    try:
        return TicTacDifficulty(str(value).strip().lower())
    except ValueError:
        valid = [d.value for d in TicTacDifficulty]
        raise ValueError(f"Invalid difficulty '{value}'. Must be one of: {valid}")


def build_key(kind: AttributeKind, attributes: ConstraintAttributes) -> str:
    parts = [kind.value]
    if attributes.pos:
        parts.append(f"pos={attributes.pos}")
    if attributes.length is not None:
        parts.append(f"len={attributes.length}")
    if attributes.start:
        parts.append(f"start={attributes.start}")
    if attributes.end:
        parts.append(f"end={attributes.end}")
    return "|".join(parts)


def build_label(kind: AttributeKind, attributes: ConstraintAttributes) -> str:
    """Text shown to the student, e.g. "5", "B_____", "n. | _____T"."""
    length = str(attributes.length) if attributes.length is not None else ""
    start = f"{attributes.start}{VISUAL_PLACEHOLDER}" if attributes.start else ""
    end = f"{VISUAL_PLACEHOLDER}{attributes.end}" if attributes.end else ""
    pos = attributes.pos or ""

    labels = {
        K.LENGTH: length,
        K.START: start,
        K.END: end,
        K.POS: pos,
        K.START_END: f"{attributes.start}{VISUAL_PLACEHOLDER}{attributes.end}",
        K.POS_START: f"{pos} | {start}",
        K.POS_END: f"{pos} | {end}",
        K.POS_LENGTH: f"{pos} | {length}",
        K.LENGTH_START: f"{length} | {start}",
        K.LENGTH_END: f"{length} | {end}",
    }
    return labels[kind]


def _attributes_for(kind: AttributeKind, entry: WordEntry) -> Optional[ConstraintAttributes]:
    """Attribute tuple of kind for entry, or None if entry lacks a POS tag."""
    needs_pos = kind in (K.POS, K.POS_START, K.POS_END, K.POS_LENGTH)
    if needs_pos and not entry.pos_tag:
        return None

    uses_length = kind in (K.LENGTH, K.POS_LENGTH, K.LENGTH_START, K.LENGTH_END)
    uses_start = kind in (K.START, K.POS_START, K.START_END, K.LENGTH_START)
    uses_end = kind in (K.END, K.POS_END, K.START_END, K.LENGTH_END)
    return ConstraintAttributes(
        length=entry.length if uses_length else None,
        start=entry.start_char if uses_start else None,
        end=entry.end_char if uses_end else None,
        pos=entry.pos_tag if needs_pos else None,
    )


def build_candidates(entries: Sequence[WordEntry]) -> List[ConstraintCandidate]:
    """
    Group every (kind, attributes) a word satisfies into candidate buckets.

    Returns:
        Candidates in first-seen order, matching words sorted
    """
    buckets: Dict[str, List[str]] = defaultdict(list)
    meta: Dict[str, tuple] = {}

    for entry in entries:
        for kind in AttributeKind:
            attributes = _attributes_for(kind, entry)
            if attributes is None:
                continue
            key = build_key(kind, attributes)
            if key not in meta:
                meta[key] = (kind, attributes)
            if entry.text not in buckets[key]:
                buckets[key].append(entry.text)

    candidates = []
    for key, (kind, attributes) in meta.items():
        words = sorted(buckets[key])
        candidates.append(ConstraintCandidate(
            key=key,
            label=build_label(kind, attributes),
            attributes=attributes,
            kind=kind,
            matching_words=words,
            ambiguity=len(words),
            band=AmbiguityBand.classify(len(words)),
        ))
    return candidates


def pick_constraint_set(
    candidates: Sequence[ConstraintCandidate],
    profile: DifficultyProfile,
    selection_attempt: int,
    rng: random.Random,
) -> Optional[List[ConstraintCandidate]]:
    """
    Weighted-random pool of nine distinct candidates.

    Respects per-kind caps (which loosen as attempts accumulate) and, early
    on, skips candidates that add no new word to the pool.
    """
    if len(candidates) < BOARD_CELLS:
        return None

    boost = min(3, selection_attempt // 25)
    ordered = weighted_order(rng, candidates, lambda c: profile.band_weights.get(c.band, 1))

    pick: List[ConstraintCandidate] = []
    picked_keys = set()
    kind_counts: Dict[AttributeKind, int] = defaultdict(int)
    coverage = set()

    for candidate in ordered:
        if len(pick) >= BOARD_CELLS:
            break
        if kind_counts[candidate.kind] >= profile.cap_for(candidate.kind) + boost:
            continue

        introduces_coverage = any(w not in coverage for w in candidate.matching_words)
        if not introduces_coverage and len(pick) < 6 and selection_attempt < 40:
            continue

        pick.append(candidate)
        picked_keys.add(candidate.key)
        kind_counts[candidate.kind] += 1
        coverage.update(candidate.matching_words)

    # Top up ignoring caps
    for candidate in ordered:
        if len(pick) >= BOARD_CELLS:
            break
        if candidate.key not in picked_keys:
            pick.append(candidate)
            picked_keys.add(candidate.key)

    return pick if len(pick) == BOARD_CELLS else None


def find_distinct_assignment(
    candidates: Sequence[ConstraintCandidate],
    rng: random.Random,
) -> Optional[Dict[str, str]]:
    """
    Assign a different word to every candidate.

    Backtracking over candidates ordered by ascending option count.

    Returns:
        Mapping candidate key -> word, or None if no distinct assignment exists
    """
    ordered = sorted(candidates, key=lambda c: len(c.matching_words))
    if any(not c.matching_words for c in ordered):
        return None

    used = set()
    assignment: Dict[str, str] = {}

    def backtrack(index: int) -> bool:
        if index >= len(ordered):
            return True
        candidate = ordered[index]
        for word in shuffled(rng, candidate.matching_words):
            if word in used:
                continue
            used.add(word)
            assignment[candidate.key] = word
            if backtrack(index + 1):
                return True
            used.discard(word)
            del assignment[candidate.key]
        return False

    return assignment if backtrack(0) else None


def materialize_cells(
    candidates: Sequence[ConstraintCandidate],
    assignment: Dict[str, str],
) -> List[TicTacCell]:
    """Cells with the assigned word listed first in matching_words."""
    cells = []
    for candidate in candidates:
        assigned = assignment[candidate.key]
        others = [w for w in sorted(candidate.matching_words) if w != assigned]
        cells.append(TicTacCell(
            key=candidate.key,
            label=candidate.label,
            attributes=candidate.attributes,
            kind=candidate.kind,
            ambiguity=candidate.ambiguity,
            band=candidate.band,
            matching_words=[assigned] + others,
        ))
    return cells


def enforce_easy_center(cells: List[TicTacCell], entries: Sequence[WordEntry]):
    """Move a longest-length cell into the centre, if the board has one."""
    if len(cells) < BOARD_CELLS:
        return
    max_length = max(entry.length for entry in entries)
    for index, cell in enumerate(cells):
        if cell.attributes.length == max_length:
            if index != CENTER_CELL:
                cells[CENTER_CELL], cells[index] = cells[index], cells[CENTER_CELL]
            return


class TicTacGenerator:
    """
    Tic-Tac-Word board assembler.

    Usage:
        generator = TicTacGenerator(rng=make_rng(3))
        result = generator.generate(words, clues, "medium")
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_grid_attempts: int = MAX_GRID_ATTEMPTS,
        time_limit: Optional[float] = None,
    ):
        self.rng = rng or make_rng()
        self.max_grid_attempts = max_grid_attempts
        self.time_limit = time_limit
        self.stats: Dict[str, int] = {}

    def generate(
        self,
        words: Sequence[str],
        clues: Optional[Sequence[str]] = None,
        difficulty: Union[str, TicTacDifficulty] = TicTacDifficulty.MEDIUM,
    ) -> TicTacResult:
        """
        Build BOARD_COUNT boards; all succeed or the whole call fails.

        Raises:
            ValueError: If difficulty is not easy, medium or hard
        """
        level = parse_difficulty(difficulty)
        entries = normalize_entries(words, clues)

        if len(entries) < MIN_WORDS:
            logger.info(f"Tic-Tac-Word needs {MIN_WORDS} unique words, got {len(entries)}")
            return TicTacResult(
                success=False,
                difficulty=level,
                message=f"Please provide at least {MIN_WORDS} unique words.",
            )

        self.stats = {"attempts": 0}
        # One wall-clock budget covers all boards
        started_at = time.monotonic()
        grids = []
        for board_id in range(BOARD_COUNT):
            grid = self._generate_grid(board_id, entries, level, started_at)
            if grid is None:
                logger.warning(
                    f"Failed to assemble board {board_id + 1} with difficulty={level.value}. "
                    f"Word bank size={len(entries)}. "
                    f"Consider adding more overlapping POS/letter combinations."
                )
                return TicTacResult(
                    success=False,
                    difficulty=level,
                    message=(
                        "Could not assemble every board. Add more varied words "
                        "(with POS tags for medium/hard) and retry."
                    ),
                )
            grids.append(grid)

        logger.info(f"Tic-Tac-Word ready: {len(grids)} boards, difficulty={level.value}")
        return TicTacResult(grids=grids, success=True, difficulty=level)

    def _generate_grid(
        self,
        board_id: int,
        entries: Sequence[WordEntry],
        level: TicTacDifficulty,
        started_at: Optional[float] = None,
    ) -> Optional[TicTacGrid]:
        profile = DIFFICULTY_PROFILES[level]
        candidates = [c for c in build_candidates(entries) if c.kind in profile.allowed_kinds]
        if len(candidates) < BOARD_CELLS:
            logger.debug(f"Only {len(candidates)} eligible candidates for {level.value}")
            return None

        budget = SearchBudget(max_attempts=self.max_grid_attempts, time_limit=self.time_limit)
        if started_at is not None:
            budget.started_at = started_at
        for attempt in budget.attempts():
            self.stats["attempts"] += 1
            selection = pick_constraint_set(
                candidates, profile, attempt % MAX_SELECTION_ATTEMPTS, self.rng
            )
            if selection is None:
                continue

            assignment = find_distinct_assignment(selection, self.rng)
            if assignment is None:
                logger.debug(f"Board {board_id + 1}: attempt {attempt + 1} has no distinct assignment")
                continue

            cells = shuffled(self.rng, materialize_cells(selection, assignment))
            if level == TicTacDifficulty.EASY:
                enforce_easy_center(cells, entries)
            return TicTacGrid(id=board_id, cells=cells)

        return None
