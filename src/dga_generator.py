# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Deductive Chain Assembler (DGA)

Gives every word one letter-reveal clue ("P ____", "____ E _", ...) so that
a student can identify the words one at a time. A few clues are allowed to
match several words; they only become solvable once other words are struck
off. The assembled clue stack must always pass simulate_elimination().
"""

import logging
import random
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from models import DGAClue, DGAConstraint, DGAResult, RevealKind, VisualSpec
from search import SearchBudget, bounded_search, make_rng, shuffled
from validator import is_solvable
from word_normalizer import unique_words

logger = logging.getLogger(__name__)

MIN_WORDS = 6
DEFAULT_CLUE_LIMIT = 10
MAX_AMBIGUOUS = 3
MAX_ATTEMPTS = 500

BucketKey = Tuple[RevealKind, str]


@dataclass
class ConstraintSpace:
    """Every possible clue for a word pool, plus the ambiguity graph."""
    words: List[str]
    options: Dict[str, List[DGAConstraint]] = field(default_factory=dict)
    buckets: Dict[BucketKey, List[str]] = field(default_factory=dict)
    components: List[List[str]] = field(default_factory=list)
    component_of: Dict[str, int] = field(default_factory=dict)

    def ambiguous_options(self, word: str) -> List[DGAConstraint]:
        return [c for c in self.options[word] if c.is_ambiguous]

    def unique_options(self, word: str) -> List[DGAConstraint]:
        return [c for c in self.options[word] if c.overlap_score == 1]

    def bucket_of(self, constraint: DGAConstraint) -> List[str]:
        return self.buckets[(constraint.kind, constraint.revealed_char)]

    @property
    def ambiguity_capacity(self) -> int:
        """Most words that can carry an ambiguous clue: (size - 1) per component."""
        return sum(len(component) - 1 for component in self.components)


def build_constraint_space(words: Sequence[str]) -> ConstraintSpace:
    """
    Enumerate (kind, char) clues for each word and score their overlap.

    Args:
        words: Cleaned, unique words

    Returns:
        ConstraintSpace with options in RevealKind order for every word
    """
    buckets: Dict[BucketKey, List[str]] = defaultdict(list)
    for word in words:
        for kind in RevealKind:
            char = kind.reveal(word)
            if char is not None:
                buckets[(kind, char)].append(word)

    space = ConstraintSpace(words=list(words), buckets=dict(buckets))
    for word in words:
        options = []
        for kind in RevealKind:
            char = kind.reveal(word)
            if char is None:
                continue
            options.append(DGAConstraint(
                kind=kind,
                revealed_char=char,
                visual_spec=VisualSpec.for_kind(kind, char),
                target_word=word,
                overlap_score=len(buckets[(kind, char)]),
            ))
        space.options[word] = options

    space.components = _ambiguity_components(words, space.buckets)
    for index, component in enumerate(space.components):
        for word in component:
            space.component_of[word] = index
    return space


def _ambiguity_components(
    words: Sequence[str],
    buckets: Dict[BucketKey, List[str]],
) -> List[List[str]]:
    """Connected components of the graph linking words that share a bucket."""
    neighbors: Dict[str, Set[str]] = {word: set() for word in words}
    for members in buckets.values():
        if len(members) < 2:
            continue
        for word in members:
            neighbors[word].update(m for m in members if m != word)

    components = []
    visited: Set[str] = set()
    for start in words:
        if start in visited:
            continue
        visited.add(start)
        queue = deque([start])
        component = []
        while queue:
            word = queue.popleft()
            component.append(word)
            for other in sorted(neighbors[word]):
                if other not in visited:
                    visited.add(other)
                    queue.append(other)
        components.append(component)
    return components


def ambiguity_target(space: ConstraintSpace) -> int:
    return min(MAX_AMBIGUOUS, space.ambiguity_capacity)


def count_ambiguous(constraints: Sequence[DGAConstraint]) -> int:
    return sum(1 for c in constraints if c.is_ambiguous)


def select_randomized(
    space: ConstraintSpace,
    target: int,
    rng: random.Random,
) -> Optional[List[DGAConstraint]]:
    """
    One randomized selection attempt.

    Picks up to target words to carry ambiguous clues (never a whole
    component), gives everyone else a unique clue where possible, and keeps
    the result only if the ambiguity count is in range and it is solvable.
    """
    order = shuffled(rng, space.words)

    quota = {i: len(component) - 1 for i, component in enumerate(space.components)}
    forced: Set[str] = set()
    for word in order:
        if len(forced) >= target:
            break
        component = space.component_of[word]
        if quota[component] > 0 and space.ambiguous_options(word):
            forced.add(word)
            quota[component] -= 1

    selected: List[DGAConstraint] = []
    for word in order:
        if word in forced:
            ambiguous = space.ambiguous_options(word)
            # Prefer buckets whose other members still get a unique anchor
            preferred = [
                c for c in ambiguous
                if not any(m in forced for m in space.bucket_of(c) if m != word)
            ]
            chosen = rng.choice(preferred or ambiguous)
        else:
            candidates = (
                space.unique_options(word)
                or space.ambiguous_options(word)
                or space.options[word]
            )
            chosen = rng.choice(candidates)
        selected.append(chosen)

    ambiguous_count = count_ambiguous(selected)
    if ambiguous_count < target or ambiguous_count > MAX_AMBIGUOUS:
        return None
    if not is_solvable(selected, space.words):
        return None
    return selected


def select_deterministic(space: ConstraintSpace, required: int) -> Optional[List[DGAConstraint]]:
    """
    Build a clue stack in solving order without randomness.

    At each step take a word whose clue is unique among the words not yet
    chosen, preferring ambiguous clues until required of them are used and
    unique clues afterwards. Returns None if the chain gets stuck or ends
    with fewer than required ambiguous clues.
    """
    remaining = sorted(space.words)
    selected: List[DGAConstraint] = []
    ambiguous_count = 0

    while remaining:
        step = [
            c for word in remaining for c in space.options[word]
            if sum(1 for other in remaining if c.matches(other)) == 1
        ]
        if not step:
            return None

        want_ambiguous = ambiguous_count < required
        preferred = [c for c in step if c.is_ambiguous == want_ambiguous]
        chosen = (preferred or step)[0]

        selected.append(chosen)
        remaining.remove(chosen.target_word)
        if chosen.is_ambiguous:
            ambiguous_count += 1

    if ambiguous_count < required:
        return None
    if not is_solvable(selected, space.words):
        return None
    return selected


class DGAGenerator:
    """
    Deductive chain assembler.

    Usage:
        generator = DGAGenerator(rng=make_rng(42))
        result = generator.generate(["APPLE", "APPLY", ...], clue_count_limit=10)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_attempts: int = MAX_ATTEMPTS,
        time_limit: Optional[float] = None,
    ):
        """
        Initialize the assembler.

        Args:
            rng: Random source for subset choice, selection and clue order
            max_attempts: Randomized attempts before the deterministic fallback
            time_limit: Optional wall-clock limit (seconds) for the randomized phase
        """
        self.rng = rng or make_rng()
        self.max_attempts = max_attempts
        self.time_limit = time_limit
        self.stats: Dict[str, int] = {}

    def generate(
        self,
        words: Sequence[str],
        clue_count_limit: int = DEFAULT_CLUE_LIMIT,
    ) -> DGAResult:
        """
        Assemble a solvable clue stack for up to clue_count_limit words.

        Returns:
            DGAResult; success is False for fewer than MIN_WORDS unique words
            or when no solvable stack exists for the chosen words.
        """
        if clue_count_limit < 1:
            raise ValueError(f"clue_count_limit must be positive, got {clue_count_limit}")

        pool = unique_words(words)
        if len(pool) > clue_count_limit:
            pool = self.rng.sample(pool, clue_count_limit)

        if len(pool) < MIN_WORDS:
            logger.info(f"DGA needs {MIN_WORDS} unique words, got {len(pool)}")
            return DGAResult(
                word_bank=pool,
                success=False,
                message=f"Please provide at least {MIN_WORDS} unique words.",
            )

        space = build_constraint_space(pool)
        target = ambiguity_target(space)
        if target < MAX_AMBIGUOUS:
            logger.warning(
                f"Word list has low overlap; only {target} ambiguous clues are possible"
            )
        logger.debug(
            f"DGA pool={pool} components={[len(c) for c in space.components]} target={target}"
        )

        budget = SearchBudget(max_attempts=self.max_attempts, time_limit=self.time_limit)
        fallbacks = [
            (lambda required=required: select_deterministic(space, required))
            for required in range(target, -1, -1)
        ]
        selected = bounded_search(
            lambda attempt: select_randomized(space, target, self.rng),
            budget,
            fallbacks=fallbacks,
            label="dga",
        )
        self.stats = {"attempts": budget.attempts_used, "target_ambiguous": target}

        if selected is None:
            logger.warning(f"No solvable DGA clue stack for {sorted(pool)}")
            return DGAResult(
                word_bank=pool,
                success=False,
                message=(
                    "Could not generate a deductive path for the selected words. "
                    "Try regenerating to pick a different set of words."
                ),
            )

        clues = self._build_clues(selected, pool)
        logger.info(
            f"DGA clue stack ready: {len(clues)} clues, "
            f"{sum(1 for c in clues if c.is_ambiguous)} ambiguous"
        )
        return DGAResult(clues=clues, word_bank=sorted(pool), success=True)

    def _build_clues(self, selected: Sequence[DGAConstraint], pool: Sequence[str]) -> List[DGAClue]:
        """Turn constraints into shuffled, renumbered clues."""
        clues = [
            DGAClue(
                id=0,
                word=c.target_word,
                kind=c.kind,
                anchor_char=c.revealed_char,
                visual_spec=c.visual_spec,
                is_ambiguous=c.is_ambiguous,
                matching_words=sorted(w for w in pool if c.matches(w)),
            )
            for c in selected
        ]
        clues = shuffled(self.rng, clues)
        for index, clue in enumerate(clues):
            clue.id = index + 1
        return clues
