# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Bounded randomized search helpers.

The DGA and Tic-Tac-Word engines both follow the same shape: a pure
candidate builder, a randomized attempt loop with a fixed budget, and
(for DGA) a deterministic fallback once the budget is spent. This module
owns the budget and the random source so the engines stay pure.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, TypeVar, Union

T = TypeVar("T")

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[Union[int, str]] = None) -> random.Random:
    """Create an isolated random source (never the module-level one)."""
    return random.Random(seed)


def shuffled(rng: random.Random, items: Iterable[T]) -> List[T]:
    """Return a shuffled copy of items."""
    copy = list(items)
    rng.shuffle(copy)
    return copy


def weighted_order(
    rng: random.Random,
    items: Sequence[T],
    weight: Callable[[T], float],
) -> List[T]:
    """
    Order items by weighted random sampling without replacement.

    Uses exponential keys (u ** (1 / w)); heavier items tend to come first.
    """
    keyed = []
    for item in items:
        w = max(weight(item), 1e-6)
        keyed.append((rng.random() ** (1.0 / w), item))
    keyed.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in keyed]


@dataclass
class SearchBudget:
    """
    Attempt budget with an optional wall-clock limit.

    Running out of time is reported the same way as running out of
    attempts: the iterator simply stops.
    """
    max_attempts: int
    time_limit: Optional[float] = None
    attempts_used: int = 0
    started_at: float = field(default_factory=time.monotonic)

    def expired(self) -> bool:
        if self.attempts_used >= self.max_attempts:
            return True
        if self.time_limit is not None and time.monotonic() - self.started_at >= self.time_limit:
            return True
        return False

    def attempts(self) -> Iterator[int]:
        """Yield attempt indices until the budget is exhausted."""
        while not self.expired():
            index = self.attempts_used
            self.attempts_used += 1
            yield index


def bounded_search(
    attempt: Callable[[int], Optional[T]],
    budget: SearchBudget,
    fallbacks: Sequence[Callable[[], Optional[T]]] = (),
    label: str = "search",
) -> Optional[T]:
    """
    Run randomized attempts until one succeeds, then try fallbacks in order.

    Args:
        attempt: Called with the attempt index; returns a result or None
        budget: Attempt/time budget for the randomized phase
        fallbacks: Deterministic degradations, tried once each in order
        label: Name used in log messages

    Returns:
        First non-None result, or None if everything failed
    """
    for index in budget.attempts():
        result = attempt(index)
        if result is not None:
            logger.debug(f"{label}: succeeded on attempt {index + 1}")
            return result

    if fallbacks:
        logger.warning(
            f"{label}: randomized phase exhausted after {budget.attempts_used} attempts, "
            f"trying {len(fallbacks)} deterministic fallbacks"
        )
    for step, fallback in enumerate(fallbacks):
        result = fallback()
        if result is not None:
            logger.info(f"{label}: fallback step {step + 1} succeeded")
            return result

    return None
