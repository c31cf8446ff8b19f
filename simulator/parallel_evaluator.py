# simulator/parallel_evaluator.py

"""
Concurrency-counting queries over the parallel sets of an unfolded net,
e.g. "can three transitions read the dataset at the same time?".
"""

from __future__ import annotations
from typing import Callable, Iterable

from model.node import Transition
from utils.logger import get_logger
from .unfolding import ParallelSet

TransitionPredicate = Callable[[Transition], bool]


class ParallelEvaluator:
    """Pure, read-only queries over the output of get_parallel_sets."""

    @staticmethod
    def n_parallel_transitions_with_condition(
        predicate: TransitionPredicate, n: int, parallel_sets: Iterable[ParallelSet]
    ) -> bool:
        """True iff some parallel set holds at least `n` transitions satisfying `predicate`.

        The predicate receives the Transition, so it can inspect both its id
        and its ContextObject.
        """
        for parallel_set in parallel_sets:
            matching = sum(1 for t in parallel_set if predicate(t))
            if matching >= n:
                get_logger().debug(
                    f"{matching} parallel transitions match in {sorted(t.id for t in parallel_set)}"
                )
                return True
        return False

    @staticmethod
    def max_parallel_transitions_with_condition(
        predicate: TransitionPredicate, parallel_sets: Iterable[ParallelSet]
    ) -> int:
        """Largest number of matching transitions found in a single parallel set."""
        return max(
            (sum(1 for t in parallel_set if predicate(t)) for parallel_set in parallel_sets),
            default=0,
        )
