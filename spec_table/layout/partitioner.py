"""Balanced two-column assignment of sections by item count."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from spec_table.utils.logger import get_logger

LOGGER = get_logger(__name__)

# Above this many sections the exhaustive search gives way to the greedy pass.
EXACT_SEARCH_LIMIT = 10


@dataclass(frozen=True, slots=True)
class SectionWeight:
    """Section index paired with the number of items it contributes."""

    index: int
    item_count: int


@dataclass(slots=True)
class Partition:
    """Section indices per column, each in ascending original order."""

    left: List[int] = field(default_factory=list)
    right: List[int] = field(default_factory=list)


@dataclass(slots=True)
class _SearchState:
    """Best assignment found so far during the exhaustive search."""

    best_diff: Optional[int] = None
    best_left: List[int] = field(default_factory=list)


class SectionPartitioner:
    """Split sections into two columns minimising the item-count difference."""

    def partition(self, sections: Sequence[SectionWeight]) -> Partition:
        if not sections:
            return Partition()

        if len(sections) <= EXACT_SEARCH_LIMIT:
            left = self._exact(sections)
            strategy = "exact"
        else:
            left = self._greedy(sections)
            strategy = "greedy"

        chosen = set(left)
        result = Partition(
            left=sorted(section.index for section in sections if section.index in chosen),
            right=sorted(section.index for section in sections if section.index not in chosen),
        )
        LOGGER.debug(
            "Partitioned %d sections (%s): left=%s right=%s",
            len(sections),
            strategy,
            result.left,
            result.right,
        )
        return result

    # ------------------------------------------------------------------
    def _exact(self, sections: Sequence[SectionWeight]) -> List[int]:
        counts = [section.item_count for section in sections]
        # remaining[i] is the total item count of sections i..N-1.
        remaining = [0] * (len(counts) + 1)
        for position in range(len(counts) - 1, -1, -1):
            remaining[position] = remaining[position + 1] + counts[position]

        state = _SearchState()
        assignment: List[int] = []

        def visit(position: int, left_sum: int, right_sum: int) -> None:
            diff = abs(left_sum - right_sum)
            if state.best_diff is not None:
                if state.best_diff == 0:
                    return
                # The remaining sections can close the gap by at most their total.
                if diff - remaining[position] >= state.best_diff:
                    return
            if position == len(counts):
                if state.best_diff is None or diff < state.best_diff:
                    state.best_diff = diff
                    state.best_left = list(assignment)
                return

            assignment.append(sections[position].index)
            visit(position + 1, left_sum + counts[position], right_sum)
            assignment.pop()
            visit(position + 1, left_sum, right_sum + counts[position])

        visit(0, 0, 0)
        return state.best_left

    def _greedy(self, sections: Sequence[SectionWeight]) -> List[int]:
        left: List[int] = []
        left_sum = right_sum = 0
        for section in sections:
            if left_sum <= right_sum:
                left.append(section.index)
                left_sum += section.item_count
            else:
                right_sum += section.item_count
        return left
