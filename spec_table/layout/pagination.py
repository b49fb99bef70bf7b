"""Resolve which rows are visible under the "see more" truncation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from spec_table.model.template_model import DisplayFlags, SpecItem
from spec_table.utils.logger import get_logger

LOGGER = get_logger(__name__)

PER_COLUMN_LIMIT = 10
GLOBAL_LIMIT = 10


@dataclass(slots=True)
class IndexedSection:
    """Section content tagged with its position in the template."""

    section_index: int
    heading: str
    items: List[SpecItem] = field(default_factory=list)


@dataclass(slots=True)
class PagedSection:
    """Section split into visible and truncated rows."""

    section_index: int
    heading: str
    visible: List[SpecItem] = field(default_factory=list)
    hidden: List[SpecItem] = field(default_factory=list)


@dataclass(slots=True)
class PaginationResult:
    """Per-column paged sections plus whether truncation applies."""

    columns: List[List[PagedSection]]
    has_more: bool = False


class PaginationResolver:
    """Apply per-column or global row limits to partitioned sections.

    ``columns`` holds two columns when sections are split per section and a
    single column otherwise; splitting per metafield turns one input column
    into two output columns.
    """

    def resolve(
        self,
        columns: Sequence[Sequence[IndexedSection]],
        flags: DisplayFlags,
        show_all: bool = False,
    ) -> PaginationResult:
        if flags.split_per_section:
            limit = PER_COLUMN_LIMIT if flags.see_more else None
            paged = [self._truncate(column, limit) for column in columns]
        elif flags.split_per_metafield:
            limit = GLOBAL_LIMIT * 2 if flags.see_more else None
            paged = self._split_alternating(self._truncate(self._flatten(columns), limit))
        else:
            limit = GLOBAL_LIMIT if flags.see_more else None
            paged = [self._truncate(self._flatten(columns), limit)]

        hidden_total = sum(len(section.hidden) for column in paged for section in column)
        LOGGER.debug("Pagination limit=%s hidden=%d show_all=%s", limit, hidden_total, show_all)

        return PaginationResult(
            columns=[self._finalize(column, show_all) for column in paged],
            has_more=hidden_total > 0,
        )

    # ------------------------------------------------------------------
    def _flatten(self, columns: Sequence[Sequence[IndexedSection]]) -> List[IndexedSection]:
        return [section for column in columns for section in column]

    def _truncate(self, sections: Sequence[IndexedSection], limit: Optional[int]) -> List[PagedSection]:
        """Keep the first ``limit`` rows across ``sections`` in order."""
        budget = limit
        paged: List[PagedSection] = []
        for section in sections:
            if budget is None:
                visible, hidden = list(section.items), []
            else:
                visible, hidden = list(section.items[:budget]), list(section.items[budget:])
                budget -= len(visible)
            paged.append(PagedSection(section.section_index, section.heading, visible, hidden))
        return paged

    def _split_alternating(self, sections: Sequence[PagedSection]) -> List[List[PagedSection]]:
        """Deal rows left/right by their position within each section."""
        left: List[PagedSection] = []
        right: List[PagedSection] = []
        for section in sections:
            visible_left, visible_right = self._deal(section.visible, 0)
            hidden_left, hidden_right = self._deal(section.hidden, len(section.visible))
            left.append(PagedSection(section.section_index, section.heading, visible_left, hidden_left))
            right.append(PagedSection(section.section_index, section.heading, visible_right, hidden_right))
        return [left, right]

    def _deal(self, items: Sequence[SpecItem], offset: int) -> Tuple[List[SpecItem], List[SpecItem]]:
        even = [item for position, item in enumerate(items, offset) if position % 2 == 0]
        odd = [item for position, item in enumerate(items, offset) if position % 2 == 1]
        return even, odd

    def _finalize(self, column: Sequence[PagedSection], show_all: bool) -> List[PagedSection]:
        finalized: List[PagedSection] = []
        for section in column:
            if show_all:
                if not section.visible and not section.hidden:
                    continue
                finalized.append(
                    PagedSection(section.section_index, section.heading, section.visible + section.hidden, [])
                )
            elif section.visible:
                finalized.append(section)
        return finalized
