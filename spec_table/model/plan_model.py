"""Render plan handed to presentation layers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from spec_table.model.style_model import StyleSet
from spec_table.model.template_model import SpecItem


@dataclass(slots=True)
class RowPlan:
    """Fully resolved row ready to be painted."""

    item: SpecItem
    display_name: str
    visible_row_index: int
    name_cell_color: str
    value_cell_color: str
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    tooltip_text: Optional[str] = None


@dataclass(slots=True)
class SectionPlan:
    """Visible and hidden rows of one section within a column."""

    section_index: int
    heading: str
    visible_items: List[SpecItem] = field(default_factory=list)
    hidden_items: List[SpecItem] = field(default_factory=list)
    rows: List[RowPlan] = field(default_factory=list)


@dataclass(slots=True)
class Column:
    """Ordered sections rendered in one visual column."""

    sections: List[SectionPlan] = field(default_factory=list)

    def item_count(self) -> int:
        return sum(len(section.visible_items) for section in self.sections)


@dataclass(slots=True)
class RenderPlan:
    """Device-specific, paginated, column-assigned output of the planner."""

    device: str
    effective_style: StyleSet
    columns: List[Column]
    has_more: bool = False
    split_mode: Optional[str] = None
    table_name: str = ""
    accordion: bool = False
    collapsible: bool = False
    show_see_more: bool = False
    show_see_less: bool = False
