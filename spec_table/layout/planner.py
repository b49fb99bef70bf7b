"""Compose partitioning, pagination, styling, and striping into a render plan."""
from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, List, Optional, Sequence

from spec_table.layout.display_modes import (
    ACCORDION,
    COLLAPSIBLE_TABLE,
    SEE_MORE,
    SPLIT_PER_METAFIELD,
    SPLIT_PER_SECTION,
    is_item_hidden,
    mode_active_on,
    normalize_flags,
    normalize_item,
    see_less_allowed,
)
from spec_table.layout.pagination import IndexedSection, PagedSection, PaginationResolver
from spec_table.layout.partitioner import SectionPartitioner, SectionWeight
from spec_table.layout.striping import stripe_for
from spec_table.model.plan_model import Column, RenderPlan, RowPlan, SectionPlan
from spec_table.model.style_model import StyleSet, validate_device
from spec_table.model.template_model import (
    DisplayFlags,
    FieldDefinition,
    ItemKind,
    SpecItem,
    Template,
)
from spec_table.parser.style_profiles import StyleProfileResolver
from spec_table.utils.logger import get_logger

LOGGER = get_logger(__name__)

FieldLookup = Callable[[str], Optional[FieldDefinition]]
ValuePredicate = Callable[[SpecItem], bool]


def default_has_value(item: SpecItem) -> bool:
    """Custom rows need an inline value; store-backed rows are resolved later."""
    if item.kind is ItemKind.CUSTOM_SPEC:
        return bool(item.custom_value and item.custom_value.strip())
    return True


class LayoutPlanner:
    """Transform a template snapshot into a device-specific render plan.

    The planner keeps no state between calls, so one instance can serve
    concurrent render requests.
    """

    def __init__(
        self,
        field_lookup: Optional[FieldLookup] = None,
        has_value: Optional[ValuePredicate] = None,
        styles: Optional[StyleProfileResolver] = None,
    ) -> None:
        self._field_lookup = field_lookup
        self._has_value = has_value or default_has_value
        self._styles = styles or StyleProfileResolver()
        self._partitioner = SectionPartitioner()
        self._paginator = PaginationResolver()

    # ------------------------------------------------------------------
    # Public API
    def plan(self, template: Template, device: str, show_all: bool = False) -> RenderPlan:
        validate_device(device)
        flags = normalize_flags(template.display_flags)

        sections = self._visible_sections(template, device)
        columns = self._assign_columns(sections, flags)

        paging_flags = replace(flags, see_more=mode_active_on(flags, SEE_MORE, device))
        paged = self._paginator.resolve(columns, paging_flags, show_all)

        profiles = self._styles.migrate(template.style_profiles)
        style = self._styles.resolve(profiles, device)

        plan_columns = [self._build_column(column, style) for column in paged.columns]
        LOGGER.debug(
            "Planned %s render: %d column(s), has_more=%s, show_all=%s",
            device,
            len(plan_columns),
            paged.has_more,
            show_all,
        )
        return RenderPlan(
            device=device,
            effective_style=style,
            columns=plan_columns,
            has_more=paged.has_more,
            split_mode=self._split_mode(flags),
            table_name=template.table_name,
            accordion=mode_active_on(flags, ACCORDION, device),
            collapsible=mode_active_on(flags, COLLAPSIBLE_TABLE, device),
            show_see_more=paged.has_more and not show_all,
            show_see_less=paged.has_more and show_all and see_less_allowed(flags, device),
        )

    # ------------------------------------------------------------------
    # Section helpers
    def _visible_sections(self, template: Template, device: str) -> List[IndexedSection]:
        """Drop rows hidden on this device or without a value, then empty sections."""
        sections: List[IndexedSection] = []
        for index, section in enumerate(template.sections):
            items = [normalize_item(item) for item in section.items]
            items = [item for item in items if not is_item_hidden(item, device) and self._has_value(item)]
            if not items:
                LOGGER.debug("Section %d (%s) has no rows for %s", index, section.heading, device)
                continue
            sections.append(IndexedSection(index, section.heading, items))
        return sections

    def _assign_columns(self, sections: List[IndexedSection], flags: DisplayFlags) -> List[List[IndexedSection]]:
        if not flags.split_per_section:
            return [sections]
        by_index: Dict[int, IndexedSection] = {section.section_index: section for section in sections}
        partition = self._partitioner.partition(
            [SectionWeight(section.section_index, len(section.items)) for section in sections]
        )
        return [
            [by_index[index] for index in partition.left],
            [by_index[index] for index in partition.right],
        ]

    def _split_mode(self, flags: DisplayFlags) -> Optional[str]:
        if flags.split_per_section:
            return SPLIT_PER_SECTION
        if flags.split_per_metafield:
            return SPLIT_PER_METAFIELD
        return None

    # ------------------------------------------------------------------
    # Row layout
    def _build_column(self, sections: Sequence[PagedSection], style: StyleSet) -> Column:
        column = Column()
        row_index = 0
        for section in sections:
            rows: List[RowPlan] = []
            for item in section.visible:
                stripe = stripe_for(style, row_index)
                rows.append(
                    RowPlan(
                        item=item,
                        display_name=item.display_name(self._definition_for(item)),
                        visible_row_index=row_index,
                        name_cell_color=stripe.name_cell_color,
                        value_cell_color=stripe.value_cell_color,
                        prefix=item.prefix,
                        suffix=item.suffix,
                        tooltip_text=item.tooltip_text if item.tooltip_enabled else None,
                    )
                )
                row_index += 1
            column.sections.append(
                SectionPlan(
                    section_index=section.section_index,
                    heading=section.heading,
                    visible_items=list(section.visible),
                    hidden_items=list(section.hidden),
                    rows=rows,
                )
            )
        return column

    def _definition_for(self, item: SpecItem) -> Optional[FieldDefinition]:
        if item.kind is not ItemKind.METAFIELD:
            return None
        if self._field_lookup is not None and item.definition_id is not None:
            definition = self._field_lookup(item.definition_id)
        else:
            definition = item.definition
        if definition is None:
            LOGGER.warning("Metafield definition %s not found; rendering placeholder", item.definition_id)
        return definition
