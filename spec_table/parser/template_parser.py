"""Parse a stored template payload into the template model."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from spec_table.model.template_model import (
    DEFAULT_TABLE_NAME,
    DisplayFlags,
    FieldDefinition,
    ItemKind,
    Section,
    SpecItem,
    Template,
)
from spec_table.parser.style_profiles import StyleProfileResolver
from spec_table.utils.logger import get_logger
from spec_table.utils.values import parse_bool

LOGGER = get_logger(__name__)

# Stored settings keys for each display flag.
SETTINGS_KEYS: Dict[str, str] = {
    "accordion": "isAccordion",
    "accordion_hide_from_pc": "isAccordionHideFromPC",
    "accordion_hide_from_mobile": "isAccordionHideFromMobile",
    "see_more": "seeMoreEnabled",
    "see_more_hide_from_pc": "seeMoreHideFromPC",
    "see_more_hide_from_mobile": "seeMoreHideFromMobile",
    "see_less_hide_from_pc": "seeLessHideFromPC",
    "see_less_hide_from_mobile": "seeLessHideFromMobile",
    "collapsible_table": "isCollapsible",
    "collapsible_on_pc": "collapsibleOnPC",
    "collapsible_on_mobile": "collapsibleOnMobile",
    "split_per_section": "splitViewPerSection",
    "split_per_metafield": "splitViewPerMetafield",
}


def load_json_part(value: Any) -> Any:
    """Payload parts may arrive either decoded or as JSON text."""
    if isinstance(value, str):
        return json.loads(value)
    return value


class TemplateParser:
    """Transforms the storefront template payload into a Template."""

    def __init__(self, payload: Mapping[str, Any], styles: Optional[StyleProfileResolver] = None) -> None:
        self._payload = payload
        self._styles = styles or StyleProfileResolver()

    def parse(self) -> Template:
        structure = load_json_part(self._payload.get("structure"))
        if structure is None:
            raise ValueError("Template structure missing from payload")
        settings = load_json_part(self._payload.get("settings")) or {}

        sections = [self._parse_section(raw) for raw in structure.get("sections") or []]
        table_name = settings.get("tableName") or self._payload.get("tableName") or DEFAULT_TABLE_NAME
        template_id = self._payload.get("id")

        LOGGER.debug("Parsed template %s with %d sections", template_id, len(sections))
        return Template(
            sections=sections,
            display_flags=self.parse_flags(settings),
            style_profiles=self._styles.migrate(self._payload.get("styling")),
            table_name=str(table_name).strip() or DEFAULT_TABLE_NAME,
            template_id=None if template_id is None else str(template_id),
        )

    @staticmethod
    def parse_flags(settings: Mapping[str, Any]) -> DisplayFlags:
        return DisplayFlags(**{name: parse_bool(settings.get(key)) for name, key in SETTINGS_KEYS.items()})

    # ------------------------------------------------------------------
    def _parse_section(self, raw: Mapping[str, Any]) -> Section:
        items: List[SpecItem] = [self._parse_item(entry) for entry in raw.get("metafields") or []]
        return Section(heading=raw.get("heading") or "", items=items)

    def _parse_item(self, raw: Mapping[str, Any]) -> SpecItem:
        kind_value = raw.get("type") or ItemKind.METAFIELD.value
        try:
            kind = ItemKind(kind_value)
        except ValueError:
            raise ValueError(f"Unsupported specification item type: {kind_value}") from None

        common = dict(
            custom_name=raw.get("customName") or None,
            tooltip_enabled=parse_bool(raw.get("tooltipEnabled")),
            tooltip_text=raw.get("tooltipText") or None,
            hide_from_pc=parse_bool(raw.get("hideFromPC")),
            hide_from_mobile=parse_bool(raw.get("hideFromMobile")),
            prefix=raw.get("prefix") or None,
            suffix=raw.get("suffix") or None,
        )

        if kind is ItemKind.CUSTOM_SPEC:
            return SpecItem(kind=kind, custom_value=raw.get("customValue") or None, **common)
        if kind is ItemKind.PRODUCT_SPEC:
            spec_type = (raw.get("productSpecType") or "").strip() or None
            return SpecItem(kind=kind, product_spec_type=spec_type, **common)

        definition_id = raw.get("metafieldDefinitionId")
        return SpecItem(
            kind=kind,
            definition_id=None if definition_id is None else str(definition_id),
            definition=self._inline_definition(raw),
            **common,
        )

    def _inline_definition(self, raw: Mapping[str, Any]) -> Optional[FieldDefinition]:
        namespace = raw.get("namespace")
        key = raw.get("key")
        if not namespace or not key:
            return None
        return FieldDefinition(
            namespace=namespace,
            key=key,
            name=raw.get("name") or None,
            owner_type=raw.get("ownerType") or "PRODUCT",
        )
