"""Style model captures the per-device visual properties of a table."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Tuple

from spec_table.utils.values import parse_bool

MOBILE = "mobile"
TABLET = "tablet"
DESKTOP = "desktop"
DEVICES: Tuple[str, ...] = (MOBILE, TABLET, DESKTOP)

# Legacy single text color, predating the split into name and value colors.
LEGACY_TEXT_COLOR_KEY = "textColor"


def _prop(default: Any, key: str) -> Any:
    return field(default=default, metadata={"key": key})


@dataclass(slots=True)
class StyleSet:
    """Complete set of style properties for one device tier.

    Each field carries its stored camelCase key in ``metadata["key"]``; the
    field default is the documented default applied during migration.
    """

    background_color: str = _prop("#ffffff", "backgroundColor")
    specification_text_color: str = _prop("#000000", "specificationTextColor")
    value_text_color: str = _prop("#000000", "valueTextColor")
    heading_color: str = _prop("#000000", "headingColor")
    heading_font_size: str = _prop("18px", "headingFontSize")
    heading_font_weight: str = _prop("bold", "headingFontWeight")
    heading_font_family: str = _prop("Arial", "headingFontFamily")
    text_font_size: str = _prop("14px", "textFontSize")
    text_font_family: str = _prop("Arial", "textFontFamily")
    text_transform: str = _prop("none", "textTransform")
    border_width: str = _prop("0px", "borderWidth")
    border_radius: str = _prop("0px", "borderRadius")
    padding: str = _prop("10px", "padding")
    section_border_enabled: bool = _prop(False, "sectionBorderEnabled")
    section_border_color: str = _prop("#000000", "sectionBorderColor")
    section_border_style: str = _prop("solid", "sectionBorderStyle")
    section_border_width: str = _prop("1px", "sectionBorderWidth")
    row_border_enabled: bool = _prop(False, "rowBorderEnabled")
    row_border_color: str = _prop("#000000", "rowBorderColor")
    row_border_style: str = _prop("solid", "rowBorderStyle")
    row_border_width: str = _prop("1px", "rowBorderWidth")
    # Striping
    td_background_color: str = _prop("transparent", "tdBackgroundColor")
    row_background_enabled: bool = _prop(False, "rowBackgroundEnabled")
    odd_row_background_color: str = _prop("#f0f0f0", "oddRowBackgroundColor")
    even_row_background_color: str = _prop("#ffffff", "evenRowBackgroundColor")
    column_background_enabled: bool = _prop(False, "columnBackgroundEnabled")
    odd_column_background_color: str = _prop("#ff0000", "oddColumnBackgroundColor")
    even_column_background_color: str = _prop("#00ff00", "evenColumnBackgroundColor")
    # See more / see less button
    see_more_button_style: str = _prop("arrow", "seeMoreButtonStyle")
    see_more_button_text: str = _prop("See More", "seeMoreButtonText")
    see_less_button_text: str = _prop("See Less", "seeLessButtonText")
    see_more_button_border_enabled: bool = _prop(False, "seeMoreButtonBorderEnabled")
    see_more_button_border_width: str = _prop("1px", "seeMoreButtonBorderWidth")
    see_more_button_border_style: str = _prop("solid", "seeMoreButtonBorderStyle")
    see_more_button_border_color: str = _prop("#000000", "seeMoreButtonBorderColor")
    see_more_button_color: str = _prop("#000000", "seeMoreButtonColor")
    see_more_button_background: str = _prop("transparent", "seeMoreButtonBackground")
    see_more_button_font_size: str = _prop("14px", "seeMoreButtonFontSize")
    see_more_button_font_style: str = _prop("normal", "seeMoreButtonFontStyle")
    see_more_button_font_family: str = _prop("Arial", "seeMoreButtonFontFamily")
    see_more_button_border_radius: str = _prop("0px", "seeMoreButtonBorderRadius")
    see_more_button_padding: str = _prop("8px", "seeMoreButtonPadding")
    # Table geometry
    table_width: str = _prop("100%", "tableWidth")
    table_margin_top: str = _prop("0px", "tableMarginTop")
    table_margin_bottom: str = _prop("0px", "tableMarginBottom")
    table_alignment: str = _prop("left", "tableAlignment")
    row_spacing: str = _prop("0px", "rowSpacing")
    first_column_width: str = _prop("40", "firstColumnWidth")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StyleSet":
        """Build a style set from stored camelCase keys, defaulting absent values."""
        values: Dict[str, Any] = {}
        for style_field in fields(cls):
            value = data.get(style_field.metadata["key"])
            if is_absent(value):
                continue
            if style_field.type == "bool":
                value = parse_bool(value)
            values[style_field.name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Return the stored camelCase representation."""
        return {f.metadata["key"]: getattr(self, f.name) for f in fields(self)}


def validate_device(device: str) -> str:
    """Return ``device`` unchanged, rejecting names outside the three tiers."""
    if device not in DEVICES:
        raise ValueError(f"Unknown device: {device}")
    return device


def is_absent(value: Any) -> bool:
    """Stored style values count as missing when null or an empty string."""
    return value is None or value == ""


def style_keys() -> Tuple[str, ...]:
    """Return every stored style key in declaration order."""
    return tuple(f.metadata["key"] for f in fields(StyleSet))
