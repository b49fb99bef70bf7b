"""Background colors for the name and value cells of a rendered row."""
from __future__ import annotations

from dataclasses import dataclass

from spec_table.model.style_model import StyleSet


@dataclass(frozen=True, slots=True)
class Stripe:
    name_cell_color: str
    value_cell_color: str


def stripe_for(style: StyleSet, visible_row_index: int) -> Stripe:
    """Return the cell colors for the row at ``visible_row_index``.

    Column and row striping are mutually exclusive in the editor; column
    striping takes precedence if a stored style has both. The first rendered
    row (index 0) counts as odd.
    """
    if style.column_background_enabled:
        return Stripe(style.odd_column_background_color, style.even_column_background_color)
    if style.row_background_enabled:
        color = style.odd_row_background_color if visible_row_index % 2 == 0 else style.even_row_background_color
        return Stripe(color, color)
    return Stripe(style.td_background_color, style.td_background_color)
