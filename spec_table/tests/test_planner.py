"""Integration tests for the layout planner and library entry points."""
import json
import tempfile
import unittest
from pathlib import Path
from typing import List

from spec_table.layout.planner import LayoutPlanner
from spec_table.main import apply_display_flag, build_render_plan, copy_styling
from spec_table.model.plan_model import RenderPlan
from spec_table.model.style_model import DEVICES, StyleSet
from spec_table.model.template_model import (
    DELETED_METAFIELD_LABEL,
    DisplayFlags,
    FieldDefinition,
    Section,
    SpecItem,
    Template,
)
from spec_table.parser.style_profiles import StyleProfileResolver
from spec_table.utils.debug import DebugDumper


def _section(heading: str, count: int, **item_kwargs) -> Section:
    items = [SpecItem.custom_spec(f"{heading} {n}", f"v{n}", **item_kwargs) for n in range(count)]
    return Section(heading=heading, items=items)


def _template(sections: List[Section], flags: DisplayFlags = DisplayFlags(), **style) -> Template:
    profiles = StyleProfileResolver().migrate(None)
    for device in DEVICES:
        for name, value in style.items():
            setattr(profiles[device], name, value)
    return Template(sections=sections, display_flags=flags, style_profiles=profiles)


def _section_indices(plan: RenderPlan) -> List[List[int]]:
    return [[section.section_index for section in column.sections] for column in plan.columns]


class LayoutPlannerTest(unittest.TestCase):
    """Validate the composed render plan."""

    def setUp(self) -> None:
        self.planner = LayoutPlanner()

    def test_split_per_section_balances_columns(self) -> None:
        template = _template(
            [_section("A", 7), _section("B", 3), _section("C", 5)],
            DisplayFlags(split_per_section=True),
        )
        plan = self.planner.plan(template, "desktop")

        self.assertEqual(_section_indices(plan), [[0], [1, 2]])
        self.assertEqual(plan.split_mode, "split_per_section")
        self.assertFalse(plan.has_more)

    def test_single_column_without_split(self) -> None:
        plan = self.planner.plan(_template([_section("A", 2), _section("B", 2)]), "desktop")
        self.assertEqual(_section_indices(plan), [[0, 1]])
        self.assertIsNone(plan.split_mode)

    def test_see_more_truncates_single_section(self) -> None:
        section = _section("A", 14)
        plan = self.planner.plan(_template([section], DisplayFlags(see_more=True)), "mobile")

        planned = plan.columns[0].sections[0]
        self.assertEqual(planned.visible_items, section.items[:10])
        self.assertEqual(planned.hidden_items, section.items[10:])
        self.assertTrue(plan.has_more)
        self.assertTrue(plan.show_see_more)
        self.assertFalse(plan.show_see_less)

    def test_show_all_renders_everything_and_offers_see_less(self) -> None:
        section = _section("A", 14)
        plan = self.planner.plan(_template([section], DisplayFlags(see_more=True)), "desktop", show_all=True)

        self.assertEqual(plan.columns[0].sections[0].visible_items, section.items)
        self.assertTrue(plan.has_more)
        self.assertFalse(plan.show_see_more)
        self.assertTrue(plan.show_see_less)

    def test_see_less_hidden_on_mobile(self) -> None:
        flags = DisplayFlags(see_more=True, see_less_hide_from_mobile=True)
        plan = self.planner.plan(_template([_section("A", 14)], flags), "mobile", show_all=True)
        self.assertFalse(plan.show_see_less)

    def test_see_more_hidden_from_pc_applies_on_mobile_only(self) -> None:
        template = _template([_section("A", 14)], DisplayFlags(see_more=True, see_more_hide_from_pc=True))

        desktop = self.planner.plan(template, "desktop")
        tablet = self.planner.plan(template, "tablet")
        mobile = self.planner.plan(template, "mobile")

        self.assertFalse(desktop.has_more)
        self.assertEqual(len(desktop.columns[0].sections[0].visible_items), 14)
        self.assertFalse(tablet.has_more)
        self.assertTrue(mobile.has_more)

    def test_device_hidden_items_filtered(self) -> None:
        shared = SpecItem.custom_spec("Shared", "yes")
        pc_only_hidden = SpecItem.custom_spec("Mobile only", "yes", hide_from_pc=True)
        mobile_hidden = SpecItem.custom_spec("Desktop only", "yes", hide_from_mobile=True)
        template = _template([Section("A", [shared, pc_only_hidden, mobile_hidden])])

        desktop_rows = self.planner.plan(template, "desktop").columns[0].sections[0].rows
        mobile_rows = self.planner.plan(template, "mobile").columns[0].sections[0].rows

        self.assertEqual([row.display_name for row in desktop_rows], ["Shared", "Desktop only"])
        self.assertEqual([row.display_name for row in mobile_rows], ["Shared", "Mobile only"])

    def test_conflicting_hide_flags_prefer_pc(self) -> None:
        item = SpecItem.custom_spec("Conflict", "yes", hide_from_pc=True, hide_from_mobile=True)
        template = _template([Section("A", [item, SpecItem.custom_spec("Other", "yes")])])

        desktop = self.planner.plan(template, "desktop")
        mobile = self.planner.plan(template, "mobile")

        self.assertEqual([r.display_name for r in desktop.columns[0].sections[0].rows], ["Other"])
        self.assertEqual([r.display_name for r in mobile.columns[0].sections[0].rows], ["Conflict", "Other"])

    def test_empty_sections_dropped(self) -> None:
        template = _template(
            [_section("A", 2), Section("Empty", [SpecItem.custom_spec("Blank", "  ")]), _section("C", 1)]
        )
        plan = self.planner.plan(template, "desktop")
        self.assertEqual(_section_indices(plan), [[0, 2]])

    def test_row_striping_counts_rendered_rows_per_column(self) -> None:
        template = _template(
            [_section("A", 3), _section("B", 2)],
            row_background_enabled=True,
            odd_row_background_color="#odd",
            even_row_background_color="#even",
        )
        plan = self.planner.plan(template, "desktop")

        rows = [row for section in plan.columns[0].sections for row in section.rows]
        self.assertEqual([row.visible_row_index for row in rows], [0, 1, 2, 3, 4])
        self.assertEqual(
            [row.name_cell_color for row in rows],
            ["#odd", "#even", "#odd", "#even", "#odd"],
        )

    def test_row_striping_restarts_in_each_split_column(self) -> None:
        template = _template(
            [_section("A", 4)],
            DisplayFlags(split_per_metafield=True),
            row_background_enabled=True,
            odd_row_background_color="#odd",
            even_row_background_color="#even",
        )
        plan = self.planner.plan(template, "desktop")

        self.assertEqual(len(plan.columns), 2)
        for column in plan.columns:
            rows = column.sections[0].rows
            self.assertEqual([row.visible_row_index for row in rows], [0, 1])
            self.assertEqual([row.value_cell_color for row in rows], ["#odd", "#even"])

    def test_effective_style_follows_device(self) -> None:
        template = _template([_section("A", 1)])
        template.style_profiles["mobile"] = StyleSet(text_font_size="12px")

        self.assertEqual(self.planner.plan(template, "mobile").effective_style.text_font_size, "12px")
        self.assertEqual(self.planner.plan(template, "desktop").effective_style.text_font_size, "14px")

    def test_unknown_device_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.planner.plan(_template([_section("A", 1)]), "smartwatch")

    def test_accordion_and_collapsible_per_device(self) -> None:
        accordion = _template([_section("A", 1)], DisplayFlags(accordion=True, accordion_hide_from_mobile=True))
        self.assertTrue(self.planner.plan(accordion, "desktop").accordion)
        self.assertFalse(self.planner.plan(accordion, "mobile").accordion)

        collapsible = _template([_section("A", 1)], DisplayFlags(collapsible_table=True, collapsible_on_pc=True))
        self.assertTrue(self.planner.plan(collapsible, "desktop").collapsible)
        self.assertFalse(self.planner.plan(collapsible, "mobile").collapsible)

    def test_metafield_names_resolved_through_lookup(self) -> None:
        definitions = {"1": FieldDefinition("custom", "width", "Width")}
        items = [
            SpecItem.metafield("1"),
            SpecItem.metafield("2"),
            SpecItem.metafield("1", custom_name="Breadth"),
            SpecItem.product_spec("sku", tooltip_enabled=True, tooltip_text="Stock keeping unit"),
        ]
        planner = LayoutPlanner(field_lookup=definitions.get)
        rows = planner.plan(_template([Section("A", items)]), "desktop").columns[0].sections[0].rows

        self.assertEqual(
            [row.display_name for row in rows],
            ["Width", DELETED_METAFIELD_LABEL, "Breadth", "SKU"],
        )
        self.assertEqual(rows[3].tooltip_text, "Stock keeping unit")
        self.assertIsNone(rows[0].tooltip_text)

    def test_custom_value_predicate(self) -> None:
        values = {"A 0": "x", "A 2": "z"}
        planner = LayoutPlanner(has_value=lambda item: item.custom_name in values)
        rows = planner.plan(_template([_section("A", 3)]), "desktop").columns[0].sections[0].rows
        self.assertEqual([row.display_name for row in rows], ["A 0", "A 2"])

    def test_template_not_mutated(self) -> None:
        item = SpecItem.custom_spec("Conflict", "yes", hide_from_pc=True, hide_from_mobile=True)
        flags = DisplayFlags(accordion=True, see_more=True)
        template = _template([Section("A", [item])], flags)

        self.planner.plan(template, "mobile")

        self.assertTrue(template.sections[0].items[0].hide_from_mobile)
        self.assertTrue(template.display_flags.see_more)


class EntryPointTest(unittest.TestCase):
    """Library entry points used by the editor and storefront adapters."""

    payload = {
        "id": "t-1",
        "structure": {
            "sections": [
                {"heading": "Size", "metafields": [{"type": "custom_spec", "customName": f"Row {n}", "customValue": "1"} for n in range(12)]},
            ]
        },
        "styling": {"columnBackgroundEnabled": True},
        "settings": {"seeMoreEnabled": "true"},
    }

    def test_build_render_plan_from_payload(self) -> None:
        plan = build_render_plan(self.payload, "tablet")

        self.assertEqual(plan.device, "tablet")
        self.assertTrue(plan.has_more)
        row = plan.columns[0].sections[0].rows[0]
        self.assertEqual((row.name_cell_color, row.value_cell_color), ("#ff0000", "#00ff00"))

    def test_apply_display_flag_from_settings(self) -> None:
        flags = apply_display_flag({"seeMoreEnabled": True, "seeMoreHideFromPC": True}, "accordion", True)

        self.assertTrue(flags.accordion)
        self.assertFalse(flags.see_more)
        self.assertFalse(flags.see_more_hide_from_pc)

    def test_apply_display_flag_repairs_stored_conflicts(self) -> None:
        flags = apply_display_flag({"isAccordion": True, "seeMoreEnabled": "true"}, "split_per_section", True)

        self.assertTrue(flags.split_per_section)
        self.assertTrue(flags.accordion)
        self.assertFalse(flags.see_more)

    def test_copy_styling_from_legacy_styling(self) -> None:
        profiles = copy_styling({"desktop": {"padding": "5px"}, "mobile": {"padding": "1px"}}, "desktop", "mobile")
        self.assertEqual(profiles["mobile"].padding, "5px")

    def test_build_render_plan_writes_debug_dump(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            plan = build_render_plan(self.payload, "mobile", debug_dir=Path(tmp) / "debug")
            data = json.loads((Path(tmp) / "debug" / "render_plan.json").read_text())

        self.assertEqual(data["device"], plan.device)
        self.assertEqual(data["has_more"], plan.has_more)

    def test_debug_dump_writes_plan(self) -> None:
        plan = build_render_plan(self.payload, "desktop")
        with tempfile.TemporaryDirectory() as tmp:
            path = DebugDumper(Path(tmp)).dump(plan)
            data = json.loads(path.read_text())

        self.assertEqual(data["device"], "desktop")
        self.assertEqual(data["effective_style"]["columnBackgroundEnabled"], True)
        first_row = data["columns"][0]["sections"][0]["rows"][0]
        self.assertEqual(first_row["item"]["kind"], "custom_spec")
        self.assertEqual(first_row["display_name"], "Row 0")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
