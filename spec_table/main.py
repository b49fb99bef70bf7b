"""Entry points shared by the editor preview and the storefront renderer."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from spec_table.layout.display_modes import set_flag
from spec_table.layout.planner import FieldLookup, LayoutPlanner, ValuePredicate
from spec_table.model.plan_model import RenderPlan
from spec_table.model.style_model import DESKTOP
from spec_table.model.template_model import DisplayFlags, Template
from spec_table.parser.style_profiles import StyleProfileResolver, StyleProfiles
from spec_table.parser.template_parser import TemplateParser
from spec_table.utils.debug import DebugDumper
from spec_table.utils.logger import get_logger

LOGGER = get_logger(__name__)


def load_template(payload: Mapping[str, Any]) -> Template:
    """Parse a stored template payload into a Template snapshot."""
    return TemplateParser(payload).parse()


def build_render_plan(
    template: Union[Template, Mapping[str, Any]],
    device: str = DESKTOP,
    show_all: bool = False,
    *,
    field_lookup: Optional[FieldLookup] = None,
    has_value: Optional[ValuePredicate] = None,
    debug_dir: Optional[Path] = None,
) -> RenderPlan:
    """Plan one render of ``template`` for ``device``.

    ``template`` is either a parsed Template or the stored payload. When
    ``debug_dir`` is given the plan is also written there as JSON.
    """
    if not isinstance(template, Template):
        template = load_template(template)
    LOGGER.info("Building %s render plan for template %s", device, template.template_id)
    plan = LayoutPlanner(field_lookup=field_lookup, has_value=has_value).plan(template, device, show_all)

    if debug_dir is not None:
        path = DebugDumper(Path(debug_dir)).dump(plan)
        LOGGER.info("Wrote render plan to %s", path)
    return plan


def apply_display_flag(
    flags: Union[DisplayFlags, Mapping[str, Any]],
    flag: str,
    value: bool,
) -> DisplayFlags:
    """Editor toggle handler: accepts parsed flags or stored settings."""
    if not isinstance(flags, DisplayFlags):
        flags = TemplateParser.parse_flags(flags)
    return set_flag(flags, flag, value)


def copy_styling(profiles: Any, source: str, target: str) -> StyleProfiles:
    """Copy one device's styling onto another after the user confirmed it."""
    resolver = StyleProfileResolver()
    LOGGER.info("Copying %s styling onto %s", source, target)
    return resolver.copy(resolver.migrate(profiles), source, target)
