"""Single entry point enforcing mutual exclusivity between display modes."""
from __future__ import annotations

from dataclasses import fields, replace
from typing import Dict, Tuple

from spec_table.model.style_model import MOBILE, validate_device
from spec_table.model.template_model import DisplayFlags, SpecItem
from spec_table.utils.logger import get_logger

LOGGER = get_logger(__name__)

PC = "pc"

ACCORDION = "accordion"
SEE_MORE = "see_more"
COLLAPSIBLE_TABLE = "collapsible_table"
SPLIT_PER_SECTION = "split_per_section"
SPLIT_PER_METAFIELD = "split_per_metafield"

# Group A and group B: at most one member of each may be enabled.
EXCLUSIVE_MODES: Tuple[str, ...] = (ACCORDION, SEE_MORE, COLLAPSIBLE_TABLE)
EXCLUSIVE_SPLITS: Tuple[str, ...] = (SPLIT_PER_SECTION, SPLIT_PER_METAFIELD)

# Per-device sub-flags as (pc, mobile) pairs; only one of each pair may be set.
DEVICE_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("accordion_hide_from_pc", "accordion_hide_from_mobile"),
    ("see_more_hide_from_pc", "see_more_hide_from_mobile"),
    ("see_less_hide_from_pc", "see_less_hide_from_mobile"),
    ("collapsible_on_pc", "collapsible_on_mobile"),
)

MODE_SUB_FLAGS: Dict[str, Tuple[str, ...]] = {
    ACCORDION: DEVICE_PAIRS[0],
    SEE_MORE: DEVICE_PAIRS[1] + DEVICE_PAIRS[2],
    COLLAPSIBLE_TABLE: DEVICE_PAIRS[3],
}

_SIBLINGS: Dict[str, str] = {}
for _pc, _mobile in DEVICE_PAIRS:
    _SIBLINGS[_pc] = _mobile
    _SIBLINGS[_mobile] = _pc

FLAG_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(DisplayFlags))

ITEM_HIDE_FLAGS = ("hide_from_pc", "hide_from_mobile")


def device_class(device: str) -> str:
    """Map a style tier onto the PC/mobile split used by visibility flags."""
    validate_device(device)
    return MOBILE if device == MOBILE else PC


def set_flag(flags: DisplayFlags, flag: str, value: bool) -> DisplayFlags:
    """Return new flags with ``flag`` set and every exclusivity rule applied.

    Stored conflicts in ``flags`` are repaired first, so the result is
    consistent whatever the starting state.
    """
    if flag not in FLAG_NAMES:
        raise ValueError(f"Unknown display flag: {flag}")
    return _apply_flag(normalize_flags(flags), flag, value)


def _apply_flag(flags: DisplayFlags, flag: str, value: bool) -> DisplayFlags:
    changes: Dict[str, bool] = {flag: bool(value)}

    if value and flag in EXCLUSIVE_MODES:
        for other in EXCLUSIVE_MODES:
            if other == flag:
                continue
            changes[other] = False
            for sub_flag in MODE_SUB_FLAGS[other]:
                changes[sub_flag] = False
    elif value and flag in EXCLUSIVE_SPLITS:
        for other in EXCLUSIVE_SPLITS:
            if other != flag:
                changes[other] = False
    elif value and flag in _SIBLINGS:
        changes[_SIBLINGS[flag]] = False
    elif not value and flag == COLLAPSIBLE_TABLE:
        for sub_flag in MODE_SUB_FLAGS[COLLAPSIBLE_TABLE]:
            changes[sub_flag] = False

    return replace(flags, **changes)


def normalize_flags(flags: DisplayFlags) -> DisplayFlags:
    """Repair stored flag sets that violate exclusivity.

    The first enabled member of each group wins, and the PC sub-flag wins
    over its mobile sibling.
    """
    normalized = flags
    for group in (EXCLUSIVE_MODES, EXCLUSIVE_SPLITS):
        enabled = [name for name in group if getattr(normalized, name)]
        if len(enabled) > 1:
            LOGGER.warning("Conflicting display modes %s; keeping %s", enabled, enabled[0])
            normalized = _apply_flag(normalized, enabled[0], True)
    for pc_flag, mobile_flag in DEVICE_PAIRS:
        if getattr(normalized, pc_flag) and getattr(normalized, mobile_flag):
            LOGGER.warning("Both %s and %s set; keeping %s", pc_flag, mobile_flag, pc_flag)
            normalized = _apply_flag(normalized, pc_flag, True)
    return normalized


def set_item_hide_flag(item: SpecItem, flag: str, value: bool) -> SpecItem:
    """Return a copy of ``item`` with one device hide flag set, last write wins."""
    if flag not in ITEM_HIDE_FLAGS:
        raise ValueError(f"Unknown item visibility flag: {flag}")
    changes = {flag: bool(value)}
    if value:
        sibling = ITEM_HIDE_FLAGS[1] if flag == ITEM_HIDE_FLAGS[0] else ITEM_HIDE_FLAGS[0]
        changes[sibling] = False
    return replace(item, **changes)


def normalize_item(item: SpecItem) -> SpecItem:
    """Resolve items stored with both hide flags set in favour of ``hide_from_pc``."""
    if item.hide_from_pc and item.hide_from_mobile:
        LOGGER.warning("Item %r hidden on both devices; keeping hide_from_pc", item.custom_name or item.definition_id)
        return set_item_hide_flag(item, "hide_from_pc", True)
    return item


def is_item_hidden(item: SpecItem, device: str) -> bool:
    if device_class(device) == PC:
        return item.hide_from_pc
    return item.hide_from_mobile


def mode_active_on(flags: DisplayFlags, mode: str, device: str) -> bool:
    """Whether ``mode`` applies to ``device`` given its per-device sub-flags.

    Accordion and see-more use "hide from" sub-flags; the collapsible table
    uses "on" sub-flags, where setting neither means both devices.
    """
    if not getattr(flags, mode):
        return False
    on_pc = device_class(device) == PC
    if mode == COLLAPSIBLE_TABLE:
        if not (flags.collapsible_on_pc or flags.collapsible_on_mobile):
            return True
        return flags.collapsible_on_pc if on_pc else flags.collapsible_on_mobile
    pc_flag, mobile_flag = MODE_SUB_FLAGS[mode][:2]
    return not getattr(flags, pc_flag if on_pc else mobile_flag)


def see_less_allowed(flags: DisplayFlags, device: str) -> bool:
    if device_class(device) == PC:
        return not flags.see_less_hide_from_pc
    return not flags.see_less_hide_from_mobile
