"""Migrate stored styling into per-device profiles and resolve them."""
from __future__ import annotations

import json
from copy import deepcopy
from typing import Any, Dict, Mapping, Optional, Union

from spec_table.model.style_model import (
    DESKTOP,
    DEVICES,
    LEGACY_TEXT_COLOR_KEY,
    MOBILE,
    TABLET,
    StyleSet,
    is_absent,
    validate_device,
)
from spec_table.utils.logger import get_logger

LOGGER = get_logger(__name__)

StyleProfiles = Dict[str, StyleSet]
RawStyling = Union[None, str, StyleSet, Mapping[str, Any]]

# Order in which present tiers donate to missing ones.
_DONOR_ORDER = (DESKTOP, TABLET, MOBILE)

# Stored keys populated from the legacy single text color when absent.
_TEXT_COLOR_ALIASES = ("specificationTextColor", "valueTextColor")


class StyleProfileResolver:
    """Owns the tiered style schema: migration, lookup, and cross-device copy."""

    def migrate(self, raw: RawStyling) -> StyleProfiles:
        """Return a mapping with a StyleSet for every device tier."""
        if isinstance(raw, StyleSet):
            return {device: deepcopy(raw) for device in DEVICES}
        data = self._load(raw)
        present = [device for device in DEVICES if device in data]

        if len(present) == len(DEVICES):
            return {device: self._to_style_set(data[device]) for device in DEVICES}

        if present:
            LOGGER.warning("Styling defines only %s; filling missing device tiers", ", ".join(present))
            donor = next(device for device in _DONOR_ORDER if device in data)
            profiles = {device: self._to_style_set(data[device]) for device in present}
            for device in DEVICES:
                if device not in profiles:
                    profiles[device] = deepcopy(profiles[donor])
            return profiles

        flat = self._to_style_set(data)
        LOGGER.debug("Migrated flat styling into %d device tiers", len(DEVICES))
        return {device: deepcopy(flat) for device in DEVICES}

    def resolve(self, profiles: Mapping[str, StyleSet], device: str) -> StyleSet:
        """Return the style set for ``device``, falling back to desktop."""
        validate_device(device)
        style = profiles.get(device)
        if style is not None:
            return style
        LOGGER.warning("No %s style profile; using desktop", device)
        return profiles[DESKTOP]

    def copy(self, profiles: Mapping[str, StyleSet], source: str, target: str) -> StyleProfiles:
        """Return new profiles whose ``target`` tier deep-copies ``source``.

        The operation overwrites the target tier; callers confirm with the
        user before invoking it.
        """
        for device in (source, target):
            validate_device(device)
        copied = dict(profiles)
        copied[target] = deepcopy(self.resolve(profiles, source))
        return copied

    # ------------------------------------------------------------------
    def _load(self, raw: RawStyling) -> Mapping[str, Any]:
        if raw is None:
            return {}
        if isinstance(raw, str):
            return json.loads(raw) if raw.strip() else {}
        return raw

    def _to_style_set(self, value: Any) -> StyleSet:
        if isinstance(value, StyleSet):
            return value
        if value is None:
            return StyleSet()
        return StyleSet.from_dict(self._apply_aliases(value))

    def _apply_aliases(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        legacy_color: Optional[Any] = data.get(LEGACY_TEXT_COLOR_KEY)
        if is_absent(legacy_color):
            return data
        aliased = dict(data)
        for key in _TEXT_COLOR_ALIASES:
            if is_absent(aliased.get(key)):
                aliased[key] = legacy_color
        return aliased
