"""In-memory representation of a specification table template."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from spec_table.model.style_model import StyleSet

DEFAULT_TABLE_NAME = "Specifications"
DELETED_METAFIELD_LABEL = "Metafield deleted"


class ItemKind(str, Enum):
    """Source of a specification row."""

    METAFIELD = "metafield"
    PRODUCT_SPEC = "product_spec"
    CUSTOM_SPEC = "custom_spec"


class ProductSpecType(str, Enum):
    """Built-in product attributes that can be shown without a metafield."""

    VENDOR = "vendor"
    PRODUCT_TYPE = "product_type"
    SKU = "sku"
    BARCODE = "barcode"
    WEIGHT = "weight"
    INVENTORY_QUANTITY = "inventory_quantity"
    PRICE = "price"
    COMPARE_AT_PRICE = "compare_at_price"
    TAGS = "tags"
    COLLECTIONS = "collections"


PRODUCT_SPEC_LABELS: Dict[ProductSpecType, str] = {
    ProductSpecType.VENDOR: "Vendor",
    ProductSpecType.PRODUCT_TYPE: "Product type",
    ProductSpecType.SKU: "SKU",
    ProductSpecType.BARCODE: "Barcode",
    ProductSpecType.WEIGHT: "Weight",
    ProductSpecType.INVENTORY_QUANTITY: "Inventory quantity",
    ProductSpecType.PRICE: "Price",
    ProductSpecType.COMPARE_AT_PRICE: "Compare at price",
    ProductSpecType.TAGS: "Tags",
    ProductSpecType.COLLECTIONS: "Collections",
}


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    """Store custom field definition referenced by metafield rows."""

    namespace: str
    key: str
    name: Optional[str] = None
    owner_type: str = "PRODUCT"


@dataclass(slots=True)
class SpecItem:
    """A single specification row; ``kind`` selects which attributes apply."""

    kind: ItemKind
    definition_id: Optional[str] = None
    definition: Optional[FieldDefinition] = None
    product_spec_type: Optional[str] = None
    custom_value: Optional[str] = None
    custom_name: Optional[str] = None
    tooltip_enabled: bool = False
    tooltip_text: Optional[str] = None
    hide_from_pc: bool = False
    hide_from_mobile: bool = False
    prefix: Optional[str] = None
    suffix: Optional[str] = None

    @classmethod
    def metafield(cls, definition_id: Optional[str] = None, definition: Optional[FieldDefinition] = None, **kwargs) -> "SpecItem":
        return cls(kind=ItemKind.METAFIELD, definition_id=definition_id, definition=definition, **kwargs)

    @classmethod
    def product_spec(cls, spec_type: str, **kwargs) -> "SpecItem":
        return cls(kind=ItemKind.PRODUCT_SPEC, product_spec_type=spec_type, **kwargs)

    @classmethod
    def custom_spec(cls, name: str, value: Optional[str], **kwargs) -> "SpecItem":
        return cls(kind=ItemKind.CUSTOM_SPEC, custom_name=name, custom_value=value, **kwargs)

    def display_name(self, definition: Optional[FieldDefinition] = None) -> str:
        """Return the label shown in the specification-name cell.

        ``definition`` is the resolved field definition for metafield rows;
        ``None`` means the definition no longer exists in the store.
        """
        if self.custom_name:
            return self.custom_name
        if self.kind is ItemKind.METAFIELD:
            if definition is None:
                return DELETED_METAFIELD_LABEL
            return definition.name or f"{definition.namespace}.{definition.key}"
        if self.kind is ItemKind.PRODUCT_SPEC:
            try:
                return PRODUCT_SPEC_LABELS[ProductSpecType(self.product_spec_type)]
            except ValueError:
                return self.product_spec_type or ""
        return ""

    def format_value(self, value: object) -> str:
        """Concatenate prefix and suffix around a literal value."""
        prefix = "" if self.prefix is None else str(self.prefix)
        suffix = "" if self.suffix is None else str(self.suffix)
        return f"{prefix}{value}{suffix}"


@dataclass(slots=True)
class Section:
    """Named, ordered group of specification rows."""

    heading: str
    items: List[SpecItem] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DisplayFlags:
    """Display mode switches and their per-device sub-flags."""

    accordion: bool = False
    accordion_hide_from_pc: bool = False
    accordion_hide_from_mobile: bool = False
    see_more: bool = False
    see_more_hide_from_pc: bool = False
    see_more_hide_from_mobile: bool = False
    see_less_hide_from_pc: bool = False
    see_less_hide_from_mobile: bool = False
    collapsible_table: bool = False
    collapsible_on_pc: bool = False
    collapsible_on_mobile: bool = False
    split_per_section: bool = False
    split_per_metafield: bool = False

    @property
    def split_active(self) -> bool:
        return self.split_per_section or self.split_per_metafield


@dataclass(slots=True)
class Template:
    """Template snapshot handed to the layout planner for one render."""

    sections: List[Section]
    display_flags: DisplayFlags = field(default_factory=DisplayFlags)
    style_profiles: Dict[str, StyleSet] = field(default_factory=dict)
    table_name: str = DEFAULT_TABLE_NAME
    template_id: Optional[str] = None
