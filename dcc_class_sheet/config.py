from __future__ import annotations

from dataclasses import dataclass

# Reserved marker identifying the naming record, compared case-insensitively.
NAMING_TOKEN = "CUSTOMCLASS"

SKILL_KIND = "skill"

DEFAULT_ICON = "fa-solid fa-circle-exclamation"
DEFAULT_BUILDER_ICON = "fa-circle-exclamation"
DEFAULT_STYLE_FAMILY = "fa-solid"
ICON_STYLE_FAMILIES: tuple[str, ...] = ("fa-solid", "fa-regular", "fa-brands")

DEFAULT_FALLBACK_LABEL = "Custom Class"
DEFAULT_OCCUPATIONAL_LABEL = "Occupational Skills"
DEFAULT_ITEM_IMG = "icons/svg/item-bag.svg"
DEFAULT_FOLDER_COLOR = "#8b4513"


@dataclass(slots=True)
class SheetConfig:
    naming_token: str = NAMING_TOKEN
    fallback_label: str = DEFAULT_FALLBACK_LABEL
    occupational_label: str = DEFAULT_OCCUPATIONAL_LABEL
    default_icon: str = DEFAULT_ICON


COMMON_ICONS: dict[str, str] = {
    "fa-axe-battle": "Axe (Barbarian)",
    "fa-hand-fist": "Fist (Monk)",
    "fa-bow-arrow": "Bow (Ranger)",
    "fa-shield-cross": "Shield (Paladin)",
    "fa-hat-wizard": "Hat (Wizard)",
    "fa-mask": "Mask (Rogue)",
    "fa-cross": "Cross (Cleric)",
    "fa-leaf": "Leaf (Druid)",
    "fa-music": "Music (Bard)",
    "fa-skull": "Skull (Necromancer)",
    "fa-flask": "Flask (Alchemist)",
    "fa-droplet": "Droplet (Blood Mage)",
    "fa-fire": "Fire (Pyromancer)",
    "fa-book-sparkles": "Book (Scholar)",
    "fa-paw": "Paw (Beastmaster)",
}


DEFAULT_RECORD_COLUMNS: dict[str, tuple[str, ...]] = {
    "id": ("id", "_id", "item_id", "item id"),
    "name": ("name", "item_name", "item name", "label"),
    "kind": ("kind", "type", "item_type", "item type"),
    "description": ("description", "description_value", "system_description_value", "html"),
    "updated_at": ("updated_at", "updated at", "update_time", "updatetime", "modified_time", "modifiedtime"),
}
