"""Decode skill item names into naming tokens, class-prefixed skills or plain skills.

Grammar (names are trimmed first):

* ``(CUSTOMCLASS)Barbarian`` -> naming token, label ``Barbarian``. The marker is
  matched case-insensitively and may be padded with whitespace.
* ``(Barbarian^10)Natural Armor`` -> class ``Barbarian``, weight ``10``,
  skill ``Natural Armor``. The ``^weight`` suffix is optional.
* anything else -> plain (occupational) skill.
"""

from __future__ import annotations

import re
from functools import lru_cache

from .config import NAMING_TOKEN
from .models import NamingToken, ParsedToken, Plain, PrefixedSkill

_PREFIXED_RE = re.compile(r"^\(\s*([^)]+?)\s*(?:\^([0-9]+))?\)\s*(.*)$")

PLAIN = Plain()


@lru_cache(maxsize=8)
def _naming_re(naming_token: str) -> re.Pattern[str]:
    return re.compile(
        rf"^\(\s*{re.escape(naming_token)}\s*\)\s*(.+)$",
        re.IGNORECASE,
    )


def _text(name: str | None) -> str:
    if name is None:
        return ""
    return str(name).strip()


def parse_naming_item(name: str | None, naming_token: str = NAMING_TOKEN) -> str | None:
    match = _naming_re(naming_token).match(_text(name))
    if not match:
        return None
    return match.group(1).strip()


def parse_prefixed_skill_name(name: str | None) -> PrefixedSkill | None:
    match = _PREFIXED_RE.match(_text(name))
    if not match:
        return None
    class_name, weight, skill_name = match.groups()
    try:
        parsed_weight = int(weight) if weight else 0
    except ValueError:
        # Digit runs past the interpreter's int conversion limit.
        return None
    return PrefixedSkill(
        class_name=class_name.strip(),
        weight=parsed_weight,
        skill_name=skill_name.strip(),
    )


def parse_name(name: str | None, naming_token: str = NAMING_TOKEN) -> ParsedToken:
    label = parse_naming_item(name, naming_token)
    if label is not None:
        return NamingToken(label=label)
    prefixed = parse_prefixed_skill_name(name)
    if prefixed is not None:
        return prefixed
    return PLAIN


def is_reserved_class_name(class_name: str, naming_token: str = NAMING_TOKEN) -> bool:
    return class_name.strip().casefold() == naming_token.casefold()


def compose_prefixed_name(class_name: str, skill_name: str, weight: int = 0) -> str:
    suffix = f"^{int(weight)}" if weight and int(weight) > 0 else ""
    return f"({class_name}{suffix}){skill_name}"


def compose_naming_name(class_name: str, naming_token: str = NAMING_TOKEN) -> str:
    return f"({naming_token}){class_name}"
