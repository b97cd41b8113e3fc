"""Custom class tab engine for DCC character sheets."""

from .config import NAMING_TOKEN, SheetConfig
from .grouping import classify, order_group_names
from .name_parser import parse_name
from .naming import resolve_icon, resolve_label
from .view import build_sheet_view

__all__ = [
    "NAMING_TOKEN",
    "SheetConfig",
    "build_sheet_view",
    "classify",
    "order_group_names",
    "parse_name",
    "resolve_icon",
    "resolve_label",
]
