from __future__ import annotations

import importlib.util
import logging
import os
import sys
from typing import Any

from .config import SheetConfig

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _str(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def sheet_config_from_dict(
    payload: dict[str, Any] | None = None,
    base: SheetConfig | None = None,
) -> SheetConfig:
    """Build a config from API/CLI options; blank or missing values keep ``base`` (or the defaults).

    The naming token is fixed for the process and is never read from options.
    """
    payload = payload or {}
    base = base or SheetConfig()
    return SheetConfig(
        fallback_label=_str(payload.get("fallback_label"), base.fallback_label),
        occupational_label=_str(payload.get("occupational_label"), base.occupational_label),
        default_icon=_str(payload.get("default_icon"), base.default_icon),
    )


def sheet_config_from_env() -> SheetConfig:
    return sheet_config_from_dict(
        {
            "fallback_label": os.getenv("DCC_CLASS_SHEET_FALLBACK_LABEL"),
            "occupational_label": os.getenv("DCC_CLASS_SHEET_OCCUPATIONAL_LABEL"),
            "default_icon": os.getenv("DCC_CLASS_SHEET_DEFAULT_ICON"),
        }
    )


def configure_logging(level: str | None = None) -> None:
    name = _str(level or os.getenv("DCC_CLASS_SHEET_LOG_LEVEL"), "WARNING").upper()
    logging.basicConfig(level=getattr(logging, name, logging.WARNING), format=LOG_FORMAT)


def assert_runtime_compatibility() -> None:
    """Fail early when the interpreter or the rendering/table libraries are unusable."""
    if os.getenv("DCC_CLASS_SHEET_SKIP_RUNTIME_CHECK", "0") == "1":
        return

    if sys.version_info < (3, 11):
        raise RuntimeError(f"dcc-class-sheet needs Python 3.11+ (current: {sys.version.split()[0]}).")

    missing = [name for name in ("jinja2", "pandas") if importlib.util.find_spec(name) is None]
    if missing:
        raise RuntimeError(
            f"Missing required packages: {', '.join(missing)}. Install them via `pip install -e .`."
        )
