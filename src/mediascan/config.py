"""Scanner configuration: well-known constants and environment-supplied values."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

# Platform property values hold at most 92 bytes including the terminator.
PROPERTY_VALUE_MAX: Final[int] = 92

SKIPLIST_ENV: Final[str] = "MEDIASCANNER_SKIPLIST"
WHITELIST_ENV: Final[str] = "MEDIASCANNER_WHITELIST"
LOCALE_ENV: Final[str] = "MEDIASCANNER_LOCALE"

DEFAULT_WHITELIST_PATH: Final[Path] = Path("/sdcard/.mediascanner_whitelist")
MAX_WHITELIST_ENTRIES: Final[int] = 100

# Conventional mount points of primary external storage, lowercase.
WHITELIST_ROOT_PREFIXES: Final[tuple[str, ...]] = (
    "/storage/emulated/0/",
    "/storage/sdcard0/",
)

NO_SCAN_MARKER: Final[str] = ".noscanandnomtp"
NO_MEDIA_MARKER: Final[str] = ".nomedia"


@dataclass(frozen=True, slots=True)
class ScannerConfig:
    """Values supplied to a scan session from outside the core.

    Attributes:
        skip_list: Raw comma-separated skip-list string, or ``None``.
        whitelist_path: Location of the whitelist file.
        locale: Locale handed to the reporter before scanning.
    """

    skip_list: str | None = None
    whitelist_path: Path = DEFAULT_WHITELIST_PATH
    locale: str | None = None


def cap_property_value(value: str | None) -> str | None:
    """Truncate *value* to what a platform property can hold.

    Returns:
        str | None: ``None`` for missing or empty values.
    """
    if not value:
        return None
    return value[: PROPERTY_VALUE_MAX - 1]


def load_config(
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, object] | None = None,
) -> ScannerConfig:
    """Build a config from the environment, then apply explicit overrides.

    Priority: defaults < environment < overrides. ``None`` override
    values are ignored.

    Args:
        environ: Environment mapping. Defaults to ``os.environ``.
        overrides: Values keyed by ``ScannerConfig`` field name.

    Returns:
        ScannerConfig: Merged configuration.
    """
    env = os.environ if environ is None else environ
    merged: dict[str, object] = {
        "skip_list": env.get(SKIPLIST_ENV),
        "whitelist_path": env.get(WHITELIST_ENV) or DEFAULT_WHITELIST_PATH,
        "locale": env.get(LOCALE_ENV) or None,
    }
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = set(merged) - {"skip_list", "whitelist_path", "locale"}
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    skip_list = merged["skip_list"]
    locale = merged["locale"]
    return ScannerConfig(
        skip_list=cap_property_value(str(skip_list)) if skip_list else None,
        whitelist_path=Path(str(merged["whitelist_path"])),
        locale=str(locale) if locale else None,
    )
