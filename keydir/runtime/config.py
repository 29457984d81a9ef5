"""Menu configuration plus persistent JSON storage.

The on-disk file is read leniently: a missing file, malformed JSON, or a
value of the wrong JSON type falls back to that option's default. Value
checks (page size, key collisions, patterns) happen in
``MenuConfig.validate`` and are fatal before any session starts.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

from ..errors import InvalidConfiguration
from ..input.key_registry import SIDE_COMMAND_KEYS
from ..keys import available_key_count, validate_reserved_keys
from ..sorting import SortMethod, parse_sort_method

APP_NAME = "keydir"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_MAX_ITEMS_PER_PAGE = 40
DEFAULT_BACK_TO_PARENT_KEY = "^"
DEFAULT_CURRENT_DIRECTORY_KEY = "."


@dataclass(frozen=True)
class MenuConfig:
    """Fixed set of named options controlling menu construction."""

    root: Path
    max_items_per_page: int = DEFAULT_MAX_ITEMS_PER_PAGE
    back_to_parent_key: str = DEFAULT_BACK_TO_PARENT_KEY
    current_directory_key: str = DEFAULT_CURRENT_DIRECTORY_KEY
    default_sort_method: SortMethod = SortMethod.NAME
    column_major_order: bool = False
    exclude_pattern: str | None = None
    stay_open_after_file_action: bool = False

    @property
    def reserved_keys(self) -> tuple[str, str]:
        return (self.back_to_parent_key, self.current_directory_key)

    def validate(self) -> MenuConfig:
        """Raise ``InvalidConfiguration`` for unusable values; return ``self``."""
        if isinstance(self.max_items_per_page, bool) or not isinstance(self.max_items_per_page, int):
            raise InvalidConfiguration("max_items_per_page must be an integer")
        if self.max_items_per_page <= 0:
            raise InvalidConfiguration(f"max_items_per_page must be > 0, got {self.max_items_per_page}")
        validate_reserved_keys(
            self.back_to_parent_key,
            self.current_directory_key,
            set(SIDE_COMMAND_KEYS.values()),
        )
        key_space = available_key_count(self.reserved_keys)
        if self.max_items_per_page > key_space:
            raise InvalidConfiguration(
                f"max_items_per_page {self.max_items_per_page} exceeds the {key_space} available keys"
            )
        if self.exclude_pattern is not None:
            try:
                re.compile(self.exclude_pattern)
            except re.error as exc:
                raise InvalidConfiguration(f"invalid exclude_pattern {self.exclude_pattern!r}: {exc}") from exc
        return self

    def with_overrides(self, **changes: object) -> MenuConfig:
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


def default_config() -> MenuConfig:
    return MenuConfig(root=Path.home())


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored so an unwritable config
    never breaks navigation.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _string_or_none(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value if value.strip() else None


def _int_or_none(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _bool_or_none(value: object) -> bool | None:
    return value if isinstance(value, bool) else None


def _sort_method_or_none(value: object) -> SortMethod | None:
    if not isinstance(value, str):
        return None
    try:
        return parse_sort_method(value)
    except ValueError:
        return None


def menu_config_from_mapping(data: dict[str, object]) -> MenuConfig:
    """Build an unvalidated ``MenuConfig`` from decoded JSON values."""
    raw_root = _string_or_none(data.get("root"))
    base = default_config()
    return base.with_overrides(
        root=Path(raw_root).expanduser() if raw_root is not None else None,
        max_items_per_page=_int_or_none(data.get("max_items_per_page")),
        back_to_parent_key=_string_or_none(data.get("back_to_parent_key")),
        current_directory_key=_string_or_none(data.get("current_directory_key")),
        default_sort_method=_sort_method_or_none(data.get("default_sort_method")),
        column_major_order=_bool_or_none(data.get("column_major_order")),
        exclude_pattern=_string_or_none(data.get("exclude_pattern")),
        stay_open_after_file_action=_bool_or_none(data.get("stay_open_after_file_action")),
    )


def load_menu_config() -> MenuConfig:
    """Load and validate the persisted menu configuration."""
    return menu_config_from_mapping(load_config()).validate()


def save_menu_config(config: MenuConfig) -> None:
    """Persist ``config`` alongside any unrelated keys already in the file."""
    data = load_config()
    data.update(
        {
            "root": str(config.root),
            "max_items_per_page": config.max_items_per_page,
            "back_to_parent_key": config.back_to_parent_key,
            "current_directory_key": config.current_directory_key,
            "default_sort_method": config.default_sort_method.value,
            "column_major_order": config.column_major_order,
            "exclude_pattern": config.exclude_pattern,
            "stay_open_after_file_action": config.stay_open_after_file_action,
        }
    )
    save_config(data)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "MenuConfig",
    "default_config",
    "load_config",
    "save_config",
    "menu_config_from_mapping",
    "load_menu_config",
    "save_menu_config",
]
