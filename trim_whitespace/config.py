"""Configuration loading and management."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
import tomllib

from .exceptions import ConfigError, InvalidNumberError


@dataclass(frozen=True)
class TrimSettings:
    """Immutable snapshot of the preferences that drive one trim.

    Attributes:
        trim_on_save: Trim the document before a manual save proceeds.
        auto_trim_document: Trim the document in the background after edits.
        auto_trim_timeout: Idle delay, in seconds, between edits and an auto-trim.
        preserve_code_blocks: Leave fenced and inline code untouched.
        preserve_indented_lists: Keep indentation that precedes a list marker.
        convert_non_breaking_spaces: Rewrite U+00A0 to ordinary spaces first.
        trim_trailing_spaces: Remove spaces at the end of each line.
        trim_leading_spaces: Remove spaces at the start of each line.
        trim_multiple_spaces: Collapse runs of inline spaces.
        trim_trailing_tabs: Remove tabs at the end of each line.
        trim_leading_tabs: Remove tabs at the start of each line.
        trim_multiple_tabs: Collapse runs of inline tabs.
        trim_trailing_lines: Remove blank lines at the end of the document.
        trim_leading_lines: Remove blank lines at the start of the document.
        trim_multiple_lines: Collapse runs of blank lines.
        trailing_lines_keep_max: Line endings kept when trimming trailing lines.

    Examples:
        TrimSettings(trim_leading_spaces=True, preserve_indented_lists=False)
    """

    # General
    trim_on_save: bool = False
    auto_trim_document: bool = True
    auto_trim_timeout: float = 2.5

    # Protection
    preserve_code_blocks: bool = True
    preserve_indented_lists: bool = True
    convert_non_breaking_spaces: bool = False

    # Spaces
    trim_trailing_spaces: bool = True
    trim_leading_spaces: bool = False
    trim_multiple_spaces: bool = False

    # Tabs
    trim_trailing_tabs: bool = True
    trim_leading_tabs: bool = False
    trim_multiple_tabs: bool = False

    # Lines
    trim_trailing_lines: bool = True
    trim_leading_lines: bool = False
    trim_multiple_lines: bool = False
    trailing_lines_keep_max: int = 0


# Persisted key names, as stored by editor integrations.
SETTING_KEYS: dict[str, str] = {
    "TrimOnSave": "trim_on_save",
    "AutoTrimDocument": "auto_trim_document",
    "AutoTrimTimeout": "auto_trim_timeout",
    "PreserveCodeBlocks": "preserve_code_blocks",
    "PreserveIndentedLists": "preserve_indented_lists",
    "ConvertNonBreakingSpaces": "convert_non_breaking_spaces",
    "TrimTrailingSpaces": "trim_trailing_spaces",
    "TrimLeadingSpaces": "trim_leading_spaces",
    "TrimMultipleSpaces": "trim_multiple_spaces",
    "TrimTrailingTabs": "trim_trailing_tabs",
    "TrimLeadingTabs": "trim_leading_tabs",
    "TrimMultipleTabs": "trim_multiple_tabs",
    "TrimTrailingLines": "trim_trailing_lines",
    "TrimLeadingLines": "trim_leading_lines",
    "TrimMultipleLines": "trim_multiple_lines",
    "TrailingLinesKeepMax": "trailing_lines_keep_max",
}

# Older stores used this name before code preservation covered inline code too.
LEGACY_KEYS: dict[str, str] = {"SkipCodeBlocks": "preserve_code_blocks"}

_FIELD_NAMES = frozenset(field.name for field in fields(TrimSettings))
_NUMERIC_FIELDS = frozenset({"auto_trim_timeout", "trailing_lines_keep_max"})


def settings_from_mapping(data: Mapping[str, object] | None) -> TrimSettings:
    """Build settings from stored data, with defaults merged under it.

    Keys may use the persisted spelling (``TrimTrailingSpaces``), the legacy
    ``SkipCodeBlocks`` name, or the attribute spelling (``trim_trailing_spaces``).

    Args:
        data: Stored overrides; None or an empty mapping yields the defaults.

    Returns:
        TrimSettings: Validated settings.

    Raises:
        ConfigError: If a key is unknown or a value has the wrong type.

    Examples:
        settings_from_mapping({"TrimLeadingSpaces": True, "TrailingLinesKeepMax": 1})
    """
    if not data:
        return TrimSettings()

    changes: dict[str, object] = {}
    for key, value in data.items():
        name = SETTING_KEYS.get(key) or LEGACY_KEYS.get(key) or key
        if name not in _FIELD_NAMES:
            raise ConfigError(f"Unknown setting `{key}`")
        changes[name] = value

    settings = replace(TrimSettings(), **changes)
    validate_settings(settings)
    return settings


def settings_to_mapping(settings: TrimSettings) -> dict[str, object]:
    """Serialize settings using the persisted key names."""
    values = asdict(settings)
    return {key: values[name] for key, name in SETTING_KEYS.items()}


def load_settings(search_path: Path) -> TrimSettings:
    """Load settings from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.trim-whitespace]`` table from `pyproject.toml` and the
    ``[trim-whitespace]`` or ``[tool.trim-whitespace]`` table from
    `.trim-whitespace.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        TrimSettings: Loaded settings with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but is not a mapping, contains
            unsupported keys, or holds values of the wrong type.

    Examples:
        load_settings(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_settings = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "trim-whitespace")]
        )
        if pyproject_settings is not None:
            return pyproject_settings

        dotfile_settings = _load_from_file(
            current / ".trim-whitespace.toml",
            table_paths=[("trim-whitespace",), ("tool", "trim-whitespace")],
        )
        if dotfile_settings is not None:
            return dotfile_settings

        parent = current.parent
        if parent == current:
            break
        current = parent

    return TrimSettings()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> TrimSettings | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_settings = _extract_table(data, table_path)
        if raw_settings is _MISSING:
            continue
        return _build_settings_from_raw(raw_settings, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_settings_from_raw(
    raw_settings: object, config_file: Path, table_path: tuple[str, ...]
) -> TrimSettings:
    table_display = ".".join(table_path)

    if not isinstance(raw_settings, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return settings_from_mapping(raw_settings)
    except ConfigError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}: {error}") from error


def validate_settings(settings: TrimSettings) -> None:
    """Validate a `TrimSettings` instance.

    Raises:
        ConfigError: If a toggle is not a boolean, the auto-trim delay is not a
            finite non-negative number, or the keep count is not a non-negative
            integer.
    """
    for name in sorted(_FIELD_NAMES - _NUMERIC_FIELDS):
        if not isinstance(getattr(settings, name), bool):
            raise ConfigError(f"`{name}` must be a boolean")

    timeout = settings.auto_trim_timeout
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigError("`auto_trim_timeout` must be a number")
    if not math.isfinite(timeout) or timeout < 0:
        raise ConfigError("`auto_trim_timeout` must be a non-negative number")

    keep_max = settings.trailing_lines_keep_max
    if isinstance(keep_max, bool) or not isinstance(keep_max, int):
        raise ConfigError("`trailing_lines_keep_max` must be an integer")
    if keep_max < 0:
        raise ConfigError("`trailing_lines_keep_max` must be a non-negative integer")


def apply_overrides(settings: TrimSettings, **overrides: object) -> TrimSettings:
    """Apply override values to `TrimSettings`.

    Args:
        settings: Base settings to update.
        overrides: Override values keyed by attribute name; values set to None
            are ignored.

    Returns:
        TrimSettings: New settings with the overrides applied, or `settings`
        itself when nothing changes.

    Raises:
        TypeError: If an override name is not defined on `TrimSettings`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return settings
    return replace(settings, **changes)


def build_settings(search_path: Path, **overrides: object) -> TrimSettings:
    """Load, override, and validate settings.

    Examples:
        settings = build_settings(Path.cwd(), preserve_code_blocks=False)
    """
    settings = load_settings(search_path)
    settings = apply_overrides(settings, **overrides)
    validate_settings(settings)
    return settings


def parse_timeout(raw_value: str) -> float:
    """Parse user input for the auto-trim delay, in seconds.

    Raises:
        InvalidNumberError: If the input is not a finite non-negative number.

    Examples:
        parse_timeout("1.5")  # 1.5
    """
    try:
        value = float(str(raw_value).strip())
    except ValueError as error:
        raise InvalidNumberError("auto_trim_timeout", raw_value) from error

    if not math.isfinite(value) or value < 0:
        raise InvalidNumberError("auto_trim_timeout", raw_value)
    return value


def parse_keep_max(raw_value: str) -> int:
    """Parse user input for the number of trailing line endings to keep.

    Raises:
        InvalidNumberError: If the input is not a non-negative integer.
    """
    try:
        value = int(str(raw_value).strip())
    except ValueError as error:
        raise InvalidNumberError("trailing_lines_keep_max", raw_value) from error

    if value < 0:
        raise InvalidNumberError("trailing_lines_keep_max", raw_value)
    return value
