"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import (
    ALIGNMENT_NAMES,
    DEFAULT_DIVIDER_WIDTH,
    DEFAULT_LINK_SCHEME,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_LINE_LENGTH,
    THEME_NAMES,
)

CONFIG_TABLE = "micron-markup"
DOTFILE_NAME = ".micron-markup.toml"


@dataclass(frozen=True)
class ParserConfig:
    """Immutable settings threaded into every parse.

    A single instance can be shared by any number of concurrent parses; the
    per-document mutable state lives in `ParserState` instead.

    Attributes:
        theme: Theme name (``"dark"`` or ``"light"``) selecting the default
            foreground color and heading styles.
        default_alignment: Alignment restored by the reset directives.
        link_scheme: Prefix prepended to every link URL.
        divider_width: Repetition count used when a renderer expands a
            divider fill character into a line.
        max_file_size: Maximum file size in bytes that will be loaded.
        max_line_length: Maximum line length allowed when loading files.

    Examples:
        ParserConfig(theme="light", default_alignment="center")
    """

    theme: str = "dark"
    default_alignment: str = "left"
    link_scheme: str = DEFAULT_LINK_SCHEME
    divider_width: int = DEFAULT_DIVIDER_WIDTH

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`theme` must be one of: dark, light")
    """


def load_config(search_path: Path) -> ParserConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.micron-markup]`` table from `pyproject.toml` and the
    ``[micron-markup]`` or ``[tool.micron-markup]`` table from
    `.micron-markup.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ParserConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("pages"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / DOTFILE_NAME,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ParserConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ParserConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ParserConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return ParserConfig()

    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return ParserConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ParserConfig) -> None:
    """Validate a `ParserConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If the theme or alignment is unknown, the link scheme is
            not a string, or numeric settings are not positive integers.

    Examples:
        validate_config(ParserConfig(theme="light"))
    """
    if config.theme not in THEME_NAMES:
        raise ConfigError(f"`theme` must be one of: {', '.join(THEME_NAMES)}")
    if config.default_alignment not in ALIGNMENT_NAMES:
        raise ConfigError(
            f"`default_alignment` must be one of: {', '.join(ALIGNMENT_NAMES)}"
        )
    if not isinstance(config.link_scheme, str):
        raise ConfigError("`link_scheme` must be a string")

    values = {
        "divider_width": config.divider_width,
        "max_file_size": config.max_file_size,
        "max_line_length": config.max_line_length,
    }
    _ensure_integers(values)
    _ensure_positive(values)


def apply_overrides(config: ParserConfig, **overrides: object) -> ParserConfig:
    """Apply override values to a `ParserConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ParserConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ParserConfig`.

    Examples:
        updated = apply_overrides(config, theme="light")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ParserConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ParserConfig: Validated configuration ready for parsing.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), theme="light")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
