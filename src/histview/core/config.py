"""
Configuration management for histview
"""

import os
import tomllib
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Any, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from histview.domain.search import SearchMode
from histview.ui.blessed.components.layout import (
    DEFAULT_COLUMNS,
    DEFAULT_COLUMN_WIDTHS,
    ColumnKind,
    ColumnSpec,
)
from histview.ui.blessed.helpers.selection import RenderMode, SelectionMode
from histview.ui.blessed.styles.palette import Theme, build_theme


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""


@dataclass
class UIConfig:
    """Configuration for the history list."""

    columns: List[ColumnSpec] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    inverted: bool = False
    selection_mode: str = "background"  # 'background' or 'reverse'
    timezone: Optional[str] = None  # IANA name, None for local time

    def validate(self) -> None:
        """Validate UI configuration values.

        Raises:
            ConfigError: If configuration values are invalid
        """
        if not self.columns:
            raise ConfigError("At least one column must be configured")
        for column in self.columns:
            if column.width < 0:
                raise ConfigError(
                    f"Column {column.kind.value!r} has negative width {column.width}"
                )
        expanding = [c.kind.value for c in self.columns if c.expand]
        if len(expanding) > 1:
            logger.warning(
                f"Several columns expand ({', '.join(expanding)}); "
                "the remaining width is split between them"
            )

        valid_modes = {mode.value for mode in SelectionMode}
        if self.selection_mode not in valid_modes:
            raise ConfigError(
                f"Invalid selection_mode: {self.selection_mode!r}. "
                f"Valid modes are: {sorted(valid_modes)}"
            )
        self.tzinfo()

    def render_mode(self) -> RenderMode:
        return RenderMode(
            inverted=self.inverted, selection=SelectionMode(self.selection_mode)
        )

    def tzinfo(self) -> Optional[tzinfo]:
        if self.timezone is None:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
            raise ConfigError(f"Unknown timezone: {self.timezone!r}") from e


@dataclass
class SearchConfig:
    """Configuration for query matching."""

    mode: str = "fuzzy"  # prefix, fulltext or fuzzy

    def validate(self) -> None:
        valid_modes = {mode.value for mode in SearchMode}
        if self.mode not in valid_modes:
            raise ConfigError(
                f"Invalid search mode: {self.mode!r}. Valid modes are: {sorted(valid_modes)}"
            )

    def search_mode(self) -> SearchMode:
        return SearchMode(self.mode)


@dataclass
class ThemeConfig:
    """Color overrides keyed by role (base, guidance, annotation, alert_*)."""

    colors: dict[str, str] = field(default_factory=dict)
    selection_background: Optional[str] = None

    def build(self) -> Theme:
        try:
            return build_theme(self.colors, self.selection_background)
        except ValueError as e:
            raise ConfigError(str(e)) from e


@dataclass
class HistoryConfig:
    """Where history is read from."""

    file: Optional[str] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # default: ~/.local/share/histview/histview.log

    def validate(self) -> None:
        valid_levels = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        if self.level.upper() not in valid_levels:
            raise ConfigError(f"Invalid log level: {self.level!r}")


@dataclass
class Config:
    """Main configuration object."""

    ui: UIConfig = field(default_factory=UIConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Validate every section once, before any rendering happens.

        Raises:
            ConfigError: If any value is invalid
        """
        self.ui.validate()
        self.search.validate()
        self.theme.build()
        self.logging.validate()


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "histview"
    return Path.home() / ".config" / "histview"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "histview"
    return Path.home() / ".local" / "share" / "histview"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/histview (or ~/.config/histview)
    """
    local_config = Path.cwd() / "histview.toml"
    if local_config.exists():
        return local_config
    return get_config_dir() / "config.toml"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# histview configuration

[ui]
# Columns from left to right. Either a kind name or a table:
#   { kind = "directory", width = 30 }
#   { kind = "command", expand = true }
# Kinds: duration, time, datetime, directory, host, user, exit, command
columns = ["duration", "time", "command"]

# Draw the newest entry at the top instead of next to the bottom input line
inverted = false

# How the selected row is marked: "background" or "reverse"
selection_mode = "background"

# Timezone for the datetime column (IANA name); local time when unset
# timezone = "Europe/Berlin"

[search]
# Highlighting and filtering mode: prefix, fulltext or fuzzy
mode = "fuzzy"

[theme]
# Foreground overrides per role: base, guidance, annotation,
# alert_info, alert_warn, alert_error
# colors = { guidance = "cyan", alert_error = "#ff5555" }
# selection_background = "#313244"

[history]
# History file (defaults to $HISTFILE)
# file = "~/.zsh_history"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/histview/histview.log)
# log_file = "/path/to/histview.log"
""".strip()


def parse_column(value: Any) -> ColumnSpec:
    """
    Parse one column entry: a kind name or a {kind, width, expand} table.

    Raises:
        ConfigError: If the entry is malformed
    """
    if isinstance(value, str):
        value = {"kind": value}
    if not isinstance(value, dict) or "kind" not in value:
        raise ConfigError(f"Invalid column entry: {value!r}")

    try:
        kind = ColumnKind(str(value["kind"]).lower())
    except ValueError:
        valid = [k.value for k in ColumnKind]
        raise ConfigError(
            f"Unknown column kind: {value['kind']!r}. Valid kinds are: {valid}"
        ) from None

    width = value.get("width", DEFAULT_COLUMN_WIDTHS[kind])
    expand = value.get("expand", kind is ColumnKind.COMMAND and "width" not in value)
    if not isinstance(width, int) or isinstance(width, bool):
        raise ConfigError(f"Column {kind.value!r} width must be an integer")
    if not isinstance(expand, bool):
        raise ConfigError(f"Column {kind.value!r} expand must be true or false")
    return ColumnSpec(kind, width, expand)


def _section(toml_data: dict[str, Any], name: str) -> Optional[dict[str, Any]]:
    """Return a top-level table, or None when it is absent."""
    if name not in toml_data:
        return None
    section = toml_data[name]
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _typed(
    section: dict[str, Any], name: str, key: str, expected: type, default: Any
) -> Any:
    """
    Read one value, checking its TOML type.

    Raises:
        ConfigError: If the value is present with the wrong type
    """
    value = section.get(key, default)
    if value is None:
        return None
    # bool is an int subclass; never accept one for the other
    if not isinstance(value, expected) or (
        isinstance(value, bool) and expected is not bool
    ):
        raise ConfigError(
            f"[{name}] {key} must be a {expected.__name__}, got {value!r}"
        )
    return value


def config_from_dict(toml_data: dict[str, Any]) -> Config:
    """Build and validate a Config from parsed TOML data.

    Raises:
        ConfigError: If a value has the wrong type or fails validation
    """
    config = Config()

    ui_data = _section(toml_data, "ui")
    if ui_data is not None:
        columns = _typed(ui_data, "ui", "columns", list, None)
        selection_mode = _typed(
            ui_data, "ui", "selection_mode", str, config.ui.selection_mode
        )
        config.ui = UIConfig(
            columns=[parse_column(c) for c in columns]
            if columns is not None
            else config.ui.columns,
            inverted=_typed(ui_data, "ui", "inverted", bool, config.ui.inverted),
            selection_mode=selection_mode.lower(),
            timezone=_typed(ui_data, "ui", "timezone", str, config.ui.timezone),
        )

    search_data = _section(toml_data, "search")
    if search_data is not None:
        mode = _typed(search_data, "search", "mode", str, config.search.mode)
        config.search = SearchConfig(mode=mode.lower())

    theme_data = _section(toml_data, "theme")
    if theme_data is not None:
        colors = _typed(theme_data, "theme", "colors", dict, {})
        for role, color in colors.items():
            if not isinstance(color, str):
                raise ConfigError(f"[theme] colors.{role} must be a str, got {color!r}")
        config.theme = ThemeConfig(
            colors=dict(colors),
            selection_background=_typed(
                theme_data, "theme", "selection_background", str, None
            ),
        )

    history_data = _section(toml_data, "history")
    if history_data is not None:
        history_file = _typed(history_data, "history", "file", str, None)
        config.history = HistoryConfig(
            file=str(Path(history_file).expanduser()) if history_file else None
        )

    logging_data = _section(toml_data, "logging")
    if logging_data is not None:
        log_file = _typed(logging_data, "logging", "log_file", str, None)
        if log_file:
            log_file = str(Path(log_file).expanduser())
        level = _typed(logging_data, "logging", "level", str, config.logging.level)
        config.logging = LoggingConfig(level=level.upper(), log_file=log_file)

    # Fall back to the shell's own history file
    if config.history.file is None and os.environ.get("HISTFILE"):
        config.history.file = os.environ["HISTFILE"]

    config.validate()
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, using defaults when it does not exist.

    Args:
        config_path: Explicit config file; defaults to get_config_path()

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values
    """
    path = config_path or get_config_path()

    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Configuration file not found: {path}")
        logger.debug(f"No configuration at {path}, using defaults")
        return config_from_dict({})

    try:
        with open(path, "rb") as f:
            toml_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    logger.debug(f"Loaded configuration from {path}")
    return config_from_dict(toml_data)
