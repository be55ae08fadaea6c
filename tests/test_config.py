"""Tests for configuration loading and validation."""

import pytest

from histview.core.config import (
    Config,
    ConfigError,
    UIConfig,
    config_from_dict,
    create_default_config,
    get_config_path,
    load_config,
    parse_column,
)
from histview.domain.search import SearchMode
from histview.ui.blessed.components.layout import ColumnKind, ColumnSpec
from histview.ui.blessed.helpers.selection import SelectionMode
from histview.ui.blessed.styles.palette import Meaning


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the user's HISTFILE and config directories out of the tests."""
    monkeypatch.delenv("HISTFILE", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


class TestParseColumn:
    def test_kind_name_uses_default_width(self):
        assert parse_column("duration") == ColumnSpec(ColumnKind.DURATION, 5)
        assert parse_column("Directory") == ColumnSpec(ColumnKind.DIRECTORY, 20)

    def test_command_expands_by_default(self):
        assert parse_column("command") == ColumnSpec(ColumnKind.COMMAND, 0, expand=True)

    def test_command_with_width_is_fixed(self):
        assert parse_column({"kind": "command", "width": 30}) == ColumnSpec(
            ColumnKind.COMMAND, 30
        )

    def test_table_entry(self):
        spec = parse_column({"kind": "host", "width": 12, "expand": True})
        assert spec == ColumnSpec(ColumnKind.HOST, 12, expand=True)

    @pytest.mark.parametrize(
        "entry",
        ["session", {"width": 4}, {"kind": "exit", "width": "wide"}, 7,
         {"kind": "exit", "expand": "yes"}],
    )
    def test_invalid_entries(self, entry):
        with pytest.raises(ConfigError):
            parse_column(entry)


class TestValidation:
    def test_defaults_are_valid(self):
        config = Config()
        config.validate()
        assert config.search.search_mode() is SearchMode.FUZZY
        assert config.ui.render_mode().selection is SelectionMode.BACKGROUND
        assert not config.ui.render_mode().inverted

    def test_empty_columns_rejected(self):
        with pytest.raises(ConfigError):
            UIConfig(columns=[]).validate()

    def test_negative_width_rejected(self):
        with pytest.raises(ConfigError):
            UIConfig(columns=[ColumnSpec(ColumnKind.EXIT, -1)]).validate()

    def test_invalid_selection_mode(self):
        with pytest.raises(ConfigError):
            config_from_dict({"ui": {"selection_mode": "blink"}})

    def test_invalid_search_mode(self):
        with pytest.raises(ConfigError):
            config_from_dict({"search": {"mode": "regex"}})

    def test_unknown_timezone(self):
        with pytest.raises(ConfigError):
            config_from_dict({"ui": {"timezone": "Mars/Olympus_Mons"}})

    def test_invalid_color(self):
        with pytest.raises(ConfigError):
            config_from_dict({"theme": {"colors": {"guidance": "not-a-color"}}})

    def test_unknown_theme_role(self):
        with pytest.raises(ConfigError):
            config_from_dict({"theme": {"colors": {"sparkle": "red"}}})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError):
            config_from_dict({"logging": {"level": "chatty"}})

    @pytest.mark.parametrize(
        "document",
        [
            {"ui": {"inverted": "false"}},
            {"ui": {"timezone": 5}},
            {"ui": {"columns": "command"}},
            {"ui": {"selection_mode": 1}},
            {"ui": "compact"},
            {"search": {"mode": True}},
            {"theme": {"colors": "red"}},
            {"theme": {"colors": {"guidance": 3}}},
            {"theme": {"selection_background": 0x313244}},
            {"history": {"file": ["a", "b"]}},
            {"logging": {"level": 10}},
        ],
    )
    def test_wrong_types_rejected(self, document):
        with pytest.raises(ConfigError):
            config_from_dict(document)

    def test_inverted_string_not_coerced(self):
        """A quoted "false" must not silently turn the option on."""
        with pytest.raises(ConfigError, match="inverted"):
            config_from_dict({"ui": {"inverted": "false"}})

    def test_non_string_timezone_rejected_directly(self):
        with pytest.raises(ConfigError):
            UIConfig(timezone=5).validate()


class TestConfigFromDict:
    def test_full_document(self):
        config = config_from_dict(
            {
                "ui": {
                    "columns": ["exit", {"kind": "directory", "width": 12}, "command"],
                    "inverted": True,
                    "selection_mode": "reverse",
                },
                "search": {"mode": "prefix"},
                "theme": {
                    "colors": {"guidance": "#112233"},
                    "selection_background": "blue",
                },
                "logging": {"level": "debug"},
            }
        )

        assert [c.kind for c in config.ui.columns] == [
            ColumnKind.EXIT,
            ColumnKind.DIRECTORY,
            ColumnKind.COMMAND,
        ]
        assert config.ui.columns[1].width == 12
        assert config.ui.render_mode().inverted
        assert config.ui.render_mode().selection is SelectionMode.REVERSE
        assert config.search.search_mode() is SearchMode.PREFIX
        assert config.logging.level == "DEBUG"

        theme = config.theme.build()
        assert theme.style_for(Meaning.GUIDANCE).fg == (0x11, 0x22, 0x33)
        assert theme.style_for(Meaning.SELECTION).bg == "blue"

    def test_histfile_fallback(self, monkeypatch):
        monkeypatch.setenv("HISTFILE", "/tmp/zsh_history")
        assert config_from_dict({}).history.file == "/tmp/zsh_history"

    def test_explicit_history_file_wins(self, monkeypatch):
        monkeypatch.setenv("HISTFILE", "/tmp/zsh_history")
        config = config_from_dict({"history": {"file": "/data/history.jsonl"}})
        assert config.history.file == "/data/history.jsonl"

    def test_no_history_file(self):
        assert config_from_dict({}).history.file is None


class TestLoadConfig:
    def test_defaults_without_file(self):
        config = load_config()
        assert [c.kind for c in config.ui.columns] == [
            ColumnKind.DURATION,
            ColumnKind.TIME,
            ColumnKind.COMMAND,
        ]

    def test_local_file_preferred(self, tmp_path):
        (tmp_path / "histview.toml").write_text('[search]\nmode = "fulltext"\n')
        assert get_config_path() == tmp_path / "histview.toml"
        assert load_config().search.search_mode() is SearchMode.FULLTEXT

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[ui]\ninverted = true\n")
        assert load_config(path).ui.inverted

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[ui\ninverted = ")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_default_template_loads(self, tmp_path):
        path = tmp_path / "template.toml"
        path.write_text(create_default_config())
        config = load_config(path)
        assert config.search.search_mode() is SearchMode.FUZZY
        assert config.ui.columns[-1].expand
