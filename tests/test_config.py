"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest

from docnav.config import Config, ServerConfig, SidebarsConfig


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "docnav.toml"
        config_file.write_text("""
[server]
host = "0.0.0.0"
port = 3000

[sidebars]
sidebars_file = "build/sidebars.json"
docs_file = "build/docs.json"
version_name = "1.0.0"
""")

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000
        assert config.sidebars.sidebars_file == tmp_path / "build/sidebars.json"
        assert config.sidebars.docs_file == tmp_path / "build/docs.json"
        assert config.sidebars.version_name == "1.0.0"
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Load minimal config with defaults relative to config file."""
        config_file = tmp_path / "docnav.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.sidebars.sidebars_file == tmp_path / "sidebars.json"
        assert config.sidebars.docs_file == tmp_path / "docs.json"
        assert config.sidebars.version_name == "current"

    def test__missing_explicit_path__raises_error(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for missing explicit config file."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "nonexistent.toml")

    def test__no_path_no_discovery__returns_defaults(self) -> None:
        """Return defaults when no config file found."""
        with patch.object(Config, "_discover_config", return_value=None):
            config = Config.load()

        assert config.server == ServerConfig()
        assert config.sidebars == SidebarsConfig()
        assert config.sidebars.sidebars_file == Path("sidebars.json")
        assert config.config_path is None

    def test__invalid_toml__raises_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docnav.toml"
        config_file.write_text("[server\n")

        with pytest.raises(ValueError, match="Invalid TOML"):
            Config.load(config_file)


class TestConfigValidation:
    """Tests for configuration type checks."""

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('server = "x"', "server section must be a dictionary"),
            ("[server]\nhost = 1", "server.host must be a string"),
            ('[server]\nport = "80"', "server.port must be an integer"),
            ("[server]\nport = true", "server.port must be an integer"),
            ("sidebars = 1", "sidebars section must be a dictionary"),
            ("[sidebars]\nsidebars_file = 1", "sidebars.sidebars_file must be a string"),
            ("[sidebars]\ndocs_file = []", "sidebars.docs_file must be a string"),
            ('[sidebars]\nversion_name = ""', "sidebars.version_name must be a non-empty"),
        ],
    )
    def test__invalid_value__raises_error(
        self,
        tmp_path: Path,
        content: str,
        message: str,
    ) -> None:
        config_file = tmp_path / "docnav.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestConfigDiscovery:
    """Tests for config file discovery."""

    def test__config_in_current_dir__found(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docnav.toml"
        config_file.write_text("[server]\nport = 9000")

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            discovered = Config._discover_config()

        assert discovered == config_file

    def test__config_in_parent_dir__found(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docnav.toml"
        config_file.write_text("[server]\nport = 9000")
        subdir = tmp_path / "sub" / "dir"
        subdir.mkdir(parents=True)

        with patch("pathlib.Path.cwd", return_value=subdir):
            discovered = Config._discover_config()

        assert discovered == config_file


class TestConfigWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__overrides_applied__original_unchanged(self) -> None:
        config = Config(server=ServerConfig(), sidebars=SidebarsConfig())

        result = config.with_overrides(port=9000, docs_file=Path("out/docs.json"))

        assert result.server.port == 9000
        assert result.server.host == "127.0.0.1"
        assert result.sidebars.docs_file == Path("out/docs.json")
        assert result.sidebars.sidebars_file == Path("sidebars.json")
        assert config.server.port == 8080
        assert config.sidebars.docs_file == Path("docs.json")

    def test__no_overrides__same_values(self) -> None:
        config = Config(server=ServerConfig(), sidebars=SidebarsConfig())

        assert config.with_overrides() == config
