"""Configuration management for Docnav.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "docnav.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class SidebarsConfig:
    """Sidebars configuration."""

    sidebars_file: Path = field(default_factory=lambda: Path("sidebars.json"))
    docs_file: Path = field(default_factory=lambda: Path("docs.json"))
    version_name: str = "current"


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    sidebars: SidebarsConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docnav.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        return cls(server=ServerConfig(), sidebars=SidebarsConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            sidebars=cls._parse_sidebars(data.get("sidebars"), config_dir),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_sidebars(cls, data: object, config_dir: Path) -> SidebarsConfig:
        """Parse sidebars configuration section.

        Args:
            data: Raw sidebars section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SidebarsConfig instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("sidebars section must be a dictionary")

        sidebars_file = data.get("sidebars_file", "sidebars.json")
        if not isinstance(sidebars_file, str):
            raise ValueError("sidebars.sidebars_file must be a string")

        docs_file = data.get("docs_file", "docs.json")
        if not isinstance(docs_file, str):
            raise ValueError("sidebars.docs_file must be a string")

        version_name = data.get("version_name", "current")
        if not isinstance(version_name, str) or not version_name:
            raise ValueError("sidebars.version_name must be a non-empty string")

        return SidebarsConfig(
            sidebars_file=config_dir / sidebars_file,
            docs_file=config_dir / docs_file,
            version_name=version_name,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        sidebars_file: Path | None = None,
        docs_file: Path | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            sidebars_file: Override sidebars.sidebars_file
            docs_file: Override sidebars.docs_file

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        sidebars = self.sidebars
        if sidebars_file is not None or docs_file is not None:
            sidebars = replace(
                self.sidebars,
                sidebars_file=(
                    sidebars_file
                    if sidebars_file is not None
                    else self.sidebars.sidebars_file
                ),
                docs_file=docs_file if docs_file is not None else self.sidebars.docs_file,
            )

        return replace(self, server=server, sidebars=sidebars)
