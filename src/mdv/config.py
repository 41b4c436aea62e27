"""Configuration management for mdv.

Supports TOML configuration with auto-discovery, environment overrides
(MDV_ prefix) and command-line overrides, applied in that order.
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "mdv.toml"
USER_CONFIG_PATH = Path("~/.config/mdv") / CONFIG_FILENAME
ENV_PREFIX = "MDV_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8888
    open: bool = False


@dataclass
class DocsConfig:
    """Served content configuration."""

    target_dir: Path = field(default_factory=lambda: Path("."))


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    docs: DocsConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file. Otherwise searches
        for mdv.toml in the current directory and its parents, then in
        ~/.config/mdv/.

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
        """Search for config file in current directory, parents and user dir.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                break
            current = parent

        user_config = USER_CONFIG_PATH.expanduser()
        if user_config.exists():
            return user_config
        return None

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(server=ServerConfig(), docs=DocsConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
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
            except tomllib.TOMLDecodeError as exc:
                raise ValueError(f"Invalid TOML in {path}: {exc}") from exc

        config_dir = path.parent

        server = cls._parse_server(data.get("server"))
        docs = cls._parse_docs(data.get("docs"), config_dir)

        return cls(server=server, docs=docs, config_path=path)

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

        port = data.get("port", 8888)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        open_browser = data.get("open", False)
        if not isinstance(open_browser, bool):
            raise ValueError("server.open must be a boolean")

        return ServerConfig(host=host, port=port, open=open_browser)

    @classmethod
    def _parse_docs(cls, data: object, config_dir: Path) -> DocsConfig:
        """Parse docs configuration section.

        Args:
            data: Raw docs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            DocsConfig instance
        """
        if data is None:
            return DocsConfig(target_dir=config_dir)

        if not isinstance(data, dict):
            raise ValueError("docs section must be a dictionary")

        target_dir = data.get("target_dir", ".")
        if not isinstance(target_dir, str):
            raise ValueError("docs.target_dir must be a string")

        return DocsConfig(target_dir=config_dir / Path(target_dir).expanduser())

    def with_env(self, environ: Mapping[str, str] | None = None) -> "Config":
        """Create a new Config with MDV_* environment variables applied.

        Args:
            environ: Environment mapping (default: os.environ)

        Returns:
            New Config instance with environment overrides applied

        Raises:
            ValueError: If a variable has an invalid value
        """
        env = os.environ if environ is None else environ

        port: int | None = None
        raw_port = env.get(f"{ENV_PREFIX}PORT")
        if raw_port is not None:
            try:
                port = int(raw_port)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}PORT must be an integer") from None

        open_browser: bool | None = None
        raw_open = env.get(f"{ENV_PREFIX}OPEN")
        if raw_open is not None:
            open_browser = _parse_bool(f"{ENV_PREFIX}OPEN", raw_open)

        raw_target = env.get(f"{ENV_PREFIX}TARGET_DIR")

        return self.with_overrides(
            host=env.get(f"{ENV_PREFIX}HOST"),
            port=port,
            open_browser=open_browser,
            target_dir=Path(raw_target).expanduser() if raw_target else None,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        open_browser: bool | None = None,
        target_dir: Path | None = None,
    ) -> "Config":
        """Create a new Config with overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            open_browser: Override server.open
            target_dir: Override docs.target_dir

        Returns:
            New Config instance with overrides applied
        """
        server = replace(
            self.server,
            host=host if host is not None else self.server.host,
            port=port if port is not None else self.server.port,
            open=open_browser if open_browser is not None else self.server.open,
        )

        docs = self.docs
        if target_dir is not None:
            docs = replace(self.docs, target_dir=target_dir)

        return replace(self, server=server, docs=docs)

    def resolve_root(self) -> Path:
        """Resolve the served root to an absolute directory.

        Returns:
            Absolute path of docs.target_dir

        Raises:
            ValueError: If the target directory does not exist or is not a directory
        """
        root = self.docs.target_dir.expanduser().resolve()
        if not root.is_dir():
            raise ValueError(f"Target directory not found: {self.docs.target_dir}")
        return root


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean")
