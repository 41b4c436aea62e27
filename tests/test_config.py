"""Tests for configuration loading."""

from pathlib import Path

import pytest

from mdv.config import Config, DocsConfig, ServerConfig


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "mdv.toml"
        config_file.write_text("""
[server]
host = "0.0.0.0"
port = 3000
open = true

[docs]
target_dir = "notes"
""")

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000
        assert config.server.open is True
        assert config.docs.target_dir == tmp_path / "notes"
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Load empty config with defaults relative to config file."""
        config_file = tmp_path / "mdv.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8888
        assert config.server.open is False
        assert config.docs.target_dir == tmp_path

    def test__no_config_file__returns_defaults(self) -> None:
        """Return built-in defaults when nothing is discovered."""
        config = Config.load()

        assert config.server == ServerConfig()
        assert config.docs == DocsConfig()
        assert config.config_path is None

    def test__missing_explicit_path__raises_file_not_found(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for an explicit path that doesn't exist."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "nonexistent.toml")

    def test__config_in_parent__discovered(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Discover mdv.toml in a parent of the working directory."""
        (tmp_path / "mdv.toml").write_text("[server]\nport = 4000\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.server.port == 4000
        assert config.config_path == tmp_path / "mdv.toml"

    def test__user_config__discovered(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Fall back to the per-user config file."""
        user_config = tmp_path / "user" / "mdv.toml"
        user_config.parent.mkdir()
        user_config.write_text("[server]\nport = 5000\n")
        monkeypatch.setattr("mdv.config.USER_CONFIG_PATH", user_config)

        config = Config.load()

        assert config.server.port == 5000

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('server = "x"', "server section must be a dictionary"),
            ('[server]\nhost = 1', "server.host must be a string"),
            ('[server]\nport = "80"', "server.port must be an integer"),
            ("[server]\nport = true", "server.port must be an integer"),
            ('[server]\nopen = "yes"', "server.open must be a boolean"),
            ("docs = 3", "docs section must be a dictionary"),
            ("[docs]\ntarget_dir = 1", "docs.target_dir must be a string"),
            ("[server", "Invalid TOML"),
        ],
    )
    def test__invalid_value__raises_value_error(
        self, tmp_path: Path, content: str, message: str
    ) -> None:
        """Raise ValueError naming the offending key."""
        config_file = tmp_path / "mdv.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestConfigWithEnv:
    """Tests for Config.with_env()."""

    def test__env_values__override_file(self, tmp_path: Path) -> None:
        """Environment variables override file values."""
        config = Config(server=ServerConfig(port=3000), docs=DocsConfig())

        result = config.with_env(
            {
                "MDV_HOST": "0.0.0.0",
                "MDV_PORT": "9000",
                "MDV_OPEN": "true",
                "MDV_TARGET_DIR": str(tmp_path),
            }
        )

        assert result.server.host == "0.0.0.0"
        assert result.server.port == 9000
        assert result.server.open is True
        assert result.docs.target_dir == tmp_path

    def test__no_env__keeps_values(self) -> None:
        """Without variables the config is unchanged."""
        config = Config(server=ServerConfig(port=3000, open=True), docs=DocsConfig())

        result = config.with_env({})

        assert result.server == config.server
        assert result.docs == config.docs

    @pytest.mark.parametrize(("raw", "expected"), [("1", True), ("off", False), ("No", False)])
    def test__open_values__parsed_as_bool(self, raw: str, expected: bool) -> None:
        """Accept common boolean spellings."""
        config = Config(server=ServerConfig(), docs=DocsConfig())

        assert config.with_env({"MDV_OPEN": raw}).server.open is expected

    def test__invalid_port__raises_value_error(self) -> None:
        """Reject a non-numeric port."""
        config = Config(server=ServerConfig(), docs=DocsConfig())

        with pytest.raises(ValueError, match="MDV_PORT must be an integer"):
            config.with_env({"MDV_PORT": "eighty"})

    def test__invalid_open__raises_value_error(self) -> None:
        """Reject an unrecognized boolean."""
        config = Config(server=ServerConfig(), docs=DocsConfig())

        with pytest.raises(ValueError, match="MDV_OPEN must be a boolean"):
            config.with_env({"MDV_OPEN": "maybe"})

    def test__reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Use os.environ when no mapping is given."""
        monkeypatch.setenv("MDV_PORT", "7000")
        config = Config(server=ServerConfig(), docs=DocsConfig())

        assert config.with_env().server.port == 7000


class TestConfigWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__overrides__applied_without_mutation(self, tmp_path: Path) -> None:
        """Return a new config; the original is untouched."""
        config = Config(server=ServerConfig(), docs=DocsConfig())

        result = config.with_overrides(port=1234, open_browser=True, target_dir=tmp_path)

        assert result.server.port == 1234
        assert result.server.open is True
        assert result.docs.target_dir == tmp_path
        assert config.server.port == 8888
        assert config.docs.target_dir == Path(".")

    def test__none_values__keep_existing(self) -> None:
        """None means no override."""
        config = Config(server=ServerConfig(host="0.0.0.0", port=3000), docs=DocsConfig())

        result = config.with_overrides()

        assert result.server.host == "0.0.0.0"
        assert result.server.port == 3000

    def test__precedence__flag_over_env_over_file(self, tmp_path: Path) -> None:
        """Flags beat environment, which beats the config file."""
        config_file = tmp_path / "mdv.toml"
        config_file.write_text("[server]\nport = 1000\nhost = \"10.0.0.1\"\n")

        config = (
            Config.load(config_file)
            .with_env({"MDV_PORT": "2000", "MDV_OPEN": "1"})
            .with_overrides(port=3000)
        )

        assert config.server.port == 3000
        assert config.server.open is True
        assert config.server.host == "10.0.0.1"


class TestConfigResolveRoot:
    """Tests for Config.resolve_root()."""

    def test__existing_directory__returns_absolute_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Resolve a relative target directory against the working directory."""
        (tmp_path / "docs").mkdir()
        monkeypatch.chdir(tmp_path)
        config = Config(server=ServerConfig(), docs=DocsConfig(target_dir=Path("docs")))

        root = config.resolve_root()

        assert root.is_absolute()
        assert root == (tmp_path / "docs").resolve()

    def test__missing_directory__raises_value_error(self, tmp_path: Path) -> None:
        """Reject a target directory that doesn't exist."""
        config = Config(server=ServerConfig(), docs=DocsConfig(target_dir=tmp_path / "nope"))

        with pytest.raises(ValueError, match="Target directory not found"):
            config.resolve_root()

    def test__file_target__raises_value_error(self, tmp_path: Path) -> None:
        """Reject a target that is a file."""
        target = tmp_path / "file.md"
        target.write_text("x")
        config = Config(server=ServerConfig(), docs=DocsConfig(target_dir=target))

        with pytest.raises(ValueError, match="Target directory not found"):
            config.resolve_root()
