"""Tests for configuration loading and saving."""

import tomllib
from pathlib import Path

import pytest
import typer
from clannad.core.config import (
    ClannadConfig,
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    get_default_config,
    load_config,
    load_config_or_default,
    require_config,
    save_config,
)
from clannad.models.policy import SymlinkPolicy
from pydantic import ValidationError


class TestClannadConfig:
    """Tests for the ClannadConfig model."""

    def test_defaults(self) -> None:
        """Defaults preserve symlinks and deflate files."""
        config = get_default_config()
        assert config.policy == SymlinkPolicy.PRESERVE
        assert config.compression == "deflated"
        assert config.compresslevel is None
        assert config.max_symlink_hops == 40

    def test_policy_from_string(self) -> None:
        """Policies validate from their string values."""
        config = ClannadConfig.model_validate({"policy": "follow-strict"})
        assert config.policy == SymlinkPolicy.FOLLOW_STRICT

    @pytest.mark.parametrize(
        "data",
        [
            {"policy": "sideways"},
            {"compression": "zstd"},
            {"compresslevel": 10},
            {"max_symlink_hops": 0},
            {"unknown": True},
        ],
    )
    def test_rejects_invalid(self, data: dict[str, object]) -> None:
        """Out-of-range values and unknown keys are rejected."""
        with pytest.raises(ValidationError):
            ClannadConfig.model_validate(data)


class TestLoadConfig:
    """Tests for load_config and load_config_or_default."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "config.toml")

    def test_missing_file_defaults(self, tmp_path: Path) -> None:
        """load_config_or_default falls back to the defaults."""
        assert load_config_or_default(tmp_path / "config.toml") == get_default_config()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values are read from TOML."""
        path = tmp_path / "config.toml"
        path.write_text('policy = "follow"\ncompression = "stored"\nmax_symlink_hops = 8\n')

        config = load_config(path)

        assert config.policy == SymlinkPolicy.FOLLOW
        assert config.compression == "stored"
        assert config.max_symlink_hops == 8

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("policy = \n")
        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text('policy = "sideways"\n')
        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config_or_default(path)

    def test_uses_default_path(self, isolated_config: Path) -> None:
        """Without a path the XDG config location is read."""
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text('policy = "basic"\n')
        assert load_config().policy == SymlinkPolicy.BASIC


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        config = ClannadConfig(policy=SymlinkPolicy.FOLLOW, compresslevel=9)
        path = save_config(config, tmp_path / "nested" / "config.toml")

        assert path == tmp_path / "nested" / "config.toml"
        assert load_config(path) == config

    def test_omits_unset_values(self, tmp_path: Path) -> None:
        """Unset optional values are left out of the file."""
        path = save_config(get_default_config(), tmp_path / "config.toml")
        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert "compresslevel" not in data
        assert data["policy"] == "preserve"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The atomic write leaves only the config file behind."""
        save_config(get_default_config(), tmp_path / "config.toml")
        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_write_failure(self, tmp_path: Path) -> None:
        """A path under a regular file cannot be written."""
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(ConfigError, match="Failed to write config"):
            save_config(get_default_config(), blocker / "config.toml")


class TestRequireConfig:
    """Tests for require_config."""

    def test_defaults_without_file(self, isolated_config: Path) -> None:
        """A missing file yields the defaults."""
        assert require_config() == get_default_config()

    def test_exits_on_invalid_file(self, tmp_path: Path) -> None:
        """An invalid file exits with code 1."""
        path = tmp_path / "config.toml"
        path.write_text("not toml at all [")
        with pytest.raises(typer.Exit) as exc_info:
            require_config(path)
        assert exc_info.value.exit_code == 1
