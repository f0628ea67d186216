"""clannad configuration and settings.

This module provides the configuration model and I/O functions for
scan and archive defaults.

Configuration is stored in ~/.config/clannad/config.toml
"""

import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from clannad.archive.zipwriter import CompressionName
from clannad.core.paths import get_config_path
from clannad.models.policy import SymlinkPolicy
from clannad.scanners.follow import DEFAULT_MAX_SYMLINK_HOPS


class ClannadConfig(BaseModel):
    """Configuration for scanning and archiving.

    Attributes:
        policy: Default symlink policy for scan and zip commands.
        compression: Zip compression method for regular files.
        compresslevel: Compression level (0-9), None for the method default.
        max_symlink_hops: Maximum symlink chain length followed by the
            follow policies.
    """

    model_config = ConfigDict(extra="forbid")

    policy: Annotated[
        SymlinkPolicy,
        Field(description="Default symlink policy"),
    ] = SymlinkPolicy.PRESERVE
    compression: Annotated[
        CompressionName,
        Field(description="Zip compression method"),
    ] = "deflated"
    compresslevel: Annotated[
        int | None,
        Field(ge=0, le=9, description="Compression level (0-9)"),
    ] = None
    max_symlink_hops: Annotated[
        int,
        Field(ge=1, le=256, description="Maximum symlink chain length (1-256)"),
    ] = DEFAULT_MAX_SYMLINK_HOPS


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def get_default_config() -> ClannadConfig:
    """Get the default configuration.

    Returns:
        ClannadConfig with default values.
    """
    return ClannadConfig()


def load_config(path: Path | None = None) -> ClannadConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ClannadConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ClannadConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> ClannadConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded ClannadConfig, or the defaults if the file is missing.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return get_default_config()


def save_config(config: ClannadConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ClannadConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    import os
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: ClannadConfig) -> dict[str, object]:
    """Convert ClannadConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.

    Args:
        config: The ClannadConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    data = config.model_dump(mode="json", exclude_none=True)
    return dict(data)


def require_config(config_path: Path | None = None) -> ClannadConfig:
    """Load configuration or exit with a helpful error message.

    This is a convenience wrapper around load_config_or_default() for CLI
    commands. A missing file yields the defaults; an unreadable or invalid
    one prints the problem and exits.

    Args:
        config_path: Optional custom config path.

    Returns:
        Loaded or default ClannadConfig.

    Raises:
        typer.Exit: If the config file exists but cannot be loaded.
    """
    import typer

    from clannad.utils.formatting import print_error, print_info

    path = config_path or get_config_path()
    try:
        return load_config_or_default(path)
    except ConfigError as e:
        print_error(str(e))
        print_info(f"Fix or remove {path}, or run 'clannad config init --force'.")
        raise typer.Exit(code=1) from e
