"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (MYTHPMS_*)
3. Config file (/etc/mythpms/config.toml)
4. Default values

Environment variables:
- MYTHPMS_CONFIG_PATH: Path to config file (overrides default location)
- MYTHPMS_DATABASE_DRIVER: Catalog driver, mysql or sqlite
- MYTHPMS_DATABASE_HOST: MySQL server holding mythconverg
- MYTHPMS_DATABASE_PASSWORD: MySQL password for the catalog user
- MYTHPMS_DATABASE_PATH: Path to a SQLite catalog
- MYTHPMS_TOOLS_BIN_DIR: Directory holding the MythTV and HandBrake binaries
- MYTHPMS_SCRATCH_DIR: Directory for the commercial-free intermediate file
- MYTHPMS_LIBRARY_ROOT: Root of the library-server link tree
- MYTHPMS_COMMERCIAL_FREE_CHANNELS: Colon-separated commercial-free channel ids
- MYTHPMS_LIBRARY_SERVER_URL: Base URL of the library server
- MYTHPMS_LIBRARY_SERVER_TOKEN: Access token for the library server
- MYTHPMS_LOG_DIR: Run-log directory
- MYTHPMS_NICENESS: Target process niceness
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from mythpms.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mythpms.config.env import CONFIG_PATH_VAR, EnvReader
from mythpms.config.models import MythPMSConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("/etc/mythpms/config.toml")


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or is invalid."""


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by MYTHPMS_CONFIG_PATH environment variable.
    """
    reader = env_reader or EnvReader()
    return reader.get_path(CONFIG_PATH_VAR, DEFAULT_CONFIG_FILE)


def load_config_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file.
        strict: If True, raise ConfigError on parse failures.
                If False (default), log a warning and return an empty dict.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.

    Raises:
        ConfigError: When strict=True and the file cannot be parsed.
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Cannot load config file {path}: {e}") from e
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    database_path: Path | None = None,
    log_dir: Path | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> MythPMSConfig:
    """Get mythpms configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MYTHPMS_CONFIG_PATH).
        database_path: CLI override for a SQLite catalog path.
        log_dir: CLI override for the run-log directory.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, a malformed config file or invalid value raises
            ConfigError instead of falling back to defaults.

    Returns:
        MythPMSConfig with merged configuration.

    Raises:
        ConfigError: When the merged values are rejected by a section, or
            when strict=True and the config file cannot be parsed.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)

    file_config = load_config_file(path, strict=strict)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    builder.apply(
        ConfigSource(database_path=database_path, run_log_directory=log_dir),
        source_name="cli",
    )

    try:
        config = builder.build()
    except ValueError as e:
        raise ConfigError(f"Invalid configuration ({path}): {e}") from e

    logger.debug(
        "Catalog %s (%s, from %s), run logs in %s (from %s)",
        config.catalog.location,
        config.catalog.driver,
        builder.origin_of("database_driver"),
        config.run_log.directory,
        builder.origin_of("run_log_directory"),
    )
    return config


def check_artifact_paths(config: MythPMSConfig) -> None:
    """Reject extensions that would give two artifacts the same file name.

    The original, commercial-free and transcoded files share the
    recording's stem and all end up in the storage directory, so their
    extensions must be pairwise distinct. A collision would let one
    artifact overwrite another and the original cleanup delete the file
    the catalog points at.

    Raises:
        ConfigError: If any two artifact extensions are equal.
    """
    extensions = (
        ("commercials.original_extension", config.commercials.original_extension),
        (
            "commercials.commercial_free_extension",
            config.commercials.commercial_free_extension,
        ),
        ("transcode.extension", config.transcode.extension),
    )
    problems = [
        f"{name_a} and {name_b} are both '{ext_a}'"
        for i, (name_a, ext_a) in enumerate(extensions)
        for name_b, ext_b in extensions[i + 1 :]
        if ext_a.casefold() == ext_b.casefold()
    ]
    if problems:
        raise ConfigError(
            "Artifact extensions must differ: " + "; ".join(problems)
        )


def validate_config(config: MythPMSConfig) -> list[str]:
    """Validate cross-field configuration constraints.

    Checks beyond what individual __post_init__ methods validate,
    such as relationships between different config sections.

    Args:
        config: The configuration to validate.

    Returns:
        List of error strings. Empty list means configuration is valid.
    """
    errors: list[str] = []

    library = config.library
    overlap = set(library.movie_storage_groups) & set(library.tv_storage_groups)
    for group in sorted(overlap):
        errors.append(f"Storage group '{group}' is listed as both movie and TV")

    server = config.library_server
    if server.enabled:
        if not server.url:
            errors.append("Library server is enabled but url is not set")
        if not server.movie_section and not server.tv_section:
            errors.append("Library server is enabled but no section ids are set")

    catalog = config.catalog
    if catalog.driver != "sqlite" and catalog.database_path is not None:
        errors.append(
            f"Catalog database_path {catalog.database_path} is ignored "
            f"with driver '{catalog.driver}'"
        )

    override = config.commercials.override_settings_file
    if override is not None and not override.exists():
        errors.append(f"Commercial-flag override file does not exist: {override}")

    for name, tool_path in (
        ("mythcommflag", config.tools.mythcommflag),
        ("mythutil", config.tools.mythutil),
        ("mythtranscode", config.tools.mythtranscode),
        ("handbrake", config.tools.handbrake),
    ):
        if tool_path is not None and not os.access(tool_path, os.X_OK):
            errors.append(f"Configured {name} is not executable: {tool_path}")

    return errors
