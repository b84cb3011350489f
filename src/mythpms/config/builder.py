"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building MythPMSConfig by composing
multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from mythpms.config.env import (
    COMMERCIAL_FREE_CHANNELS_VAR,
    DATABASE_DRIVER_VAR,
    DATABASE_HOST_VAR,
    DATABASE_PASSWORD_VAR,
    DATABASE_PATH_VAR,
    LIBRARY_ROOT_VAR,
    LIBRARY_SERVER_TOKEN_VAR,
    LIBRARY_SERVER_URL_VAR,
    LOG_DIR_VAR,
    NICENESS_VAR,
    SCRATCH_DIR_VAR,
    TOOLS_BIN_DIR_VAR,
    EnvReader,
)
from mythpms.config.models import (
    DEFAULT_COMMERCIAL_FREE_CHANNELS,
    CatalogConfig,
    CommercialsConfig,
    EmailLogMode,
    LibraryConfig,
    LibraryServerConfig,
    LoggingConfig,
    MythPMSConfig,
    ProcessConfig,
    RunLogConfig,
    ToolPathsConfig,
    TranscodeConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Catalog
    database_driver: str | None = None
    database_host: str | None = None
    database_port: int | None = None
    database_user: str | None = None
    database_password: str | None = None
    database_name: str | None = None
    database_path: Path | None = None
    database_timeout: float | None = None

    # Tool paths
    tools_bin_dir: Path | None = None
    mythcommflag_path: Path | None = None
    mythutil_path: Path | None = None
    mythtranscode_path: Path | None = None
    handbrake_path: Path | None = None

    # Commercials
    commercial_free_channels: list[str] | None = None
    commflag_override_file: Path | None = None
    original_extension: str | None = None
    scratch_dir: Path | None = None
    commercial_free_extension: str | None = None

    # Transcode
    transcode_extension: str | None = None
    transcode_preset: str | None = None
    transcode_audio_encoder: str | None = None
    transcode_audio_fallback: str | None = None
    transcode_audio_copy_mask: str | None = None

    # Library
    library_root: Path | None = None
    library_tv_dir: str | None = None
    library_movies_dir: str | None = None
    library_movie_storage_groups: list[str] | None = None
    library_tv_storage_groups: list[str] | None = None
    library_file_owner: str | None = None
    library_file_group: str | None = None

    # Library server
    library_server_enabled: bool | None = None
    library_server_url: str | None = None
    library_server_movie_section: str | None = None
    library_server_tv_section: str | None = None
    library_server_token: str | None = None
    library_server_timeout: int | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None

    # Run log
    run_log_directory: Path | None = None
    run_log_name: str | None = None
    run_log_failed_suffix: str | None = None
    run_log_email_queue_dir: Path | None = None
    run_log_email_mode: str | None = None
    run_log_retention_days: int | None = None

    # Process
    niceness: int | None = None


class ConfigBuilder:
    """Builds MythPMSConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config), source_name="file")
        builder.apply(source_from_env(reader), source_name="env")
        builder.apply(cli_source, source_name="cli")
        config = builder.build()
    """

    def __init__(self) -> None:
        """Initialize the builder with no values set."""
        self._values: dict[str, Any] = {}
        self._origins: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value (for debug logging).
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._origins[field_obj.name] = source_name

    def origin_of(self, key: str) -> str:
        """Return which source provided a value ("default" if none did)."""
        return self._origins.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> MythPMSConfig:
        """Build the final MythPMSConfig with defaults for unset values.

        Raises:
            ValueError: If a section rejects its values.
        """
        database_path = self._get("database_path", None)
        catalog = CatalogConfig(
            # A catalog file on its own means a SQLite catalog
            driver=self._get(
                "database_driver", "sqlite" if database_path else "mysql"
            ),
            host=self._get("database_host", "localhost"),
            port=self._get("database_port", 3306),
            user=self._get("database_user", "mythtv"),
            password=self._get("database_password", "mythtv"),
            database=self._get("database_name", "mythconverg"),
            database_path=database_path,
            timeout_seconds=self._get("database_timeout", 30.0),
        )

        tools = ToolPathsConfig(
            bin_dir=self._get("tools_bin_dir", Path("/usr/local/bin")),
            mythcommflag=self._get("mythcommflag_path", None),
            mythutil=self._get("mythutil_path", None),
            mythtranscode=self._get("mythtranscode_path", None),
            handbrake=self._get("handbrake_path", None),
        )

        commercials = CommercialsConfig(
            free_channels=tuple(
                self._get("commercial_free_channels", DEFAULT_COMMERCIAL_FREE_CHANNELS)
            ),
            override_settings_file=self._get("commflag_override_file", None),
            original_extension=self._get("original_extension", "mpg"),
            scratch_dir=self._get("scratch_dir", Path("/media/tmp")),
            commercial_free_extension=self._get("commercial_free_extension", "mp2"),
        )

        transcode = TranscodeConfig(
            extension=self._get("transcode_extension", "mp4"),
            preset=self._get("transcode_preset", "High Profile"),
            audio_encoder=self._get("transcode_audio_encoder", "copy:aac"),
            audio_fallback=self._get("transcode_audio_fallback", "faac"),
            audio_copy_mask=self._get("transcode_audio_copy_mask", "aac"),
        )

        library = LibraryConfig(
            root=self._get("library_root", Path("/media/pms")),
            tv_dir=self._get("library_tv_dir", "TV Shows"),
            movies_dir=self._get("library_movies_dir", "Movies"),
            movie_storage_groups=tuple(
                self._get("library_movie_storage_groups", ("Videos",))
            ),
            tv_storage_groups=tuple(
                self._get("library_tv_storage_groups", ("LiveTV", "Default"))
            ),
            file_owner=self._get("library_file_owner", None),
            file_group=self._get("library_file_group", None),
        )

        library_server = LibraryServerConfig(
            enabled=self._get("library_server_enabled", False),
            url=self._get("library_server_url", None),
            movie_section=self._get("library_server_movie_section", None),
            tv_section=self._get("library_server_tv_section", None),
            token=self._get("library_server_token", None),
            timeout_seconds=self._get("library_server_timeout", 30),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        run_log = RunLogConfig(
            directory=self._get("run_log_directory", Path("/var/log/mythtv")),
            name=self._get("run_log_name", "mythpms"),
            failed_suffix=self._get("run_log_failed_suffix", "FAILED"),
            email_queue_dir=self._get("run_log_email_queue_dir", None),
            email_mode=EmailLogMode(
                str(self._get("run_log_email_mode", "error")).lower()
            ),
            retention_days=self._get("run_log_retention_days", 4),
        )

        process = ProcessConfig(niceness=self._get("niceness", 19))

        return MythPMSConfig(
            catalog=catalog,
            tools=tools,
            commercials=commercials,
            transcode=transcode,
            library=library,
            library_server=library_server,
            logging=logging_config,
            run_log=run_log,
            process=process,
        )


def _path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def _str(value: Any) -> str | None:
    return str(value) if value is not None and value != "" else None


def _str_list(value: Any) -> list[str] | None:
    """Accept a TOML array or a colon-separated string."""
    if value is None:
        return None
    if isinstance(value, str):
        return [part.strip() for part in value.split(":") if part.strip()]
    return [str(item).strip() for item in value if str(item).strip()]


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from parsed TOML config file.

    Args:
        file_config: Parsed configuration dictionary from TOML file.

    Returns:
        ConfigSource with values from the config file.
    """
    catalog = file_config.get("catalog", {})
    tools = file_config.get("tools", {})
    commercials = file_config.get("commercials", {})
    transcode = file_config.get("transcode", {})
    library = file_config.get("library", {})
    server = file_config.get("library_server", {})
    logging_conf = file_config.get("logging", {})
    run_log = file_config.get("run_log", {})
    process = file_config.get("process", {})

    return ConfigSource(
        # Catalog
        database_driver=_str(catalog.get("driver")),
        database_host=_str(catalog.get("host")),
        database_port=catalog.get("port"),
        database_user=_str(catalog.get("user")),
        database_password=_str(catalog.get("password")),
        database_name=_str(catalog.get("database")),
        database_path=_path(catalog.get("database_path")),
        database_timeout=catalog.get("timeout_seconds"),
        # Tools
        tools_bin_dir=_path(tools.get("bin_dir")),
        mythcommflag_path=_path(tools.get("mythcommflag")),
        mythutil_path=_path(tools.get("mythutil")),
        mythtranscode_path=_path(tools.get("mythtranscode")),
        handbrake_path=_path(tools.get("handbrake")),
        # Commercials
        commercial_free_channels=_str_list(commercials.get("free_channels")),
        commflag_override_file=_path(commercials.get("override_settings_file")),
        original_extension=_str(commercials.get("original_extension")),
        scratch_dir=_path(commercials.get("scratch_dir")),
        commercial_free_extension=_str(commercials.get("commercial_free_extension")),
        # Transcode
        transcode_extension=_str(transcode.get("extension")),
        transcode_preset=_str(transcode.get("preset")),
        transcode_audio_encoder=_str(transcode.get("audio_encoder")),
        transcode_audio_fallback=_str(transcode.get("audio_fallback")),
        transcode_audio_copy_mask=_str(transcode.get("audio_copy_mask")),
        # Library
        library_root=_path(library.get("root")),
        library_tv_dir=_str(library.get("tv_dir")),
        library_movies_dir=_str(library.get("movies_dir")),
        library_movie_storage_groups=_str_list(library.get("movie_storage_groups")),
        library_tv_storage_groups=_str_list(library.get("tv_storage_groups")),
        library_file_owner=_str(library.get("file_owner")),
        library_file_group=_str(library.get("file_group")),
        # Library server
        library_server_enabled=server.get("enabled"),
        library_server_url=_str(server.get("url")),
        library_server_movie_section=_str(server.get("movie_section")),
        library_server_tv_section=_str(server.get("tv_section")),
        library_server_token=_str(server.get("token")),
        library_server_timeout=server.get("timeout_seconds"),
        # Logging
        logging_level=logging_conf.get("level"),
        logging_file=_path(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
        # Run log
        run_log_directory=_path(run_log.get("directory")),
        run_log_name=_str(run_log.get("name")),
        run_log_failed_suffix=_str(run_log.get("failed_suffix")),
        run_log_email_queue_dir=_path(run_log.get("email_queue_dir")),
        run_log_email_mode=_str(run_log.get("email_mode")),
        run_log_retention_days=run_log.get("retention_days"),
        # Process
        niceness=process.get("niceness"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        database_driver=reader.get_str(DATABASE_DRIVER_VAR),
        database_host=reader.get_str(DATABASE_HOST_VAR),
        database_password=reader.get_str(DATABASE_PASSWORD_VAR),
        database_path=reader.get_path(DATABASE_PATH_VAR),
        tools_bin_dir=reader.get_path(TOOLS_BIN_DIR_VAR),
        scratch_dir=reader.get_path(SCRATCH_DIR_VAR),
        commercial_free_channels=reader.get_list(COMMERCIAL_FREE_CHANNELS_VAR),
        library_root=reader.get_path(LIBRARY_ROOT_VAR),
        library_server_url=reader.get_str(LIBRARY_SERVER_URL_VAR),
        library_server_token=reader.get_str(LIBRARY_SERVER_TOKEN_VAR),
        run_log_directory=reader.get_path(LOG_DIR_VAR),
        niceness=reader.get_int(NICENESS_VAR),
    )
