"""Configuration data models.

This module defines dataclasses for mythpms configuration options. All
sections are frozen: the configuration is built once per invocation and
passed explicitly to every stage.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

CATALOG_DRIVERS = ("mysql", "sqlite")

# Channels that broadcast without commercials (the operator's premium tier)
DEFAULT_COMMERCIAL_FREE_CHANNELS = (
    "1111",
    "1112",
    "1113",
    "1114",
    "1201",
    "1202",
    "1203",
)


class EmailLogMode(str, Enum):
    """When the run log is queued for mailing."""

    NEVER = "never"
    ERROR = "error"
    ALWAYS = "always"


@dataclass(frozen=True)
class CatalogConfig:
    """Configuration for the MythTV catalog database.

    ``driver = "mysql"`` connects to MythTV's ``mythconverg`` database on
    the backend's MySQL/MariaDB server with the credentials from the
    backend's ``config.xml``. ``driver = "sqlite"`` reads a SQLite copy of
    the same tables at ``database_path`` instead.
    """

    driver: str = "mysql"
    host: str = "localhost"
    port: int = 3306
    user: str = "mythtv"
    password: str = "mythtv"
    database: str = "mythconverg"

    # SQLite catalog file, only used with driver = "sqlite"
    database_path: Path | None = None

    # Seconds to wait for the server or for a lock held by another MythTV process
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.driver not in CATALOG_DRIVERS:
            raise ValueError(
                f"driver must be one of {CATALOG_DRIVERS}, got {self.driver!r}"
            )
        if self.driver == "sqlite" and self.database_path is None:
            raise ValueError("database_path is required when driver is 'sqlite'")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    @property
    def location(self) -> str:
        """Where the catalog lives, for log messages (no password)."""
        if self.driver == "sqlite":
            return str(self.database_path)
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


@dataclass(frozen=True)
class ToolPathsConfig:
    """Configuration for external tool paths.

    Individual paths are optional. An unset tool is looked up as
    ``bin_dir/<default executable name>``.
    """

    bin_dir: Path = Path("/usr/local/bin")
    mythcommflag: Path | None = None
    mythutil: Path | None = None
    mythtranscode: Path | None = None
    handbrake: Path | None = None


@dataclass(frozen=True)
class CommercialsConfig:
    """Configuration for commercial detection and removal."""

    free_channels: tuple[str, ...] = DEFAULT_COMMERCIAL_FREE_CHANNELS
    """Channel ids treated as commercial-free regardless of catalog status."""

    override_settings_file: Path | None = None
    """Optional ``mythcommflag --override-settings-file`` argument."""

    original_extension: str = "mpg"
    """Extension of an as-recorded file. Anything else was already processed."""

    scratch_dir: Path = Path("/media/tmp")
    """Where ``mythtranscode`` writes the commercial-free intermediate."""

    commercial_free_extension: str = "mp2"

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("original_extension", "commercial_free_extension"):
            value = getattr(self, name)
            if not value or value.startswith("."):
                raise ValueError(f"{name} must be a bare extension, got {value!r}")


@dataclass(frozen=True)
class TranscodeConfig:
    """Configuration for the HandBrake H.264 transcode."""

    extension: str = "mp4"
    preset: str = "High Profile"
    audio_encoder: str = "copy:aac"
    audio_fallback: str = "faac"
    audio_copy_mask: str = "aac"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.extension or self.extension.startswith("."):
            raise ValueError(
                f"extension must be a bare extension, got {self.extension!r}"
            )


@dataclass(frozen=True)
class LibraryConfig:
    """Configuration for the library-server link tree."""

    root: Path = Path("/media/pms")
    tv_dir: str = "TV Shows"
    movies_dir: str = "Movies"
    movie_storage_groups: tuple[str, ...] = ("Videos",)
    tv_storage_groups: tuple[str, ...] = ("LiveTV", "Default")

    # Owner/group applied to the best artifact and the link (None = leave as is)
    file_owner: str | None = None
    file_group: str | None = None

    @property
    def tv_root(self) -> Path:
        return self.root / self.tv_dir

    @property
    def movies_root(self) -> Path:
        return self.root / self.movies_dir


@dataclass(frozen=True)
class LibraryServerConfig:
    """Connection to the library server (Plex Media Server).

    The refresh is best-effort; a disabled or unreachable server only
    produces a log line.
    """

    enabled: bool = False
    url: str | None = None
    """Base URL of the server (e.g., "http://localhost:32400")."""

    movie_section: str | None = None
    tv_section: str | None = None

    token: str | None = None
    """Optional X-Plex-Token sent with refresh requests."""

    timeout_seconds: int = 30

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.url and not self.url.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        if not 1 <= self.timeout_seconds <= 300:
            raise ValueError("Timeout must be between 1 and 300 seconds")


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for process logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass(frozen=True)
class RunLogConfig:
    """Configuration for the per-recording run log."""

    directory: Path = Path("/var/log/mythtv")
    name: str = "mythpms"
    failed_suffix: str = "FAILED"

    # None = <directory>/emailQueue
    email_queue_dir: Path | None = None
    email_mode: EmailLogMode = EmailLogMode.ERROR

    # Delete *.log files in directory older than this (None or 0 = keep all)
    retention_days: int | None = 4

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not isinstance(self.email_mode, EmailLogMode):
            # Frozen dataclass: coerce via object.__setattr__
            object.__setattr__(self, "email_mode", EmailLogMode(self.email_mode))
        if self.retention_days is not None and self.retention_days < 0:
            raise ValueError(
                f"retention_days must be non-negative, got {self.retention_days}"
            )

    @property
    def resolved_email_queue_dir(self) -> Path:
        if self.email_queue_dir is not None:
            return self.email_queue_dir
        return self.directory / "emailQueue"


@dataclass(frozen=True)
class ProcessConfig:
    """Configuration for the worker process itself."""

    # Target niceness (None = leave unchanged)
    niceness: int | None = 19

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.niceness is not None and not -20 <= self.niceness <= 19:
            raise ValueError(f"niceness must be -20..19, got {self.niceness}")


@dataclass(frozen=True)
class MythPMSConfig:
    """Main configuration container for mythpms.

    Aggregates all configuration sections.
    """

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    commercials: CommercialsConfig = field(default_factory=CommercialsConfig)
    transcode: TranscodeConfig = field(default_factory=TranscodeConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)
    library_server: LibraryServerConfig = field(default_factory=LibraryServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    run_log: RunLogConfig = field(default_factory=RunLogConfig)
    process: ProcessConfig = field(default_factory=ProcessConfig)
