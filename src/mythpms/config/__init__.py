"""Configuration management for mythpms.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (MYTHPMS_*)
3. Config file (/etc/mythpms/config.toml)
4. Default values (lowest priority)
"""

from mythpms.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mythpms.config.env import EnvReader
from mythpms.config.loader import (
    DEFAULT_CONFIG_FILE,
    ConfigError,
    check_artifact_paths,
    get_config,
    get_default_config_path,
    load_config_file,
    validate_config,
)
from mythpms.config.logging_factory import build_logging_config
from mythpms.config.models import (
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

__all__ = [
    # Models
    "CatalogConfig",
    "CommercialsConfig",
    "EmailLogMode",
    "LibraryConfig",
    "LibraryServerConfig",
    "LoggingConfig",
    "MythPMSConfig",
    "ProcessConfig",
    "RunLogConfig",
    "ToolPathsConfig",
    "TranscodeConfig",
    # Loader
    "DEFAULT_CONFIG_FILE",
    "ConfigError",
    "check_artifact_paths",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "validate_config",
    # Builder
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
]
