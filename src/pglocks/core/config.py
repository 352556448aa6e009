"""
Configuration for pglocks.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, cast

import yaml

from pglocks.core.exceptions import ConfigurationError
from pglocks.core.logging import logger

CONFIG_FILE_NAME = ".pglocks"
VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
DATA_FILE_SUFFIXES = (".yaml", ".yml", ".json")

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0",
    # None means the reference table bundled with the package
    "data": {"file": None},
    "api": {"host": "127.0.0.1", "port": 8000},
    "export": {"output_dir": "public"},
    "logging": {"level": "WARNING", "file": None, "rotation_size_mb": 10, "debug_mode": False},
}


class ConfigValidator:
    """
    Configuration validator.

    Validations:
    1. API port in the unprivileged range
    2. Known log level
    3. Data file with a supported extension
    """

    def validate_config(self, config: Dict[str, Any]) -> None:
        """Validate the merged configuration, raising ConfigurationError."""
        port = config.get("api", {}).get("port")
        if not isinstance(port, int) or isinstance(port, bool) or port < 1024 or port > 65535:
            logger.error("Invalid port configuration", port=port)
            raise ConfigurationError(
                f"Invalid API port: {port}", context={"setting": "api.port", "value": port}
            )

        level = str(config.get("logging", {}).get("level", "")).upper()
        if level not in VALID_LOG_LEVELS:
            logger.error("Invalid log level", value=level)
            raise ConfigurationError(
                f"Invalid log level: {level}. Allowed: {', '.join(VALID_LOG_LEVELS)}",
                context={"setting": "logging.level", "value": level},
            )

        data_file = config.get("data", {}).get("file")
        if data_file is not None and Path(str(data_file)).suffix.lower() not in DATA_FILE_SUFFIXES:
            logger.error("Unsupported data file", file=str(data_file))
            raise ConfigurationError(
                f"Unsupported data file: {data_file}. "
                f"Expected one of {', '.join(DATA_FILE_SUFFIXES)}",
                context={"setting": "data.file", "value": str(data_file)},
            )


class Settings:
    """
    Main configuration.

    Priority order:
    1. Default values
    2. .pglocks file in the working directory (YAML)
    3. Environment variables
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._explicit_path = config_path
        self.config = self._load_config()
        self.validator = ConfigValidator()
        self.validator.validate_config(self.config)
        logger.debug(
            "Settings initialized",
            config_source=str(self._find_config_file() or "defaults"),
        )

    def _find_config_file(self) -> Optional[Path]:
        """Explicit path first, then `.pglocks` in the current directory."""
        if self._explicit_path is not None:
            if not self._explicit_path.is_file():
                raise ConfigurationError(f"Configuration file not found: {self._explicit_path}")
            return self._explicit_path

        local_config = Path.cwd() / CONFIG_FILE_NAME
        if local_config.is_file():
            return local_config

        return None

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration in priority order.

        1. Defaults
        2. .pglocks file
        3. Environment variables
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        config_path = self._find_config_file()
        if config_path:
            try:
                with open(config_path, encoding="utf-8") as f:
                    file_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.error(
                    "Error reading configuration file", file=str(config_path), error=str(e)
                )
                raise ConfigurationError(f"Error reading configuration file: {e}", cause=e) from e

            if file_config is not None and not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Configuration file must contain a mapping: {config_path}"
                )
            if file_config:
                self._deep_merge(config, file_config)
                logger.debug("Config loaded", file=str(config_path), keys=list(file_config.keys()))

        env_overrides = {
            "PGLOCKS_PORT": ("api", "port"),
            "PGLOCKS_HOST": ("api", "host"),
            "PGLOCKS_LOG_LEVEL": ("logging", "level"),
            "PGLOCKS_DATA_FILE": ("data", "file"),
            "PGLOCKS_EXPORT_DIR": ("export", "output_dir"),
        }

        for env_key, path_tuple in env_overrides.items():
            env_value = os.getenv(env_key)
            if env_value:
                value_to_set: Any = env_value
                if env_key == "PGLOCKS_PORT":
                    try:
                        value_to_set = int(env_value)
                    except ValueError:
                        pass  # Rejected by the validator
                self._set_nested(config, path_tuple, value_to_set)

        return config

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> None:
        """Deep merge of dictionaries."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(cast(Dict[str, Any], base[key]), cast(Dict[str, Any], value))
            else:
                base[key] = value

    def _set_nested(self, data: Dict[str, Any], path: tuple[str, ...], value: Any) -> None:
        """Set value at nested path."""
        current = data
        for key in path[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value, supporting dotted paths: "api.port"."""
        if "." in key:
            current: Any = self.config
            for part in key.split("."):
                if isinstance(current, dict) and part in current:
                    current = current[part]
                else:
                    return default
            return current
        return self.config.get(key, default)

    def require(self, key: str) -> Any:
        """
        Get a value or raise.

        For settings that must be present and non-null.
        """
        value = self.get(key)
        if value is None:
            logger.error("Required config missing", key=key)
            raise ConfigurationError(f"Missing required config: {key}")
        return value

    @property
    def data_file(self) -> Optional[Path]:
        value = self.get("data.file")
        return Path(value) if value else None

    @property
    def export_dir(self) -> Path:
        return Path(self.require("export.output_dir"))
