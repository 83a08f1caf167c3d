"""Custom YAML config source with conf.d directory support.

Extends pydantic-settings YamlConfigSettingsSource to support:
- Main YAML file (e.g., conf/queue.yaml)
- conf.d directory merging (e.g., conf/queue.d/*.yaml)
- Alphabetical file ordering in conf.d
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import YamlConfigSettingsSource

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings


class ConfDYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings source with conf.d directory support.

    Supports the standard Linux conf.d pattern:
    - conf/queue.yaml        (base configuration)
    - conf/queue.d/*.yaml    (override files, merged alphabetically)

    An environment variable can override the config directory, for example
    ``QUEUE_CONFIG_DIR=/etc/transfer-queue``.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: str,
        confd_dir: str | None,
        config_dir_env: str,
        base_dir: str = "conf",
        yaml_file_encoding: str | None = "utf-8",
    ) -> None:
        """Initialize the conf.d YAML source.

        Args:
            settings_cls: The settings class being configured.
            yaml_file: Main YAML file name (e.g., "queue.yaml").
            confd_dir: conf.d subdirectory name (e.g., "queue.d"), or None to disable.
            config_dir_env: Environment variable to override base directory.
            base_dir: Default base directory for config files.
            yaml_file_encoding: File encoding for YAML files.
        """
        config_base = Path(os.getenv(config_dir_env, base_dir))

        yaml_files: list[Path] = []

        main_file = config_base / yaml_file
        if main_file.exists():
            yaml_files.append(main_file)

        if confd_dir:
            confd_path = config_base / confd_dir
            if confd_path.exists() and confd_path.is_dir():
                yaml_files.extend(sorted(confd_path.glob("*.yaml")))
                yaml_files.extend(sorted(confd_path.glob("*.yml")))

        self._yaml_files = yaml_files

        super().__init__(
            settings_cls=settings_cls,
            yaml_file=yaml_files if yaml_files else None,
            yaml_file_encoding=yaml_file_encoding,
        )

    def __repr__(self) -> str:
        """Return human-readable summary of configured YAML files."""
        files_str = ", ".join(str(f) for f in self._yaml_files)
        return f"{self.__class__.__name__}(yaml_files=[{files_str}])"


def create_redis_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for RedisSettings.

    Loads from conf/redis.yaml and conf/redis.d/*.yaml.
    Override directory with: REDIS_CONFIG_DIR=/custom/path
    """
    return ConfDYamlConfigSettingsSource(
        settings_cls,
        yaml_file="redis.yaml",
        confd_dir="redis.d",
        config_dir_env="REDIS_CONFIG_DIR",
    )


def create_queue_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for QueueSettings.

    Loads from conf/queue.yaml and conf/queue.d/*.yaml.
    Override directory with: QUEUE_CONFIG_DIR=/custom/path
    """
    return ConfDYamlConfigSettingsSource(
        settings_cls,
        yaml_file="queue.yaml",
        confd_dir="queue.d",
        config_dir_env="QUEUE_CONFIG_DIR",
    )


def create_logging_yaml_source(settings_cls: type[BaseSettings]) -> ConfDYamlConfigSettingsSource:
    """Create YAML source for LoggingSettings.

    Loads from conf/logging.yaml and conf/logging.d/*.yaml.
    Override directory with: LOGGING_CONFIG_DIR=/custom/path
    """
    return ConfDYamlConfigSettingsSource(
        settings_cls,
        yaml_file="logging.yaml",
        confd_dir="logging.d",
        config_dir_env="LOGGING_CONFIG_DIR",
    )
