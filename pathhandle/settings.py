"""
Settings for pathhandle. This is a pydantic model deserialized from the
config file pointed to by PATHHANDLE_CONFIG_PATH, with environment
variable overrides.
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import loguru
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from .drivers import CoreUploadDriver

    settings: "PathHandleSettings"


class LogSettings(BaseModel):
    """
    Settings for the loguru logger.
    """

    files: dict[Path, str] = {}
    "Egress files for the logger. Rotation (e.g. 500 MB, 1 week) is the string."

    def setup_logs(self, level: str):
        for file_name, rotation in self.files.items():
            loguru.logger.add(file_name, rotation=rotation, level=level, enqueue=True)

        return


class PathHandleSettings(BaseSettings):
    """
    Settings for pathhandle. Because this is a BaseSettings object, values in
    the config file can be overwritten with environment variables.
    """

    # Root that relative handles are joined onto. When unset, the root is
    # worked out from the location of the running program.
    root_path: Optional[Path] = None

    log_level: str = "INFO"
    log_settings: LogSettings = Field(default_factory=LogSettings)

    # Upload driver configuration, e.g. {"driver": "local"}.
    upload_driver: Optional[dict] = None

    model_config = SettingsConfigDict(env_prefix="pathhandle_")

    @property
    def driver(self) -> Optional["CoreUploadDriver"]:
        """
        The configured upload driver, or None if no driver is configured.
        """

        if self.upload_driver is None:
            return None

        from .drivers import upload_driver_from_config

        return upload_driver_from_config(self.upload_driver)

    @classmethod
    def from_file(cls, config_path: Path | str) -> "PathHandleSettings":
        """
        Loads the settings from the given path.
        """

        with open(config_path, "r") as handle:
            return cls.model_validate_json(handle.read())


# Automatically create a variable, settings, from the environment variable
# on _use_!

_settings = None


def load_settings() -> PathHandleSettings:
    """
    Load the settings from the config file.
    """

    global _settings

    try_paths = [
        os.environ.get("PATHHANDLE_CONFIG_PATH", None),
    ]

    for path in try_paths:
        if path is not None:
            path = Path(path)
        else:
            continue

        if path.exists():
            try:
                _settings = PathHandleSettings.from_file(path)
            except ValidationError as e:
                print(f"Error loading settings from {path}: {e}")
                raise e

            return _settings

    _settings = PathHandleSettings()

    return _settings


def __getattr__(name):
    """
    Try to load the settings if they haven't been loaded yet.
    """

    if name == "settings":
        global _settings

        if _settings is not None:
            return _settings

        return load_settings()

    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
