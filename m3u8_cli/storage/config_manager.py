"""
Loads the optional INI file of default settings and builds the validated job.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from m3u8_cli.exceptions import ConfigurationError
from m3u8_cli.models.config import DEFAULT_OUTPUT_DIR, DownloadJob
from m3u8_cli.storage.headers import load_headers

log = logging.getLogger(__name__)

INT_KEYS = ("workers", "queue_size")
FLOAT_KEYS = ("timeout",)
STR_KEYS = ("dest", "header")


class ConfigManager:
    """Reads default settings from the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser()

    def load_defaults(self) -> dict[str, Any]:
        """
        Returns the settings found in the `DEFAULT` section of the INI file.

        A missing file is not an error; it simply yields no settings.

        Raises:
            ConfigurationError: If the file cannot be parsed or holds a value of
            the wrong type.
        """
        if not self.config_file_path.is_file():
            log.debug(f"No config file at '{self.config_file_path}', using defaults.")
            return {}

        try:
            self._parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        section = self._parser["DEFAULT"]
        settings: dict[str, Any] = {}
        try:
            for key in INT_KEYS:
                if key in section:
                    settings[key] = section.getint(key)
            for key in FLOAT_KEYS:
                if key in section:
                    settings[key] = section.getfloat(key)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value in configuration file '{self.config_file_path}': {e}"
            ) from e
        for key in STR_KEYS:
            if value := section.get(key, "").strip():
                settings[key] = value

        unknown = set(section) - set(INT_KEYS + FLOAT_KEYS + STR_KEYS)
        if unknown:
            log.warning(
                f"[yellow]Ignoring unknown config keys: {', '.join(sorted(unknown))}"
                "[/yellow]"
            )
        return settings

    def load_job(self, cli_options: dict[str, Any]) -> DownloadJob:
        """
        Merges the INI defaults with CLI options, loads the header file and
        validates the result.

        Args:
            cli_options: Options given on the command line. `None` values do not
            override the config file.

        Returns:
            A validated, immutable DownloadJob.

        Raises:
            ConfigurationError: If the header file or any setting is invalid.
        """
        settings = self.load_defaults()
        settings.update({k: v for k, v in cli_options.items() if v is not None})

        header_file = settings.pop("header", None)
        output_dir = settings.pop("dest", DEFAULT_OUTPUT_DIR)
        headers = load_headers(Path(header_file) if header_file else None)

        try:
            return DownloadJob(
                output_dir=Path(output_dir), headers=tuple(headers), **settings
            )
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e
