"""
Configuration management for mdpreview.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "mdpreview.toml"


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholder with its value.

    Args:
        match: A regex match object containing the environment variable name.

    Returns:
        str: The value of the environment variable or the original placeholder
             if the variable is not set.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in configuration values.

    Args:
        value: The configuration value to process. Can be a string, dict, list, or other type.

    Returns:
        The processed value: strings get placeholders replaced, dicts and lists
        are rebuilt with substituted items, other types are returned unchanged.
    """
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Manages configuration loading for mdpreview."""

    def __init__(self, configPath: str = DEFAULT_CONFIG_PATH, configDirs: Optional[List[str]] = None):
        """Initialize ConfigManager with config file path and optional config directories."""
        self.configPath = configPath
        self.configDirs = configDirs or []
        self.config: Dict[str, Any] = substituteEnvVars(self._loadConfig())

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory."""
        dirPath = Path(directory)

        if not dirPath.exists():
            logger.warning(f"Config directory {directory} does not exist, skipping")
            return []

        if not dirPath.is_dir():
            logger.warning(f"Config path {directory} is not a directory, skipping")
            return []

        tomlFiles = [tomlFile for tomlFile in dirPath.rglob("*.toml") if tomlFile.is_file()]
        for tomlFile in tomlFiles:
            logger.debug(f"Found config file: {tomlFile}")

        return sorted(tomlFiles)

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, newConfig wins."""
        merged = baseConfig.copy()

        for key, value in newConfig.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """
        Load configuration from the main TOML file and optional config directories.

        A missing main file means built-in defaults. A main file that can't be
        read or parsed is fatal; broken files in config directories are skipped.
        """
        config: Dict[str, Any] = {}
        configFile = Path(self.configPath)

        if configFile.exists():
            try:
                with open(configFile, "rb") as f:
                    config = tomli.load(f)
                logger.info(f"Loaded main config from {self.configPath}")
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration {self.configPath}: {e}")
                sys.exit(1)
        elif not self.configDirs:
            logger.warning(f"Configuration file {self.configPath} not found, using defaults")

        for configDir in self.configDirs:
            tomlFiles = self._findTomlFilesRecursive(configDir)
            logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")

            for tomlFile in tomlFiles:
                try:
                    with open(tomlFile, "rb") as f:
                        dirConfig = tomli.load(f)
                except (OSError, tomli.TOMLDecodeError) as e:
                    logger.error(f"Failed to load config file {tomlFile}: {e}")
                    continue

                config = self._mergeConfigs(config, dirConfig)
                logger.info(f"Merged config from {tomlFile}")

        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getParserConfig(self) -> Dict[str, Any]:
        """Get block parser options ([parser] table)."""
        return self.get("parser", {})

    def getRendererConfig(self) -> Dict[str, Any]:
        """Get HTML renderer options ([renderer] table)."""
        return self.get("renderer", {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def getPreviewConfig(self) -> Dict[str, Any]:
        """Get preview page and watch-mode configuration ([preview] table)."""
        return self.get("preview", {})

    def getMarkdownOptions(self) -> Dict[str, Any]:
        """Build the options dict MarkdownParser expects."""
        options = dict(self.getParserConfig())
        options["html_options"] = dict(self.getRendererConfig())
        return options
