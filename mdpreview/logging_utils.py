"""
Logging utilities for mdpreview.
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = getattr(logging, str(levelStr).upper(), None)
    if not isinstance(level, int):
        logger.error(f"Invalid log level '{levelStr}'")
        return default
    return level


def _createFileHandler(logFile: str, rotate: bool) -> logging.Handler:
    """Create file handler, rotating at midnight if requested."""
    logPath = Path(logFile)
    logPath.parent.mkdir(parents=True, exist_ok=True)

    if rotate:
        return TimedRotatingFileHandler(
            filename=logFile,
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
    return logging.FileHandler(logFile, encoding="utf-8")


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from [logging] table settings."""

    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        logLevel = getLogLevelByStr(config["level"])
        if logLevel is not None:
            localLogger.setLevel(logLevel)

    logLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_LOG_FORMAT))

    # Clear existing handlers to avoid duplicates
    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    if config.get("console", False):
        consoleLogLevel = logLevel
        if "console-level" in config:
            consoleLogLevel = getLogLevelByStr(config["console-level"], logLevel)
        consoleHandler = logging.StreamHandler()
        consoleHandler.setLevel(consoleLogLevel or logLevel)
        consoleHandler.setFormatter(formatter)
        localLogger.addHandler(consoleHandler)
        logger.info(f"Logging {localLogger.name} to console, logLevel: {consoleLogLevel}")

    if "file" in config:
        logFile = config["file"]
        try:
            fileLogLevel = logLevel
            if "file-level" in config:
                fileLogLevel = getLogLevelByStr(config["file-level"], logLevel)
            fileHandler = _createFileHandler(logFile, bool(config.get("rotate", False)))
            fileHandler.setLevel(fileLogLevel or logLevel)
            fileHandler.setFormatter(formatter)
            localLogger.addHandler(fileHandler)
            logger.info(f"Logging {localLogger.name} to file: {logFile}, logLevel: {fileLogLevel}")
        except OSError as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure root logger and per-logger overrides from config."""
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.WARNING)

    configureLogger(rootLogger, config)

    logConfigs = config.get("logger", {})
    for loggerName, loggerConfig in logConfigs.items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.info(f"Logging configured: root level={logging.getLevelName(rootLogger.getEffectiveLevel())}")
