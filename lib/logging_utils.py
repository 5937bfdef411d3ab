"""
Logging utilities for the Thingful client.

Configures stdlib logging from the [logging] config section:

    [logging]
    level = "INFO"
    console = true
    file = "logs/thingful.log"
    rotate = true

    [logging.logger."lib.thingful"]
    level = "DEBUG"
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty dependencies, kept at WARNING unless configured otherwise
QUIET_LOGGERS = ("httpx", "httpcore")


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = logging.getLevelName(levelStr.upper())
    if isinstance(level, int):
        return level
    logger.error(f"Invalid log level '{levelStr}'")
    return default


def _createConsoleHandler(config: Dict[str, Any], logLevel: int, formatter: logging.Formatter) -> logging.Handler:
    consoleLogLevel = logLevel
    if "console-level" in config:
        consoleLogLevel = getLogLevelByStr(config["console-level"], logLevel) or logLevel

    handler = logging.StreamHandler()
    handler.setLevel(consoleLogLevel)
    handler.setFormatter(formatter)
    return handler


def _createFileHandler(config: Dict[str, Any], logLevel: int, formatter: logging.Formatter) -> logging.Handler:
    logFile = config["file"]
    Path(logFile).parent.mkdir(parents=True, exist_ok=True)

    fileLogLevel = logLevel
    if "file-level" in config:
        fileLogLevel = getLogLevelByStr(config["file-level"], logLevel) or logLevel

    handler: logging.Handler
    if config.get("rotate", False):
        handler = TimedRotatingFileHandler(
            filename=logFile,
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(logFile, encoding="utf-8")

    handler.setLevel(fileLogLevel)
    handler.setFormatter(formatter)
    return handler


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from config file settings."""

    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        logLevel = getLogLevelByStr(config["level"])
        if logLevel is not None:
            localLogger.setLevel(logLevel)

    logLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_FORMAT))

    # Clear existing handlers to avoid duplicates
    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    if config.get("console", False):
        consoleHandler = _createConsoleHandler(config, logLevel, formatter)
        localLogger.addHandler(consoleHandler)
        logger.info(f"Logging {localLogger.name} to console, logLevel: {consoleHandler.level}")

    if "file" in config:
        try:
            fileHandler = _createFileHandler(config, logLevel, formatter)
        except OSError as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")
        else:
            localLogger.addHandler(fileHandler)
            logger.info(f"Logging {localLogger.name} to file: {config['file']}, logLevel: {fileHandler.level}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure logging from config file settings."""
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.INFO)

    configureLogger(rootLogger, config)
    logLevel = rootLogger.getEffectiveLevel()

    # Set higher logging level for httpx to avoid every GET being logged
    if logLevel < logging.WARNING:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.info(f"Logging configured: root level={logging.getLevelName(logLevel)}")
