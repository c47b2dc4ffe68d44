"""
Pytest configuration and common fixtures for mdpreview tests.

All fixtures follow camelCase naming convention.
"""

import logging
import tempfile
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Generator

import pytest

# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture
def tempDir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory removed after the test.

    Yields:
        Path: Temporary directory path
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def markdownFile(tempDir: Path) -> Path:
    """
    Provide a small Markdown document on disk.

    Returns:
        Path: Path to the document
    """
    path = tempDir / "doc.md"
    path.write_text("# Title\n\n- a\n  - b\n\n```python\nx = '<1>'\n```\n", encoding="utf-8")
    return path


@pytest.fixture
def missingConfigPath(tempDir: Path) -> str:
    """
    Provide a config path that does not exist, so defaults are used.

    Returns:
        str: Config file path
    """
    return str(tempDir / "missing.toml")


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restoreRootLogger() -> Generator[logging.Logger, None, None]:
    """
    Drop handlers installed by initLogging() and restore the root level.

    Yields:
        logging.Logger: The root logger
    """
    rootLogger = logging.getLogger()
    level = rootLogger.level
    yield rootLogger
    for handler in rootLogger.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler, TimedRotatingFileHandler):
            rootLogger.removeHandler(handler)
            handler.close()
    rootLogger.setLevel(level)
