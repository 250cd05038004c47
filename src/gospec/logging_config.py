"""
Logging for gospec.

Every module logs through the `logger` imported from here. Console output
goes to stderr, so stdout carries nothing but the generated document or the
requested listing. Set GOSPEC_MACHINE_MODE to silence the console sink and
GOSPEC_FILE_LOGGING to keep a rotating log of generation runs.
"""

import sys
import os
from pathlib import Path
from loguru import logger

_logging_configured = False

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def _env_flag(key: str) -> bool:
    return os.getenv(key, "").lower() in ("1", "true", "yes")


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None):
    """
    Install the gospec log sinks. Later calls are no-ops until reset_logging().

    Args:
        level: Console level; DEBUG shows every resolution step
        suppress_console: Drop the stderr sink. None reads GOSPEC_MACHINE_MODE.
        enable_file_logging: Add the rotating file sink under GOSPEC_LOG_DIR.
            None reads GOSPEC_FILE_LOGGING.
    """
    global _logging_configured

    if _logging_configured:
        return
    _logging_configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = _env_flag("GOSPEC_MACHINE_MODE")

    if not suppress_console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if enable_file_logging is None:
        enable_file_logging = _env_flag("GOSPEC_FILE_LOGGING")

    if enable_file_logging:
        log_dir = Path(os.getenv("GOSPEC_LOG_DIR", ".gospec/logs"))
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "gospec.log",
            level="INFO",
            rotation="10 MB",
            retention="1 day",
            compression="gz",
            catch=True,
        )


def reset_logging():
    """Let the next setup_logging() call replace the sinks, e.g. after --verbose or --human."""
    global _logging_configured
    _logging_configured = False


setup_logging()
