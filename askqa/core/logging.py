from loguru import logger
import sys

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}"

# Remove default handler
logger.remove()

# Console handler until configure_logging() runs with the real settings
logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)


def configure_logging(level: str = "INFO", log_dir: str = "logs"):
    """Reset loguru sinks: colorized stdout at `level`, plus a daily ERROR file when `log_dir` is set."""
    logger.remove()
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level.upper(), colorize=True)

    if log_dir:
        logger.add(
            f"{log_dir.rstrip('/')}/app_{{time:YYYY-MM-DD}}.log",
            rotation="1 day",
            retention="7 days",
            level="ERROR",
            format=FILE_FORMAT,
        )


def get_logger(name: str):
    return logger.bind(name=name)
