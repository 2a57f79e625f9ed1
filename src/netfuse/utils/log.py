"""Console logging setup for command-line entry points"""
import logging

from rich.logging import RichHandler


def setup_logger(level: int = logging.INFO, name: str = "netfuse") -> logging.Logger:
    """
    Attach a rich console handler to the package logger

    Args:
        level: Logging level
        name: Logger name

    Returns:
        Configured Logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Re-running the CLI in one process must not stack handlers
    logger.handlers.clear()

    console_handler = RichHandler(
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    return logger
