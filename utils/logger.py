"""
Logging utilities for the command bot.
Uses Rich for colored console output.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Custom theme for logging
CUSTOM_THEME = Theme({
    "logging.level.success": "green",
    "logging.level.command": "cyan",
    "logging.level.debug": "dim cyan",
})

console = Console(theme=CUSTOM_THEME)


def setup_logging(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Set up a logger with RichHandler.

    Args:
        name: Logger name
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers = []

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


class LoggerMixin:
    """Mixin class that provides logger functionality."""

    def __init__(self, name: str):
        self._logger = setup_logging(name)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str, error: Optional[BaseException] = None) -> None:
        self._logger.error(message, exc_info=error)

    def success(self, message: str) -> None:
        """Log success message (info level with a [SUCCESS] prefix)."""
        self._logger.info(f"[SUCCESS] {message}")


class ActivityLogger(LoggerMixin):
    """
    Records the outcome of every input the bot reacts to.

    One line per attempt: where it happened, who sent it, the raw input and
    whether it succeeded. Internal failures get their own entry with the
    full traceback.
    """

    def __init__(self, name: str = "Activity"):
        super().__init__(name)

    def log_input_reaction(
        self,
        title: str,
        context: Any,
        success: bool,
        description: Optional[str] = "",
    ) -> None:
        """
        Log the result of reacting to user input.

        Args:
            title: Subsystem tag (e.g. COMMAND)
            context: InvocationContext the input arrived in
            success: Whether the reaction succeeded
            description: Short reason, mostly used for failures
        """
        location = context.describe_location()
        line = f"[{title}] {location} {context.invoker_name}: {context.content}"

        if success:
            self.success(line)
            return

        if description:
            line += f" (FAILED: {description})"
        else:
            line += " (FAILED)"
        self.warning(line)

    def log_failure(
        self,
        title: str,
        message: str,
        error: Optional[BaseException] = None,
    ) -> None:
        """
        Log an internal failure with its traceback.

        Args:
            title: Subsystem tag
            message: What was being attempted
            error: The underlying exception, if any
        """
        self.error(f"[{title}] {message}", error)


# Convenience function
def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return setup_logging(name)
