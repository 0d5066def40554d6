"""
Utility modules for the command bot.
"""

from .logger import ActivityLogger, LoggerMixin, get_logger, setup_logging
from .discord import DiscordMessenger, DiscordUtils
from .validation import ValidationUtils, ValidationResult

__all__ = [
    "ActivityLogger",
    "LoggerMixin",
    "get_logger",
    "setup_logging",
    "DiscordMessenger",
    "DiscordUtils",
    "ValidationUtils",
    "ValidationResult",
]
