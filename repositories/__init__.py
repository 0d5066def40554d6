"""
Database repositories for the command bot.
"""

from .base_repository import BaseRepository
from .ban_repository import BanRepository
from .settings_repository import SettingsRepository

__all__ = [
    "BaseRepository",
    "BanRepository",
    "SettingsRepository",
]
