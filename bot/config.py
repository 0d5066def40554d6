"""
Configuration management for the command bot.
Loads environment variables and provides configuration settings.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def parse_id_list(value: str) -> Tuple[str, ...]:
    """Split a comma-separated list of Discord IDs."""
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Config:
    """Bot configuration settings."""

    # Discord
    DISCORD_TOKEN: str = ""

    # Database
    DATABASE_URL: str = ""

    # Web Server (keep-alive)
    PORT: int = 11186
    HOST: str = "0.0.0.0"

    # Debug
    DEBUG: bool = False

    # Permissions
    BOT_ADMIN_IDS: Tuple[str, ...] = ()
    SERVER_ADMIN_ROLE_NAME: str = ""

    # Replies
    GENERIC_ERROR_MESSAGE: str = "Oh no, that command had an error! Please check error logs for details."
    MISSING_PERMISSIONS_ERROR_MESSAGE: str = (
        "I do not have permission to do that. Ask a server admin to check my permissions."
    )
    AUTO_DELETE_SECONDS: float = 6

    # Commands
    SETTINGS_CATEGORY_SEPARATOR: str = "/"
    COMMANDS_DIRECTORY: str = "user_commands"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        defaults = cls()
        return cls(
            DISCORD_TOKEN=os.getenv("DISCORD_TOKEN", ""),
            DATABASE_URL=os.getenv("DATABASE_URL", ""),
            PORT=int(os.getenv("PORT", "11186")),
            HOST=os.getenv("HOST", "0.0.0.0"),
            DEBUG=os.getenv("DEBUG", "false").lower() == "true",
            BOT_ADMIN_IDS=parse_id_list(os.getenv("BOT_ADMIN_IDS", "")),
            SERVER_ADMIN_ROLE_NAME=os.getenv("SERVER_ADMIN_ROLE_NAME", ""),
            GENERIC_ERROR_MESSAGE=os.getenv("GENERIC_ERROR_MESSAGE", defaults.GENERIC_ERROR_MESSAGE),
            MISSING_PERMISSIONS_ERROR_MESSAGE=os.getenv(
                "MISSING_PERMISSIONS_ERROR_MESSAGE",
                defaults.MISSING_PERMISSIONS_ERROR_MESSAGE,
            ),
            AUTO_DELETE_SECONDS=float(os.getenv("AUTO_DELETE_SECONDS", "6")),
            SETTINGS_CATEGORY_SEPARATOR=os.getenv("SETTINGS_CATEGORY_SEPARATOR", "/"),
            COMMANDS_DIRECTORY=os.getenv("COMMANDS_DIRECTORY", "user_commands"),
        )

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if not self.SETTINGS_CATEGORY_SEPARATOR:
            raise ValueError("SETTINGS_CATEGORY_SEPARATOR must not be empty")
        if self.AUTO_DELETE_SECONDS < 0:
            raise ValueError("AUTO_DELETE_SECONDS must not be negative")


# Global config instance
config = Config.from_env()
