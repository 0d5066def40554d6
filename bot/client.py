"""
Discord client setup using discord.py.
"""

import asyncio
import signal
from pathlib import Path
from typing import Optional

import discord

from bot.config import Config, config
from bot.database import close_database, get_pool, init_database
from bot.keep_alive import run_server, update_bot_status
from bot.permissions import DiscordIdentity
from commands.command_manager import CommandManager
from commands.context import CommandEnvironment, InvocationContext
from commands.discovery import DirectoryDiscovery
from repositories.ban_repository import BanRepository
from repositories.settings_repository import SettingsRepository
from utils.discord import DiscordMessenger
from utils.logger import ActivityLogger, get_logger

logger = get_logger("Client")


def resolve_commands_directory(directory: str) -> Path:
    """Resolve the commands directory relative to the project root."""
    path = Path(directory)
    if path.is_absolute():
        return path
    return Path(__file__).parent.parent / path


class CommandBot(discord.Client):
    """Discord client that hands every message to the command manager."""

    def __init__(self, bot_config: Config = config):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents)

        self.config = bot_config
        self.activity_logger = ActivityLogger()
        self.command_manager: Optional[CommandManager] = None
        self.bans: Optional[BanRepository] = None
        self.identity = DiscordIdentity(
            bot_config.BOT_ADMIN_IDS,
            bot_config.SERVER_ADMIN_ROLE_NAME,
        )

    async def setup_hook(self):
        """Called when bot is starting up."""
        logger.info("Setting up bot...")

        # Initialize database
        await init_database()
        pool = get_pool()

        self.bans = BanRepository(pool)
        environment = CommandEnvironment(
            config=self.config,
            settings=SettingsRepository(pool),
            identity=self.identity,
            messenger=DiscordMessenger(self.config.AUTO_DELETE_SECONDS),
            bans=self.bans,
        )

        self.command_manager = CommandManager(
            DirectoryDiscovery(resolve_commands_directory(self.config.COMMANDS_DIRECTORY)),
            environment,
            reload_action=self.reload_commands,
            activity_logger=self.activity_logger,
        )
        self.reload_commands()

        logger.info("Bot setup complete")

    def reload_commands(self) -> None:
        """Load (or reload) every command."""
        self.command_manager.load()
        update_bot_status(commands_loaded=len(self.command_manager.user_commands))

    async def on_ready(self):
        """Called when bot is ready."""
        update_bot_status(status="ready", discord_connected=True)
        logger.info(f"Logged in as: {self.user}")

    async def on_message(self, message: discord.Message):
        """Handle incoming messages."""
        if message.author.bot or self.command_manager is None:
            return

        author_id = str(message.author.id)
        guild_id = str(message.guild.id) if message.guild else None
        if not self.identity.is_bot_admin(author_id) and await self.bans.is_banned(author_id, guild_id):
            return

        context = InvocationContext.from_message(message)
        await self.command_manager.route_input(context)

    async def close(self):
        """Clean shutdown."""
        logger.info("Shutting down bot...")

        # Close database
        await close_database()

        update_bot_status(status="offline", discord_connected=False)
        await super().close()


# Global bot instance
bot: Optional[CommandBot] = None


def create_bot() -> CommandBot:
    """Create and return bot instance."""
    global bot
    bot = CommandBot()
    return bot


async def run_bot():
    """Run the bot."""
    global bot

    # Validate config
    config.validate()

    # Create bot
    bot = create_bot()

    def shutdown_handler(sig, frame):
        """Handle SIGINT and SIGTERM."""
        logger.info(f"Received signal {sig}, shutting down...")
        asyncio.create_task(bot.close())

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)

    try:
        # Start keep-alive server
        run_server()

        # Start bot
        await bot.start(config.DISCORD_TOKEN)
    except Exception as e:
        logger.error(f"Bot error: {e}")
        raise
