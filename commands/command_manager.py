"""
Command Manager
Loads commands, enforces their uniqueness, and routes user input to them
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from commands import strings
from commands.admin_commands import create_admin_commands
from commands.command import (
    DEFAULT_SETTINGS_CATEGORY_SEPARATOR,
    ENABLED_COMMANDS_CATEGORY_NAME,
    Command,
    SettingDescriptor,
)
from commands.context import CommandEnvironment, InvocationContext
from commands.help_command import create_help_command
from commands.public_error import PublicError
from commands.reload_command import create_reload_command
from utils.logger import ActivityLogger, get_logger
from utils.validation import ValidationUtils

COMMAND_LOGGER_TITLE = "COMMAND"
MANAGER_LOGGER_TITLE = "COMMAND MANAGER"

# Full-width space some IMEs insert in place of a regular space
IDEOGRAPHIC_SPACE = "\u3000"


@dataclass(frozen=True)
class SettingsCategory:
    """A group of settings registered with the settings subsystem."""

    name: str
    description: str = ""
    children: Tuple[SettingDescriptor, ...] = field(default_factory=tuple)
    type: str = "CATEGORY"


def create_settings_category_for_commands(
    user_commands: Sequence[Command],
    name: str = ENABLED_COMMANDS_CATEGORY_NAME,
) -> SettingsCategory:
    settings = (command.create_enabled_setting() for command in user_commands)
    return SettingsCategory(
        name=name,
        description=strings.ENABLED_COMMANDS_CATEGORY_DESCRIPTION,
        children=tuple(setting for setting in settings if setting is not None),
    )


def get_duplicate_alias(command: Command, other_commands: Sequence[Command]) -> Optional[str]:
    for alias in command.aliases:
        if any(alias in other.aliases for other in other_commands):
            return alias
    return None


def split_input(content: str) -> Tuple[str, str]:
    """
    Split raw input into the command key and the remaining text.

    Args:
        content: Raw message content

    Returns:
        Tuple of (lowercased first token, trimmed remainder)
    """
    normalized = content.replace(IDEOGRAPHIC_SPACE, " ")
    parts = normalized.split(None, 1)
    if not parts:
        return "", ""

    key = ValidationUtils.sanitize_input(parts[0]).lower()
    suffix = parts[1].strip() if len(parts) > 1 else ""
    return key, suffix


class CommandManager:
    """
    Loads commands and executes them in response to user input.

    The command list is replaced as a whole on every load, so an invocation
    that is already running keeps the Command it was dispatched to.
    """

    def __init__(
        self,
        discovery: Any,
        environment: CommandEnvironment,
        reload_action: Optional[Callable[[], Any]] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        """
        Args:
            discovery: Source of command definitions (sources() / load(source))
            environment: Collaborators commands are gated and run against
            reload_action: What the reload command calls; no reload command if None
            activity_logger: Where invocation outcomes are recorded
        """
        self.logger = get_logger("CommandManager")
        self.discovery = discovery
        self.environment = environment
        self.reload_action = reload_action
        self.activity_logger = activity_logger or ActivityLogger()
        self.commands: List[Command] = []
        self.user_commands: Tuple[Command, ...] = ()
        self.settings_category = create_settings_category_for_commands(())

    @property
    def settings_category_separator(self) -> str:
        return getattr(
            self.environment.config,
            "SETTINGS_CATEGORY_SEPARATOR",
            DEFAULT_SETTINGS_CATEGORY_SEPARATOR,
        )

    def _create_command(self, definition: Any) -> Command:
        return Command(
            definition,
            settings_category_separator=self.settings_category_separator,
            enabled_commands_category_name=ENABLED_COMMANDS_CATEGORY_NAME,
        )

    def load(self) -> None:
        """
        Load commands. Can be called again to reload them.

        One bad definition is logged and skipped. If the definitions cannot
        be enumerated at all, the command set is left empty.
        """
        separator = self.settings_category_separator

        try:
            sources = list(self.discovery.sources())
        except Exception as e:
            self.activity_logger.log_failure(MANAGER_LOGGER_TITLE, strings.GENERIC_LOAD_ERROR, e)
            self.commands = []
            self.user_commands = ()
            self.settings_category = create_settings_category_for_commands(())
            return

        commands: List[Command] = []
        for source in sources:
            try:
                command = self._create_command(self.discovery.load(source))
            except Exception as e:
                self.activity_logger.log_failure(
                    MANAGER_LOGGER_TITLE,
                    strings.create_failed_to_load_command_message(str(source)),
                    e,
                )
                continue

            if command.unique_id and any(other.unique_id == command.unique_id for other in commands):
                self.activity_logger.log_failure(
                    MANAGER_LOGGER_TITLE,
                    strings.create_non_unique_unique_id_message(str(source), command.unique_id),
                )
                continue

            duplicate_alias = get_duplicate_alias(command, commands)
            if duplicate_alias:
                self.activity_logger.log_failure(
                    MANAGER_LOGGER_TITLE,
                    strings.create_non_unique_alias_message(str(source), duplicate_alias),
                )
                continue

            if separator and any(separator in alias for alias in command.aliases):
                self.activity_logger.log_failure(
                    MANAGER_LOGGER_TITLE,
                    strings.create_alias_separator_message(str(source), separator),
                )
                continue

            commands.append(command)

        user_commands = tuple(commands)
        for command in self._create_builtin_commands(user_commands):
            shadowed = get_duplicate_alias(command, user_commands)
            if shadowed:
                self.logger.warning(strings.create_shadowed_builtin_message(shadowed))
            commands.append(command)

        self.user_commands = user_commands
        self.settings_category = create_settings_category_for_commands(user_commands)
        self.commands = commands

        self.logger.info(strings.create_loaded_commands_message(len(user_commands), len(commands)))

    def _create_builtin_commands(self, user_commands: Tuple[Command, ...]) -> List[Command]:
        definitions = create_admin_commands(user_commands)
        definitions.append(create_help_command(user_commands))
        if self.reload_action:
            definitions.append(create_reload_command(self.reload_action))
        return [self._create_command(definition) for definition in definitions]

    def collect_settings_categories(self) -> List[SettingsCategory]:
        """
        Collect the settings this subsystem wants registered.

        Returns:
            One category with a toggle per channel-restrictable user command
        """
        return [self.settings_category]

    def find_command(self, key: str) -> Optional[Command]:
        """First command that has key as an alias."""
        for command in self.commands:
            if key in command.aliases:
                return command
        return None

    async def route_input(self, context: InvocationContext) -> bool:
        """
        Try to process user input as a command.

        Args:
            context: The input and where it came from

        Returns:
            True if the input was handed to a command, False otherwise.
            True does not mean the command succeeded.

        The command runs to completion before this returns. Callers that need
        concurrent dispatch run each call as its own task, as discord.py does
        for on_message.
        """
        key, suffix = split_input(context.content)
        if not key:
            return False

        command = self.find_command(key)
        if command is None:
            return False

        await self._execute(command, context, suffix)
        return True

    async def _execute(self, command: Command, context: InvocationContext, suffix: str) -> None:
        try:
            result = await command.attempt_invoke(context, suffix, self.environment)
        except Exception as e:
            error = PublicError.from_exception(e)
            await error.output(COMMAND_LOGGER_TITLE, context, self.environment, self.activity_logger)
            return

        # A string result is a soft failure description
        if isinstance(result, str):
            self.activity_logger.log_input_reaction(COMMAND_LOGGER_TITLE, context, False, result)
        else:
            self.activity_logger.log_input_reaction(COMMAND_LOGGER_TITLE, context, True)
