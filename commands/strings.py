"""
Strings
User-facing replies and log descriptions used by the command system
"""

from typing import Iterable, Optional

# Definition validation
NO_DATA = "No command data"
NO_ACTION = "Command does not have an action, or it is not callable."
NO_ALIASES = "Command does not have command aliases."
INVALID_ALIAS = "Command alias is not a string, or is an empty string."
INVALID_SERVER_ADMIN_ONLY = "Invalid server_admin_only value"
INVALID_BOT_ADMIN_ONLY = "Invalid bot_admin_only value"
INVALID_CAN_BE_CHANNEL_RESTRICTED = "Invalid can_be_channel_restricted value"
INVALID_ONLY_IN_SERVER = "Invalid only_in_server value"
INVALID_COOLDOWN = "Invalid cooldown, it's not a number"
NEGATIVE_COOLDOWN = "Cooldown is less than 0. Cannot reverse time."
NEEDS_UNIQUE_ID = (
    "Command has can_be_channel_restricted true (or unset, defaulting to true), "
    "but does not have a unique_id, or its unique_id is not a string. "
    "Commands that can be channel restricted must have a unique_id."
)
INVALID_UNIQUE_ID = "Command unique_id is not a string, or is an empty string."
NON_STRING_SETTING = "A required setting is not a string, or is an empty string."
INVALID_REQUIRED_SETTINGS = "Invalid value for required_settings. It must be a string or a list of strings."


def create_unique_id_contains_separator_string(separator: str) -> str:
    return f"The unique_id contains the settings category separator ({separator}). It must not."


def create_alias_contains_separator_string(separator: str) -> str:
    return f"An alias contains the settings category separator ({separator}). It must not."


# Invocation gates
NOT_COOLED_DOWN_LOG = "Not cooled down"
ONLY_BOT_ADMIN = "Only a bot admin can use that command."
ONLY_BOT_ADMIN_LOG = "User is not a bot admin"
ONLY_IN_SERVER = "That command can only be used in a server."
ONLY_IN_SERVER_LOG = "Not in a server"
MUST_BE_SERVER_ADMIN_LOG = "User is not a server admin"
COMMAND_DISABLED = "That command is disabled in this channel."
COMMAND_DISABLED_LOG = "Command disabled"


def create_required_setting_disabled_log(setting_name: str) -> str:
    return f"Required setting {setting_name} is disabled"


def create_must_be_server_admin_string(server_admin_role_name: Optional[str]) -> str:
    message = "You must be a server admin "
    if server_admin_role_name:
        message += f"or have a role called '{server_admin_role_name}' "
    return message + "in order to do that."


def create_not_cooled_down_string(username: str, cooldown: float) -> str:
    return f"{username}, that command has a {cooldown:g} second cooldown."


# Enablement settings
ENABLED_COMMANDS_CATEGORY_DESCRIPTION = "Enable or disable individual commands."


def create_enabled_setting_description(alias: str) -> str:
    return f"This setting controls whether the {alias} command (and all of its aliases) is allowed to be used or not."


# Error surfacing
GENERIC_ERROR_DESCRIPTION_LOG = "Error"
UNHANDLED_EXCEPTION_LOG = "Exception or coroutine failure"
MISSING_PERMISSIONS_DISCORD_ERROR = "Missing Permissions"
MISSING_PERMISSIONS_LOG = "Insufficient privileges"
SEND_ERROR_MESSAGE_FAILED = "Failed to send error message"


def create_error_description(command_text: str) -> str:
    return f"Command '{command_text}' errored."


# Command manager
GENERIC_LOAD_ERROR = "Error loading commands."


def create_failed_to_load_command_message(source: str) -> str:
    return f"Failed to load command from: {source}"


def create_non_unique_unique_id_message(source: str, unique_id: str) -> str:
    return f"{create_failed_to_load_command_message(source)}. Error: unique_id: {unique_id} is not unique."


def create_non_unique_alias_message(source: str, alias: str) -> str:
    return f"{create_failed_to_load_command_message(source)}. Error: alias: {alias} is not unique."


def create_alias_separator_message(source: str, separator: str) -> str:
    return f"{create_failed_to_load_command_message(source)}. Error: {create_alias_contains_separator_string(separator)}"


def create_shadowed_builtin_message(alias: str) -> str:
    return f"Built-in command alias '{alias}' is shadowed by a user command."


def create_loaded_commands_message(user_count: int, total_count: int) -> str:
    return f"Loaded {user_count} user commands ({total_count} including built-ins)"


# Built-in commands
ALLOW_SHORT_DESCRIPTION = "Only allow the specified commands in this channel."
ALLOW_USAGE = "allow ping roll"
ALLOW_NO_ARGUMENTS = "Say which commands to allow, for example: `allow ping roll`."
ALLOW_NO_ARGUMENTS_LOG = "No commands specified"
ALLOW_UNKNOWN_COMMANDS_LOG = "Unknown or unrestrictable commands"
UNRESTRICT_SHORT_DESCRIPTION = "Remove all command restrictions in this channel."
UNRESTRICT_SUCCESS = "All command restrictions in this channel have been removed."
BAN_SHORT_DESCRIPTION = "Stop the bot from responding to a user or a server."
UNBAN_SHORT_DESCRIPTION = "Let the bot respond to a banned user or server again."
BAN_USAGE = "Usage: `ban user <id>` or `ban server <id>`"
UNBAN_USAGE = "Usage: `unban user <id>` or `unban server <id>`"
BAN_INVALID_ARGUMENTS_LOG = "Invalid ban arguments"
BANS_UNAVAILABLE = "Bans are not available right now."
BANS_UNAVAILABLE_LOG = "No ban repository"
RELOAD_SHORT_DESCRIPTION = "Reload all commands."
RELOAD_SUCCESS = "Commands reloaded!"
HELP_SHORT_DESCRIPTION = "List commands, or show details for one command."
HELP_USAGE = "help ping"
NO_COMMANDS_FOR_HELP_LOG = "No commands for help"
UNKNOWN_HELP_COMMAND_LOG = "Unknown command for help"


def create_allow_success_string(aliases: Iterable[str]) -> str:
    formatted = ", ".join(f"`{alias}`" for alias in aliases)
    return f"Only these commands are now allowed in this channel: {formatted}"


def create_allow_unknown_commands_string(names: Iterable[str]) -> str:
    formatted = ", ".join(f"`{name}`" for name in names)
    return f"These commands don't exist or can't be restricted: {formatted}"


def create_ban_success_string(target_type: str, target_id: str) -> str:
    return f"Banned {target_type} {target_id}."


def create_unban_success_string(target_type: str, target_id: str) -> str:
    return f"Unbanned {target_type} {target_id}."


def create_not_banned_string(target_type: str, target_id: str) -> str:
    return f"{target_type.capitalize()} {target_id} is not banned."


def create_unknown_help_command_string(name: str) -> str:
    return f"❌ Unknown command: `{name}`"
