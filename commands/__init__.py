"""
Command system for the Discord bot.
"""

from .command import Command, CommandDefinition, SettingDescriptor, ValidationError
from .command_manager import CommandManager, SettingsCategory
from .context import CommandEnvironment, InvocationContext, ScopeKind
from .discovery import DirectoryDiscovery, StaticDiscovery
from .public_error import InvokeFailure, PublicError, PublicMessageType

__all__ = [
    "Command",
    "CommandDefinition",
    "SettingDescriptor",
    "ValidationError",
    "CommandManager",
    "SettingsCategory",
    "CommandEnvironment",
    "InvocationContext",
    "ScopeKind",
    "DirectoryDiscovery",
    "StaticDiscovery",
    "InvokeFailure",
    "PublicError",
    "PublicMessageType",
]
