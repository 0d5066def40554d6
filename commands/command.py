"""
Command
Declarative command definitions, their validation, and per-invocation gating
"""

import inspect
import time
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Optional, Union

from commands import strings
from commands.context import CommandEnvironment, InvocationContext
from commands.public_error import InvokeFailure, PublicError
from utils.validation import ValidationResult

DEFAULT_SETTINGS_CATEGORY_SEPARATOR = "/"
ENABLED_COMMANDS_CATEGORY_NAME = "commands"

# Ledger size above which expired cooldown entries are pruned
COOLDOWN_PRUNE_THRESHOLD = 1000

# Command action type alias: (context, suffix, environment) -> result or awaitable
CommandAction = Callable[[InvocationContext, str, CommandEnvironment], Any]


class ValidationError(Exception):
    """Raised when a command definition is malformed."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass
class CommandDefinition:
    """Declarative description of a command, as written in a command module."""

    aliases: Union[str, List[str], None] = None
    action: Optional[CommandAction] = None
    unique_id: Optional[str] = None
    server_admin_only: bool = False
    bot_admin_only: bool = False
    only_in_server: bool = False
    can_be_channel_restricted: Optional[bool] = None
    cooldown: float = 0
    required_settings: Union[str, List[str], None] = None
    short_description: str = ""
    long_description: str = ""
    usage_example: str = ""
    hidden: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommandDefinition":
        """
        Build a definition from a plain dict.

        Unknown keys are ignored, missing keys take their defaults.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


@dataclass(frozen=True)
class SettingDescriptor:
    """A boolean toggle the settings subsystem should expose."""

    name: str
    qualified_name: str
    description: str
    value_type: str = "BOOLEAN"
    default_value: bool = True


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _normalize_required_settings(required_settings: Any) -> Optional[List[str]]:
    if required_settings is None:
        return []
    if isinstance(required_settings, str):
        return [required_settings]
    if isinstance(required_settings, (list, tuple)):
        return list(required_settings)
    return None


def validate_definition(
    definition: Any,
    settings_category_separator: str = DEFAULT_SETTINGS_CATEGORY_SEPARATOR,
) -> ValidationResult:
    """
    Check a command definition in a single pass.

    Args:
        definition: CommandDefinition to check
        settings_category_separator: Token reserved by the settings tree

    Returns:
        ValidationResult, with error naming the first violated constraint
    """
    if not isinstance(definition, CommandDefinition):
        return ValidationResult(valid=False, error=strings.NO_DATA)

    if definition.action is None or not callable(definition.action):
        return ValidationResult(valid=False, error=strings.NO_ACTION)

    aliases = definition.aliases
    if isinstance(aliases, str):
        aliases = [aliases]
    if not aliases or not isinstance(aliases, (list, tuple)):
        return ValidationResult(valid=False, error=strings.NO_ALIASES)
    for alias in aliases:
        if not isinstance(alias, str) or not alias:
            return ValidationResult(valid=False, error=strings.INVALID_ALIAS)

    boolean_flags = (
        (definition.server_admin_only, strings.INVALID_SERVER_ADMIN_ONLY),
        (definition.bot_admin_only, strings.INVALID_BOT_ADMIN_ONLY),
        (definition.only_in_server, strings.INVALID_ONLY_IN_SERVER),
    )
    for value, error in boolean_flags:
        if not isinstance(value, bool):
            return ValidationResult(valid=False, error=error)

    restricted = definition.can_be_channel_restricted
    if restricted is not None and not isinstance(restricted, bool):
        return ValidationResult(valid=False, error=strings.INVALID_CAN_BE_CHANNEL_RESTRICTED)

    if not _is_number(definition.cooldown):
        return ValidationResult(valid=False, error=strings.INVALID_COOLDOWN)
    if definition.cooldown < 0:
        return ValidationResult(valid=False, error=strings.NEGATIVE_COOLDOWN)

    if restricted is None:
        restricted = not definition.bot_admin_only

    unique_id = definition.unique_id
    if restricted and not isinstance(unique_id, str):
        return ValidationResult(valid=False, error=strings.NEEDS_UNIQUE_ID)
    if unique_id is not None:
        if not isinstance(unique_id, str) or not unique_id:
            return ValidationResult(valid=False, error=strings.INVALID_UNIQUE_ID)
        if settings_category_separator and settings_category_separator in unique_id:
            return ValidationResult(
                valid=False,
                error=strings.create_unique_id_contains_separator_string(settings_category_separator),
            )

    required_settings = _normalize_required_settings(definition.required_settings)
    if required_settings is None:
        return ValidationResult(valid=False, error=strings.INVALID_REQUIRED_SETTINGS)
    for setting in required_settings:
        if not isinstance(setting, str) or not setting:
            return ValidationResult(valid=False, error=strings.NON_STRING_SETTING)

    return ValidationResult(valid=True, value=definition)


class Command:
    """
    A validated command.

    Immutable after construction except for the cooldown ledger, which maps
    invoker ID to the time that invoker last passed the cooldown gate.
    """

    def __init__(
        self,
        definition: Union[CommandDefinition, Dict[str, Any], None],
        settings_category_separator: str = DEFAULT_SETTINGS_CATEGORY_SEPARATOR,
        enabled_commands_category_name: str = ENABLED_COMMANDS_CATEGORY_NAME,
        clock: Callable[[], float] = time.monotonic,
    ):
        if isinstance(definition, dict):
            definition = CommandDefinition.from_dict(definition)

        result = validate_definition(definition, settings_category_separator)
        if not result:
            raise ValidationError(result.error)

        aliases = definition.aliases
        if isinstance(aliases, str):
            aliases = [aliases]

        # Lowercased, de-duplicated, first alias stays primary
        self.aliases: List[str] = list(dict.fromkeys(alias.lower() for alias in aliases))
        self.action = definition.action
        self.unique_id: Optional[str] = definition.unique_id
        self.server_admin_only = definition.server_admin_only
        self.bot_admin_only = definition.bot_admin_only
        self.only_in_server = definition.only_in_server
        self.cooldown = definition.cooldown
        self.required_settings = _normalize_required_settings(definition.required_settings)
        self.short_description = definition.short_description
        self.long_description = definition.long_description
        self.usage_example = definition.usage_example
        self.hidden = definition.hidden

        if definition.can_be_channel_restricted is None:
            self.can_be_channel_restricted = not self.bot_admin_only
        else:
            self.can_be_channel_restricted = definition.can_be_channel_restricted

        self.enabled_setting_name: Optional[str] = None
        if self.can_be_channel_restricted:
            self.enabled_setting_name = (
                f"{enabled_commands_category_name}{settings_category_separator}{self.unique_id}"
            )

        self._clock = clock
        self._last_invocation_by_invoker: Dict[str, float] = {}
        self._prune_at = COOLDOWN_PRUNE_THRESHOLD

    @property
    def primary_alias(self) -> str:
        return self.aliases[0]

    def __repr__(self) -> str:
        return f"Command(aliases={self.aliases!r}, unique_id={self.unique_id!r})"

    def create_enabled_setting(self) -> Optional[SettingDescriptor]:
        """
        Describe the per-channel toggle for this command.

        Returns:
            SettingDescriptor if the command can be channel restricted, else None
        """
        if not self.can_be_channel_restricted:
            return None
        return SettingDescriptor(
            name=self.unique_id,
            qualified_name=self.enabled_setting_name,
            description=strings.create_enabled_setting_description(self.primary_alias),
        )

    async def attempt_invoke(
        self,
        context: InvocationContext,
        suffix: str,
        environment: CommandEnvironment,
    ) -> Any:
        """
        Run the invocation gates in order, then the action.

        Everything before the first await runs synchronously, so the cooldown
        ledger is already written when the coroutine first suspends.

        Args:
            context: Where and by whom the command was invoked
            suffix: Input text after the alias, trimmed
            environment: Settings, identity and messaging collaborators

        Returns:
            Whatever the action returns

        Raises:
            PublicError: A gate rejected the attempt
        """
        self._check_cooldown(context)
        self._check_permissions(context, environment)

        scope = context.settings_scope

        if self.can_be_channel_restricted:
            enabled = await environment.settings.resolve_boolean(
                scope,
                self.enabled_setting_name,
                True,
            )
            if not enabled:
                raise PublicError.create_with_custom_public_message(
                    strings.COMMAND_DISABLED,
                    True,
                    strings.COMMAND_DISABLED_LOG,
                    reason=InvokeFailure.COMMAND_DISABLED,
                )

        resolved: Dict[str, bool] = {}
        if self.required_settings:
            resolved = await environment.settings.resolve_many(
                scope,
                self.required_settings,
                False,
            )
            for setting in self.required_settings:
                if not resolved.get(setting):
                    raise PublicError.create_with_no_public_message(
                        strings.create_required_setting_disabled_log(setting),
                        reason=InvokeFailure.REQUIRED_SETTING_DISABLED,
                    )
        context.settings = resolved

        result = self.action(context, suffix, environment)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _check_cooldown(self, context: InvocationContext) -> None:
        if self.cooldown <= 0:
            return

        now = self._clock()
        last_invocation = self._last_invocation_by_invoker.get(context.invoker_id)
        if last_invocation is not None and now - last_invocation < self.cooldown:
            raise PublicError.create_with_custom_public_message(
                strings.create_not_cooled_down_string(context.invoker_name, self.cooldown),
                True,
                strings.NOT_COOLED_DOWN_LOG,
                reason=InvokeFailure.NOT_COOLED_DOWN,
            )

        self._last_invocation_by_invoker[context.invoker_id] = now
        if len(self._last_invocation_by_invoker) > self._prune_at:
            self.prune_cooldowns(now)
            # Next prune once the ledger has doubled
            self._prune_at = max(
                COOLDOWN_PRUNE_THRESHOLD,
                2 * len(self._last_invocation_by_invoker),
            )

    def prune_cooldowns(self, now: Optional[float] = None) -> int:
        """
        Drop ledger entries whose cooldown has expired.

        Returns:
            Number of entries removed
        """
        if now is None:
            now = self._clock()
        expired = [
            invoker_id
            for invoker_id, last_invocation in self._last_invocation_by_invoker.items()
            if now - last_invocation >= self.cooldown
        ]
        for invoker_id in expired:
            del self._last_invocation_by_invoker[invoker_id]
        return len(expired)

    def _check_permissions(self, context: InvocationContext, environment: CommandEnvironment) -> None:
        identity = environment.identity

        # Bot admin commands behave the same in every scope
        if self.bot_admin_only and not identity.is_bot_admin(context.invoker_id):
            raise PublicError.create_with_custom_public_message(
                strings.ONLY_BOT_ADMIN,
                False,
                strings.ONLY_BOT_ADMIN_LOG,
                reason=InvokeFailure.ONLY_BOT_ADMIN,
            )

        if self.only_in_server and not context.is_in_server:
            raise PublicError.create_with_custom_public_message(
                strings.ONLY_IN_SERVER,
                False,
                strings.ONLY_IN_SERVER_LOG,
                reason=InvokeFailure.ONLY_IN_SERVER,
            )

        # No server to administer in a DM
        if self.server_admin_only and context.is_in_server and not identity.is_scope_admin(context):
            raise PublicError.create_with_custom_public_message(
                strings.create_must_be_server_admin_string(identity.server_admin_role_name),
                False,
                strings.MUST_BE_SERVER_ADMIN_LOG,
                reason=InvokeFailure.MUST_BE_SERVER_ADMIN,
            )
