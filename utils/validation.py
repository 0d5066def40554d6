"""
Validation Utilities
Helper functions for validating Discord IDs and user input
"""

import re
from typing import Any, List, Optional, Union

# Discord snowflake ID pattern: 17-20 digits
SNOWFLAKE_REGEX = re.compile(r"^[0-9]{17,20}$")

# Discord message length limit
MAX_MESSAGE_LENGTH = 2000


class ValidationResult:
    """Result of a validation operation."""

    def __init__(
        self,
        valid: bool,
        error: Optional[str] = None,
        sanitized: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        self.valid = valid
        self.error = error
        self.sanitized = sanitized
        self.value = value

    def __bool__(self) -> bool:
        return self.valid

    def __repr__(self) -> str:
        if self.valid:
            return "ValidationResult(valid=True)"
        return f"ValidationResult(valid=False, error={self.error!r})"


class ValidationUtils:
    """Utility class for input validation."""

    @staticmethod
    def is_valid_snowflake(id_value: Union[str, int]) -> bool:
        """
        Check if value is a valid Discord snowflake ID.

        Args:
            id_value: ID to validate

        Returns:
            True if valid snowflake
        """
        if isinstance(id_value, bool) or not isinstance(id_value, (str, int)):
            return False
        return bool(SNOWFLAKE_REGEX.match(str(id_value)))

    @staticmethod
    def validate_snowflake(id_value: Optional[Union[str, int]], label: str = "ID") -> ValidationResult:
        """
        Validate and sanitize a Discord user, channel or guild ID.

        Args:
            id_value: ID to validate
            label: Name used in the error message

        Returns:
            ValidationResult with valid status and sanitized value
        """
        if not id_value:
            return ValidationResult(valid=False, error=f"{label} is required")

        sanitized = ValidationUtils.sanitize_input(str(id_value))

        # Accept mentions like <@123...> and <#123...>
        mention = re.match(r"^<[@#]!?(\d+)>$", sanitized)
        if mention:
            sanitized = mention.group(1)

        if not ValidationUtils.is_valid_snowflake(sanitized):
            return ValidationResult(valid=False, error=f"Invalid {label} format")

        return ValidationResult(valid=True, sanitized=sanitized)

    @staticmethod
    def sanitize_input(input_value: str) -> str:
        """
        Sanitize user input to prevent injection.

        Args:
            input_value: Input to sanitize

        Returns:
            Sanitized input string
        """
        if not isinstance(input_value, str):
            return ""

        sanitized = input_value.strip()

        # Remove zero-width characters
        sanitized = re.sub(r"[\u200B-\u200D\uFEFF]", "", sanitized)

        # Remove control characters
        sanitized = re.sub(r"[\x00-\x1F\x7F-\x9F]", "", sanitized)

        return sanitized

    @staticmethod
    def validate_args_length(
        args: Optional[List[Any]],
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
    ) -> ValidationResult:
        """
        Validate command arguments length.

        Args:
            args: Command arguments
            min_length: Minimum required
            max_length: Maximum allowed

        Returns:
            ValidationResult with valid status
        """
        length = len(args) if args else 0

        if min_length is not None and length < min_length:
            return ValidationResult(
                valid=False,
                error=f"Too few arguments. Minimum: {min_length}"
            )

        if max_length is not None and length > max_length:
            return ValidationResult(
                valid=False,
                error=f"Too many arguments. Maximum: {max_length}"
            )

        return ValidationResult(valid=True)

    @staticmethod
    def validate_message_length(
        content: Optional[str],
        max_length: int = MAX_MESSAGE_LENGTH,
    ) -> ValidationResult:
        """
        Validate message content length.

        Args:
            content: Message content
            max_length: Maximum length (default: 2000 for Discord)

        Returns:
            ValidationResult with valid status and optional truncated content
        """
        if not content:
            return ValidationResult(valid=True)

        if len(content) > max_length:
            truncated = content[: max_length - 3] + "..."
            return ValidationResult(
                valid=False,
                error=f"Message too long ({len(content)}/{max_length})",
                value=truncated,
            )

        return ValidationResult(valid=True)
