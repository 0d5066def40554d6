"""
Roll dice, e.g. `roll 2d6`.
"""

import random
import re

from commands.command import CommandDefinition
from commands.public_error import PublicError

DICE_PATTERN = re.compile(r"^(\d{0,2})d(\d{1,4})$")
MAX_DICE = 20


async def roll(context, suffix, environment):
    expression = suffix.split()[0].lower() if suffix else "1d6"
    match = DICE_PATTERN.match(expression)
    if not match:
        raise PublicError.create_with_custom_public_message(
            "Usage: `roll <count>d<sides>`, for example `roll 2d6`.",
            True,
            "Invalid dice expression",
        )

    count = int(match.group(1) or 1)
    sides = int(match.group(2))
    if not 1 <= count <= MAX_DICE or sides < 2:
        # Soft failure, nothing is sent
        return f"Dice out of range: {expression}"

    results = [random.randint(1, sides) for _ in range(count)]
    rolled = ", ".join(str(result) for result in results)
    await environment.messenger.send(
        context,
        f"🎲 {context.invoker_name} rolled {rolled} (total {sum(results)})",
    )


command = {
    "aliases": ["roll", "dice"],
    "action": roll,
    "unique_id": "roll",
    "cooldown": 5,
    "short_description": "Roll some dice.",
    "long_description": "Roll up to 20 dice with any number of sides. Defaults to one six-sided die.",
    "usage_example": "roll 2d6",
}
