"""
Command Discovery
Finds command definitions for the command manager to load
"""

import importlib
import importlib.util
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Union

# Module attribute holding a command definition
COMMAND_ATTRIBUTE = "command"

# Prefix for the synthetic module names command files are imported under
MODULE_NAME_PREFIX = "_loaded_commands"


class DiscoveryError(Exception):
    """Raised when a definition source cannot be turned into a definition."""


class DirectoryDiscovery:
    """
    Loads one command definition per Python file in a directory.

    Each file is imported fresh on every load, so edits are picked up by a
    reload. Files whose names start with an underscore are skipped.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self._generation = 0

    def sources(self) -> List[Path]:
        """
        List command files.

        Raises:
            FileNotFoundError: The directory does not exist
        """
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Command directory not found: {self.directory}")

        importlib.invalidate_caches()
        self._generation += 1
        return sorted(
            path
            for path in self.directory.glob("*.py")
            if not path.name.startswith("_")
        )

    def load(self, source: Path) -> Any:
        """
        Import a command file and return its definition.

        Args:
            source: Path returned by sources()

        Returns:
            The module's `command` attribute
        """
        module_name = f"{MODULE_NAME_PREFIX}.g{self._generation}.{source.stem}"
        spec = importlib.util.spec_from_file_location(module_name, source)
        if spec is None or spec.loader is None:
            raise DiscoveryError(f"Cannot import {source}")

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        if not hasattr(module, COMMAND_ATTRIBUTE):
            raise DiscoveryError(f"{source} does not define '{COMMAND_ATTRIBUTE}'")
        return getattr(module, COMMAND_ATTRIBUTE)


class StaticDiscovery:
    """Serves command definitions that are already in memory."""

    def __init__(self, definitions: Iterable[Any]):
        self.definitions: Sequence[Any] = list(definitions)

    def sources(self) -> List[int]:
        return list(range(len(self.definitions)))

    def load(self, source: int) -> Any:
        return self.definitions[source]
