"""Configuration source metadata."""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Any


class ConfigSourceName(StrEnum):
    """Where a layer of configuration came from.

    Members are listed from highest to lowest precedence.
    """

    CLI = "cli"
    ENV = "env"
    FILE = "file"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """One layer of configuration.

    Attributes:
        name: Kind of source.
        path: TOML file backing the source, if any. File sources are read
            lazily, so ``values`` is empty until the file has been loaded.
        exists: Whether the source contributes anything.
        values: Values in config file layout.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any] = field(default_factory=dict)  # pyright: ignore[reportExplicitAny]

    @property
    def label(self) -> str:
        """Describe the source for error messages, e.g. ``user (/path)``."""
        if self.path is None:
            return self.name.value
        return f"{self.name.value} ({self.path})"
