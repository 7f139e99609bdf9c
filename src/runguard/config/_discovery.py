"""Locating configuration sources.

runguard reads at most two files: the per-user config file and a file named
with ``--config``. Neither a project directory nor the working directory is
searched, since the supervised command may run anywhere.
"""

from pathlib import Path
from typing import Any

import platformdirs

from ._defaults import DEFAULT_CONFIG
from ._loader import parse_env_vars
from ._models._source import ConfigSource, ConfigSourceName

APP_NAME = "runguard"
CONFIG_FILENAME = "config.toml"


def get_user_config_path() -> Path:
    r"""Return where the per-user config file lives, whether or not it exists.

    - Linux: ``$XDG_CONFIG_HOME/runguard/config.toml``
    - macOS: ``~/Library/Application Support/runguard/config.toml``
    - Windows: ``%APPDATA%\runguard\config.toml``
    """
    return platformdirs.user_config_path(APP_NAME) / CONFIG_FILENAME


def _file_exists(path: Path) -> bool:
    """Return True for a regular file, False if it is missing or unreadable."""
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    config_path: Path | None = None,
    *,
    include_env: bool = True,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """List configuration sources from highest to lowest precedence.

    File sources are returned unread. An explicit ``config_path`` is always
    marked as existing so that a missing file fails loudly when read, while
    a missing user file is silently skipped.

    Args:
        config_path: File named with ``--config``.
        include_env: Whether RUNGUARD_<SECTION>__<KEY> variables count.
        cli_overrides: Values taken from CLI flags. Omitted when empty.
    """
    sources: list[ConfigSource] = []

    if cli_overrides:
        sources.append(ConfigSource(ConfigSourceName.CLI, None, True, cli_overrides))

    if include_env:
        env_values = parse_env_vars()
        sources.append(
            ConfigSource(ConfigSourceName.ENV, None, bool(env_values), env_values)
        )

    if config_path is not None:
        sources.append(ConfigSource(ConfigSourceName.FILE, config_path, True))

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(ConfigSourceName.USER, user_path, _file_exists(user_path))
    )
    sources.append(ConfigSource(ConfigSourceName.DEFAULT, None, True, DEFAULT_CONFIG))
    return sources
