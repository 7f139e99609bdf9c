"""Reading and layering of configuration sources.

Every source is reduced to a plain nested dictionary in the same layout as
the TOML file, so sources can be layered with deep_merge() before a single
validation pass.
"""

import copy
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Any

from runguard.exceptions import ConfigLoadError

ENV_PREFIX = "RUNGUARD_"

# Separates the section from the key: RUNGUARD_TIMEOUT__GRACE
ENV_SEPARATOR = "__"


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML config file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file is not valid TOML. The error carries
            the line and column reported by the parser.
    """
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"{path}: invalid TOML: {e}"
            raise ConfigLoadError(
                msg,
                path=path,
                line=getattr(e, "lineno", None),
                column=getattr(e, "colno", None),
            ) from e


def deep_merge(
    base: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
    override: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Layer ``override`` on top of ``base`` and return a new dictionary.

    Tables present on both sides are merged key by key. Any other value in
    ``override`` replaces the one in ``base`` outright. Neither argument is
    modified and the result shares no containers with them.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)  # pyright: ignore[reportUnknownArgumentType]
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Collect ``<PREFIX><SECTION>__<KEY>`` variables into a config dictionary.

    ``RUNGUARD_TIMEOUT__GRACE=500ms`` becomes ``{"timeout": {"grace":
    "500ms"}}``. Values stay strings; the config models parse durations,
    signals and levels themselves. Variables without a section separator,
    such as RUNGUARD_DEBUG or RUNGUARD_STRICT_CONFIG, control runguard
    directly and are skipped.

    Args:
        prefix: Variable name prefix.
        environ: Variables to read. Defaults to ``os.environ``.
    """
    if environ is None:
        environ = os.environ

    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    for name, value in environ.items():
        if not name.startswith(prefix):
            continue
        section, sep, key = name[len(prefix) :].partition(ENV_SEPARATOR)
        if not sep or not section or not key:
            continue
        set_nested_key(result, f"{section}.{key.replace(ENV_SEPARATOR, '.')}", value)
    return result


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: object,
) -> None:
    """Store ``value`` under a dotted, case-insensitive key path.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "LOGGING.level", "debug")
        >>> d
        {'logging': {'level': 'debug'}}
    """
    *parents, leaf = key_path.lower().split(".")
    table = d
    for part in parents:
        child = table.get(part)
        if not isinstance(child, dict):
            child = table[part] = {}
        table = child  # pyright: ignore[reportUnknownVariableType]
    table[leaf] = value
