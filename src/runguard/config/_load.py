import os
import sys
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations

from runguard.exceptions import ConfigError

from ._models import Config

STRICT_ENV_VAR = "RUNGUARD_STRICT_CONFIG"


def _strict_mode() -> bool:
    return os.environ.get(STRICT_ENV_VAR, "").strip().lower() in {"1", "true", "yes"}


def _report(prefix: str, message: str) -> None:
    print(f"{prefix}: {message}", file=sys.stderr)  # noqa: T201


def safe_load_config(
    *,
    config_path: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration for the CLI without letting a bad file block a run.

    A broken config file should not stop ``runguard retry`` from running
    the user's command, so by default problems are reported as a warning
    and the built-in defaults are used. With RUNGUARD_STRICT_CONFIG=1 they
    end the process instead. A ``--config`` file that does not exist always
    ends the process.

    Args:
        config_path: File named with ``--config``.
        cli_overrides: Values taken from CLI flags.

    Returns:
        The configuration and the problem that was ignored, if any.
    """
    if config_path is not None and not config_path.exists():
        _report("Error", f"Config file not found: {config_path}")
        sys.exit(1)

    try:
        return Config.load(config_path=config_path, cli_overrides=cli_overrides), None
    except ConfigError as e:
        problem = str(e)
    except OSError as e:
        problem = f"Failed to load config: {e}"

    if _strict_mode():
        _report("Error", problem)
        sys.exit(1)

    _report("Warning", f"{problem} (using defaults)")
    return Config.from_dict({}), problem
