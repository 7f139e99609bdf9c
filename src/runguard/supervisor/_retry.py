"""Bounded retry policy.

Runs a command until it exits with code 0 or the retry budget is used up.
Attempts run back-to-back with no delay between them.
"""

import dataclasses
import functools
from collections.abc import Sequence

import anyio

from runguard.exceptions import NegativeRetriesError

from ._models import RunResult
from ._process import ProcessRunner, normalize_command


async def run_with_retry(
    budget: int,
    command: Sequence[str],
    *,
    runner: ProcessRunner | None = None,
) -> RunResult:
    """Run a command up to ``budget + 1`` times, stopping at the first success.

    Only a nonzero exit code is retried. A launch failure ends the loop at
    once since every further attempt would fail the same way. Running out
    of retries is not an error: the last attempt's exit code is returned.

    Args:
        budget: Number of retries allowed after the first attempt.
        command: Program followed by its arguments.
        runner: Process runner to use. Creates a default runner if None.

    Returns:
        The result of the last attempt, with ``attempts`` set to the number
        of times the command was started.

    Raises:
        NegativeRetriesError: If budget is negative. Nothing is spawned.
        EmptyCommandError: If the command is empty. Nothing is spawned.
    """
    if budget < 0:
        msg = f"negative retries are not allowed: {budget}"
        raise NegativeRetriesError(msg, budget=budget)

    argv = normalize_command(command)
    runner = runner or ProcessRunner()
    logger = runner.logger.bind(policy="retry", budget=budget)

    attempt = 0
    while True:
        attempt += 1
        result = dataclasses.replace(await runner.run(argv), attempts=attempt)

        if result.success or result.error is not None:
            return result

        if attempt > budget:
            logger.warning(
                "retries_exhausted", attempts=attempt, exit_code=result.exit_code
            )
            return result

        logger.info("attempt_failed", attempt=attempt, exit_code=result.exit_code)


def run_with_retry_sync(
    budget: int,
    command: Sequence[str],
    *,
    runner: ProcessRunner | None = None,
) -> RunResult:
    """Run run_with_retry() in a new event loop.

    Blocks until the final attempt has exited. Must not be called from a
    running event loop.
    """
    return anyio.run(functools.partial(run_with_retry, budget, command, runner=runner))
