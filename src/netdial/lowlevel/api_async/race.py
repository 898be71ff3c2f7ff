# Copyright 2021-2025, Francis Clairicia-Rose-Claire-Josephine
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
"""Race combinator module.

Runs several attempts concurrently and keeps the first one that succeeds.
"""

from __future__ import annotations

__all__ = ["select_all_ok"]

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar, cast

from ...exceptions import AllAttemptsFailedError
from .backend.abc import AsyncBackend, Task

_T = TypeVar("_T")

logger = logging.getLogger(__name__)


async def select_all_ok(
    backend: AsyncBackend,
    attempts: Iterable[Callable[[], Awaitable[_T]]],
    *,
    discard: Callable[[_T], object] | None = None,
) -> _T:
    """
    Starts every attempt concurrently and returns the first successful result.

    Every attempt is started, in order. As soon as one of them returns, the others which are still running are cancelled.
    A result produced by an attempt after the winner is known is given to `discard`, so that exactly one result survives.

    Parameters:
        backend: The backend implementation to use.
        attempts: Zero-argument async functions. Must not be empty.
        discard: Called with every surplus result (e.g. :meth:`socket.socket.close`).

    Raises:
        ValueError: `attempts` is empty.
        AllAttemptsFailedError: every attempt raised an :exc:`OSError`.

    Returns:
        The result of the first attempt which succeeded.
    """
    attempts = list(attempts)
    if not attempts:
        raise ValueError("select_all_ok() requires at least one attempt")

    logger.debug("Creating %d parallel connection attempts", len(attempts))

    winner: _T | None = None
    winner_index: int = -1
    errors: list[OSError] = []
    tasks: list[Task[None]] = []

    async def run_attempt(index: int, attempt: Callable[[], Awaitable[_T]]) -> None:
        nonlocal winner, winner_index
        try:
            result = await attempt()
        except OSError as exc:
            errors.append(exc)
            return
        finally:
            del attempt

        if winner_index >= 0:
            # Lost the race by a hair.
            if discard is not None:
                discard(result)
            return

        winner, winner_index = result, index
        for task_index, task in enumerate(tasks):
            if task_index != index:
                task.cancel()

    try:
        async with backend.create_task_group() as task_group:
            for index, attempt in enumerate(attempts):
                task = await task_group.start(run_attempt, index, attempt)
                tasks.append(task)
                if winner_index >= 0 and winner_index != index:
                    # The winner finished before this handle was known.
                    task.cancel()
                del task

        if winner_index < 0:
            logger.debug("All %d parallel attempts failed", len(errors))
            try:
                raise AllAttemptsFailedError(errors) from ExceptionGroup("select_all_ok() failed", errors)
            finally:
                errors.clear()

        logger.debug("Parallel attempt #%d won the race", winner_index)
        return cast(_T, winner)
    except BaseException:
        if winner_index >= 0 and discard is not None:
            discard(cast(_T, winner))
        raise
    finally:
        tasks.clear()
