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
"""trio engine for netdial.lowlevel.api_async"""

from __future__ import annotations

__all__ = ["Task", "TaskGroup"]

import contextlib
from collections.abc import Awaitable, Callable, Coroutine
from types import TracebackType
from typing import Any, Self, TypeVar, TypeVarTuple, final

import outcome
import trio

from ..abc import Task as AbstractTask, TaskGroup as AbstractTaskGroup

_T = TypeVar("_T")
_T_co = TypeVar("_T_co", covariant=True)
_T_PosArgs = TypeVarTuple("_T_PosArgs")


@final
class Task(AbstractTask[_T_co]):
    """Nursery child wrapped in its own cancel scope."""

    __slots__ = ("__scope", "__outcome")

    def __init__(self) -> None:
        self.__scope: trio.CancelScope = trio.CancelScope()
        self.__outcome: outcome.Outcome[_T_co] | None = None

    def done(self) -> bool:
        return self.__outcome is not None

    def cancel(self) -> bool:
        if self.__outcome is not None:
            return False
        self.__scope.cancel()
        return True

    def cancelled(self) -> bool:
        match self.__outcome:
            case outcome.Error(trio.Cancelled()):
                return True
            case _:
                return False

    async def _run(
        self,
        coro_func: Callable[[*_T_PosArgs], Awaitable[_T_co]],
        args: tuple[*_T_PosArgs],
        *,
        task_status: trio.TaskStatus[None],
    ) -> None:
        with self.__scope:
            task_status.started()
            result = self.__outcome = await outcome.acapture(coro_func, *args)
            del coro_func, args
            result.unwrap()


@final
class TaskGroup(AbstractTaskGroup):
    __slots__ = ("__nursery_ctx", "__nursery")

    def __init__(self) -> None:
        super().__init__()

        self.__nursery_ctx: contextlib.AbstractAsyncContextManager[trio.Nursery] = trio.open_nursery()
        self.__nursery: trio.Nursery | None = None

    async def __aenter__(self) -> Self:
        self.__nursery = await self.__nursery_ctx.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await self.__nursery_ctx.__aexit__(exc_type, exc_val, exc_tb)
        except BaseExceptionGroup as exc_grp:
            # The body's own exception is given back as is.
            if exc_val is not None and exc_grp.exceptions == (exc_val,):
                return
            raise
        finally:
            del exc_val, exc_tb

    async def start(
        self,
        coro_func: Callable[[*_T_PosArgs], Coroutine[Any, Any, _T]],
        /,
        *args: *_T_PosArgs,
        name: str | None = None,
    ) -> AbstractTask[_T]:
        if (nursery := self.__nursery) is None:
            raise RuntimeError("TaskGroup not started")

        task: Task[_T] = Task()
        await nursery.start(task._run, coro_func, args, name=name or coro_func)
        return task
