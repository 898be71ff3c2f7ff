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
"""asyncio engine for netdial.lowlevel.api_async"""

from __future__ import annotations

__all__ = ["Task", "TaskGroup", "coro_yield"]

import asyncio
import types
from collections.abc import Awaitable, Callable, Coroutine, Generator
from types import TracebackType
from typing import Any, Self, TypeVar, TypeVarTuple, final

from ..abc import Task as AbstractTask, TaskGroup as AbstractTaskGroup

_T = TypeVar("_T")
_T_co = TypeVar("_T_co", covariant=True)
_T_PosArgs = TypeVarTuple("_T_PosArgs")


@types.coroutine
def coro_yield() -> Generator[Any, Any, None]:
    yield


@final
class Task(AbstractTask[_T_co]):
    __slots__ = ("__task",)

    def __init__(self, task: asyncio.Task[_T_co]) -> None:
        self.__task: asyncio.Task[_T_co] = task

    def __repr__(self) -> str:
        return f"<Task({self.__task.get_name()!r})>"

    def done(self) -> bool:
        return self.__task.done()

    def cancel(self) -> bool:
        return self.__task.cancel()

    def cancelled(self) -> bool:
        return self.__task.cancelled()


@final
class TaskGroup(AbstractTaskGroup):
    __slots__ = ("__asyncio_tg",)

    def __init__(self) -> None:
        super().__init__()
        self.__asyncio_tg: asyncio.TaskGroup = asyncio.TaskGroup()

    async def __aenter__(self) -> Self:
        await self.__asyncio_tg.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await self.__asyncio_tg.__aexit__(exc_type, exc_val, exc_tb)
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
        started: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        coroutine = _run_once_started(started, coro_func, args)
        try:
            task = Task(self.__asyncio_tg.create_task(coroutine, name=name))
        except BaseException:
            coroutine.close()
            raise
        finally:
            del coroutine

        try:
            await started
        except asyncio.CancelledError:
            task.cancel()
            raise
        return task


async def _run_once_started(
    started: asyncio.Future[None],
    coro_func: Callable[[*_T_PosArgs], Awaitable[_T]],
    args: tuple[*_T_PosArgs],
) -> _T:
    if started.done():
        # start() was cancelled before this task ran: wait for the pending cancellation.
        await asyncio.sleep(0)
    else:
        started.set_result(None)
    return await coro_func(*args)
