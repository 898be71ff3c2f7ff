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
"""Asynchronous backend engine interfaces module."""

from __future__ import annotations

__all__ = [
    "AsyncBackend",
    "Task",
    "TaskGroup",
]

import socket as _socket
from abc import ABCMeta, abstractmethod
from collections.abc import Callable, Coroutine, Sequence
from types import TracebackType
from typing import TYPE_CHECKING, Any, Generic, Self, TypeVar, TypeVarTuple, Unpack

if TYPE_CHECKING:
    from ...socket import SocketAddress

_T = TypeVar("_T")
_T_co = TypeVar("_T_co", covariant=True)
_T_PosArgs = TypeVarTuple("_T_PosArgs")


class Task(Generic[_T_co], metaclass=ABCMeta):
    """
    Handle on a task started by :meth:`TaskGroup.start`.

    Cancelling a task through its handle only stops this task. The other members of the group keep running.
    """

    __slots__ = ("__weakref__",)

    @abstractmethod
    def done(self) -> bool:
        """
        Returns:
            :data:`True` once the task has returned, raised or has been cancelled.
        """
        raise NotImplementedError

    @abstractmethod
    def cancel(self) -> bool:
        """
        Requests the cancellation of the task. The cancellation is delivered at its next checkpoint.

        Returns:
            :data:`False` if the task was already *done*, :data:`True` otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    def cancelled(self) -> bool:
        """
        Returns:
            :data:`True` if the task ended because of a cancellation.
        """
        raise NotImplementedError


class TaskGroup(metaclass=ABCMeta):
    """
    Scope owning a set of concurrent tasks.

    Leaving the :keyword:`async with` block waits for every task of the group::

        async with backend.create_task_group() as task_group:
            first = await task_group.start(attempt, address_1)
            second = await task_group.start(attempt, address_2)
    """

    __slots__ = ("__weakref__",)

    @abstractmethod
    async def __aenter__(self) -> Self:
        raise NotImplementedError

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    async def start(
        self,
        coro_func: Callable[[Unpack[_T_PosArgs]], Coroutine[Any, Any, _T]],
        /,
        *args: *_T_PosArgs,
        name: str | None = ...,
    ) -> Task[_T]:
        """
        Runs ``coro_func(*args)`` in a new task of this group, and waits for the event loop to start it.

        Parameters:
            coro_func: An async function.
            args: Positional arguments to be passed to `coro_func`.
            name: Name of the task, for debugging purpose.

        Returns:
            the handle of the new task.
        """
        raise NotImplementedError


class AsyncBackend(metaclass=ABCMeta):
    """
    The async framework seen by netdial.

    It provides the task group used to race attempts, name resolution, and the three socket operations
    performed against one concrete address (:meth:`connect_tcp`, :meth:`listen_tcp` and :meth:`bind_udp`).
    """

    __slots__ = ("__weakref__",)

    @abstractmethod
    async def coro_yield(self) -> None:
        """
        Checkpoint: lets other tasks run and delivers a pending cancellation.
        """
        raise NotImplementedError

    @abstractmethod
    def create_task_group(self) -> TaskGroup:
        """
        Returns:
            A new task group, to be used as an :term:`asynchronous context manager`.
        """
        raise NotImplementedError

    @abstractmethod
    async def getaddrinfo(
        self,
        host: bytes | str | None,
        port: bytes | str | int | None,
        family: int = 0,
        type: int = 0,
        proto: int = 0,
        flags: int = 0,
    ) -> Sequence[tuple[int, int, int, str, tuple[str, int] | tuple[str, int, int, int] | tuple[int, bytes]]]:
        """
        Asynchronous version of :func:`socket.getaddrinfo`.

        Raises:
            socket.gaierror: the lookup failed.
        """
        raise NotImplementedError

    @abstractmethod
    async def connect_tcp(self, address: SocketAddress) -> _socket.socket:
        """
        Opens a TCP connection to a concrete `address`. No name resolution is performed.

        Raises:
            OSError: Cannot connect to `address`. The socket is closed.

        Returns:
            A connected non-blocking stream socket owned by the caller.
        """
        raise NotImplementedError

    @abstractmethod
    async def listen_tcp(self, address: SocketAddress, backlog: int, *, reuse_port: bool = ...) -> _socket.socket:
        """
        Opens a TCP listener bound to a concrete `address`.

        Parameters:
            address: The local address. Port ``0`` lets the system pick an unused port.
            backlog: Maximum number of queued connections passed to :meth:`~socket.socket.listen`.
            reuse_port: Sets :data:`~socket.SO_REUSEPORT` on the socket.

        Raises:
            OSError: Cannot bind to `address`.
            ValueError: `reuse_port` is not supported on this platform.

        Returns:
            A listening non-blocking stream socket owned by the caller.
        """
        raise NotImplementedError

    @abstractmethod
    async def bind_udp(self, address: SocketAddress, *, reuse_port: bool = ...) -> _socket.socket:
        """
        Opens a UDP socket bound to a concrete `address`.

        Parameters:
            address: The local address. Port ``0`` lets the system pick an unused port.
            reuse_port: Sets :data:`~socket.SO_REUSEPORT` on the socket.

        Raises:
            OSError: Cannot bind to `address`.
            ValueError: `reuse_port` is not supported on this platform.

        Returns:
            A bound non-blocking datagram socket owned by the caller.
        """
        raise NotImplementedError
