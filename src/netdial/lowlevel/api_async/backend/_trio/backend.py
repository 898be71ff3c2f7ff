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

__all__ = ["TrioBackend"]

import socket as _socket
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .... import _utils
from ....constants import DEFAULT_LISTEN_BACKLOG
from ..abc import AsyncBackend as AbstractAsyncBackend, TaskGroup

if TYPE_CHECKING:
    from ....socket import SocketAddress


class TrioBackend(AbstractAsyncBackend):
    __slots__ = ("__trio", "__socket_factory")

    def __init__(self) -> None:
        try:
            import trio
        except ModuleNotFoundError as exc:
            raise _utils.missing_extra_deps("trio") from exc

        from .sockets import TrioSocketFactory

        self.__trio = trio
        self.__socket_factory = TrioSocketFactory()

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} object at {id(self):#x}>"

    async def coro_yield(self) -> None:
        await self.__trio.lowlevel.checkpoint()

    def create_task_group(self) -> TaskGroup:
        from .tasks import TaskGroup

        return TaskGroup()

    async def getaddrinfo(
        self,
        host: bytes | str | None,
        port: bytes | str | int | None,
        family: int = 0,
        type: int = 0,
        proto: int = 0,
        flags: int = 0,
    ) -> Sequence[tuple[int, int, int, str, tuple[str, int] | tuple[str, int, int, int] | tuple[int, bytes]]]:
        return await self.__trio.socket.getaddrinfo(host, port, family=family, type=type, proto=proto, flags=flags)

    async def connect_tcp(self, address: SocketAddress) -> _socket.socket:
        return await self.__socket_factory.open_tcp_connection(address)

    async def listen_tcp(
        self,
        address: SocketAddress,
        backlog: int = DEFAULT_LISTEN_BACKLOG,
        *,
        reuse_port: bool = False,
    ) -> _socket.socket:
        await self.coro_yield()
        return self.__socket_factory.open_tcp_listener(address, backlog, reuse_port=reuse_port)

    async def bind_udp(self, address: SocketAddress, *, reuse_port: bool = False) -> _socket.socket:
        await self.coro_yield()
        return self.__socket_factory.open_udp_socket(address, reuse_port=reuse_port)
