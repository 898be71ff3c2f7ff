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
"""Per-address socket operations shared by the builtin backends."""

from __future__ import annotations

__all__ = ["BaseSocketFactory"]

import contextlib
import socket as _socket
from abc import ABCMeta, abstractmethod
from collections.abc import Iterator

from .... import _utils
from ....constants import REUSE_ADDRESS_ON_LISTENERS
from ....socket import IPv6SocketAddress, SocketAddress, socket_address_family


class BaseSocketFactory(metaclass=ABCMeta):
    __slots__ = ()

    @abstractmethod
    async def connect_socket(self, socket: _socket.socket, address: tuple[str, int] | tuple[str, int, int, int]) -> None:
        raise NotImplementedError

    async def open_tcp_connection(self, address: SocketAddress) -> _socket.socket:
        socket = _socket.socket(socket_address_family(address), _socket.SOCK_STREAM, _socket.IPPROTO_TCP)
        try:
            socket.setblocking(False)
            await self.connect_socket(socket, address.for_connection())
        except BaseException:
            socket.close()
            raise
        return socket

    def open_tcp_listener(self, address: SocketAddress, backlog: int, *, reuse_port: bool) -> _socket.socket:
        with self.__bound_socket(
            address,
            _socket.SOCK_STREAM,
            reuse_address=REUSE_ADDRESS_ON_LISTENERS,
            reuse_port=reuse_port,
        ) as socket:
            socket.listen(backlog)
            return socket

    def open_udp_socket(self, address: SocketAddress, *, reuse_port: bool) -> _socket.socket:
        with self.__bound_socket(address, _socket.SOCK_DGRAM, reuse_address=False, reuse_port=reuse_port) as socket:
            return socket

    @contextlib.contextmanager
    def __bound_socket(
        self,
        address: SocketAddress,
        socktype: int,
        *,
        reuse_address: bool,
        reuse_port: bool,
    ) -> Iterator[_socket.socket]:
        family = socket_address_family(address)
        socket = _socket.socket(family, socktype)
        try:
            if reuse_address and hasattr(_socket, "SO_REUSEADDR"):
                try:
                    socket.setsockopt(_socket.SOL_SOCKET, _socket.SO_REUSEADDR, True)
                except OSError:
                    # Will fail later on bind()
                    pass
            if reuse_port:
                _utils.set_reuseport(socket)
            # Disable IPv4/IPv6 dual stack support (enabled by
            # default on Linux) which makes a single socket
            # bind on both address families.
            if family == _socket.AF_INET6 and hasattr(_socket, "IPPROTO_IPV6"):
                socket.setsockopt(_socket.IPPROTO_IPV6, _socket.IPV6_V6ONLY, True)
            sockaddr = _bind_address(address)
            try:
                socket.bind(sockaddr)
            except OSError as exc:
                raise _utils.bind_error(exc, sockaddr) from None
            socket.setblocking(False)
            yield socket
        except BaseException:
            socket.close()
            raise


def _bind_address(address: SocketAddress) -> tuple[str, int] | tuple[str, int, int, int]:
    match address:
        case IPv6SocketAddress(host, port, flowinfo, scope_id) if "%" in host:
            host, scope = host.split("%", 1)
            if scope.isdigit():
                scope_id = int(scope)
            else:
                scope_id = _socket.if_nametoindex(scope)
            return (host, port, flowinfo, scope_id)
        case _:
            return address.for_connection()
