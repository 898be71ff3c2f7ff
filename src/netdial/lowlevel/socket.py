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
"""Network socket helper module."""

from __future__ import annotations

__all__ = [
    "IPAddress",
    "IPv4SocketAddress",
    "IPv6SocketAddress",
    "SocketAddress",
    "new_socket_address",
    "socket_address_family",
    "socket_address_from_ip",
]

import ipaddress
import socket as _socket
from typing import Any, Literal, NamedTuple, TypeAlias, assert_never, overload

IPAddress: TypeAlias = ipaddress.IPv4Address | ipaddress.IPv6Address
"""An IP address, as returned by a resolver."""


class IPv4SocketAddress(NamedTuple):
    """An internet (IPv4) socket address."""

    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port:d}"

    def for_connection(self) -> tuple[str, int]:
        """
        Returns:
            A pair of (host, port)
        """
        return self.host, self.port


class IPv6SocketAddress(NamedTuple):
    """An internet (IPv6) socket address."""

    host: str
    port: int
    flowinfo: int = 0
    scope_id: int = 0

    def __str__(self) -> str:
        return f"[{self.host}]:{self.port:d}"

    def for_connection(self) -> tuple[str, int, int, int]:
        """
        Returns:
            A tuple of (host, port, flowinfo, scope_id)
        """
        return self.host, self.port, self.flowinfo, self.scope_id


SocketAddress: TypeAlias = IPv4SocketAddress | IPv6SocketAddress
"""An internet socket address, either IPv4 or IPv6."""


@overload
def new_socket_address(addr: tuple[str, int], family: Literal[_socket.AddressFamily.AF_INET]) -> IPv4SocketAddress: ...


@overload
def new_socket_address(
    addr: tuple[str, int] | tuple[str, int, int, int], family: Literal[_socket.AddressFamily.AF_INET6]
) -> IPv6SocketAddress: ...


@overload
def new_socket_address(addr: tuple[Any, ...], family: int) -> SocketAddress: ...


def new_socket_address(addr: tuple[Any, ...], family: int) -> SocketAddress:
    """
    Factory to create a :data:`SocketAddress` from `addr`.

    Example:
        >>> import socket
        >>> new_socket_address(("127.0.0.1", 12345), socket.AF_INET)
        IPv4SocketAddress(host='127.0.0.1', port=12345)
        >>> new_socket_address(("::1", 12345, 12, 345), socket.AF_INET6)
        IPv6SocketAddress(host='::1', port=12345, flowinfo=12, scope_id=345)

    Parameters:
        addr: The address in the form ``(host, port)`` or ``(host, port, flow, scope_id)``.
        family: The socket family.

    Raises:
        ValueError: Invalid `family`.
        TypeError: Invalid `addr`.

    Returns:
        a :data:`SocketAddress` named tuple.
    """
    match family:
        case _socket.AddressFamily.AF_INET:
            return IPv4SocketAddress(*addr)
        case _socket.AddressFamily.AF_INET6:
            return IPv6SocketAddress(*addr)
        case _:
            raise ValueError(f"Unsupported address family {family!r}")


def socket_address_from_ip(ip: IPAddress, port: int) -> SocketAddress:
    """
    Combines a resolved IP address with a port.

    Example:
        >>> import ipaddress
        >>> socket_address_from_ip(ipaddress.ip_address("10.0.0.1"), 80)
        IPv4SocketAddress(host='10.0.0.1', port=80)
        >>> socket_address_from_ip(ipaddress.ip_address("::1"), 80)
        IPv6SocketAddress(host='::1', port=80, flowinfo=0, scope_id=0)
    """
    match ip:
        case ipaddress.IPv4Address():
            return IPv4SocketAddress(str(ip), port)
        case ipaddress.IPv6Address():
            return IPv6SocketAddress(str(ip), port)
        case _:  # pragma: no cover
            assert_never(ip)


def socket_address_family(address: SocketAddress) -> _socket.AddressFamily:
    """
    Returns:
        the address family to use for a socket bound or connected to `address`.
    """
    match address:
        case IPv4SocketAddress():
            return _socket.AF_INET
        case IPv6SocketAddress():
            return _socket.AF_INET6
        case _:
            raise TypeError(f"Expected a SocketAddress, got {address!r}")
