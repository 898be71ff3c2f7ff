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
"""Endpoint model module.

An endpoint is what the caller wants to reach: either a literal socket address,
or a host name which still needs to be resolved, along with a port.
"""

from __future__ import annotations

__all__ = [
    "Endpoint",
    "HostEndpoint",
    "SocketAddressEndpoint",
    "to_endpoint",
]

import ipaddress
from dataclasses import dataclass
from typing import Any, TypeAlias

from .exceptions import MalformedEndpointError
from .lowlevel.socket import IPAddress, IPv4SocketAddress, IPv6SocketAddress, SocketAddress, socket_address_from_ip


@dataclass(frozen=True, slots=True)
class SocketAddressEndpoint:
    """
    A literal socket address. No name resolution is needed.
    """

    address: SocketAddress
    """The concrete socket address."""

    def __str__(self) -> str:
        return str(self.address)


@dataclass(frozen=True, slots=True)
class HostEndpoint:
    """
    A host name and a port. The host name must be resolved before use.
    """

    host: str
    """A non-empty host name."""

    port: int
    """A port number, between 0 and 65535."""

    def __post_init__(self) -> None:
        if not isinstance(self.host, str) or not self.host:
            raise MalformedEndpointError(f"Invalid host name: {self.host!r}")
        _check_port(self.port)

    def __str__(self) -> str:
        return f"{self.host}:{self.port:d}"


Endpoint: TypeAlias = SocketAddressEndpoint | HostEndpoint
"""Either a literal socket address or a host name with a port."""


def to_endpoint(value: Any) -> Endpoint:
    """
    Converts `value` into an :data:`Endpoint`.

    Accepted values:

    * An :data:`Endpoint`, returned as is.
    * A :data:`~netdial.lowlevel.socket.SocketAddress`.
    * A ``(host, port)`` pair. `host` may be an IP address or a host name.
    * A ``(host, port, flowinfo, scope_id)`` tuple where `host` is an IPv6 address.
    * A string in the form ``"host:port"`` or ``"[ipv6]:port"``.

    Example:
        >>> to_endpoint("127.0.0.1:8080")
        SocketAddressEndpoint(address=IPv4SocketAddress(host='127.0.0.1', port=8080))
        >>> to_endpoint("[::1]:8080")
        SocketAddressEndpoint(address=IPv6SocketAddress(host='::1', port=8080, flowinfo=0, scope_id=0))
        >>> to_endpoint(("localhost", 8080))
        HostEndpoint(host='localhost', port=8080)

    Raises:
        MalformedEndpointError: `value` cannot be converted.

    Returns:
        the endpoint.
    """
    match value:
        case SocketAddressEndpoint() | HostEndpoint():
            return value
        case IPv4SocketAddress() | IPv6SocketAddress():
            _check_port(value.port)
            return SocketAddressEndpoint(value)
        case str():
            return _parse_endpoint_string(value)
        case (str() as host, int() as port):
            return _host_port_to_endpoint(host, port)
        case (str() as host, int() as port, int() as flowinfo, int() as scope_id):
            _check_port(port)
            ip = _parse_ip_address(host)
            if not isinstance(ip, ipaddress.IPv6Address):
                raise MalformedEndpointError(f"Expected an IPv6 address, got {host!r}")
            return SocketAddressEndpoint(IPv6SocketAddress(str(ip), port, flowinfo, scope_id))
        case _:
            raise MalformedEndpointError(f"Cannot convert {value!r} to an endpoint")


def _host_port_to_endpoint(host: str, port: int) -> Endpoint:
    _check_port(port)
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return HostEndpoint(host, port)
    return SocketAddressEndpoint(socket_address_from_ip(ip, port))


def _parse_endpoint_string(value: str) -> Endpoint:
    if value.startswith("["):
        host, sep, port = value[1:].partition("]:")
        if not sep:
            raise MalformedEndpointError(f"Missing port in {value!r}")
        ip = _parse_ip_address(host)
        if not isinstance(ip, ipaddress.IPv6Address):
            raise MalformedEndpointError(f"Expected an IPv6 address between brackets in {value!r}")
        return SocketAddressEndpoint(socket_address_from_ip(ip, _parse_port(port, value)))

    host, sep, port = value.rpartition(":")
    if not sep:
        raise MalformedEndpointError(f"Missing port in {value!r}")
    if ":" in host:
        raise MalformedEndpointError(f"IPv6 addresses must be enclosed in brackets: {value!r}")
    if not host:
        raise MalformedEndpointError(f"Missing host in {value!r}")
    return _host_port_to_endpoint(host, _parse_port(port, value))


def _parse_ip_address(host: str) -> IPAddress:
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        raise MalformedEndpointError(f"Invalid IP address: {host!r}") from None


def _parse_port(port: str, value: str) -> int:
    if not (port.isascii() and port.isdigit()):
        raise MalformedEndpointError(f"Invalid port in {value!r}")
    return int(port)


def _check_port(port: Any) -> None:
    if not isinstance(port, int) or isinstance(port, bool):
        raise MalformedEndpointError(f"Port must be an integer, got {port!r}")
    if not 0 <= port <= 65535:
        raise MalformedEndpointError(f"Port out of range: {port!r}")
