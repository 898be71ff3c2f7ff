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
"""Dial functions module.

Here are the entry points which turn an endpoint into one usable socket.
"""

from __future__ import annotations

__all__ = [
    "DialStrategy",
    "dispatch",
    "tcp_connect_chain",
    "tcp_connect_race",
    "tcp_listen_chain",
    "udp_bind_chain",
]

import enum
import functools
import logging
import socket as _socket
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, assert_never

from .endpoint import Endpoint, HostEndpoint, SocketAddressEndpoint, to_endpoint
from .exceptions import NoAddressesAvailableError, ResolutionError
from .lowlevel.api_async.backend.abc import AsyncBackend
from .lowlevel.api_async.backend.utils import BuiltinAsyncBackendLiteral, ensure_backend
from .lowlevel.api_async.chain import chain_attempts
from .lowlevel.api_async.race import select_all_ok
from .lowlevel.constants import DEFAULT_LISTEN_BACKLOG
from .lowlevel.socket import SocketAddress, socket_address_from_ip
from .resolver import AsyncResolver, GetAddrInfoResolver

_T = TypeVar("_T")

logger = logging.getLogger(__name__)


@enum.unique
class DialStrategy(enum.Enum):
    """How the resolved addresses are tried."""

    RACE = "race"
    """Try every address concurrently, keep the first success."""

    CHAIN = "chain"
    """Try the addresses one at a time, in resolver order."""


async def dispatch(
    endpoint: Any,
    resolver: AsyncResolver,
    operation: Callable[[SocketAddress], Awaitable[_T]],
    *,
    backend: AsyncBackend,
    strategy: DialStrategy,
    direct_operation: Callable[[SocketAddress], Awaitable[_T]] | None = None,
    discard: Callable[[_T], object] | None = None,
) -> _T:
    """
    Runs `operation` against `endpoint`, resolving it first if needed.

    * A literal socket address is given directly to `direct_operation` (defaults to `operation`);
      its outcome is returned unchanged and `resolver` is never called.
    * A host name is resolved with `resolver`, then each IP address is combined with the endpoint's port
      and the addresses are tried according to `strategy`.

    Parameters:
        endpoint: Anything accepted by :func:`.to_endpoint`.
        resolver: The resolver to use for host names.
        operation: The per-address operation.
        backend: The backend implementation to use.
        strategy: How the resolved addresses are tried.
        direct_operation: The operation to use for literal socket addresses.
        discard: Releases a surplus result when using :attr:`DialStrategy.RACE`.

    Raises:
        MalformedEndpointError: `endpoint` is not a valid endpoint. No I/O is performed.
        ResolutionError: `resolver` failed.
        NoAddressesAvailableError: `resolver` returned no address.
        AllAttemptsFailedError: every attempt failed.

    Returns:
        The result of the successful attempt.
    """
    match to_endpoint(endpoint):
        case SocketAddressEndpoint(address):
            if direct_operation is None:
                direct_operation = operation
            return await direct_operation(address)
        case HostEndpoint(host, port):
            addresses = await _resolve(resolver, host, port)
            logger.debug("Dialing %s:%d using %d address(es) (strategy=%s)", host, port, len(addresses), strategy.name)
            match strategy:
                case DialStrategy.RACE:
                    return await select_all_ok(
                        backend,
                        [functools.partial(operation, address) for address in addresses],
                        discard=discard,
                    )
                case DialStrategy.CHAIN:
                    return await chain_attempts(operation, addresses)
                case _:
                    assert_never(strategy)
        case invalid:  # pragma: no cover
            raise AssertionError(f"Unexpected endpoint {invalid!r}")


async def _resolve(resolver: AsyncResolver, host: str, port: int) -> list[SocketAddress]:
    try:
        ip_addresses = await resolver.resolve(host)
    except ResolutionError:
        raise
    except OSError as exc:
        raise ResolutionError(host, str(exc)) from exc

    if not ip_addresses:
        raise NoAddressesAvailableError(host)

    return [socket_address_from_ip(ip, port) for ip in ip_addresses]


def _close_socket(socket: _socket.socket) -> None:
    socket.close()


def _setup(
    endpoint: Any,
    resolver: AsyncResolver | None,
    backend: AsyncBackend | BuiltinAsyncBackendLiteral | None,
) -> tuple[Endpoint, AsyncResolver, AsyncBackend]:
    endpoint = to_endpoint(endpoint)
    backend = ensure_backend(backend)
    if resolver is None:
        resolver = GetAddrInfoResolver(backend)
    return endpoint, resolver, backend


async def tcp_connect_race(
    endpoint: Any,
    *,
    resolver: AsyncResolver | None = None,
    backend: AsyncBackend | BuiltinAsyncBackendLiteral | None = None,
) -> _socket.socket:
    """
    Opens a TCP connection to `endpoint`.

    If `endpoint` must be resolved, a connection attempt is started for every address at once.
    The first established connection is kept, the others are cancelled.

    Parameters:
        endpoint: Anything accepted by :func:`.to_endpoint`.
        resolver: The resolver to use. Defaults to a :class:`.GetAddrInfoResolver`.
        backend: The backend implementation to use. If :data:`None`, it is detected from the running event loop.

    Raises:
        MalformedEndpointError: `endpoint` is not a valid endpoint.
        ResolutionError: The host name could not be resolved.
        NoAddressesAvailableError: The host name resolved to no address.
        AllAttemptsFailedError: Every connection attempt failed.
        OSError: The connection to a literal socket address failed.

    Returns:
        A connected non-blocking stream socket. The caller owns the socket.
    """
    endpoint, resolver, backend = _setup(endpoint, resolver, backend)
    return await dispatch(
        endpoint,
        resolver,
        backend.connect_tcp,
        backend=backend,
        strategy=DialStrategy.RACE,
        discard=_close_socket,
    )


async def tcp_connect_chain(
    endpoint: Any,
    *,
    resolver: AsyncResolver | None = None,
    backend: AsyncBackend | BuiltinAsyncBackendLiteral | None = None,
) -> _socket.socket:
    """
    Opens a TCP connection to `endpoint`.

    If `endpoint` must be resolved, the addresses are tried one after the other, in resolver order.

    Parameters:
        endpoint: Anything accepted by :func:`.to_endpoint`.
        resolver: The resolver to use. Defaults to a :class:`.GetAddrInfoResolver`.
        backend: The backend implementation to use. If :data:`None`, it is detected from the running event loop.

    Raises:
        MalformedEndpointError: `endpoint` is not a valid endpoint.
        ResolutionError: The host name could not be resolved.
        NoAddressesAvailableError: The host name resolved to no address.
        AllAttemptsFailedError: Every connection attempt failed.
        OSError: The connection to a literal socket address failed.

    Returns:
        A connected non-blocking stream socket. The caller owns the socket.
    """
    endpoint, resolver, backend = _setup(endpoint, resolver, backend)
    return await dispatch(endpoint, resolver, backend.connect_tcp, backend=backend, strategy=DialStrategy.CHAIN)


async def tcp_listen_chain(
    endpoint: Any,
    *,
    resolver: AsyncResolver | None = None,
    backend: AsyncBackend | BuiltinAsyncBackendLiteral | None = None,
    backlog: int = DEFAULT_LISTEN_BACKLOG,
    reuse_port: bool = False,
) -> _socket.socket:
    """
    Opens a TCP listener on `endpoint`.

    If `endpoint` must be resolved, the addresses are tried one after the other, in resolver order.

    Parameters:
        endpoint: Anything accepted by :func:`.to_endpoint`.
        resolver: The resolver to use. Defaults to a :class:`.GetAddrInfoResolver`.
        backend: The backend implementation to use. If :data:`None`, it is detected from the running event loop.
        backlog: is the maximum number of queued connections passed to :meth:`~socket.socket.listen`.
        reuse_port: tells the kernel to allow this endpoint to be bound to the same port as other existing endpoints
                    are bound to, so long as they all set this flag when being created.

    Raises:
        MalformedEndpointError: `endpoint` is not a valid endpoint.
        ResolutionError: The host name could not be resolved.
        NoAddressesAvailableError: The host name resolved to no address.
        AllAttemptsFailedError: Every bind attempt failed.
        OSError: Binding to a literal socket address failed.

    Returns:
        A listening non-blocking stream socket. The caller owns the socket.
    """
    endpoint, resolver, backend = _setup(endpoint, resolver, backend)
    listen_tcp = functools.partial(backend.listen_tcp, backlog=backlog, reuse_port=reuse_port)
    return await dispatch(endpoint, resolver, listen_tcp, backend=backend, strategy=DialStrategy.CHAIN)


async def udp_bind_chain(
    endpoint: Any,
    *,
    resolver: AsyncResolver | None = None,
    backend: AsyncBackend | BuiltinAsyncBackendLiteral | None = None,
    reuse_port: bool = False,
) -> _socket.socket:
    """
    Opens a UDP socket bound to `endpoint`.

    If `endpoint` must be resolved, the addresses are tried one after the other, in resolver order.

    Parameters:
        endpoint: Anything accepted by :func:`.to_endpoint`.
        resolver: The resolver to use. Defaults to a :class:`.GetAddrInfoResolver`.
        backend: The backend implementation to use. If :data:`None`, it is detected from the running event loop.
        reuse_port: If :data:`True`, sets the :data:`~socket.SO_REUSEPORT` socket option if supported.

    Raises:
        MalformedEndpointError: `endpoint` is not a valid endpoint.
        ResolutionError: The host name could not be resolved.
        NoAddressesAvailableError: The host name resolved to no address.
        AllAttemptsFailedError: Every bind attempt failed.
        OSError: Binding to a literal socket address failed.

    Returns:
        A bound non-blocking datagram socket. The caller owns the socket.
    """
    endpoint, resolver, backend = _setup(endpoint, resolver, backend)
    bind_udp = functools.partial(backend.bind_udp, reuse_port=reuse_port)
    return await dispatch(endpoint, resolver, bind_udp, backend=backend, strategy=DialStrategy.CHAIN)
