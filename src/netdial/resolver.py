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
"""Name resolution module."""

from __future__ import annotations

__all__ = [
    "AsyncResolver",
    "GetAddrInfoResolver",
]

import ipaddress
import logging
import socket as _socket
from abc import ABCMeta, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .exceptions import ResolutionError
from .lowlevel.api_async.backend.utils import BuiltinAsyncBackendLiteral, ensure_backend
from .lowlevel.socket import IPAddress

if TYPE_CHECKING:
    from .lowlevel.api_async.backend.abc import AsyncBackend

logger = logging.getLogger(__name__)


class AsyncResolver(metaclass=ABCMeta):
    """
    Translates a host name into IP addresses.
    """

    __slots__ = ("__weakref__",)

    @abstractmethod
    async def resolve(self, host: str) -> Sequence[IPAddress]:
        """
        Resolves `host`.

        Parameters:
            host: The host name to resolve.

        Raises:
            ResolutionError: The name could not be resolved.

        Returns:
            The IP addresses of `host`, in preference order. It may be empty.
        """
        raise NotImplementedError


class GetAddrInfoResolver(AsyncResolver):
    """
    A resolver which uses the system's :func:`socket.getaddrinfo`.

    The lookup runs in a worker thread, through :meth:`.AsyncBackend.getaddrinfo`.
    """

    __slots__ = ("__backend", "__family")

    def __init__(
        self,
        backend: AsyncBackend | BuiltinAsyncBackendLiteral | None = None,
        *,
        family: int = _socket.AF_UNSPEC,
    ) -> None:
        """
        Parameters:
            backend: The backend implementation to use. If :data:`None`, it is detected at each call.
            family: Restricts the lookup to one address family.
        """
        match family:
            case _socket.AF_UNSPEC | _socket.AF_INET | _socket.AF_INET6:
                pass
            case _:
                raise ValueError("Only these families are supported: AF_UNSPEC, AF_INET, AF_INET6")

        self.__backend: AsyncBackend | BuiltinAsyncBackendLiteral | None = backend
        self.__family: int = family

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} family={_socket.AddressFamily(self.__family)!r}>"

    async def resolve(self, host: str) -> Sequence[IPAddress]:
        try:
            ip = ipaddress.ip_address(host)
        except ValueError:
            pass
        else:
            if self.__family != _socket.AF_UNSPEC and _ip_family(ip) != self.__family:
                return []
            return [ip]

        backend = ensure_backend(self.__backend)
        try:
            addrinfo_list = await backend.getaddrinfo(host, None, family=self.__family, type=_socket.SOCK_STREAM)
        except _socket.gaierror as exc:
            raise ResolutionError(host, exc.strerror or str(exc)) from exc

        addresses: dict[IPAddress, None] = {}
        for family, _, _, _, sockaddr in addrinfo_list:
            if family not in (_socket.AF_INET, _socket.AF_INET6):
                continue
            addresses.setdefault(ipaddress.ip_address(sockaddr[0]), None)

        logger.debug("%r resolved to %d address(es)", host, len(addresses))
        return list(addresses)


def _ip_family(ip: IPAddress) -> int:
    match ip:
        case ipaddress.IPv4Address():
            return _socket.AF_INET
        case _:
            return _socket.AF_INET6
