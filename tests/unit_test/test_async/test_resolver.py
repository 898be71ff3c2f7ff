from __future__ import annotations

import ipaddress
from socket import AF_INET, AF_INET6, AF_UNSPEC, EAI_NONAME, IPPROTO_TCP, SOCK_STREAM, gaierror
from typing import TYPE_CHECKING, Any

from netdial.exceptions import ResolutionError
from netdial.resolver import GetAddrInfoResolver

import pytest

if TYPE_CHECKING:
    from unittest.mock import MagicMock


def _addrinfo(family: int, host: str) -> tuple[int, int, int, str, tuple[Any, ...]]:
    if family == AF_INET6:
        return (family, SOCK_STREAM, IPPROTO_TCP, "", (host, 0, 0, 0))
    return (family, SOCK_STREAM, IPPROTO_TCP, "", (host, 0))


@pytest.mark.asyncio
class TestGetAddrInfoResolver:
    @pytest.mark.parametrize("host", ["127.0.0.1", "::1", "2001:db8::1"])
    async def test____resolve____numeric_host(self, host: str, mock_backend: MagicMock) -> None:
        # Arrange
        resolver = GetAddrInfoResolver(mock_backend)

        # Act
        addresses = await resolver.resolve(host)

        # Assert
        assert addresses == [ipaddress.ip_address(host)]
        mock_backend.getaddrinfo.assert_not_called()

    @pytest.mark.parametrize(
        ["host", "family"],
        [
            pytest.param("127.0.0.1", AF_INET6),
            pytest.param("::1", AF_INET),
        ],
    )
    async def test____resolve____numeric_host____family_mismatch(self, host: str, family: int, mock_backend: MagicMock) -> None:
        # Arrange
        resolver = GetAddrInfoResolver(mock_backend, family=family)

        # Act
        addresses = await resolver.resolve(host)

        # Assert
        assert addresses == []
        mock_backend.getaddrinfo.assert_not_called()

    async def test____resolve____use_backend_getaddrinfo(self, mock_backend: MagicMock) -> None:
        # Arrange
        resolver = GetAddrInfoResolver(mock_backend)
        mock_backend.getaddrinfo.return_value = [
            _addrinfo(AF_INET6, "::1"),
            _addrinfo(AF_INET, "127.0.0.1"),
        ]

        # Act
        addresses = await resolver.resolve("localhost")

        # Assert
        assert addresses == [ipaddress.IPv6Address("::1"), ipaddress.IPv4Address("127.0.0.1")]
        mock_backend.getaddrinfo.assert_awaited_once_with("localhost", None, family=AF_UNSPEC, type=SOCK_STREAM)

    @pytest.mark.parametrize("family", [AF_INET, AF_INET6])
    async def test____resolve____family_given_to_getaddrinfo(self, family: int, mock_backend: MagicMock) -> None:
        # Arrange
        resolver = GetAddrInfoResolver(mock_backend, family=family)
        mock_backend.getaddrinfo.return_value = []

        # Act
        await resolver.resolve("localhost")

        # Assert
        mock_backend.getaddrinfo.assert_awaited_once_with("localhost", None, family=family, type=SOCK_STREAM)

    async def test____resolve____remove_duplicates____keep_order(self, mock_backend: MagicMock) -> None:
        # Arrange
        resolver = GetAddrInfoResolver(mock_backend)
        mock_backend.getaddrinfo.return_value = [
            _addrinfo(AF_INET, "10.0.0.2"),
            _addrinfo(AF_INET, "10.0.0.1"),
            _addrinfo(AF_INET, "10.0.0.2"),
            _addrinfo(AF_INET6, "2001:db8::1"),
            _addrinfo(AF_INET, "10.0.0.1"),
        ]

        # Act
        addresses = await resolver.resolve("example.com")

        # Assert
        assert addresses == [
            ipaddress.IPv4Address("10.0.0.2"),
            ipaddress.IPv4Address("10.0.0.1"),
            ipaddress.IPv6Address("2001:db8::1"),
        ]

    async def test____resolve____empty_result(self, mock_backend: MagicMock) -> None:
        # Arrange
        resolver = GetAddrInfoResolver(mock_backend)
        mock_backend.getaddrinfo.return_value = []

        # Act
        addresses = await resolver.resolve("example.com")

        # Assert
        assert addresses == []

    async def test____resolve____gaierror(self, mock_backend: MagicMock) -> None:
        # Arrange
        resolver = GetAddrInfoResolver(mock_backend)
        error = gaierror(EAI_NONAME, "Name or service not known")
        mock_backend.getaddrinfo.side_effect = error

        # Act
        with pytest.raises(ResolutionError) as exc_info:
            await resolver.resolve("example.invalid")

        # Assert
        assert exc_info.value.host == "example.invalid"
        assert str(exc_info.value) == "could not resolve 'example.invalid': Name or service not known"
        assert exc_info.value.__cause__ is error


class TestGetAddrInfoResolverConstructor:
    @pytest.mark.parametrize("family", [-1, 123456789])
    def test____dunder_init____invalid_family(self, family: int) -> None:
        # Arrange

        # Act & Assert
        with pytest.raises(ValueError, match=r"^Only these families are supported: AF_UNSPEC, AF_INET, AF_INET6$"):
            GetAddrInfoResolver(family=family)
