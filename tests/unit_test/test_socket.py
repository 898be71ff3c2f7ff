from __future__ import annotations

import ipaddress
from socket import AF_INET, AF_INET6, AF_UNIX
from typing import Any

from netdial.lowlevel.socket import (
    IPv4SocketAddress,
    IPv6SocketAddress,
    new_socket_address,
    socket_address_family,
    socket_address_from_ip,
)

import pytest


class TestSocketAddress:
    @pytest.mark.parametrize(
        ["address", "expected_str"],
        [
            pytest.param(IPv4SocketAddress("127.0.0.1", 8080), "127.0.0.1:8080"),
            pytest.param(IPv6SocketAddress("::1", 8080), "[::1]:8080"),
        ],
    )
    def test____dunder_str____format(self, address: Any, expected_str: str) -> None:
        # Arrange

        # Act & Assert
        assert str(address) == expected_str

    def test____for_connection____ipv4(self) -> None:
        # Arrange
        address = IPv4SocketAddress("127.0.0.1", 8080)

        # Act & Assert
        assert address.for_connection() == ("127.0.0.1", 8080)

    def test____for_connection____ipv6(self) -> None:
        # Arrange
        address = IPv6SocketAddress("::1", 8080, 12, 34)

        # Act & Assert
        assert address.for_connection() == ("::1", 8080, 12, 34)

    def test____new_socket_address____ipv4(self) -> None:
        # Arrange

        # Act
        address = new_socket_address(("127.0.0.1", 8080), AF_INET)

        # Assert
        assert isinstance(address, IPv4SocketAddress)
        assert address == ("127.0.0.1", 8080)

    @pytest.mark.parametrize("addr", [("::1", 8080), ("::1", 8080, 0, 0)], ids=repr)
    def test____new_socket_address____ipv6(self, addr: tuple[Any, ...]) -> None:
        # Arrange

        # Act
        address = new_socket_address(addr, AF_INET6)

        # Assert
        assert isinstance(address, IPv6SocketAddress)
        assert address == ("::1", 8080, 0, 0)

    def test____new_socket_address____unsupported_family(self) -> None:
        # Arrange

        # Act & Assert
        with pytest.raises(ValueError, match=r"^Unsupported address family .+$"):
            new_socket_address(("/path/to/sock",), AF_UNIX)

    @pytest.mark.parametrize(
        ["ip", "expected_address"],
        [
            pytest.param(ipaddress.IPv4Address("10.0.0.1"), IPv4SocketAddress("10.0.0.1", 80)),
            pytest.param(ipaddress.IPv6Address("2001:db8::1"), IPv6SocketAddress("2001:db8::1", 80)),
        ],
        ids=repr,
    )
    def test____socket_address_from_ip(self, ip: Any, expected_address: Any) -> None:
        # Arrange

        # Act
        address = socket_address_from_ip(ip, 80)

        # Assert
        assert type(address) is type(expected_address)
        assert address == expected_address

    def test____socket_address_family(self) -> None:
        # Arrange

        # Act & Assert
        assert socket_address_family(IPv4SocketAddress("127.0.0.1", 80)) == AF_INET
        assert socket_address_family(IPv6SocketAddress("::1", 80)) == AF_INET6

    def test____socket_address_family____invalid_object(self) -> None:
        # Arrange

        # Act & Assert
        with pytest.raises(TypeError):
            socket_address_family(("127.0.0.1", 80))  # type: ignore[arg-type]
