from __future__ import annotations

import itertools
from collections.abc import Callable
from socket import AF_INET, SOCK_STREAM, socket as Socket
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from pytest_mock import MockerFixture


@pytest.fixture
def SO_REUSEPORT(monkeypatch: pytest.MonkeyPatch) -> int:
    import socket

    if not hasattr(socket, "SO_REUSEPORT"):
        monkeypatch.setattr("socket.SO_REUSEPORT", 15, raising=False)
    return getattr(socket, "SO_REUSEPORT")


@pytest.fixture
def remove_SO_REUSEPORT_support(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delattr("socket.SO_REUSEPORT", raising=False)


@pytest.fixture
def mock_socket_factory(mocker: MockerFixture) -> Callable[..., MagicMock]:
    fileno_counter = itertools.count()

    def factory(family: int = AF_INET, type: int = SOCK_STREAM, proto: int = 0) -> MagicMock:
        mock_socket = mocker.NonCallableMagicMock(spec=Socket)
        mock_socket.family = family
        mock_socket.type = type
        mock_socket.proto = proto
        mock_socket.fileno.return_value = 123 + next(fileno_counter)

        def close_side_effect() -> None:
            mock_socket.fileno.return_value = -1

        mock_socket.close.side_effect = close_side_effect
        mock_socket.connect.return_value = None
        mock_socket.bind.return_value = None
        mock_socket.getsockopt.return_value = 0
        return mock_socket

    return factory


@pytest.fixture
def mock_socket_cls(mock_socket_factory: Callable[..., MagicMock], mocker: MockerFixture) -> MagicMock:
    """
    Replaces :class:`socket.socket`. Only request it from synchronous tests,
    or patch it after the event loop has been created.
    """

    return mocker.patch("socket.socket", side_effect=mock_socket_factory)
