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
"""Socket and exception helpers shared by the backends."""

from __future__ import annotations

__all__ = [
    "bind_error",
    "missing_extra_deps",
    "raise_pending_connect_error",
    "set_reuseport",
]

import errno as _errno
import os
import socket as _socket
from typing import Any


def missing_extra_deps(extra_name: str) -> ModuleNotFoundError:
    exc = ModuleNotFoundError(f"{extra_name} dependencies are missing. Consider adding {extra_name!r} extra")
    exc.add_note(f'example: pip install "netdial[{extra_name}]"')
    return exc


def raise_pending_connect_error(socket: _socket.socket, address: Any) -> None:
    """
    Raises the error of a non-blocking connect(), if any.

    The result is read from SO_ERROR once the socket is writable. Reading it resets it to zero.
    """
    errno: int = socket.getsockopt(_socket.SOL_SOCKET, _socket.SO_ERROR)
    if errno:
        raise OSError(errno, f"Could not connect to {address!r}: {os.strerror(errno)}")


def set_reuseport(socket: _socket.socket) -> None:
    try:
        option: int = _socket.SO_REUSEPORT
    except AttributeError:
        raise ValueError("reuse_port not supported by socket module") from None
    try:
        socket.setsockopt(_socket.SOL_SOCKET, option, True)
    except OSError:
        raise ValueError("reuse_port not supported by socket module, SO_REUSEPORT defined but not implemented.") from None


def bind_error(exc: OSError, address: Any) -> OSError:
    """Rewrites a bind() failure so that the message names the address."""
    if exc.errno:
        errno, reason = exc.errno, exc.strerror
    else:
        errno, reason = _errno.EINVAL, str(exc)
    return OSError(errno, f"error while attempting to bind on address {address!r}: {reason}").with_traceback(exc.__traceback__)
