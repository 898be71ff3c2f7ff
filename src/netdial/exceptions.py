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
"""Exceptions definition module.

Here are all the exception classes defined and used by the library.
"""

from __future__ import annotations

__all__ = [
    "AllAttemptsFailedError",
    "DialError",
    "MalformedEndpointError",
    "NoAddressesAvailableError",
    "ResolutionError",
]

from collections.abc import Iterable


class MalformedEndpointError(ValueError):
    """Error raised when a value cannot be interpreted as an endpoint."""


class DialError(OSError):
    """Base class of the errors raised by the dial functions once the endpoint is known to be valid."""


class ResolutionError(DialError):
    """The resolver could not translate the host name into IP addresses."""

    def __init__(self, host: str, message: str) -> None:
        """
        Parameters:
            host: The host name given to the resolver.
            message: Error message.
        """

        super().__init__(f"could not resolve {host!r}: {message}")

        self.host: str = host
        """The host name given to the resolver."""


class NoAddressesAvailableError(DialError):
    """Name resolution succeeded but returned no address."""

    def __init__(self, host: str | None = None) -> None:
        """
        Parameters:
            host: The host name given to the resolver, if known.
        """

        if host is None:
            super().__init__("resolve returned no addresses")
        else:
            super().__init__(f"resolve returned no addresses for {host!r}")

        self.host: str | None = host
        """The host name given to the resolver."""


class AllAttemptsFailedError(DialError):
    """Every attempt, one per resolved address, failed."""

    def __init__(self, errors: Iterable[OSError]) -> None:
        """
        Parameters:
            errors: The error raised by each attempt.
        """

        errors = tuple(errors)
        super().__init__("all of the connection attempts failed")

        self.errors: tuple[OSError, ...] = errors
        """The error raised by each attempt, in the order they occurred."""
