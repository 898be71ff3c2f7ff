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
"""Fallback chain combinator module.

Tries addresses one at a time until one succeeds.
"""

from __future__ import annotations

__all__ = ["chain_attempts"]

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from ...exceptions import AllAttemptsFailedError, NoAddressesAvailableError

_T = TypeVar("_T")
_T_Address = TypeVar("_T_Address")

logger = logging.getLogger(__name__)


async def chain_attempts(operation: Callable[[_T_Address], Awaitable[_T]], addresses: Iterable[_T_Address]) -> _T:
    """
    Invokes `operation` on each address sequentially, in order, and returns the first successful result.

    Only one attempt is in flight at any time. An :exc:`OSError` moves on to the next address;
    any other exception is propagated immediately.

    Parameters:
        operation: The async function to call with each address.
        addresses: The addresses to try.

    Raises:
        NoAddressesAvailableError: `addresses` is empty. `operation` is never called.
        AllAttemptsFailedError: every attempt raised an :exc:`OSError`.

    Returns:
        The result of the first attempt which succeeded.
    """
    addresses = list(addresses)
    if not addresses:
        raise NoAddressesAvailableError()

    logger.debug("Chaining %d connection attempts", len(addresses))

    errors: list[OSError] = []
    for address in addresses:
        try:
            return await operation(address)
        except OSError as exc:
            logger.debug("Attempt on %s failed: %s", address, exc)
            errors.append(exc)

    try:
        raise AllAttemptsFailedError(errors) from ExceptionGroup("chain_attempts() failed", errors)
    finally:
        errors.clear()
