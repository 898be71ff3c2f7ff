from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from netdial.lowlevel.api_async.backend._trio.backend import TrioBackend


@pytest.fixture(scope="package")
def trio_backend() -> TrioBackend:
    from netdial.lowlevel.api_async.backend._trio.backend import TrioBackend

    return TrioBackend()
