from __future__ import annotations

from typing import TYPE_CHECKING

from netdial.lowlevel.api_async.backend._asyncio.backend import AsyncIOBackend
from netdial.lowlevel.api_async.backend.abc import AsyncBackend

import pytest

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from pytest_mock import MockerFixture


@pytest.fixture(scope="package")
def asyncio_backend() -> AsyncIOBackend:
    return AsyncIOBackend()


@pytest.fixture
def mock_backend(mocker: MockerFixture) -> MagicMock:
    from netdial.lowlevel.api_async.backend._asyncio.tasks import TaskGroup

    mock_backend = mocker.NonCallableMagicMock(spec=AsyncBackend)

    mock_backend.create_task_group.side_effect = TaskGroup

    return mock_backend
