import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fixtures.builders import FixedClock


def _passthrough(value, *args):
    return value


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.spaces = MagicMock()
    uow.spaces.get_by_id = AsyncMock(return_value=None)
    uow.spaces.claim = AsyncMock(return_value=True)

    uow.rents = MagicMock()
    uow.rents.get_by_id = AsyncMock(return_value=None)
    uow.rents.get_for_update = AsyncMock(return_value=None)
    uow.rents.list = AsyncMock(return_value=[])
    uow.rents.list_by_status = AsyncMock(return_value=[])
    uow.rents.create = AsyncMock(side_effect=_passthrough)
    uow.rents.update = AsyncMock(side_effect=_passthrough)

    uow.invoices = MagicMock()
    uow.invoices.get_by_rent_id = AsyncMock(return_value=None)
    uow.invoices.get_entries = AsyncMock(return_value=[])
    uow.invoices.create = AsyncMock(side_effect=_passthrough)
    uow.invoices.add_entries = AsyncMock(side_effect=_passthrough)
    uow.invoices.update_entry = AsyncMock(side_effect=_passthrough)
    uow.invoices.find_released_entries = AsyncMock(return_value=[])

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()
    uow.audit_events.create_once = AsyncMock(return_value=True)

    return uow


@pytest.fixture
def mock_storage():
    storage = MagicMock()
    storage.store = AsyncMock(side_effect=lambda data, content_type, path: path)
    storage.resolve = AsyncMock(side_effect=lambda key: f"https://files.test/{key}")
    return storage


@pytest.fixture
def clock():
    return FixedClock()
