from decimal import Decimal
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from rent_service.adapter.services.database import create_engine
from rent_service.adapter.services.object_storage import LocalObjectStorage
from rent_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from rent_service.depends import get_clock, get_object_storage, get_unit_of_work
from rent_service.domain.entities import Space
from tests.fixtures.builders import FixedClock
from tests.fixtures.json_loader import TestDataLoader
from tests.utils.http import STORAGE_BASE_URL


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def storage(tmp_path):
    return LocalObjectStorage(root=str(tmp_path / "objects"), base_url=STORAGE_BASE_URL)


@pytest_asyncio.fixture
async def client(db_session, clock, storage):
    from httpx import ASGITransport
    from rent_service.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_object_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def spaces(db_session, test_data):
    """Seed the spaces from test_data.json"""
    seeded = []
    for item in test_data.get_copy("spaces"):
        space = Space(
            id=UUID(item["id"]),
            name=item["name"],
            provider_id=UUID(item["provider_id"]),
            price=Decimal(item["price"]),
            publish=item["publish"],
        )
        db_session.add(space)
        seeded.append(space)
    await db_session.commit()
    return seeded
