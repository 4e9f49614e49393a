"""Test configuration and fixtures"""

from datetime import date, time, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from restaurant_api.main import app
from restaurant_api.config import settings
from restaurant_api.database import Base, get_db
from restaurant_api.models import Reservation, Table


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def next_open_date() -> date:
    """First day after today the restaurant is open"""
    day = date.today() + timedelta(days=1)
    while day.weekday() == settings.closed_weekday:
        day += timedelta(days=1)
    return day


def next_closed_date() -> date:
    day = date.today() + timedelta(days=1)
    while day.weekday() != settings.closed_weekday:
        day += timedelta(days=1)
    return day


def reservation_payload(**overrides) -> dict:
    """A valid create payload for a future open day"""
    payload = {
        "first_name": "Jane",
        "last_name": "Doe",
        "mobile_number": "555-0100",
        "reservation_date": next_open_date().isoformat(),
        "reservation_time": "18:00",
        "people": 4,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    
    async with session_factory() as session:
        yield session
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    
    await engine.dispose()


@pytest.fixture
async def test_tables(test_db):
    """Create the default dining room tables"""
    tables = [
        Table(table_name="Bar #1", capacity=1, occupied=False),
        Table(table_name="Bar #2", capacity=1, occupied=False),
        Table(table_name="#1", capacity=6, occupied=False),
        Table(table_name="#2", capacity=6, occupied=False),
    ]
    
    for table in tables:
        test_db.add(table)
    
    await test_db.commit()
    return tables


@pytest.fixture
async def booked_reservation(test_db):
    """Create a booked party of four"""
    reservation = Reservation(
        first_name="Rick",
        last_name="Sanchez",
        mobile_number="202-555-0164",
        reservation_date=next_open_date(),
        reservation_time=time(18, 0),
        people=4,
        status="booked",
    )
    test_db.add(reservation)
    await test_db.commit()
    
    return reservation


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db
    
    app.dependency_overrides[get_db] = override_get_db
    
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    
    app.dependency_overrides.clear()
