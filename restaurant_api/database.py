"""Async database engine and session management"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from restaurant_api.config import settings

engine = create_async_engine(settings.database_url, echo=settings.api_debug)

SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base for all models"""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request"""
    async with SessionLocal() as session:
        yield session
