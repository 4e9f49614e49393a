#!/usr/bin/env python3
"""
Seed script to create the default dining room tables
"""

import asyncio

DEMO_TABLES = [
    {"table_name": "Bar #1", "capacity": 1},
    {"table_name": "Bar #2", "capacity": 1},
    {"table_name": "#1", "capacity": 6},
    {"table_name": "#2", "capacity": 6},
]


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select
    from restaurant_api.database import SessionLocal, engine, Base
    from restaurant_api.models.table import Table
    
    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    async with SessionLocal() as db:
        result = await db.execute(select(Table.table_name))
        existing = set(result.scalars().all())
        
        created = 0
        for table_data in DEMO_TABLES:
            if table_data["table_name"] in existing:
                continue
            db.add(Table(**table_data, occupied=False))
            created += 1
        
        await db.commit()
    
    await engine.dispose()
    
    print(f"Demo data created: {created} tables added, {len(existing)} already present.")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
