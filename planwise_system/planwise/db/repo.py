# planwise/db/repo.py

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from planwise.db.models import StoredValue


async def get_value(db: AsyncSession, key: str) -> str | None:
    res = await db.execute(select(StoredValue).where(StoredValue.key == key))
    row = res.scalar_one_or_none()
    return row.value if row is not None else None


async def put_value(db: AsyncSession, key: str, value: str) -> StoredValue:
    await db.execute(delete(StoredValue).where(StoredValue.key == key))
    row = StoredValue(key=key, value=value)
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return row


async def delete_value(db: AsyncSession, key: str) -> None:
    await db.execute(delete(StoredValue).where(StoredValue.key == key))
    await db.commit()
