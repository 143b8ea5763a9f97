"""
Key-value storage port used by the draft store.
What it provides:
- KeyValueStorage protocol (async get/set/delete of strings)
- MemoryStorage: dict-backed, for tests and embedding
- SqlStorage: SQLAlchemy async table, schema created on first use

And, the main purpose:
Keep persistence behind an injected port instead of ambient global state.
"""


from typing import Dict, Optional, Protocol

from planwise.core.config import settings
from planwise.db.repo import delete_value, get_value, put_value
from planwise.db.session import init_db, make_engine, make_session_factory


class KeyValueStorage(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


class SqlStorage:
    def __init__(self, database_url: Optional[str] = None):
        self.engine = make_engine(database_url or settings.DATABASE_URL)
        self.session_factory = make_session_factory(self.engine)
        self._schema_ready = False

    async def _ensure_schema(self) -> None:
        if not self._schema_ready:
            await init_db(self.engine)
            self._schema_ready = True

    async def get(self, key: str) -> Optional[str]:
        await self._ensure_schema()
        async with self.session_factory() as db:
            return await get_value(db, key)

    async def set(self, key: str, value: str) -> None:
        await self._ensure_schema()
        async with self.session_factory() as db:
            await put_value(db, key, value)

    async def delete(self, key: str) -> None:
        await self._ensure_schema()
        async with self.session_factory() as db:
            await delete_value(db, key)

    async def aclose(self) -> None:
        await self.engine.dispose()
