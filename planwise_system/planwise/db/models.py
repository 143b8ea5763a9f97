"""
Database table definitions and it stores:
- Serialized client records (the active plan draft) under a well-known key
Main purpose:
Define persistent data structure.
"""



from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from planwise.db.base import Base

class StoredValue(Base):
    __tablename__ = "kv_store"
    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
