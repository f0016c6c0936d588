"""Shared repository base helpers."""
import os
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text


class BaseRepository:
    """Base repository with common DB helpers."""

    def __init__(self, db: AsyncSession, schema: Optional[str] = None):
        self.db = db
        self.schema = schema if schema is not None else os.getenv("DB_SCHEMA")

    async def _set_search_path(self):
        """Set PostgreSQL search_path to the configured schema, if any."""
        if not self.schema or self.db.bind.dialect.name != "postgresql":
            return
        await self.db.execute(text(f'SET search_path TO "{self.schema}", public'))
