"""
Tests for the shared repository helpers
"""
from unittest.mock import AsyncMock, Mock

import pytest

from app.db.repository import BaseRepository


def make_session(dialect_name: str):
    db = Mock()
    db.execute = AsyncMock()
    db.bind.dialect.name = dialect_name
    return db


@pytest.mark.asyncio
async def test_search_path_set_on_postgresql():
    db = make_session("postgresql")
    repository = BaseRepository(db, schema="feedback_prod")

    await repository._set_search_path()

    db.execute.assert_awaited_once()
    statement = db.execute.await_args.args[0]
    assert str(statement) == 'SET search_path TO "feedback_prod", public'


@pytest.mark.asyncio
async def test_schema_read_from_environment(monkeypatch):
    monkeypatch.setenv("DB_SCHEMA", "tenant_a")
    db = make_session("postgresql")

    await BaseRepository(db)._set_search_path()

    assert str(db.execute.await_args.args[0]) == 'SET search_path TO "tenant_a", public'


@pytest.mark.asyncio
async def test_search_path_skipped_without_schema(monkeypatch):
    monkeypatch.delenv("DB_SCHEMA", raising=False)
    db = make_session("postgresql")

    await BaseRepository(db)._set_search_path()

    db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_path_skipped_on_other_dialects():
    db = make_session("sqlite")

    await BaseRepository(db, schema="feedback_prod")._set_search_path()

    db.execute.assert_not_awaited()
