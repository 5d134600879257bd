import pytest
from sqlalchemy import event, text
from sqlalchemy.exc import IntegrityError

from application_service.infrastructure import models
from application_service.infrastructure.database import (
    _sqlite_foreign_keys_on,
    create_database,
)


async def test_sqlite_connections_enforce_foreign_keys(engine):
    async with engine.connect() as conn:
        result = await conn.execute(text("PRAGMA foreign_keys"))
        assert result.scalar() == 1


async def test_orphan_message_is_rejected(db_session):
    db_session.add(models.Message(content="Oi", sender_id=999, group_id=999))
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()


async def test_foreign_key_hook_is_registered(engine):
    create_database(engine)
    create_database(engine)

    assert event.contains(engine.sync_engine, "connect", _sqlite_foreign_keys_on)
