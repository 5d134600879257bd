# application_service/gateways/message_gateway.py
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from application_service.domain import entities
from application_service.gateways.interfaces import IMessageGateway
from application_service.infrastructure import models
from application_service.infrastructure.data_mappers import MessageMapper, apply_changes


class MessageGateway(IMessageGateway):
    def __init__(self, session: AsyncSession):
        self.session = session
        self.mapper = MessageMapper()

    async def _get_model(self, message_id: int) -> models.Message | None:
        stmt = select(models.Message).filter(models.Message.id == message_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_group_id(
        self, group_id: int, page: int = 1, limit: int = 50
    ) -> entities.Page[entities.Message]:
        stmt = (
            select(models.Message)
            .filter(models.Message.group_id == group_id)
            .order_by(models.Message.created_at.desc(), models.Message.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        messages = result.scalars().all()
        total = await self.session.scalar(
            select(func.count())
            .select_from(models.Message)
            .filter(models.Message.group_id == group_id)
        )
        return entities.Page(
            items=[self.mapper.to_entity(message) for message in messages],
            total_items=total or 0,
            page=page,
            limit=limit,
        )

    async def find_by_id(self, message_id: int) -> entities.Message | None:
        message = await self._get_model(message_id)
        return self.mapper.to_entity(message) if message else None

    async def create(self, data: dict) -> entities.Message:
        db_message = models.Message()
        apply_changes(db_message, data)
        self.session.add(db_message)
        await self.session.flush()
        return self.mapper.to_entity(db_message)

    async def update(self, message_id: int, data: dict) -> entities.Message | None:
        message = await self._get_model(message_id)
        if not message:
            return None
        apply_changes(message, data)
        await self.session.flush()
        return self.mapper.to_entity(message)

    async def delete(self, message_id: int) -> bool:
        message = await self._get_model(message_id)
        if not message or message.is_deleted:
            return False
        now = datetime.now(UTC)
        message.is_deleted = True
        message.content = None
        message.deleted_at = now
        message.updated_at = now
        await self.session.flush()
        return True
