# application_service/gateways/user_gateway.py

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from application_service.domain import entities
from application_service.gateways.interfaces import IUserGateway
from application_service.infrastructure import models
from application_service.infrastructure.data_mappers import UserMapper, apply_changes


class UserGateway(IUserGateway):
    def __init__(self, session: AsyncSession):
        self.session = session
        self.mapper = UserMapper()

    async def _get_model(self, user_id: int) -> models.User | None:
        stmt = select(models.User).filter(models.User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_all(self, page: int = 1, limit: int = 10) -> entities.Page[entities.User]:
        skip = (page - 1) * limit
        stmt = select(models.User).order_by(models.User.id).offset(skip).limit(limit)
        result = await self.session.execute(stmt)
        users = result.scalars().all()
        total = await self.session.scalar(select(func.count()).select_from(models.User))
        return entities.Page(
            items=[self.mapper.to_entity(user) for user in users],
            total_items=total or 0,
            page=page,
            limit=limit,
        )

    async def find_by_id(self, user_id: int) -> entities.User | None:
        user = await self._get_model(user_id)
        return self.mapper.to_entity(user) if user else None

    async def find_by_email(self, email: str) -> entities.User | None:
        stmt = select(models.User).filter(
            func.lower(models.User.email) == func.lower(email)
        )
        result = await self.session.execute(stmt)
        user = result.scalar_one_or_none()
        return self.mapper.to_entity(user) if user else None

    async def find_by_ids(self, user_ids: list[int]) -> list[entities.User]:
        if not user_ids:
            return []
        stmt = select(models.User).filter(models.User.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [self.mapper.to_entity(user) for user in result.scalars().all()]

    async def search_by_name(self, name: str, limit: int = 10) -> list[entities.User]:
        pattern = f"%{name}%"
        stmt = (
            select(models.User)
            .filter(
                or_(
                    models.User.name.ilike(pattern),
                    models.User.last_name.ilike(pattern),
                )
            )
            .order_by(models.User.name)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self.mapper.to_entity(user) for user in result.scalars().all()]

    async def create(self, data: dict) -> entities.User:
        db_user = models.User()
        apply_changes(db_user, data)
        self.session.add(db_user)
        await self.session.flush()
        return self.mapper.to_entity(db_user)

    async def update(self, user_id: int, data: dict) -> entities.User | None:
        user = await self._get_model(user_id)
        if not user:
            return None
        apply_changes(user, data)
        await self.session.flush()
        return self.mapper.to_entity(user)

    async def _is_referenced(self, user_id: int) -> bool:
        for column in (
            models.ChatGroup.created_by_id,
            models.ChatGroupMember.user_id,
            models.Message.sender_id,
        ):
            stmt = select(column).where(column == user_id).limit(1)
            if await self.session.scalar(stmt) is not None:
                return True
        return False

    async def delete(self, user_id: int) -> bool:
        user = await self._get_model(user_id)
        if not user or await self._is_referenced(user_id):
            return False
        await self.session.delete(user)
        await self.session.flush()
        return True
