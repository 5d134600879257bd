# application_service/gateways/chat_gateway.py
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from application_service.domain import entities
from application_service.domain.enums import ChatGroupType
from application_service.gateways.interfaces import IChatGroupGateway
from application_service.infrastructure import models
from application_service.infrastructure.data_mappers import (
    ChatGroupMapper,
    GroupMemberMapper,
    apply_changes,
)


class ChatGroupGateway(IChatGroupGateway):
    def __init__(self, session: AsyncSession):
        self.session = session
        self.mapper = ChatGroupMapper()
        self.member_mapper = GroupMemberMapper()

    async def _get_model(self, group_id: int) -> models.ChatGroup | None:
        stmt = select(models.ChatGroup).filter(models.ChatGroup.id == group_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _get_member_model(
        self, group_id: int, user_id: int
    ) -> models.ChatGroupMember | None:
        stmt = select(models.ChatGroupMember).filter(
            models.ChatGroupMember.group_id == group_id,
            models.ChatGroupMember.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_user_id(
        self, user_id: int, page: int = 1, limit: int = 20
    ) -> entities.Page[entities.ChatGroup]:
        membership = (
            select(models.ChatGroupMember.group_id)
            .filter(
                models.ChatGroupMember.user_id == user_id,
                models.ChatGroupMember.is_active.is_(True),
            )
            .scalar_subquery()
        )
        base = select(models.ChatGroup).filter(
            models.ChatGroup.id.in_(membership),
            models.ChatGroup.is_active.is_(True),
        )
        stmt = (
            base.order_by(models.ChatGroup.created_at.desc(), models.ChatGroup.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        groups = result.scalars().all()
        total = await self.session.scalar(
            select(func.count()).select_from(base.subquery())
        )
        return entities.Page(
            items=[self.mapper.to_entity(group) for group in groups],
            total_items=total or 0,
            page=page,
            limit=limit,
        )

    async def find_by_id(self, group_id: int) -> entities.ChatGroup | None:
        group = await self._get_model(group_id)
        return self.mapper.to_entity(group) if group else None

    async def find_direct_chat(
        self, user1_id: int, user2_id: int
    ) -> entities.ChatGroup | None:
        first = aliased(models.ChatGroupMember)
        second = aliased(models.ChatGroupMember)
        stmt = (
            select(models.ChatGroup)
            .join(first, first.group_id == models.ChatGroup.id)
            .join(second, second.group_id == models.ChatGroup.id)
            .filter(
                models.ChatGroup.type == ChatGroupType.DIRECT.value,
                models.ChatGroup.is_active.is_(True),
                first.user_id == user1_id,
                second.user_id == user2_id,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        group = result.scalar_one_or_none()
        return self.mapper.to_entity(group) if group else None

    async def create(
        self, data: dict, members: list[entities.GroupMember]
    ) -> entities.ChatGroup:
        db_group = models.ChatGroup()
        apply_changes(db_group, data)
        self.session.add(db_group)
        await self.session.flush()

        for member in members:
            self.session.add(
                models.ChatGroupMember(
                    user_id=member.user_id,
                    group_id=db_group.id,
                    role=member.role.value,
                    added_by_id=member.added_by_id,
                    is_active=member.is_active,
                    notifications=member.notifications,
                    joined_at=member.joined_at,
                )
            )
        await self.session.flush()
        return self.mapper.to_entity(db_group)

    async def update(self, group_id: int, data: dict) -> entities.ChatGroup | None:
        group = await self._get_model(group_id)
        if not group:
            return None
        apply_changes(group, data)
        await self.session.flush()
        return self.mapper.to_entity(group)

    async def delete(self, group_id: int) -> bool:
        group = await self._get_model(group_id)
        if not group:
            return False
        group.is_active = False
        group.updated_at = datetime.now(UTC)
        await self.session.flush()
        return True

    async def find_membership(
        self, group_id: int, user_id: int
    ) -> entities.GroupMember | None:
        member = await self._get_member_model(group_id, user_id)
        return self.member_mapper.to_entity(member) if member else None

    async def touch_last_seen(self, group_id: int, user_id: int) -> None:
        member = await self._get_member_model(group_id, user_id)
        if member:
            member.last_seen_at = datetime.now(UTC)
            await self.session.flush()
