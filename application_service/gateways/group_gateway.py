# application_service/gateways/group_gateway.py

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from application_service.domain import entities
from application_service.gateways.interfaces import IGroupGateway
from application_service.infrastructure import models
from application_service.infrastructure.data_mappers import GroupMapper


class GroupGateway(IGroupGateway):
    def __init__(self, session: AsyncSession):
        self.session = session
        self.mapper = GroupMapper()

    async def _member_ids(self, group_ids: list[int]) -> dict[int, list[int]]:
        members: dict[int, list[int]] = {group_id: [] for group_id in group_ids}
        if not group_ids:
            return members
        stmt = (
            select(
                models.ride_group_members.c.group_id,
                models.ride_group_members.c.passenger_id,
            )
            .filter(models.ride_group_members.c.group_id.in_(group_ids))
            .order_by(models.ride_group_members.c.passenger_id)
        )
        result = await self.session.execute(stmt)
        for group_id, passenger_id in result.all():
            members[group_id].append(passenger_id)
        return members

    async def find_all(self, page: int = 1, limit: int = 10) -> entities.Page[entities.Group]:
        skip = (page - 1) * limit
        stmt = (
            select(models.RideGroup)
            .order_by(models.RideGroup.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        groups = result.scalars().all()
        members = await self._member_ids([group.id for group in groups])
        total = await self.session.scalar(
            select(func.count()).select_from(models.RideGroup)
        )
        return entities.Page(
            items=[self.mapper.to_entity(group, members[group.id]) for group in groups],
            total_items=total or 0,
            page=page,
            limit=limit,
        )

    async def find_by_id(self, group_id: int) -> entities.Group | None:
        stmt = select(models.RideGroup).filter(models.RideGroup.id == group_id)
        result = await self.session.execute(stmt)
        group = result.scalar_one_or_none()
        if not group:
            return None
        members = await self._member_ids([group.id])
        return self.mapper.to_entity(group, members[group.id])

    async def create(self, data: dict) -> entities.Group:
        db_group = models.RideGroup(
            name=data["name"],
            description=data.get("description"),
            driver_id=data["driver_id"],
        )
        self.session.add(db_group)
        await self.session.flush()

        passenger_ids = list(dict.fromkeys(data.get("members") or []))
        if passenger_ids:
            await self.session.execute(
                insert(models.ride_group_members),
                [
                    {"group_id": db_group.id, "passenger_id": passenger_id}
                    for passenger_id in passenger_ids
                ],
            )
        return self.mapper.to_entity(db_group, passenger_ids)
