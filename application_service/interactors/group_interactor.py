# application_service/interactors/group_interactor.py
from application_service.domain import entities
from application_service.domain.exceptions import InvalidArgument, NotFound
from application_service.gateways.interfaces import IGroupGateway

MIN_GROUP_MEMBERS = 1
MAX_GROUP_MEMBERS = 5


class CreateGroupUseCase:
    """Creates a ride group: a driver plus one to five passengers."""

    def __init__(self, group_gateway: IGroupGateway):
        self.group_gateway = group_gateway

    async def execute(self, group_data: dict) -> entities.Group:
        name = group_data.get("name")
        members = group_data.get("members")
        driver_id = group_data.get("driver_id")

        if not isinstance(name, str) or not name.strip():
            raise InvalidArgument("Nome do grupo é obrigatório e deve ser uma string.")

        if not isinstance(members, list):
            raise InvalidArgument("Membros devem ser informados em uma lista.")

        if not MIN_GROUP_MEMBERS <= len(members) <= MAX_GROUP_MEMBERS:
            raise InvalidArgument(
                f"O grupo deve ter entre {MIN_GROUP_MEMBERS} e {MAX_GROUP_MEMBERS} membros."
            )

        if not isinstance(driver_id, int) or isinstance(driver_id, bool) or not driver_id:
            raise InvalidArgument("driverId é obrigatório e deve ser um número.")

        return await self.group_gateway.create(
            {
                "name": name.strip(),
                "description": group_data.get("description"),
                "driver_id": driver_id,
                "members": members,
            }
        )


class ListGroupsUseCase:
    def __init__(self, group_gateway: IGroupGateway):
        self.group_gateway = group_gateway

    async def execute(self, page: int = 1, limit: int = 10) -> entities.Page[entities.Group]:
        return await self.group_gateway.find_all(page, limit)


class GetGroupUseCase:
    def __init__(self, group_gateway: IGroupGateway):
        self.group_gateway = group_gateway

    async def execute(self, group_id: int) -> entities.Group:
        group = await self.group_gateway.find_by_id(group_id)
        if not group:
            raise NotFound("Grupo não encontrado.", "Group not found")
        return group
