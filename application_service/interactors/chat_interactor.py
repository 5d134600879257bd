# application_service/interactors/chat_interactor.py
from application_service.domain import entities
from application_service.domain.enums import ChatGroupType, MemberRole
from application_service.domain.exceptions import (
    DeletionFailed,
    Forbidden,
    InvalidArgument,
    NotFound,
)
from application_service.gateways.interfaces import IChatGroupGateway, IUserGateway

MAX_INVITED_MEMBERS = 99
GROUP_NOT_FOUND = "Grupo não encontrado"


async def require_active_member(
    chat_gateway: IChatGroupGateway, group_id: int, user_id: int
) -> entities.GroupMember:
    membership = await chat_gateway.find_membership(group_id, user_id)
    if not membership or not membership.is_active:
        raise Forbidden("Usuário não é membro deste grupo", "Not a group member")
    return membership


class CreateChatGroupUseCase:
    """Creates a group chat or a direct chat between two users.

    A direct chat that already exists between the two users is returned
    instead of creating a duplicate.
    """

    def __init__(self, chat_gateway: IChatGroupGateway, user_gateway: IUserGateway):
        self.chat_gateway = chat_gateway
        self.user_gateway = user_gateway

    async def execute(self, group_data: dict, created_by_id: int) -> entities.ChatGroup:
        try:
            group_type = ChatGroupType(group_data.get("type") or ChatGroupType.GROUP)
        except ValueError:
            raise InvalidArgument("Tipo de grupo inválido", "Invalid group type")

        member_ids = [
            member_id
            for member_id in dict.fromkeys(group_data.get("member_ids") or [])
            if member_id != created_by_id
        ]
        name = (group_data.get("name") or "").strip()

        if group_type == ChatGroupType.GROUP and len(name) < 2:
            raise InvalidArgument(
                "Nome é obrigatório para grupos e deve ter pelo menos 2 caracteres"
            )
        if group_type == ChatGroupType.DIRECT and len(member_ids) != 1:
            raise InvalidArgument("Chat direto deve ter exatamente 1 outro membro")
        if group_type == ChatGroupType.GROUP and len(member_ids) > MAX_INVITED_MEMBERS:
            raise InvalidArgument(f"Máximo {MAX_INVITED_MEMBERS} membros por grupo")

        creator = await self.user_gateway.find_by_id(created_by_id)
        if not creator:
            raise NotFound("Usuário criador não encontrado", "Creator not found")

        if group_type == ChatGroupType.DIRECT:
            other_user_id = member_ids[0]
            existing_chat = await self.chat_gateway.find_direct_chat(
                created_by_id, other_user_id
            )
            if existing_chat:
                return existing_chat

            other_user = await self.user_gateway.find_by_id(other_user_id)
            if not other_user:
                raise NotFound("Usuário destinatário não encontrado", "User not found")
            name = f"{creator.name} & {other_user.name}"
        elif member_ids:
            found = await self.user_gateway.find_by_ids(member_ids)
            if len(found) != len(member_ids):
                raise NotFound(
                    "Um ou mais usuários não foram encontrados", "User not found"
                )

        group = entities.ChatGroup(
            id=None,
            name=name,
            description=group_data.get("description"),
            type=group_type,
            image_url=group_data.get("image_url"),
            created_by_id=created_by_id,
            max_members=2 if group_type == ChatGroupType.DIRECT else 100,
        )
        group.validate()

        creator_role = (
            MemberRole.MEMBER if group.is_direct_chat() else MemberRole.ADMIN
        )
        # group_id is assigned by the gateway once the group row exists
        members = [
            entities.GroupMember(
                id=None,
                user_id=created_by_id,
                group_id=0,
                role=creator_role,
                added_by_id=created_by_id,
            )
        ] + [
            entities.GroupMember(
                id=None, user_id=member_id, group_id=0, added_by_id=created_by_id
            )
            for member_id in member_ids
        ]

        return await self.chat_gateway.create(
            {
                "name": group.name,
                "description": group.description,
                "type": group.type,
                "image_url": group.image_url,
                "created_by_id": group.created_by_id,
                "is_active": group.is_active,
                "max_members": group.max_members,
            },
            members,
        )


class GetUserChatGroupsUseCase:
    def __init__(self, chat_gateway: IChatGroupGateway):
        self.chat_gateway = chat_gateway

    async def execute(
        self, user_id: int, page: int = 1, limit: int = 20
    ) -> entities.Page[entities.ChatGroup]:
        return await self.chat_gateway.find_by_user_id(user_id, page, limit)


class GetChatGroupUseCase:
    def __init__(self, chat_gateway: IChatGroupGateway):
        self.chat_gateway = chat_gateway

    async def execute(
        self, group_id: int, user_id: int
    ) -> tuple[entities.ChatGroup, entities.GroupMember]:
        group = await self.chat_gateway.find_by_id(group_id)
        if not group:
            raise NotFound(GROUP_NOT_FOUND, "Group not found")
        membership = await require_active_member(self.chat_gateway, group_id, user_id)
        return group, membership


class DeactivateChatGroupUseCase:
    def __init__(self, chat_gateway: IChatGroupGateway):
        self.chat_gateway = chat_gateway

    async def execute(self, group_id: int, user_id: int) -> entities.ChatGroup:
        group = await self.chat_gateway.find_by_id(group_id)
        if not group or not group.is_active:
            raise NotFound(GROUP_NOT_FOUND, "Group not found")

        membership = await require_active_member(self.chat_gateway, group_id, user_id)
        if not membership.can_edit_group():
            raise Forbidden(
                "Apenas administradores podem excluir o grupo", "Admin role required"
            )

        group.deactivate()
        if not await self.chat_gateway.delete(group_id):
            raise DeletionFailed("Falha ao excluir grupo", "Group deletion failed")
        return group
