# application_service/interactors/message_interactor.py
from abc import ABC, abstractmethod

from application_service.domain import entities
from application_service.domain.enums import MessageType
from application_service.domain.exceptions import (
    DeletionFailed,
    Forbidden,
    InvalidArgument,
    NotFound,
)
from application_service.gateways.interfaces import IChatGroupGateway, IMessageGateway
from application_service.interactors.chat_interactor import (
    GROUP_NOT_FOUND,
    require_active_member,
)

MESSAGE_NOT_FOUND = "Mensagem não encontrada"


class SendMessageUseCase:
    def __init__(
        self, message_gateway: IMessageGateway, chat_gateway: IChatGroupGateway
    ):
        self.message_gateway = message_gateway
        self.chat_gateway = chat_gateway

    async def execute(
        self, message_data: dict, sender_id: int, group_id: int
    ) -> entities.Message:
        group = await self.chat_gateway.find_by_id(group_id)
        if not group:
            raise NotFound(GROUP_NOT_FOUND, "Group not found")
        if not group.is_active:
            raise InvalidArgument(
                "Não é possível enviar mensagem para grupo inativo", "Group inactive"
            )
        await require_active_member(self.chat_gateway, group_id, sender_id)

        try:
            message_type = MessageType(message_data.get("type") or MessageType.TEXT)
        except ValueError:
            raise InvalidArgument("Tipo de mensagem inválido", "Invalid message type")

        content = message_data.get("content")
        message = entities.Message(
            id=None,
            sender_id=sender_id,
            group_id=group_id,
            content=content.strip() if content else content,
            type=message_type,
            reply_to_id=message_data.get("reply_to_id"),
            file_url=message_data.get("file_url"),
            file_name=message_data.get("file_name"),
            file_size=message_data.get("file_size"),
        )
        message.validate()

        if message.is_reply():
            replied = await self.message_gateway.find_by_id(message.reply_to_id)
            if not replied:
                raise NotFound("Mensagem de resposta não encontrada", "Message not found")
            if replied.group_id != group_id:
                raise InvalidArgument("Não é possível responder mensagem de outro grupo")
            if replied.is_deleted:
                raise InvalidArgument("Não é possível responder mensagem deletada")

        created = await self.message_gateway.create(
            {
                "content": message.content,
                "type": message.type,
                "sender_id": message.sender_id,
                "group_id": message.group_id,
                "reply_to_id": message.reply_to_id,
                "status": message.status,
                "file_url": message.file_url,
                "file_name": message.file_name,
                "file_size": message.file_size,
                "is_deleted": False,
            }
        )
        await self.chat_gateway.touch_last_seen(group_id, sender_id)
        return created


class GetGroupMessagesUseCase:
    def __init__(
        self, message_gateway: IMessageGateway, chat_gateway: IChatGroupGateway
    ):
        self.message_gateway = message_gateway
        self.chat_gateway = chat_gateway

    async def execute(
        self, group_id: int, user_id: int, page: int = 1, limit: int = 50
    ) -> entities.Page[entities.Message]:
        group = await self.chat_gateway.find_by_id(group_id)
        if not group:
            raise NotFound(GROUP_NOT_FOUND, "Group not found")
        await require_active_member(self.chat_gateway, group_id, user_id)
        return await self.message_gateway.find_by_group_id(group_id, page, limit)


class EditMessageUseCase:
    def __init__(self, message_gateway: IMessageGateway):
        self.message_gateway = message_gateway

    async def execute(self, message_id: int, user_id: int, content: str) -> entities.Message:
        message = await self.message_gateway.find_by_id(message_id)
        if not message:
            raise NotFound(MESSAGE_NOT_FOUND, "Message not found")
        if message.sender_id != user_id:
            raise Forbidden("Apenas o autor pode editar a mensagem", "Not the message sender")

        message.edit(content)
        updated = await self.message_gateway.update(
            message_id,
            {
                "content": message.content,
                "edited_at": message.edited_at,
                "updated_at": message.updated_at,
            },
        )
        return updated or message


class DeleteMessageUseCase:
    """Soft-deletes a message; allowed for its sender and for group admins/moderators."""

    def __init__(
        self, message_gateway: IMessageGateway, chat_gateway: IChatGroupGateway
    ):
        self.message_gateway = message_gateway
        self.chat_gateway = chat_gateway

    async def execute(self, message_id: int, user_id: int) -> entities.Message:
        message = await self.message_gateway.find_by_id(message_id)
        if not message or message.is_deleted:
            raise NotFound(MESSAGE_NOT_FOUND, "Message not found")

        if message.sender_id != user_id:
            membership = await self.chat_gateway.find_membership(message.group_id, user_id)
            if not membership or not membership.is_active or not membership.can_delete_messages():
                raise Forbidden(
                    "Sem permissão para excluir esta mensagem", "Not allowed to delete message"
                )

        if not await self.message_gateway.delete(message_id):
            raise DeletionFailed("Falha ao excluir mensagem", "Message deletion failed")
        return message.delete()


class _MessageStatusUseCase(ABC):
    def __init__(
        self, message_gateway: IMessageGateway, chat_gateway: IChatGroupGateway
    ):
        self.message_gateway = message_gateway
        self.chat_gateway = chat_gateway

    @abstractmethod
    def transition(self, message: entities.Message) -> entities.Message:
        pass

    async def execute(self, message_id: int, user_id: int) -> entities.Message:
        message = await self.message_gateway.find_by_id(message_id)
        if not message:
            raise NotFound(MESSAGE_NOT_FOUND, "Message not found")
        await require_active_member(self.chat_gateway, message.group_id, user_id)

        before = (message.status, message.updated_at)
        self.transition(message)
        if (message.status, message.updated_at) == before:
            return message

        updated = await self.message_gateway.update(
            message_id, {"status": message.status, "updated_at": message.updated_at}
        )
        return updated or message


class MarkMessageDeliveredUseCase(_MessageStatusUseCase):
    def transition(self, message: entities.Message) -> entities.Message:
        return message.mark_as_delivered()


class MarkMessageReadUseCase(_MessageStatusUseCase):
    def transition(self, message: entities.Message) -> entities.Message:
        return message.mark_as_read()
