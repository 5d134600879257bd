# application_service/api/dependencies.py
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from application_service.config import AppConfig
from application_service.gateways.chat_gateway import ChatGroupGateway
from application_service.gateways.group_gateway import GroupGateway
from application_service.gateways.message_gateway import MessageGateway
from application_service.gateways.user_gateway import UserGateway
from application_service.infrastructure.security import SecurityService
from application_service.interactors import (
    chat_interactor,
    group_interactor,
    message_interactor,
    user_interactor,
)


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_security_service(request: Request) -> SecurityService:
    return request.app.state.security_service


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# --- gateways -------------------------------------------------------------


async def get_user_gateway(session: AsyncSession = Depends(get_session)):
    return UserGateway(session)


async def get_group_gateway(session: AsyncSession = Depends(get_session)):
    return GroupGateway(session)


async def get_chat_gateway(session: AsyncSession = Depends(get_session)):
    return ChatGroupGateway(session)


async def get_message_gateway(session: AsyncSession = Depends(get_session)):
    return MessageGateway(session)


# --- users ----------------------------------------------------------------


async def get_create_user_use_case(
    user_gateway: UserGateway = Depends(get_user_gateway),
    security_service: SecurityService = Depends(get_security_service),
):
    return user_interactor.CreateUserUseCase(user_gateway, security_service)


async def get_update_user_use_case(
    user_gateway: UserGateway = Depends(get_user_gateway),
    security_service: SecurityService = Depends(get_security_service),
):
    return user_interactor.UpdateUserUseCase(user_gateway, security_service)


async def get_delete_user_use_case(user_gateway: UserGateway = Depends(get_user_gateway)):
    return user_interactor.DeleteUserUseCase(user_gateway)


async def get_get_user_use_case(user_gateway: UserGateway = Depends(get_user_gateway)):
    return user_interactor.GetUserUseCase(user_gateway)


async def get_list_users_use_case(user_gateway: UserGateway = Depends(get_user_gateway)):
    return user_interactor.ListUsersUseCase(user_gateway)


async def get_search_users_use_case(user_gateway: UserGateway = Depends(get_user_gateway)):
    return user_interactor.SearchUsersUseCase(user_gateway)


async def get_authenticate_user_use_case(
    user_gateway: UserGateway = Depends(get_user_gateway),
    security_service: SecurityService = Depends(get_security_service),
):
    return user_interactor.AuthenticateUserUseCase(user_gateway, security_service)


# --- ride groups ----------------------------------------------------------


async def get_create_group_use_case(group_gateway: GroupGateway = Depends(get_group_gateway)):
    return group_interactor.CreateGroupUseCase(group_gateway)


async def get_list_groups_use_case(group_gateway: GroupGateway = Depends(get_group_gateway)):
    return group_interactor.ListGroupsUseCase(group_gateway)


async def get_get_group_use_case(group_gateway: GroupGateway = Depends(get_group_gateway)):
    return group_interactor.GetGroupUseCase(group_gateway)


# --- chat groups ----------------------------------------------------------


async def get_create_chat_group_use_case(
    chat_gateway: ChatGroupGateway = Depends(get_chat_gateway),
    user_gateway: UserGateway = Depends(get_user_gateway),
):
    return chat_interactor.CreateChatGroupUseCase(chat_gateway, user_gateway)


async def get_user_chat_groups_use_case(
    chat_gateway: ChatGroupGateway = Depends(get_chat_gateway),
):
    return chat_interactor.GetUserChatGroupsUseCase(chat_gateway)


async def get_chat_group_use_case(chat_gateway: ChatGroupGateway = Depends(get_chat_gateway)):
    return chat_interactor.GetChatGroupUseCase(chat_gateway)


async def get_deactivate_chat_group_use_case(
    chat_gateway: ChatGroupGateway = Depends(get_chat_gateway),
):
    return chat_interactor.DeactivateChatGroupUseCase(chat_gateway)


# --- messages -------------------------------------------------------------


async def get_send_message_use_case(
    message_gateway: MessageGateway = Depends(get_message_gateway),
    chat_gateway: ChatGroupGateway = Depends(get_chat_gateway),
):
    return message_interactor.SendMessageUseCase(message_gateway, chat_gateway)


async def get_group_messages_use_case(
    message_gateway: MessageGateway = Depends(get_message_gateway),
    chat_gateway: ChatGroupGateway = Depends(get_chat_gateway),
):
    return message_interactor.GetGroupMessagesUseCase(message_gateway, chat_gateway)


async def get_edit_message_use_case(
    message_gateway: MessageGateway = Depends(get_message_gateway),
):
    return message_interactor.EditMessageUseCase(message_gateway)


async def get_delete_message_use_case(
    message_gateway: MessageGateway = Depends(get_message_gateway),
    chat_gateway: ChatGroupGateway = Depends(get_chat_gateway),
):
    return message_interactor.DeleteMessageUseCase(message_gateway, chat_gateway)


async def get_mark_delivered_use_case(
    message_gateway: MessageGateway = Depends(get_message_gateway),
    chat_gateway: ChatGroupGateway = Depends(get_chat_gateway),
):
    return message_interactor.MarkMessageDeliveredUseCase(message_gateway, chat_gateway)


async def get_mark_read_use_case(
    message_gateway: MessageGateway = Depends(get_message_gateway),
    chat_gateway: ChatGroupGateway = Depends(get_chat_gateway),
):
    return message_interactor.MarkMessageReadUseCase(message_gateway, chat_gateway)
