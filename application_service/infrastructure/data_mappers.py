# application_service/infrastructure/data_mappers.py

from enum import Enum
from typing import Protocol, TypeVar

from application_service.domain import entities
from application_service.domain.enums import (
    ChatGroupType,
    MemberRole,
    MessageStatus,
    MessageType,
)
from application_service.infrastructure import models

ModelT_contra = TypeVar("ModelT_contra", contravariant=True)
EntityT_co = TypeVar("EntityT_co", covariant=True)


class DataMapper(Protocol[ModelT_contra, EntityT_co]):
    def to_entity(self, model: ModelT_contra) -> EntityT_co:
        raise NotImplementedError


class UserMapper(DataMapper[models.User, entities.User]):
    def to_entity(self, model: models.User) -> entities.User:
        return entities.User(
            id=model.id,
            name=model.name,
            last_name=model.last_name,
            email=model.email,
            password=model.password,
            cpf=model.cpf,
            phone=model.phone,
            street=model.street,
            number=model.number,
            city=model.city,
            zipcode=model.zipcode,
            verified=bool(model.verified),
            is_driver=bool(model.is_driver),
            is_passenger=bool(model.is_passenger),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class GroupMapper(DataMapper[models.RideGroup, entities.Group]):
    def to_entity(
        self, model: models.RideGroup, members: list[int] | None = None
    ) -> entities.Group:
        return entities.Group(
            id=model.id,
            name=model.name,
            description=model.description,
            driver_id=model.driver_id,
            members=list(members or []),
            created_at=model.created_at,
        )


class ChatGroupMapper(DataMapper[models.ChatGroup, entities.ChatGroup]):
    def to_entity(self, model: models.ChatGroup) -> entities.ChatGroup:
        return entities.ChatGroup(
            id=model.id,
            name=model.name,
            description=model.description,
            type=ChatGroupType(model.type),
            image_url=model.image_url,
            created_by_id=model.created_by_id,
            is_active=bool(model.is_active),
            max_members=model.max_members,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class GroupMemberMapper(DataMapper[models.ChatGroupMember, entities.GroupMember]):
    def to_entity(self, model: models.ChatGroupMember) -> entities.GroupMember:
        return entities.GroupMember(
            id=model.id,
            user_id=model.user_id,
            group_id=model.group_id,
            role=MemberRole(model.role),
            added_by_id=model.added_by_id,
            is_active=bool(model.is_active),
            notifications=bool(model.notifications),
            joined_at=model.joined_at,
            last_seen_at=model.last_seen_at,
            left_at=model.left_at,
        )


class MessageMapper(DataMapper[models.Message, entities.Message]):
    def to_entity(self, model: models.Message) -> entities.Message:
        return entities.Message(
            id=model.id,
            content=model.content,
            type=MessageType(model.type),
            sender_id=model.sender_id,
            group_id=model.group_id,
            reply_to_id=model.reply_to_id,
            status=MessageStatus(model.status),
            file_url=model.file_url,
            file_name=model.file_name,
            file_size=model.file_size,
            is_deleted=bool(model.is_deleted),
            created_at=model.created_at,
            updated_at=model.updated_at,
            edited_at=model.edited_at,
            deleted_at=model.deleted_at,
        )


def apply_changes(model, data: dict) -> None:
    """Copy ``data`` onto an ORM row, storing enum members by value."""
    for key, value in data.items():
        if isinstance(value, Enum):
            value = value.value
        setattr(model, key, value)
