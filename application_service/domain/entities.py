# application_service/domain/entities.py
import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, TypeVar

from application_service.domain.enums import (
    MEDIA_MESSAGE_TYPES,
    ROLE_HIERARCHY,
    ChatGroupType,
    MemberRole,
    MessageStatus,
    MessageType,
)
from application_service.domain.exceptions import InvalidArgument

MAX_MESSAGE_LENGTH = 4000

T = TypeVar("T")


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class User:
    id: int | None
    name: str
    last_name: str
    email: str
    password: str
    cpf: str | None = None
    phone: str | None = None
    street: str | None = None
    number: int | None = None
    city: str | None = None
    zipcode: str | None = None
    verified: bool = False
    is_driver: bool = False
    is_passenger: bool = False
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime | None = None

    def full_name(self) -> str:
        return f"{self.name} {self.last_name}"

    def address(self) -> str | None:
        if not self.street or not self.number:
            return None
        return f"{self.street}, {self.number}, {self.city or ''} {self.zipcode or ''}".strip()

    def to_dict(self) -> dict:
        # no password
        return {
            "id": self.id,
            "name": self.name,
            "last_name": self.last_name,
            "email": self.email,
            "cpf": self.cpf,
            "phone": self.phone,
            "street": self.street,
            "number": self.number,
            "city": self.city,
            "zipcode": self.zipcode,
            "verified": self.verified,
            "is_driver": self.is_driver,
            "is_passenger": self.is_passenger,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class Group:
    """Ride group: one driver and up to five passengers."""

    id: int | None
    name: str
    driver_id: int
    description: str | None = None
    members: list[int] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)

    def add_member(self, user_id: int) -> None:
        if user_id not in self.members:
            self.members.append(user_id)

    def remove_member(self, user_id: int) -> None:
        self.members = [member for member in self.members if member != user_id]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "driver_id": self.driver_id,
            "members": list(self.members),
            "created_at": self.created_at,
        }


@dataclass
class ChatGroup:
    id: int | None
    name: str
    created_by_id: int
    description: str | None = None
    type: ChatGroupType = ChatGroupType.GROUP
    image_url: str | None = None
    is_active: bool = True
    max_members: int = 100
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime | None = None

    def validate(self) -> bool:
        if not self.name or len(self.name.strip()) < 2:
            raise InvalidArgument("Nome do grupo deve ter pelo menos 2 caracteres")
        if self.type == ChatGroupType.DIRECT and self.max_members != 2:
            raise InvalidArgument("Chat direto deve ter exatamente 2 membros")
        return True

    def is_direct_chat(self) -> bool:
        return self.type == ChatGroupType.DIRECT

    def update_info(
        self,
        name: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> "ChatGroup":
        if name:
            self.name = name
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url
        self.updated_at = _now()
        self.validate()
        return self

    def deactivate(self) -> "ChatGroup":
        self.is_active = False
        self.updated_at = _now()
        return self

    def activate(self) -> "ChatGroup":
        self.is_active = True
        self.updated_at = _now()
        return self

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "image_url": self.image_url,
            "created_by_id": self.created_by_id,
            "is_active": self.is_active,
            "max_members": self.max_members,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class GroupMember:
    id: int | None
    user_id: int
    group_id: int
    role: MemberRole = MemberRole.MEMBER
    added_by_id: int | None = None
    is_active: bool = True
    notifications: bool = True
    joined_at: datetime = field(default_factory=_now)
    last_seen_at: datetime | None = None
    left_at: datetime | None = None

    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN

    def has_admin_permissions(self) -> bool:
        return self.role in (MemberRole.ADMIN, MemberRole.MODERATOR)

    def can_manage_members(self) -> bool:
        return self.has_admin_permissions()

    def can_delete_messages(self) -> bool:
        return self.has_admin_permissions()

    def can_edit_group(self) -> bool:
        return self.is_admin()

    def promote(self, new_role: MemberRole, promoted_by_id: int) -> "GroupMember":
        if ROLE_HIERARCHY.index(new_role) <= ROLE_HIERARCHY.index(self.role):
            raise InvalidArgument(
                "Não é possível promover para um cargo inferior ou igual"
            )
        self.role = new_role
        self.added_by_id = promoted_by_id
        return self

    def demote(self, new_role: MemberRole, demoted_by_id: int) -> "GroupMember":
        if ROLE_HIERARCHY.index(new_role) >= ROLE_HIERARCHY.index(self.role):
            raise InvalidArgument(
                "Não é possível rebaixar para um cargo superior ou igual"
            )
        self.role = new_role
        self.added_by_id = demoted_by_id
        return self

    def update_last_seen(self) -> "GroupMember":
        self.last_seen_at = _now()
        return self

    def leave(self) -> "GroupMember":
        self.is_active = False
        self.left_at = _now()
        return self

    def rejoin(self) -> "GroupMember":
        self.is_active = True
        self.left_at = None
        self.joined_at = _now()
        return self

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "group_id": self.group_id,
            "role": self.role.value,
            "added_by_id": self.added_by_id,
            "is_active": self.is_active,
            "notifications": self.notifications,
            "joined_at": self.joined_at,
            "last_seen_at": self.last_seen_at,
            "left_at": self.left_at,
            "permissions": {
                "can_manage_members": self.can_manage_members(),
                "can_delete_messages": self.can_delete_messages(),
                "can_edit_group": self.can_edit_group(),
            },
        }


@dataclass
class Message:
    id: int | None
    sender_id: int
    group_id: int
    content: str | None = None
    type: MessageType = MessageType.TEXT
    reply_to_id: int | None = None
    status: MessageStatus = MessageStatus.SENT
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    is_deleted: bool = False
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime | None = None
    edited_at: datetime | None = None
    deleted_at: datetime | None = None

    def validate(self) -> bool:
        if not self.sender_id:
            raise InvalidArgument("Mensagem deve ter um remetente")
        if not self.group_id:
            raise InvalidArgument("Mensagem deve pertencer a um grupo")
        if self.type == MessageType.TEXT and (
            not self.content or not self.content.strip()
        ):
            raise InvalidArgument("Mensagem de texto não pode estar vazia")
        if self.is_media_message() and not self.file_url:
            raise InvalidArgument("Mensagem de mídia deve ter um arquivo")
        if self.content and len(self.content) > MAX_MESSAGE_LENGTH:
            raise InvalidArgument(
                f"Mensagem não pode ter mais de {MAX_MESSAGE_LENGTH} caracteres"
            )
        return True

    def is_media_message(self) -> bool:
        return self.type in MEDIA_MESSAGE_TYPES

    def is_reply(self) -> bool:
        return self.reply_to_id is not None

    def is_edited(self) -> bool:
        return self.edited_at is not None

    def mark_as_delivered(self) -> "Message":
        if self.status == MessageStatus.SENT:
            self.status = MessageStatus.DELIVERED
            self.updated_at = _now()
        return self

    def mark_as_read(self) -> "Message":
        self.status = MessageStatus.READ
        self.updated_at = _now()
        return self

    def edit(self, new_content: str | None) -> "Message":
        if self.is_deleted:
            raise InvalidArgument("Não é possível editar uma mensagem deletada")
        if self.type != MessageType.TEXT:
            raise InvalidArgument("Apenas mensagens de texto podem ser editadas")
        if not new_content or not new_content.strip():
            raise InvalidArgument("Conteúdo da mensagem não pode estar vazio")
        if len(new_content.strip()) > MAX_MESSAGE_LENGTH:
            raise InvalidArgument(
                f"Mensagem não pode ter mais de {MAX_MESSAGE_LENGTH} caracteres"
            )
        self.content = new_content.strip()
        self.edited_at = _now()
        self.updated_at = self.edited_at
        return self

    def delete(self) -> "Message":
        self.is_deleted = True
        self.deleted_at = _now()
        self.updated_at = self.deleted_at
        self.content = None
        return self

    def to_dict(self) -> dict:
        """External representation; file and content fields are redacted once deleted."""
        return {
            "id": self.id,
            "content": None if self.is_deleted else self.content,
            "type": self.type.value,
            "sender_id": self.sender_id,
            "group_id": self.group_id,
            "reply_to_id": self.reply_to_id,
            "status": self.status.value,
            "file_url": None if self.is_deleted else self.file_url,
            "file_name": None if self.is_deleted else self.file_name,
            "file_size": None if self.is_deleted else self.file_size,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "edited_at": self.edited_at,
            "is_deleted": self.is_deleted,
            "is_edited": self.is_edited(),
        }


@dataclass
class Identity:
    """Caller resolved from a bearer token."""

    id: int
    email: str | None = None
    name: str | None = None
    is_driver: bool = False
    is_passenger: bool = False


@dataclass
class Page(Generic[T]):
    items: list[T]
    total_items: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(self.total_items / self.limit)
