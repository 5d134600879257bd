# application_service/infrastructure/schemas.py
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from application_service.domain.entities import Page
from application_service.domain.enums import ChatGroupType, MemberRole, MessageStatus, MessageType

T = TypeVar("T")

CPF_PATTERN = r"^\d{3}\.\d{3}\.\d{3}-\d{2}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# --- requests -------------------------------------------------------------


class UserBase(CamelModel):
    cpf: str | None = Field(None, max_length=45, pattern=CPF_PATTERN)
    phone: str | None = Field(None, max_length=45)
    street: str | None = Field(None, max_length=45)
    number: int | None = Field(None, gt=0)
    city: str | None = Field(None, max_length=45)
    zipcode: str | None = Field(None, max_length=45)
    verified: bool | None = None
    is_driver: bool | None = None
    is_passenger: bool | None = None


class UserCreate(UserBase):
    name: str = Field(..., min_length=2, max_length=255)
    last_name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=255)


class UserUpdate(UserBase):
    name: str | None = Field(None, min_length=2, max_length=255)
    last_name: str | None = Field(None, min_length=2, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=8, max_length=255)


class UserIdParams(CamelModel):
    user_id: int = Field(..., gt=0)


class UserUpdateRequest(CamelModel):
    params: UserIdParams
    body: UserUpdate


class PageQuery(CamelModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)


class PageRequest(CamelModel):
    query: PageQuery = Field(default_factory=PageQuery)


class MessagePageQuery(PageQuery):
    limit: int = Field(50, ge=1, le=100)


class MessagePageRequest(CamelModel):
    query: MessagePageQuery = Field(default_factory=MessagePageQuery)


class SearchQuery(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    limit: int = Field(10, ge=1, le=50)


class SearchRequest(CamelModel):
    query: SearchQuery


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class GroupCreate(CamelModel):
    # value rules (member count, driver) are enforced by CreateGroupUseCase
    name: str | None = None
    description: str | None = None
    members: list[int] | None = None
    driver_id: int | None = None


class ChatGroupCreate(CamelModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    type: ChatGroupType = ChatGroupType.GROUP
    image_url: str | None = None
    member_ids: list[int] = Field(default_factory=list)


class MessageCreate(CamelModel):
    content: str | None = Field(None, max_length=4000)
    type: MessageType = MessageType.TEXT
    reply_to_id: int | None = None
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = Field(None, ge=0)


class MessageUpdate(CamelModel):
    content: str = Field(..., min_length=1, max_length=4000)


# --- responses ------------------------------------------------------------


class User(CamelModel):
    id: int
    name: str
    last_name: str
    email: str
    cpf: str | None = None
    phone: str | None = None
    street: str | None = None
    number: int | None = None
    city: str | None = None
    zipcode: str | None = None
    verified: bool
    is_driver: bool
    is_passenger: bool
    created_at: datetime
    updated_at: datetime | None = None


class Group(CamelModel):
    id: int
    name: str
    description: str | None = None
    driver_id: int
    members: list[int]
    created_at: datetime


class ChatGroup(CamelModel):
    id: int
    name: str
    description: str | None = None
    type: ChatGroupType
    image_url: str | None = None
    created_by_id: int
    is_active: bool
    max_members: int
    created_at: datetime
    updated_at: datetime | None = None


class MemberPermissions(CamelModel):
    can_manage_members: bool
    can_delete_messages: bool
    can_edit_group: bool


class GroupMember(CamelModel):
    id: int
    user_id: int
    group_id: int
    role: MemberRole
    is_active: bool
    joined_at: datetime
    last_seen_at: datetime | None = None
    permissions: MemberPermissions


class ChatGroupDetail(ChatGroup):
    membership: GroupMember


class Message(CamelModel):
    id: int
    content: str | None
    type: MessageType
    sender_id: int
    group_id: int
    reply_to_id: int | None = None
    status: MessageStatus
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    created_at: datetime
    updated_at: datetime | None = None
    edited_at: datetime | None = None
    is_deleted: bool
    is_edited: bool


class Token(CamelModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime


class PageMeta(CamelModel):
    total_data: int
    total_pages: int
    current_page: int
    page_size: int

    @classmethod
    def from_page(cls, page: Page) -> "PageMeta":
        return cls(
            total_data=page.total_items,
            total_pages=page.total_pages,
            current_page=page.page,
            page_size=page.limit,
        )


class DataResponse(CamelModel, Generic[T]):
    data: T


class PageResponse(CamelModel, Generic[T]):
    data: list[T]
    meta: PageMeta


class HealthResponse(BaseModel):
    status: str
    service: str
