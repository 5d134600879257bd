# application_service/infrastructure/models.py
from datetime import UTC, datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from application_service.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


ride_group_members = Table(
    "ride_group_members",
    Base.metadata,
    Column("group_id", Integer, ForeignKey("ride_groups.id"), primary_key=True),
    Column("passenger_id", Integer, primary_key=True),
    Column("joined_at", DateTime(timezone=True), default=_utcnow),
)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, index=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(String(255))
    last_name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255))
    cpf: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    street: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    zipcode: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    is_driver: Mapped[bool] = mapped_column(Boolean, default=False)
    is_passenger: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class RideGroup(Base):
    __tablename__ = "ride_groups"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, index=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    driver_id: Mapped[int] = mapped_column(Integer, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )


class ChatGroup(Base):
    __tablename__ = "chat_groups"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, index=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    type: Mapped[str] = mapped_column(String(16), default="group")
    image_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_by_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    max_members: Mapped[int] = mapped_column(Integer, default=100)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    members: Mapped[List["ChatGroupMember"]] = relationship(
        "ChatGroupMember", back_populates="group", lazy="select"
    )


class ChatGroupMember(Base):
    __tablename__ = "chat_group_members"

    __table_args__ = (
        Index("ix_chat_member_group_user", "group_id", "user_id", unique=True),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, index=True, autoincrement=True
    )
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), index=True)
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("chat_groups.id"), index=True
    )
    role: Mapped[str] = mapped_column(String(16), default="member")
    added_by_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    notifications: Mapped[bool] = mapped_column(Boolean, default=True)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    last_seen_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    left_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    group: Mapped[ChatGroup] = relationship(
        "ChatGroup", back_populates="members", lazy="select"
    )


class Message(Base):
    __tablename__ = "messages"

    __table_args__ = (
        Index("ix_messages_group_created", "group_id", "created_at"),
        Index("ix_messages_group_deleted", "group_id", "is_deleted"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, index=True, autoincrement=True
    )
    content: Mapped[Optional[str]] = mapped_column(String(4000), nullable=True)
    type: Mapped[str] = mapped_column(String(16), default="text")
    sender_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), index=True)
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("chat_groups.id"), index=True
    )
    reply_to_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("messages.id"), nullable=True
    )
    status: Mapped[str] = mapped_column(String(16), default="sent")
    file_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    file_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    file_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    edited_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
