from enum import Enum


class ChatGroupType(str, Enum):
    GROUP = "group"
    DIRECT = "direct"


class MessageType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    AUDIO = "audio"
    VIDEO = "video"


MEDIA_MESSAGE_TYPES = frozenset(
    {MessageType.IMAGE, MessageType.FILE, MessageType.AUDIO, MessageType.VIDEO}
)


class MessageStatus(str, Enum):
    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"


class MemberRole(str, Enum):
    MEMBER = "member"
    MODERATOR = "moderator"
    ADMIN = "admin"


# lowest first
ROLE_HIERARCHY = [MemberRole.MEMBER, MemberRole.MODERATOR, MemberRole.ADMIN]
