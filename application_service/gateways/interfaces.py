# application_service/gateways/interfaces.py
from abc import ABC, abstractmethod
from typing import List, Optional

from application_service.domain import entities


class IUserGateway(ABC):
    @abstractmethod
    async def find_all(self, page: int = 1, limit: int = 10) -> entities.Page[entities.User]:
        pass

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[entities.User]:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[entities.User]:
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: List[int]) -> List[entities.User]:
        pass

    @abstractmethod
    async def search_by_name(self, name: str, limit: int = 10) -> List[entities.User]:
        pass

    @abstractmethod
    async def create(self, data: dict) -> entities.User:
        pass

    @abstractmethod
    async def update(self, user_id: int, data: dict) -> Optional[entities.User]:
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        pass


class IGroupGateway(ABC):
    @abstractmethod
    async def find_all(self, page: int = 1, limit: int = 10) -> entities.Page[entities.Group]:
        pass

    @abstractmethod
    async def find_by_id(self, group_id: int) -> Optional[entities.Group]:
        pass

    @abstractmethod
    async def create(self, data: dict) -> entities.Group:
        pass


class IChatGroupGateway(ABC):
    @abstractmethod
    async def find_by_user_id(
        self, user_id: int, page: int = 1, limit: int = 20
    ) -> entities.Page[entities.ChatGroup]:
        pass

    @abstractmethod
    async def find_by_id(self, group_id: int) -> Optional[entities.ChatGroup]:
        pass

    @abstractmethod
    async def find_direct_chat(
        self, user1_id: int, user2_id: int
    ) -> Optional[entities.ChatGroup]:
        pass

    @abstractmethod
    async def create(
        self, data: dict, members: List[entities.GroupMember]
    ) -> entities.ChatGroup:
        pass

    @abstractmethod
    async def update(self, group_id: int, data: dict) -> Optional[entities.ChatGroup]:
        pass

    @abstractmethod
    async def delete(self, group_id: int) -> bool:
        pass

    @abstractmethod
    async def find_membership(
        self, group_id: int, user_id: int
    ) -> Optional[entities.GroupMember]:
        pass

    @abstractmethod
    async def touch_last_seen(self, group_id: int, user_id: int) -> None:
        pass


class IMessageGateway(ABC):
    @abstractmethod
    async def find_by_group_id(
        self, group_id: int, page: int = 1, limit: int = 50
    ) -> entities.Page[entities.Message]:
        pass

    @abstractmethod
    async def find_by_id(self, message_id: int) -> Optional[entities.Message]:
        pass

    @abstractmethod
    async def create(self, data: dict) -> entities.Message:
        pass

    @abstractmethod
    async def update(self, message_id: int, data: dict) -> Optional[entities.Message]:
        pass

    @abstractmethod
    async def delete(self, message_id: int) -> bool:
        pass
