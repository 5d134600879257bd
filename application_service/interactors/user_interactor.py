# application_service/interactors/user_interactor.py
from datetime import UTC, datetime

from application_service.domain import entities
from application_service.domain.exceptions import (
    DeletionFailed,
    EmailConflict,
    InvalidArgument,
    NotFound,
    Unauthorized,
)
from application_service.gateways.interfaces import IUserGateway
from application_service.infrastructure.security import SecurityService

USER_NOT_FOUND = "Usuário não encontrado"
MAX_SEARCH_RESULTS = 50


class CreateUserUseCase:
    """Registers a user with a unique email and a salted password hash."""

    def __init__(self, user_gateway: IUserGateway, security_service: SecurityService):
        self.user_gateway = user_gateway
        self.security_service = security_service

    async def execute(self, user_data: dict) -> entities.User:
        data = dict(user_data)

        if data.get("email"):
            existing_user = await self.user_gateway.find_by_email(data["email"])
            if existing_user:
                raise EmailConflict("Email já está em uso")

        if data.get("password"):
            data["password"] = self.security_service.get_password_hash(data["password"])

        data["verified"] = bool(data.get("verified") or False)

        return await self.user_gateway.create(data)


class UpdateUserUseCase:
    def __init__(self, user_gateway: IUserGateway, security_service: SecurityService):
        self.user_gateway = user_gateway
        self.security_service = security_service

    async def execute(self, user_id: int, user_data: dict) -> entities.User:
        existing_user = await self.user_gateway.find_by_id(user_id)
        if not existing_user:
            raise NotFound(USER_NOT_FOUND, "User not found")

        data = dict(user_data)
        email = data.get("email")
        if email and email.lower() != existing_user.email.lower():
            user_with_email = await self.user_gateway.find_by_email(email)
            if user_with_email and user_with_email.id != user_id:
                raise EmailConflict("Email já está em uso por outro usuário")

        if data.get("password"):
            data["password"] = self.security_service.get_password_hash(data["password"])

        data["updated_at"] = datetime.now(UTC)

        updated_user = await self.user_gateway.update(user_id, data)
        if not updated_user:
            raise NotFound(USER_NOT_FOUND, "User not found")
        return updated_user


class DeleteUserUseCase:
    def __init__(self, user_gateway: IUserGateway):
        self.user_gateway = user_gateway

    async def execute(self, user_id: int) -> bool:
        existing_user = await self.user_gateway.find_by_id(user_id)
        if not existing_user:
            raise NotFound(USER_NOT_FOUND, "User not found")

        deleted = await self.user_gateway.delete(user_id)
        if not deleted:
            raise DeletionFailed("Falha ao excluir usuário", "User deletion failed")
        return True


class GetUserUseCase:
    def __init__(self, user_gateway: IUserGateway):
        self.user_gateway = user_gateway

    async def execute(self, user_id: int) -> entities.User:
        user = await self.user_gateway.find_by_id(user_id)
        if not user:
            raise NotFound(USER_NOT_FOUND, "User not found")
        return user


class ListUsersUseCase:
    def __init__(self, user_gateway: IUserGateway):
        self.user_gateway = user_gateway

    async def execute(self, page: int = 1, limit: int = 10) -> entities.Page[entities.User]:
        return await self.user_gateway.find_all(page, limit)


class SearchUsersUseCase:
    def __init__(self, user_gateway: IUserGateway):
        self.user_gateway = user_gateway

    async def execute(self, name: str, limit: int = 10) -> list[entities.User]:
        term = (name or "").strip()
        if not term:
            raise InvalidArgument("Termo de busca é obrigatório")
        return await self.user_gateway.search_by_name(term, min(limit, MAX_SEARCH_RESULTS))


class AuthenticateUserUseCase:
    """Checks email and password and issues a signed bearer token."""

    def __init__(self, user_gateway: IUserGateway, security_service: SecurityService):
        self.user_gateway = user_gateway
        self.security_service = security_service

    async def execute(self, email: str, password: str) -> tuple[str, datetime, entities.User]:
        user = await self.user_gateway.find_by_email(email)
        if not user or not self.security_service.verify_password(password, user.password):
            raise Unauthorized(
                "Email ou senha inválidos",
                "Invalid credentials",
                hint="Verifique suas credenciais e tente novamente",
            )
        token, expires_at = self.security_service.create_access_token(user)
        return token, expires_at, user
