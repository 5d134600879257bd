from unittest.mock import Mock

import pytest

from application_service.config import AppConfig
from application_service.domain.entities import Page, User
from application_service.domain.exceptions import (
    DeletionFailed,
    EmailConflict,
    InvalidArgument,
    NotFound,
    Unauthorized,
)
from application_service.gateways.interfaces import IUserGateway
from application_service.infrastructure.security import SecurityService
from application_service.interactors.user_interactor import (
    AuthenticateUserUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    SearchUsersUseCase,
    UpdateUserUseCase,
)


@pytest.fixture
def security_service():
    config = AppConfig(
        JWT_SECRET="test_secret", REDIS_HOST="localhost", REDIS_PORT=6379, BCRYPT_ROUNDS=4
    )
    return SecurityService(config)


@pytest.fixture
def mock_user_gateway():
    return Mock(spec=IUserGateway)


@pytest.fixture
def existing_user():
    return User(id=1, name="Ana", last_name="Souza", email="a@b.com", password="hash")


def echo_create(data):
    return User(id=10, **data)


class TestCreateUser:
    async def test_create_hashes_password_and_defaults_verified(
        self, mock_user_gateway, security_service
    ):
        mock_user_gateway.find_by_email.return_value = None
        mock_user_gateway.create.side_effect = echo_create
        use_case = CreateUserUseCase(mock_user_gateway, security_service)

        user = await use_case.execute(
            {"name": "Ana", "last_name": "Souza", "email": "a@b.com", "password": "pw123"}
        )

        assert user.verified is False
        assert user.password != "pw123"
        assert security_service.verify_password("pw123", user.password)
        mock_user_gateway.find_by_email.assert_called_once_with("a@b.com")

    async def test_create_rejects_taken_email(
        self, mock_user_gateway, security_service, existing_user
    ):
        mock_user_gateway.find_by_email.return_value = existing_user
        use_case = CreateUserUseCase(mock_user_gateway, security_service)

        with pytest.raises(EmailConflict):
            await use_case.execute({"email": "a@b.com", "password": "pw123"})

        mock_user_gateway.create.assert_not_called()


class TestUpdateUser:
    async def test_update_missing_user(self, mock_user_gateway, security_service):
        mock_user_gateway.find_by_id.return_value = None
        use_case = UpdateUserUseCase(mock_user_gateway, security_service)

        with pytest.raises(NotFound):
            await use_case.execute(999, {"name": "Bia"})

        mock_user_gateway.update.assert_not_called()

    async def test_update_email_taken_by_other_user(
        self, mock_user_gateway, security_service, existing_user
    ):
        other = User(id=2, name="Bia", last_name="Lima", email="b@c.com", password="x")
        mock_user_gateway.find_by_id.return_value = existing_user
        mock_user_gateway.find_by_email.return_value = other
        use_case = UpdateUserUseCase(mock_user_gateway, security_service)

        with pytest.raises(EmailConflict):
            await use_case.execute(1, {"email": "b@c.com"})

        mock_user_gateway.update.assert_not_called()

    async def test_update_same_email_skips_lookup(
        self, mock_user_gateway, security_service, existing_user
    ):
        mock_user_gateway.find_by_id.return_value = existing_user
        mock_user_gateway.update.return_value = existing_user
        use_case = UpdateUserUseCase(mock_user_gateway, security_service)

        await use_case.execute(1, {"email": "A@B.com", "password": "newsecret"})

        mock_user_gateway.find_by_email.assert_not_called()
        user_id, data = mock_user_gateway.update.call_args.args
        assert user_id == 1
        assert data["password"] != "newsecret"
        assert data["updated_at"] is not None


class TestDeleteUser:
    async def test_delete_missing_user(self, mock_user_gateway):
        mock_user_gateway.find_by_id.return_value = None

        with pytest.raises(NotFound):
            await DeleteUserUseCase(mock_user_gateway).execute(999)

        mock_user_gateway.delete.assert_not_called()

    async def test_delete_reports_failure(self, mock_user_gateway, existing_user):
        mock_user_gateway.find_by_id.return_value = existing_user
        mock_user_gateway.delete.return_value = False

        with pytest.raises(DeletionFailed):
            await DeleteUserUseCase(mock_user_gateway).execute(1)

    async def test_delete_success(self, mock_user_gateway, existing_user):
        mock_user_gateway.find_by_id.return_value = existing_user
        mock_user_gateway.delete.return_value = True

        assert await DeleteUserUseCase(mock_user_gateway).execute(1) is True


async def test_get_user_not_found(mock_user_gateway):
    mock_user_gateway.find_by_id.return_value = None

    with pytest.raises(NotFound):
        await GetUserUseCase(mock_user_gateway).execute(1)


async def test_list_users_defaults(mock_user_gateway):
    mock_user_gateway.find_all.return_value = Page(items=[], total_items=0, page=1, limit=10)

    page = await ListUsersUseCase(mock_user_gateway).execute()

    mock_user_gateway.find_all.assert_called_once_with(1, 10)
    assert page.total_pages == 0


async def test_search_users_caps_limit(mock_user_gateway):
    mock_user_gateway.search_by_name.return_value = []

    await SearchUsersUseCase(mock_user_gateway).execute(" ana ", limit=500)

    mock_user_gateway.search_by_name.assert_called_once_with("ana", 50)


async def test_search_users_requires_term(mock_user_gateway):
    with pytest.raises(InvalidArgument):
        await SearchUsersUseCase(mock_user_gateway).execute("  ")


class TestAuthenticateUser:
    async def test_valid_credentials(self, mock_user_gateway, security_service, existing_user):
        existing_user.password = security_service.get_password_hash("pw123")
        mock_user_gateway.find_by_email.return_value = existing_user
        use_case = AuthenticateUserUseCase(mock_user_gateway, security_service)

        token, expires_at, user = await use_case.execute("a@b.com", "pw123")

        assert security_service.decode_identity(token).id == existing_user.id
        assert user is existing_user
        assert expires_at is not None

    async def test_wrong_password(self, mock_user_gateway, security_service, existing_user):
        existing_user.password = security_service.get_password_hash("pw123")
        mock_user_gateway.find_by_email.return_value = existing_user
        use_case = AuthenticateUserUseCase(mock_user_gateway, security_service)

        with pytest.raises(Unauthorized):
            await use_case.execute("a@b.com", "wrong")

    async def test_unknown_email(self, mock_user_gateway, security_service):
        mock_user_gateway.find_by_email.return_value = None
        use_case = AuthenticateUserUseCase(mock_user_gateway, security_service)

        with pytest.raises(Unauthorized):
            await use_case.execute("x@y.com", "pw123")
