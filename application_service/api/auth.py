# application_service/api/auth.py
from fastapi import APIRouter, Depends

from application_service.api.dependencies import (
    get_authenticate_user_use_case,
    get_create_user_use_case,
)
from application_service.api.pipeline import RequestValidator, pipeline, rate_limit
from application_service.infrastructure import schemas
from application_service.interactors.user_interactor import (
    AuthenticateUserUseCase,
    CreateUserUseCase,
)

router = APIRouter()

validate_login = RequestValidator(schemas.LoginRequest)
validate_register = RequestValidator(schemas.UserCreate)


@router.post(
    "/login",
    response_model=schemas.DataResponse[schemas.Token],
    dependencies=pipeline(validate_login, rate_limit),
)
async def login(
    credentials: schemas.LoginRequest = Depends(validate_login),
    use_case: AuthenticateUserUseCase = Depends(get_authenticate_user_use_case),
):
    token, expires_at, _ = await use_case.execute(credentials.email, credentials.password)
    return {"data": {"token": token, "token_type": "bearer", "expires_at": expires_at}}


@router.post(
    "/register",
    status_code=201,
    response_model=schemas.DataResponse[schemas.User],
    dependencies=pipeline(validate_register, rate_limit),
)
async def register(
    user: schemas.UserCreate = Depends(validate_register),
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
):
    created = await use_case.execute(user.model_dump(exclude_none=True))
    return {"data": created.to_dict()}
