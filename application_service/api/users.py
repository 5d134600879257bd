# application_service/api/users.py
from fastapi import APIRouter, Depends

from application_service.api.dependencies import (
    get_create_user_use_case,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_search_users_use_case,
    get_update_user_use_case,
)
from application_service.api.pipeline import (
    RequestValidator,
    authenticate,
    pipeline,
    rate_limit,
    search_rate_limit,
)
from application_service.infrastructure import schemas
from application_service.interactors.user_interactor import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    SearchUsersUseCase,
    UpdateUserUseCase,
)

router = APIRouter()

validate_page = RequestValidator(schemas.PageRequest, target="request")
validate_search = RequestValidator(schemas.SearchRequest, target="request")
validate_user_create = RequestValidator(schemas.UserCreate)
validate_user_update = RequestValidator(schemas.UserUpdateRequest, target="request")


@router.get(
    "",
    response_model=schemas.PageResponse[schemas.User],
    dependencies=pipeline(validate_page, authenticate, rate_limit),
)
async def list_users(
    request_data: schemas.PageRequest = Depends(validate_page),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    page = await use_case.execute(request_data.query.page, request_data.query.limit)
    return {
        "data": [user.to_dict() for user in page.items],
        "meta": schemas.PageMeta.from_page(page),
    }


@router.get(
    "/search",
    response_model=schemas.DataResponse[list[schemas.User]],
    dependencies=pipeline(validate_search, authenticate, search_rate_limit),
)
async def search_users(
    request_data: schemas.SearchRequest = Depends(validate_search),
    use_case: SearchUsersUseCase = Depends(get_search_users_use_case),
):
    users = await use_case.execute(request_data.query.name, request_data.query.limit)
    return {"data": [user.to_dict() for user in users]}


@router.post(
    "",
    status_code=201,
    response_model=schemas.DataResponse[schemas.User],
    dependencies=pipeline(validate_user_create, authenticate, rate_limit),
)
async def create_user(
    user: schemas.UserCreate = Depends(validate_user_create),
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
):
    created = await use_case.execute(user.model_dump(exclude_none=True))
    return {"data": created.to_dict()}


@router.get(
    "/{user_id}",
    response_model=schemas.DataResponse[schemas.User],
    dependencies=pipeline(authenticate, rate_limit),
)
async def get_user(
    user_id: int,
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    user = await use_case.execute(user_id)
    return {"data": user.to_dict()}


@router.put(
    "/{user_id}",
    response_model=schemas.DataResponse[schemas.User],
    dependencies=pipeline(validate_user_update, authenticate, rate_limit),
)
async def update_user(
    request_data: schemas.UserUpdateRequest = Depends(validate_user_update),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    updated = await use_case.execute(
        request_data.params.user_id,
        request_data.body.model_dump(exclude_unset=True, exclude_none=True),
    )
    return {"data": updated.to_dict()}


@router.delete("/{user_id}", status_code=204, dependencies=pipeline(authenticate, rate_limit))
async def delete_user(
    user_id: int,
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    await use_case.execute(user_id)
