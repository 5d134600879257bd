# application_service/api/groups.py
from fastapi import APIRouter, Depends

from application_service.api.dependencies import (
    get_create_group_use_case,
    get_get_group_use_case,
    get_list_groups_use_case,
)
from application_service.api.pipeline import RequestValidator, authenticate, pipeline, rate_limit
from application_service.infrastructure import schemas
from application_service.interactors.group_interactor import (
    CreateGroupUseCase,
    GetGroupUseCase,
    ListGroupsUseCase,
)

router = APIRouter()

validate_group_create = RequestValidator(schemas.GroupCreate)
validate_page = RequestValidator(schemas.PageRequest, target="request")


@router.post(
    "",
    status_code=201,
    response_model=schemas.DataResponse[schemas.Group],
    dependencies=pipeline(validate_group_create, authenticate, rate_limit),
)
async def create_group(
    group: schemas.GroupCreate = Depends(validate_group_create),
    use_case: CreateGroupUseCase = Depends(get_create_group_use_case),
):
    created = await use_case.execute(group.model_dump())
    return {"data": created.to_dict()}


@router.get(
    "",
    response_model=schemas.PageResponse[schemas.Group],
    dependencies=pipeline(validate_page, authenticate, rate_limit),
)
async def list_groups(
    request_data: schemas.PageRequest = Depends(validate_page),
    use_case: ListGroupsUseCase = Depends(get_list_groups_use_case),
):
    page = await use_case.execute(request_data.query.page, request_data.query.limit)
    return {
        "data": [group.to_dict() for group in page.items],
        "meta": schemas.PageMeta.from_page(page),
    }


@router.get(
    "/{group_id}",
    response_model=schemas.DataResponse[schemas.Group],
    dependencies=pipeline(authenticate, rate_limit),
)
async def get_group(
    group_id: int,
    use_case: GetGroupUseCase = Depends(get_get_group_use_case),
):
    group = await use_case.execute(group_id)
    return {"data": group.to_dict()}
