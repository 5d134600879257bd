# application_service/api/chats.py
from fastapi import APIRouter, Depends

from application_service.api.dependencies import (
    get_chat_group_use_case,
    get_create_chat_group_use_case,
    get_deactivate_chat_group_use_case,
    get_user_chat_groups_use_case,
)
from application_service.api.pipeline import RequestValidator, authenticate, pipeline, rate_limit
from application_service.domain.entities import Identity
from application_service.infrastructure import schemas
from application_service.interactors.chat_interactor import (
    CreateChatGroupUseCase,
    DeactivateChatGroupUseCase,
    GetChatGroupUseCase,
    GetUserChatGroupsUseCase,
)

router = APIRouter()

validate_chat_create = RequestValidator(schemas.ChatGroupCreate)
validate_page = RequestValidator(schemas.PageRequest, target="request")


@router.post(
    "",
    status_code=201,
    response_model=schemas.DataResponse[schemas.ChatGroup],
    dependencies=pipeline(validate_chat_create, authenticate, rate_limit),
)
async def create_chat_group(
    chat: schemas.ChatGroupCreate = Depends(validate_chat_create),
    identity: Identity = Depends(authenticate),
    use_case: CreateChatGroupUseCase = Depends(get_create_chat_group_use_case),
):
    group = await use_case.execute(chat.model_dump(), identity.id)
    return {"data": group.to_dict()}


@router.get(
    "",
    response_model=schemas.PageResponse[schemas.ChatGroup],
    dependencies=pipeline(validate_page, authenticate, rate_limit),
)
async def list_chat_groups(
    request_data: schemas.PageRequest = Depends(validate_page),
    identity: Identity = Depends(authenticate),
    use_case: GetUserChatGroupsUseCase = Depends(get_user_chat_groups_use_case),
):
    page = await use_case.execute(
        identity.id, request_data.query.page, request_data.query.limit
    )
    return {
        "data": [group.to_dict() for group in page.items],
        "meta": schemas.PageMeta.from_page(page),
    }


@router.get(
    "/{chat_id}",
    response_model=schemas.DataResponse[schemas.ChatGroupDetail],
    dependencies=pipeline(authenticate, rate_limit),
)
async def get_chat_group(
    chat_id: int,
    identity: Identity = Depends(authenticate),
    use_case: GetChatGroupUseCase = Depends(get_chat_group_use_case),
):
    group, membership = await use_case.execute(chat_id, identity.id)
    return {"data": {**group.to_dict(), "membership": membership.to_dict()}}


@router.delete(
    "/{chat_id}",
    response_model=schemas.DataResponse[schemas.ChatGroup],
    dependencies=pipeline(authenticate, rate_limit),
)
async def deactivate_chat_group(
    chat_id: int,
    identity: Identity = Depends(authenticate),
    use_case: DeactivateChatGroupUseCase = Depends(get_deactivate_chat_group_use_case),
):
    group = await use_case.execute(chat_id, identity.id)
    return {"data": group.to_dict()}
