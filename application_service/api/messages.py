# application_service/api/messages.py
from fastapi import APIRouter, Depends

from application_service.api.dependencies import (
    get_delete_message_use_case,
    get_edit_message_use_case,
    get_group_messages_use_case,
    get_mark_delivered_use_case,
    get_mark_read_use_case,
    get_send_message_use_case,
)
from application_service.api.pipeline import (
    RequestValidator,
    authenticate,
    message_rate_limit,
    pipeline,
    rate_limit,
)
from application_service.domain.entities import Identity
from application_service.infrastructure import schemas
from application_service.interactors.message_interactor import (
    DeleteMessageUseCase,
    EditMessageUseCase,
    GetGroupMessagesUseCase,
    MarkMessageDeliveredUseCase,
    MarkMessageReadUseCase,
    SendMessageUseCase,
)

router = APIRouter()

validate_message_page = RequestValidator(schemas.MessagePageRequest, target="request")
validate_message_create = RequestValidator(schemas.MessageCreate)
validate_message_update = RequestValidator(schemas.MessageUpdate)


@router.get(
    "/chats/{chat_id}/messages",
    response_model=schemas.PageResponse[schemas.Message],
    dependencies=pipeline(validate_message_page, authenticate, rate_limit),
)
async def list_messages(
    chat_id: int,
    request_data: schemas.MessagePageRequest = Depends(validate_message_page),
    identity: Identity = Depends(authenticate),
    use_case: GetGroupMessagesUseCase = Depends(get_group_messages_use_case),
):
    page = await use_case.execute(
        chat_id, identity.id, request_data.query.page, request_data.query.limit
    )
    return {
        "data": [message.to_dict() for message in page.items],
        "meta": schemas.PageMeta.from_page(page),
    }


@router.post(
    "/chats/{chat_id}/messages",
    status_code=201,
    response_model=schemas.DataResponse[schemas.Message],
    dependencies=pipeline(validate_message_create, authenticate, message_rate_limit),
)
async def send_message(
    chat_id: int,
    message: schemas.MessageCreate = Depends(validate_message_create),
    identity: Identity = Depends(authenticate),
    use_case: SendMessageUseCase = Depends(get_send_message_use_case),
):
    created = await use_case.execute(message.model_dump(), identity.id, chat_id)
    return {"data": created.to_dict()}


@router.put(
    "/messages/{message_id}",
    response_model=schemas.DataResponse[schemas.Message],
    dependencies=pipeline(validate_message_update, authenticate, rate_limit),
)
async def edit_message(
    message_id: int,
    message_update: schemas.MessageUpdate = Depends(validate_message_update),
    identity: Identity = Depends(authenticate),
    use_case: EditMessageUseCase = Depends(get_edit_message_use_case),
):
    message = await use_case.execute(message_id, identity.id, message_update.content)
    return {"data": message.to_dict()}


@router.delete(
    "/messages/{message_id}",
    response_model=schemas.DataResponse[schemas.Message],
    dependencies=pipeline(authenticate, rate_limit),
)
async def delete_message(
    message_id: int,
    identity: Identity = Depends(authenticate),
    use_case: DeleteMessageUseCase = Depends(get_delete_message_use_case),
):
    message = await use_case.execute(message_id, identity.id)
    return {"data": message.to_dict()}


@router.post(
    "/messages/{message_id}/delivered",
    response_model=schemas.DataResponse[schemas.Message],
    dependencies=pipeline(authenticate, rate_limit),
)
async def mark_delivered(
    message_id: int,
    identity: Identity = Depends(authenticate),
    use_case: MarkMessageDeliveredUseCase = Depends(get_mark_delivered_use_case),
):
    message = await use_case.execute(message_id, identity.id)
    return {"data": message.to_dict()}


@router.post(
    "/messages/{message_id}/read",
    response_model=schemas.DataResponse[schemas.Message],
    dependencies=pipeline(authenticate, rate_limit),
)
async def mark_read(
    message_id: int,
    identity: Identity = Depends(authenticate),
    use_case: MarkMessageReadUseCase = Depends(get_mark_read_use_case),
):
    message = await use_case.execute(message_id, identity.id)
    return {"data": message.to_dict()}
