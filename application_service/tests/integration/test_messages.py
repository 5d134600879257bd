import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def send(client: AsyncClient, chat_id: int, headers: dict, **payload):
    return await client.post(f"/chats/{chat_id}/messages", headers=headers, json=payload)


async def test_send_message(client: AsyncClient, test_chat, auth_header, test_user):
    response = await send(client, test_chat["id"], auth_header, content="  Oi, pessoal!  ")
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["content"] == "Oi, pessoal!"
    assert data["senderId"] == test_user.id
    assert data["groupId"] == test_chat["id"]
    assert data["status"] == "sent"
    assert data["isEdited"] is False


async def test_send_empty_text_message(client: AsyncClient, test_chat, auth_header):
    response = await send(client, test_chat["id"], auth_header, content="   ")
    assert response.status_code == 400
    assert response.json()["message"] == "Mensagem de texto não pode estar vazia"


async def test_send_media_without_file(client: AsyncClient, test_chat, auth_header):
    response = await send(client, test_chat["id"], auth_header, type="image")
    assert response.status_code == 400
    assert response.json()["message"] == "Mensagem de mídia deve ter um arquivo"


async def test_send_message_to_unknown_chat(client: AsyncClient, auth_header):
    response = await send(client, 9999, auth_header, content="Oi")
    assert response.status_code == 404


async def test_reply_must_exist(client: AsyncClient, test_chat, auth_header):
    response = await send(client, test_chat["id"], auth_header, content="Oi", replyToId=9999)
    assert response.status_code == 404
    assert response.json()["message"] == "Mensagem de resposta não encontrada"


async def test_list_messages_newest_first(client: AsyncClient, test_chat, auth_header2):
    for content in ("primeira", "segunda", "terceira"):
        response = await send(client, test_chat["id"], auth_header2, content=content)
        assert response.status_code == 201

    response = await client.get(
        f"/chats/{test_chat['id']}/messages?limit=2", headers=auth_header2
    )
    assert response.status_code == 200
    body = response.json()
    assert [message["content"] for message in body["data"]] == ["terceira", "segunda"]
    assert body["meta"] == {
        "totalData": 3,
        "totalPages": 2,
        "currentPage": 1,
        "pageSize": 2,
    }


async def test_edit_message(client: AsyncClient, test_chat, auth_header, auth_header2):
    created = (await send(client, test_chat["id"], auth_header, content="Oi")).json()["data"]

    response = await client.put(
        f"/messages/{created['id']}", headers=auth_header2, json={"content": "Hack"}
    )
    assert response.status_code == 403

    response = await client.put(
        f"/messages/{created['id']}", headers=auth_header, json={"content": " Olá "}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["content"] == "Olá"
    assert data["isEdited"] is True


async def test_delete_message_redacts_content(
    client: AsyncClient, test_chat, auth_header, auth_header2
):
    created = (
        await send(
            client,
            test_chat["id"],
            auth_header2,
            type="file",
            content="contrato",
            fileUrl="https://files.example.com/contrato.pdf",
            fileName="contrato.pdf",
            fileSize=1024,
        )
    ).json()["data"]

    # chat admin may delete other members' messages
    response = await client.delete(f"/messages/{created['id']}", headers=auth_header)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["isDeleted"] is True
    assert data["content"] is None
    assert data["fileUrl"] is None
    assert data["fileName"] is None

    response = await client.delete(f"/messages/{created['id']}", headers=auth_header)
    assert response.status_code == 404

    response = await client.put(
        f"/messages/{created['id']}", headers=auth_header2, json={"content": "de novo"}
    )
    assert response.status_code == 400


async def test_member_cannot_delete_others_message(
    client: AsyncClient, test_chat, auth_header, auth_header2
):
    created = (await send(client, test_chat["id"], auth_header, content="Oi")).json()["data"]
    response = await client.delete(f"/messages/{created['id']}", headers=auth_header2)
    assert response.status_code == 403


async def test_message_status_transitions(
    client: AsyncClient, test_chat, auth_header, auth_header2
):
    created = (await send(client, test_chat["id"], auth_header, content="Oi")).json()["data"]

    response = await client.post(f"/messages/{created['id']}/read", headers=auth_header2)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "read"

    response = await client.post(
        f"/messages/{created['id']}/delivered", headers=auth_header2
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "read"


async def test_message_rate_limit(client: AsyncClient, app_config, test_chat, auth_header):
    app_config.RATE_LIMIT_MESSAGES = 2
    for content in ("um", "dois"):
        assert (await send(client, test_chat["id"], auth_header, content=content)).status_code == 201

    response = await send(client, test_chat["id"], auth_header, content="tres")
    assert response.status_code == 429
    assert response.json()["error"] == "Message rate limit exceeded"
