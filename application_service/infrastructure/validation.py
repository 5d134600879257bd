# application_service/infrastructure/validation.py
"""Turns pydantic error lists into the Portuguese messages returned to clients."""
from typing import Any, Iterable

# request sections that prefix an error location
_SECTIONS = {"body", "params", "path", "query", "header"}

FIELD_LABELS = {
    "name": "Nome",
    "lastName": "Sobrenome",
    "last_name": "Sobrenome",
    "email": "Email",
    "password": "Senha",
    "cpf": "CPF",
    "phone": "Telefone",
    "street": "Endereço",
    "number": "Número",
    "city": "Cidade",
    "zipcode": "CEP",
    "verified": "Verificado",
    "isDriver": "Motorista",
    "isPassenger": "Passageiro",
    "userId": "ID do usuário",
    "user_id": "ID do usuário",
    "chat_id": "ID do grupo",
    "message_id": "ID da mensagem",
    "group_id": "ID do grupo",
    "page": "Página",
    "limit": "Limite",
    "description": "Descrição",
    "members": "Membros",
    "memberIds": "Membros",
    "driverId": "Motorista",
    "type": "Tipo",
    "imageUrl": "Imagem",
    "content": "Conteúdo",
    "replyToId": "Mensagem respondida",
    "fileUrl": "Arquivo",
    "fileName": "Nome do arquivo",
    "fileSize": "Tamanho do arquivo",
}

FEMININE_LABELS = {"Senha", "Página", "Cidade", "Descrição", "Imagem", "Mensagem respondida"}


def field_label(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if not isinstance(part, int)]
    if parts and parts[0] in _SECTIONS:
        parts = parts[1:]
    if not parts:
        return "Requisição"
    field = parts[-1]
    return FIELD_LABELS.get(field, field)


def translate_error(error: dict) -> str:
    label = field_label(error.get("loc", ()))
    ctx = error.get("ctx") or {}
    kind = error.get("type", "")

    if kind == "missing":
        gender = "obrigatória" if label in FEMININE_LABELS else "obrigatório"
        return f"{label} é {gender}"
    if kind == "string_too_short":
        return f"{label} deve ter pelo menos {ctx.get('min_length')} caracteres"
    if kind == "string_too_long":
        return f"{label} deve ter no máximo {ctx.get('max_length')} caracteres"
    if kind == "too_short":
        return f"{label} deve ter pelo menos {ctx.get('min_length')} itens"
    if kind == "too_long":
        return f"{label} deve ter no máximo {ctx.get('max_length')} itens"
    if kind == "string_pattern_mismatch":
        return f"{label} está em formato inválido"
    if kind == "value_error":
        return f"{label} inválido"
    if kind in ("int_parsing", "int_type", "int_from_float", "float_parsing"):
        return f"{label} deve ser um valor numérico"
    if kind == "greater_than":
        return f"{label} deve ser maior que {ctx.get('gt')}"
    if kind == "greater_than_equal":
        return f"{label} deve ser maior ou igual a {ctx.get('ge')}"
    if kind == "less_than":
        return f"{label} deve ser menor que {ctx.get('lt')}"
    if kind == "less_than_equal":
        return f"{label} deve ser menor ou igual a {ctx.get('le')}"
    if kind in ("bool_parsing", "bool_type"):
        return f"{label} deve ser verdadeiro ou falso"
    if kind == "string_type":
        return f"{label} deve ser um texto"
    if kind == "list_type":
        return f"{label} deve ser uma lista"
    if kind == "enum":
        return f"{label} deve ser um dos valores: {ctx.get('expected')}"
    if kind in ("json_invalid", "model_type", "dict_type", "model_attributes_type"):
        return f"{label} está em formato inválido"
    return f"{label}: {error.get('msg', 'valor inválido')}"


def translate_errors(errors: Iterable[dict]) -> list[str]:
    return [translate_error(error) for error in errors]
