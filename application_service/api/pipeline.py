# application_service/api/pipeline.py
"""Ordered request stages: validate, authenticate, rate-limit.

Every stage is a FastAPI dependency. Placed in a route's ``dependencies=``
through :func:`pipeline`, they run in the given order before the handler,
and any of them can end the request by raising a domain exception that the
application's exception handlers render. FastAPI caches dependency results
per request, so a handler asking for ``Depends(stage)`` receives the value
the stage already produced instead of running it twice.
"""
import json
from typing import Callable, Literal

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from application_service.domain.entities import Identity
from application_service.domain.exceptions import RateLimited, Unauthorized, ValidationFailed
from application_service.infrastructure.validation import translate_errors


def pipeline(*stages: Callable) -> list:
    return [Depends(stage) for stage in stages]


class RequestValidator:
    """Validates the JSON body, or ``{body, params, query}`` with ``target="request"``."""

    def __init__(self, schema: type[BaseModel], target: Literal["body", "request"] = "body"):
        self.schema = schema
        self.target = target

    async def __call__(self, request: Request) -> BaseModel:
        body = await self._read_body(request)
        if self.target == "request":
            payload = {
                "body": body,
                "params": dict(request.path_params),
                "query": dict(request.query_params),
            }
        else:
            payload = body

        try:
            return self.schema.model_validate(payload)
        except ValidationError as e:
            raise ValidationFailed(translate_errors(e.errors()))

    @staticmethod
    async def _read_body(request: Request) -> dict:
        raw = await request.body()
        if not raw:
            return {}
        try:
            return json.loads(raw)
        except ValueError:
            raise ValidationFailed(["Corpo da requisição deve ser um JSON válido"])


async def authenticate(request: Request) -> Identity:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise Unauthorized(
            "Token de acesso requerido",
            "Authorization header missing",
            hint="Adicione o header: Authorization: Bearer <token>",
        )
    if not auth_header.startswith("Bearer "):
        raise Unauthorized(
            "Formato de token inválido",
            "Token must be Bearer format",
            hint="Use: Bearer <token>",
        )

    token = auth_header[len("Bearer "):].strip()
    if not token:
        raise Unauthorized(
            "Token não fornecido", "Token missing", hint="Token não pode estar vazio"
        )

    identity = request.app.state.security_service.decode_identity(token)
    request.state.identity = identity
    return identity


def skip_group_listings(request: Request) -> bool:
    path = request.url.path
    return (
        request.method == "GET"
        and ("/groups" in path or "/chats" in path)
        and "/messages" not in path
    )


class RateLimit:
    def __init__(
        self,
        name: str,
        setting: str,
        message: str,
        error: str,
        skip: Callable[[Request], bool] | None = None,
    ):
        self.name = name
        self.setting = setting
        self.message = message
        self.error = error
        self.skip = skip

    @staticmethod
    def client_key(request: Request) -> str:
        identity = getattr(request.state, "identity", None)
        if identity is not None:
            return f"user-{identity.id}"
        return request.client.host if request.client else "unknown"

    async def __call__(self, request: Request) -> None:
        if self.skip and self.skip(request):
            return

        config = request.app.state.config
        key = self.client_key(request)
        result = await request.app.state.rate_limiter.hit(
            f"{self.name}:{key}",
            getattr(config, self.setting),
            config.RATE_LIMIT_WINDOW_SECONDS,
        )
        if not result.allowed:
            request.app.state.logger.warning(
                f"Rate limit exceeded for {key} on {request.url.path} "
                f"(limit {result.limit})"
            )
            raise RateLimited(
                self.message,
                self.error,
                retry_after=result.retry_after,
                docs_url=config.DOCS_URL,
            )


rate_limit = RateLimit(
    "default",
    "RATE_LIMIT_DEFAULT",
    "Muitas requisições. Aguarde antes de tentar novamente.",
    "Rate limit exceeded",
    skip=skip_group_listings,
)

message_rate_limit = RateLimit(
    "messages",
    "RATE_LIMIT_MESSAGES",
    "Você está enviando mensagens muito rapidamente. Aguarde um momento.",
    "Message rate limit exceeded",
)

search_rate_limit = RateLimit(
    "search",
    "RATE_LIMIT_SEARCH",
    "Muitas buscas realizadas. Aguarde antes de buscar novamente.",
    "Search rate limit exceeded",
)
