# application_service/main.py
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import create_async_engine

from application_service.api import auth, chats, groups, messages, users
from application_service.api.dependencies import get_config
from application_service.config import AppConfig
from application_service.domain.exceptions import (
    DeletionFailed,
    DomainError,
    EmailConflict,
    Forbidden,
    InvalidArgument,
    NotFound,
    RateLimited,
    Unauthorized,
    ValidationFailed,
)
from application_service.infrastructure import schemas
from application_service.infrastructure.database import create_database
from application_service.infrastructure.rate_limiter import create_rate_limiter
from application_service.infrastructure.security import SecurityService
from application_service.infrastructure.validation import translate_errors

STATUS_CODES = {
    NotFound: 404,
    EmailConflict: 409,
    InvalidArgument: 400,
    Forbidden: 403,
    DeletionFailed: 500,
    Unauthorized: 401,
    ValidationFailed: 400,
    RateLimited: 429,
}


def status_code_for(exc: DomainError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


class Application:
    def __init__(self, config: AppConfig):
        self.config = config
        self.logger = self.setup_logger()
        engine = create_async_engine(config.DATABASE_URL, echo=False)
        self.database = create_database(engine)
        self.rate_limiter = create_rate_limiter(
            config.rate_limit_storage_url, self.logger
        )
        self.security_service = SecurityService(config)

    @asynccontextmanager
    async def lifespan(self, app: FastAPI):
        await self.database.connect()
        await self.rate_limiter.connect()
        yield
        await self.database.disconnect()

    def setup_logger(self):
        logger = logging.getLogger("ApplicationService")
        logger.setLevel(self.config.LOG_LEVEL.upper())

        if not logger.handlers:
            c_handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            c_handler.setFormatter(formatter)
            logger.addHandler(c_handler)

        return logger

    def create_app(self) -> FastAPI:
        app = FastAPI(
            title=self.config.PROJECT_NAME,
            version=self.config.PROJECT_VERSION,
            description=self.config.PROJECT_DESCRIPTION,
            docs_url=self.config.DOCS_URL,
            lifespan=self.lifespan,
        )

        app.state.config = self.config
        app.state.security_service = self.security_service
        app.state.database = self.database
        app.state.rate_limiter = self.rate_limiter
        app.state.logger = self.logger

        prefix = self.config.API_PREFIX
        app.include_router(auth.router, prefix=prefix, tags=["auth"])
        app.include_router(users.router, prefix=f"{prefix}/users", tags=["users"])
        app.include_router(groups.router, prefix=f"{prefix}/groups", tags=["groups"])
        app.include_router(chats.router, prefix=f"{prefix}/chats", tags=["chats"])
        app.include_router(messages.router, prefix=prefix, tags=["messages"])

        @app.get("/health", response_model=schemas.HealthResponse, tags=["health"])
        async def health(config: AppConfig = Depends(get_config)):
            return {"status": "UP", "service": config.SERVICE_NAME}

        @app.exception_handler(DomainError)
        async def domain_error_handler(request: Request, exc: DomainError):
            status_code = status_code_for(exc)
            headers = None
            if isinstance(exc, Unauthorized):
                headers = {"WWW-Authenticate": "Bearer"}
            elif isinstance(exc, RateLimited):
                headers = {"Retry-After": str(exc.retry_after)}

            if status_code >= 500:
                self.logger.error(
                    f"{request.method} {request.url.path} failed: {exc.message}"
                )
            else:
                self.logger.info(
                    f"{request.method} {request.url.path} rejected with "
                    f"{status_code}: {exc.error}"
                )
            return JSONResponse(
                status_code=status_code, content=exc.to_dict(), headers=headers
            )

        @app.exception_handler(RequestValidationError)
        async def request_validation_handler(
            request: Request, exc: RequestValidationError
        ):
            failure = ValidationFailed(translate_errors(exc.errors()))
            self.logger.info(
                f"{request.method} {request.url.path} rejected with 400: {failure.message}"
            )
            return JSONResponse(status_code=400, content=failure.to_dict())

        @app.exception_handler(Exception)
        async def global_exception_handler(request: Request, exc: Exception):
            self.logger.exception(
                f"Unhandled error on {request.method} {request.url.path}"
            )
            return JSONResponse(
                status_code=500,
                content={"message": f"An unexpected error occurred: {str(exc)}"},
            )

        return app


def create():
    config = AppConfig()
    application = Application(config)
    app = application.create_app()
    application.logger.info("Application created and configured")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create(), host="127.0.0.1", port=8000)
